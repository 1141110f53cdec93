"""
Preview endpoints - serve a preview session as HTML or as a PDF download.

Session ids are unguessable uuids, so these routes run without an owner filter.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from resume_mcp.app.core.access import AccessContext
from resume_mcp.app.core.config import DOWNLOAD_PATH, PDF_FILENAME
from resume_mcp.app.core.dependencies import get_db, get_pdf_generator, get_tool_context
from resume_mcp.app.core.exceptions import NotFoundError, PdfGenerationError, TemplateRenderError
from resume_mcp.app.core.logging_config import get_logger
from resume_mcp.app.models.preview_session import PreviewSession
from resume_mcp.app.schemas.resume import ResumeView
from resume_mcp.app.services.pdf_generator import PdfGenerator
from resume_mcp.app.services.resume_repository import ResumeRepository
from resume_mcp.app.tools.base import ToolContext

logger = get_logger("api.preview")

router = APIRouter()


def _load_session(db: Session, session_id: str) -> PreviewSession:
    try:
        return ResumeRepository(db, AccessContext.anonymous()).get_preview_session(session_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Preview session not found")


@router.get("/preview/{session_id}", response_class=HTMLResponse)
def preview_resume(
    session_id: str,
    db: Session = Depends(get_db),
    ctx: ToolContext = Depends(get_tool_context),
):
    """
    Render a preview session: the stored template and css applied to the resume's
    current data, with an app bar for downloading the PDF.
    """
    session = _load_session(db, session_id)
    view = ResumeView.model_validate(session.resume)
    try:
        html = ctx.template_service.generate_preview_with_options(
            session.template,
            session.css,
            view,
            include_download_button=True,
            download_url=DOWNLOAD_PATH.format(session_id=session_id),
        )
    except TemplateRenderError as e:
        logger.error("Preview render failed session_id=%s: %s", session_id, e)
        raise HTTPException(status_code=500, detail=f"Failed to generate preview: {e}")
    return HTMLResponse(content=html)


@router.get("/download/{session_id}")
def download_resume_pdf(
    session_id: str,
    db: Session = Depends(get_db),
    pdf_generator: PdfGenerator = Depends(get_pdf_generator),
):
    """Print the preview session to PDF (no app bar) and return it as an attachment."""
    session = _load_session(db, session_id)
    view = ResumeView.model_validate(session.resume)
    try:
        pdf_bytes = pdf_generator.generate_pdf(session.template, session.css, view)
    except (TemplateRenderError, PdfGenerationError) as e:
        raise HTTPException(status_code=500, detail=f"Failed to generate PDF: {e}")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
    )
