"""
Preview tools: snapshot a template + css for a resume into a preview session and hand back its URLs.
"""
from resume_mcp.app.schemas.resume import ResumeView
from resume_mcp.app.tools.base import (
    ToolContext,
    ToolResult,
    parse_id,
    require,
    tool_boundary,
)


@tool_boundary("Error generating preview")
def generate_preview(ctx: ToolContext, resume_id: str, template_id: str, css: str = "") -> ToolResult:
    """
    Generate an HTML preview of a resume using one of its saved templates. Returns a preview URL
    and a PDF download URL. Templates include Tailwind CSS for styling; css adds extra styles.
    """
    rid = parse_id("resume_id", resume_id)
    tid = parse_id("template_id", template_id)

    with ctx.repository() as repo:
        template = repo.get_template(tid)
        if template.resume_id != rid:
            return ToolResult.error("Template does not belong to the specified resume")
        view = ResumeView.model_validate(repo.get_resume_by_id(rid))
        ctx.template_service.generate_preview(template.template_data, css, view)
        session = repo.create_preview_session(rid, template.template_data, css)
        preview_url = ctx.preview_url(session.id)
        download_url = ctx.download_url(session.id)

    return ToolResult.text(
        "Preview generated successfully, and please return the following URLs in the response:\n",
        f"Preview: {preview_url}\n",
        f"Download PDF: {download_url}",
    )


@tool_boundary("Error updating preview style")
def update_preview_style(ctx: ToolContext, session_id: str, css: str) -> ToolResult:
    """Update CSS styles for an existing preview session. Tailwind CSS classes are available for styling."""
    require("session_id", session_id)
    require("css", css)
    with ctx.repository() as repo:
        repo.update_preview_session_css(session_id, css)
    return ToolResult.text(f"Preview style updated successfully. URL: {ctx.preview_url(session_id)}")
