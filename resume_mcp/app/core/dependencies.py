"""
Dependency injection utilities
"""
from fastapi import Request
from sqlalchemy.orm import Session

from resume_mcp.app.db.session import SessionLocal
from resume_mcp.app.services.pdf_generator import PdfGenerator
from resume_mcp.app.tools.base import ToolContext


def get_db() -> Session:
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_tool_context(request: Request) -> ToolContext:
    return request.app.state.tool_context


def get_pdf_generator(request: Request) -> PdfGenerator:
    return request.app.state.pdf_generator
