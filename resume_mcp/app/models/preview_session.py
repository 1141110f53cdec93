"""
PreviewSession - addressable snapshot of template + css for a resume, fetched by opaque id
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from resume_mcp.app.db.base import Base


class PreviewSession(Base):
    __tablename__ = "preview_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(255), nullable=True, index=True)

    template = Column(Text, nullable=False)
    css = Column(Text, nullable=False, default="")

    created_at = Column(DateTime, default=datetime.utcnow)

    resume = relationship("Resume", back_populates="preview_sessions")
