"""
Resume - root aggregate; owns contacts, experiences, templates and preview sessions
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from resume_mcp.app.db.base import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(255), nullable=True, index=True)  # None in single-user mode

    name = Column(String(255), nullable=False, index=True)
    photo = Column(String(1024), nullable=False, default="")
    description = Column(Text, nullable=False, default="")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    contacts = relationship(
        "Contact", back_populates="resume", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Contact.id",
    )
    work_experiences = relationship(
        "WorkExperience", back_populates="resume", cascade="all, delete-orphan",
        passive_deletes=True, order_by="WorkExperience.id",
    )
    educations = relationship(
        "Education", back_populates="resume", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Education.id",
    )
    other_experiences = relationship(
        "OtherExperience", back_populates="resume", cascade="all, delete-orphan",
        passive_deletes=True, order_by="OtherExperience.id",
    )
    templates = relationship(
        "Template", back_populates="resume", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Template.id",
    )
    preview_sessions = relationship(
        "PreviewSession", back_populates="resume", cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(255), nullable=True, index=True)

    key = Column(String(255), nullable=False)  # e.g. "email", "github"
    value = Column(Text, nullable=False)

    resume = relationship("Resume", back_populates="contacts")
