"""
Experience entities (work, education, other) and the feature maps attached to them
"""
from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from resume_mcp.app.db.base import Base


class WorkExperience(Base):
    __tablename__ = "work_experiences"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(255), nullable=True, index=True)

    company = Column(String(255), nullable=False)
    job_title = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default="fulltime")  # fulltime, parttime, internship
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # None = current

    resume = relationship("Resume", back_populates="work_experiences")
    feature_maps = relationship(
        "FeatureMap", back_populates="work_experience", cascade="all, delete-orphan",
        passive_deletes=True, order_by="FeatureMap.id",
    )


class Education(Base):
    __tablename__ = "educations"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(255), nullable=True, index=True)

    school_name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default="fulltime")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    resume = relationship("Resume", back_populates="educations")
    feature_maps = relationship(
        "FeatureMap", back_populates="education", cascade="all, delete-orphan",
        passive_deletes=True, order_by="FeatureMap.id",
    )


class OtherExperience(Base):
    __tablename__ = "other_experiences"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(255), nullable=True, index=True)

    category = Column(String(255), nullable=False)  # skills, awards, certifications, ...

    resume = relationship("Resume", back_populates="other_experiences")
    feature_maps = relationship(
        "FeatureMap", back_populates="other_experience", cascade="all, delete-orphan",
        passive_deletes=True, order_by="FeatureMap.id",
    )


class FeatureMap(Base):
    """
    Key/value detail attached to exactly one experience. experience_kind names which
    of the three foreign keys is set.
    """
    __tablename__ = "feature_maps"
    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN work_experience_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN education_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN other_experience_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_feature_maps_single_target",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(255), nullable=True, index=True)

    experience_kind = Column(String(20), nullable=False)  # work, education, other
    work_experience_id = Column(
        Integer, ForeignKey("work_experiences.id", ondelete="CASCADE"), nullable=True, index=True
    )
    education_id = Column(Integer, ForeignKey("educations.id", ondelete="CASCADE"), nullable=True, index=True)
    other_experience_id = Column(
        Integer, ForeignKey("other_experiences.id", ondelete="CASCADE"), nullable=True, index=True
    )

    key = Column(String(255), nullable=False)
    value = Column(Text, nullable=False, default="")  # may hold serialized JSON
    category = Column(String(255), nullable=True)

    work_experience = relationship("WorkExperience", back_populates="feature_maps")
    education = relationship("Education", back_populates="feature_maps")
    other_experience = relationship("OtherExperience", back_populates="feature_maps")

    @property
    def experience_id(self) -> int:
        return self.work_experience_id or self.education_id or self.other_experience_id
