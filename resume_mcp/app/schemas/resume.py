"""
Resume Pydantic schemas - read views over the ORM graph.
Used as the template render context, for tool JSON output and for get_resume_context's schema.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _View(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class FeatureMapView(_View):
    id: int
    experience_id: int
    experience_kind: str = Field(description="work, education or other")
    key: str
    value: str = Field(default="", description="Free text; may hold serialized JSON")
    category: Optional[str] = None


class ContactView(_View):
    id: int
    resume_id: int
    key: str
    value: str


class WorkExperienceView(_View):
    id: int
    resume_id: int
    company: str
    job_title: str
    type: str = Field(description="fulltime, parttime or internship")
    start_date: date
    end_date: Optional[date] = Field(default=None, description="None for a current position")
    feature_maps: List[FeatureMapView] = Field(default_factory=list)


class EducationView(_View):
    id: int
    resume_id: int
    school_name: str
    type: str
    start_date: date
    end_date: Optional[date] = None
    feature_maps: List[FeatureMapView] = Field(default_factory=list)


class OtherExperienceView(_View):
    id: int
    resume_id: int
    category: str
    feature_maps: List[FeatureMapView] = Field(default_factory=list)


class ResumeView(_View):
    """Fully populated resume, as exposed to templates."""
    id: int
    name: str
    photo: str = ""
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    contacts: List[ContactView] = Field(default_factory=list)
    work_experiences: List[WorkExperienceView] = Field(default_factory=list)
    educations: List[EducationView] = Field(default_factory=list)
    other_experiences: List[OtherExperienceView] = Field(default_factory=list)


class TemplateView(_View):
    id: int
    resume_id: int
    name: str
    description: str = ""
    template_data: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
