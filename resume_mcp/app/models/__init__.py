from resume_mcp.app.models.resume import Resume, Contact
from resume_mcp.app.models.experience import (
    WorkExperience,
    Education,
    OtherExperience,
    FeatureMap,
)
from resume_mcp.app.models.template import Template
from resume_mcp.app.models.preview_session import PreviewSession
