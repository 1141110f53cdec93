"""
Resume repository - single access object for resumes and everything hanging off them.

One repository wraps one Session (one unit of work, see db.session.session_scope) and one
AccessContext. Writes are flushed, never committed here; the scope that owns the session
commits or rolls back. Lookups that miss raise NotFoundError.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from sqlalchemy.orm import Query, Session, selectinload

from resume_mcp.app.core.access import AccessContext
from resume_mcp.app.core.exceptions import NotFoundError
from resume_mcp.app.core.logging_config import get_logger
from resume_mcp.app.models import (
    Contact,
    Education,
    FeatureMap,
    OtherExperience,
    PreviewSession,
    Resume,
    Template,
    WorkExperience,
)

logger = get_logger("services.resume_repository")


class ExperienceKind(str, Enum):
    WORK = "work"
    EDUCATION = "education"
    OTHER = "other"


_EXPERIENCE_MODELS = {
    ExperienceKind.WORK: (WorkExperience, "work_experience_id", "Work experience"),
    ExperienceKind.EDUCATION: (Education, "education_id", "Education"),
    ExperienceKind.OTHER: (OtherExperience, "other_experience_id", "Other experience"),
}


@dataclass(frozen=True)
class ExperienceRef:
    """Discriminated reference to a work experience, education or other experience."""
    kind: ExperienceKind
    id: int


def _resume_graph():
    return (
        selectinload(Resume.contacts),
        selectinload(Resume.work_experiences).selectinload(WorkExperience.feature_maps),
        selectinload(Resume.educations).selectinload(Education.feature_maps),
        selectinload(Resume.other_experiences).selectinload(OtherExperience.feature_maps),
    )


class ResumeRepository:
    def __init__(self, db: Session, access: AccessContext | None = None):
        self.db = db
        self.access = access or AccessContext.anonymous()

    # --- helpers ---

    def _query(self, model) -> Query:
        q = self.db.query(model)
        if self.access.is_scoped:
            q = q.filter(model.owner_id == self.access.owner_id)
        return q

    def _add(self, obj):
        obj.owner_id = self.access.owner_id
        self.db.add(obj)
        self.db.flush()
        return obj

    @staticmethod
    def _apply_partial(obj, **fields: str) -> None:
        """Set only non-empty values; empty string means leave unchanged."""
        for name, value in fields.items():
            if value:
                setattr(obj, name, value)

    # --- resumes ---

    def create_resume(self, name: str, description: str, photo: str = "") -> Resume:
        resume = self._add(Resume(name=name, description=description, photo=photo or ""))
        logger.info("Resume created resume_id=%s owner=%s", resume.id, self.access.owner_id)
        return resume

    def _require_resume(self, resume_id: int) -> Resume:
        resume = self._query(Resume).filter(Resume.id == resume_id).first()
        if not resume:
            raise NotFoundError("Resume", resume_id)
        return resume

    def get_resume_by_id(self, resume_id: int) -> Resume:
        resume = self._query(Resume).options(*_resume_graph()).filter(Resume.id == resume_id).first()
        if not resume:
            raise NotFoundError("Resume", resume_id)
        return resume

    def get_resume_by_name(self, name: str) -> Resume:
        resume = (
            self._query(Resume)
            .options(*_resume_graph())
            .filter(Resume.name == name)
            .order_by(Resume.id)
            .first()
        )
        if not resume:
            raise NotFoundError("Resume", name)
        return resume

    def list_resumes(self) -> list[Resume]:
        return self._query(Resume).order_by(Resume.id).all()

    def update_resume(self, resume_id: int, name: str = "", photo: str = "", description: str = "") -> Resume:
        resume = self.get_resume_by_id(resume_id)
        self._apply_partial(resume, name=name, photo=photo, description=description)
        self.db.flush()
        return resume

    def delete_resume(self, resume_id: int) -> None:
        resume = self.get_resume_by_id(resume_id)
        self.db.delete(resume)
        self.db.flush()
        logger.info("Resume deleted resume_id=%s owner=%s", resume_id, self.access.owner_id)

    def copy_resume_contents(self, source_id: int, target: Resume) -> Resume:
        """
        Copy contacts, experiences (with their feature maps) and templates from source
        into target. Runs in the caller's unit of work, so it is all-or-nothing.
        """
        source = self.get_resume_by_id(source_id)
        for contact in source.contacts:
            self.add_contact(target.id, contact.key, contact.value)
        for work in source.work_experiences:
            new_work = self.add_work_experience(
                target.id, work.company, work.job_title, work.type, work.start_date, work.end_date
            )
            self._copy_feature_maps(work.feature_maps, ExperienceRef(ExperienceKind.WORK, new_work.id))
        for edu in source.educations:
            new_edu = self.add_education(target.id, edu.school_name, edu.type, edu.start_date, edu.end_date)
            self._copy_feature_maps(edu.feature_maps, ExperienceRef(ExperienceKind.EDUCATION, new_edu.id))
        for other in source.other_experiences:
            new_other = self.add_other_experience(target.id, other.category)
            self._copy_feature_maps(other.feature_maps, ExperienceRef(ExperienceKind.OTHER, new_other.id))
        for template in self.list_templates(source.id):
            self.create_template(target.id, template.name, template.template_data, template.description)
        logger.info("Copied resume contents source_id=%s target_id=%s", source.id, target.id)
        return target

    def _copy_feature_maps(self, feature_maps, ref: ExperienceRef) -> None:
        for fm in feature_maps:
            self.add_feature_map(ref, fm.key, fm.value, fm.category)

    # --- contacts ---

    def add_contact(self, resume_id: int, key: str, value: str) -> Contact:
        self._require_resume(resume_id)
        return self._add(Contact(resume_id=resume_id, key=key, value=value))

    # --- experiences ---

    def add_work_experience(
        self,
        resume_id: int,
        company: str,
        job_title: str,
        type: str,
        start_date: date,
        end_date: date | None = None,
    ) -> WorkExperience:
        self._require_resume(resume_id)
        return self._add(WorkExperience(
            resume_id=resume_id,
            company=company,
            job_title=job_title,
            type=type,
            start_date=start_date,
            end_date=end_date,
        ))

    def add_education(
        self,
        resume_id: int,
        school_name: str,
        type: str,
        start_date: date,
        end_date: date | None = None,
    ) -> Education:
        self._require_resume(resume_id)
        return self._add(Education(
            resume_id=resume_id,
            school_name=school_name,
            type=type,
            start_date=start_date,
            end_date=end_date,
        ))

    def add_other_experience(self, resume_id: int, category: str) -> OtherExperience:
        self._require_resume(resume_id)
        return self._add(OtherExperience(resume_id=resume_id, category=category))

    def get_experience(self, ref: ExperienceRef):
        model, _, label = _EXPERIENCE_MODELS[ref.kind]
        experience = self._query(model).filter(model.id == ref.id).first()
        if not experience:
            raise NotFoundError(label, ref.id)
        return experience

    def delete_experience(self, ref: ExperienceRef) -> None:
        """Delete an experience; its feature maps go with it."""
        self.db.delete(self.get_experience(ref))
        self.db.flush()

    # --- feature maps ---

    def add_feature_map(self, ref: ExperienceRef, key: str, value: str, category: str | None = None) -> FeatureMap:
        self.get_experience(ref)
        _, fk_column, _ = _EXPERIENCE_MODELS[ref.kind]
        feature_map = FeatureMap(experience_kind=ref.kind.value, key=key, value=value, category=category)
        setattr(feature_map, fk_column, ref.id)
        return self._add(feature_map)

    def get_feature_map(self, feature_map_id: int) -> FeatureMap:
        feature_map = self._query(FeatureMap).filter(FeatureMap.id == feature_map_id).first()
        if not feature_map:
            raise NotFoundError("Feature map", feature_map_id)
        return feature_map

    def update_feature_map(self, feature_map_id: int, key: str = "", value: str = "") -> FeatureMap:
        feature_map = self.get_feature_map(feature_map_id)
        self._apply_partial(feature_map, key=key, value=value)
        self.db.flush()
        return feature_map

    def delete_feature_map(self, feature_map_id: int) -> None:
        self.db.delete(self.get_feature_map(feature_map_id))
        self.db.flush()

    # --- preview sessions ---

    def create_preview_session(self, resume_id: int, template: str, css: str = "") -> PreviewSession:
        self._require_resume(resume_id)
        return self._add(PreviewSession(resume_id=resume_id, template=template, css=css or ""))

    def get_preview_session(self, session_id: str) -> PreviewSession:
        session = (
            self._query(PreviewSession)
            .options(selectinload(PreviewSession.resume).options(*_resume_graph()))
            .filter(PreviewSession.id == session_id)
            .first()
        )
        if not session:
            raise NotFoundError("Preview session", session_id)
        return session

    def update_preview_session_css(self, session_id: str, css: str) -> PreviewSession:
        session = self.get_preview_session(session_id)
        session.css = css
        self.db.flush()
        return session

    # --- templates ---

    def create_template(self, resume_id: int, name: str, template_data: str, description: str = "") -> Template:
        self._require_resume(resume_id)
        return self._add(Template(
            resume_id=resume_id,
            name=name,
            description=description or "",
            template_data=template_data,
        ))

    def get_template(self, template_id: int) -> Template:
        template = self._query(Template).filter(Template.id == template_id).first()
        if not template:
            raise NotFoundError("Template", template_id)
        return template

    def list_templates(self, resume_id: int) -> list[Template]:
        return self._query(Template).filter(Template.resume_id == resume_id).order_by(Template.id).all()

    def update_template(
        self, template_id: int, name: str = "", description: str = "", template_data: str = ""
    ) -> Template:
        template = self.get_template(template_id)
        self._apply_partial(template, name=name, description=description, template_data=template_data)
        self.db.flush()
        return template

    def delete_template(self, template_id: int) -> Template:
        template = self.get_template(template_id)
        self.db.delete(template)
        self.db.flush()
        return template
