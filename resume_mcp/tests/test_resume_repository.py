"""Tests for ResumeRepository: CRUD, owner scoping, cascades and copying."""
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from resume_mcp.app.core.access import AccessContext
from resume_mcp.app.core.exceptions import NotFoundError
from resume_mcp.app.models import (
    Contact,
    Education,
    FeatureMap,
    PreviewSession,
    Resume,
    Template,
    WorkExperience,
)
from resume_mcp.app.services.resume_repository import ExperienceKind, ExperienceRef, ResumeRepository


def _seed_full_resume(repo: ResumeRepository) -> Resume:
    resume = repo.create_resume("Jane Smith", "Backend engineer", photo="https://example.com/jane.png")
    repo.add_contact(resume.id, "email", "jane@example.com")
    work = repo.add_work_experience(resume.id, "Acme", "Engineer", "fulltime", date(2020, 1, 1))
    repo.add_feature_map(ExperienceRef(ExperienceKind.WORK, work.id), "stack", "python, postgres")
    edu = repo.add_education(resume.id, "State University", "fulltime", date(2014, 9, 1), date(2018, 6, 1))
    repo.add_feature_map(ExperienceRef(ExperienceKind.EDUCATION, edu.id), "degree", "BSc")
    other = repo.add_other_experience(resume.id, "skills")
    repo.add_feature_map(ExperienceRef(ExperienceKind.OTHER, other.id), "languages", "Python, Go")
    repo.create_template(resume.id, "basic", "<h1>{{ name }}</h1>", "plain heading")
    return resume


def test_create_and_get_resume(repo, db_session):
    """Created resume is readable by id and by name."""
    resume = repo.create_resume("John Doe", "Software Engineer")
    db_session.commit()

    assert resume.id is not None
    assert repo.get_resume_by_id(resume.id).name == "John Doe"
    assert repo.get_resume_by_name("John Doe").id == resume.id
    assert repo.get_resume_by_id(resume.id).photo == ""


def test_get_resume_by_name_returns_first_match(repo):
    first = repo.create_resume("Same Name", "first")
    repo.create_resume("Same Name", "second")
    assert repo.get_resume_by_name("Same Name").id == first.id


def test_missing_resume_raises_not_found(repo):
    with pytest.raises(NotFoundError, match="Resume not found: 999"):
        repo.get_resume_by_id(999)
    with pytest.raises(NotFoundError):
        repo.get_resume_by_name("nobody")
    with pytest.raises(NotFoundError):
        repo.add_contact(999, "email", "x@example.com")


def test_update_resume_only_changes_non_empty_fields(repo):
    resume = repo.create_resume("John", "Old description", photo="old.png")
    repo.update_resume(resume.id, description="New description")

    updated = repo.get_resume_by_id(resume.id)
    assert updated.name == "John"
    assert updated.photo == "old.png"
    assert updated.description == "New description"


def test_list_resumes_ordered_by_id(repo):
    a = repo.create_resume("A", "a")
    b = repo.create_resume("B", "b")
    assert [r.id for r in repo.list_resumes()] == [a.id, b.id]


def test_owner_scoping_hides_other_owners(db_session):
    """A scoped repository only sees rows stamped with its owner."""
    alice = ResumeRepository(db_session, AccessContext(owner_id="alice"))
    bob = ResumeRepository(db_session, AccessContext(owner_id="bob"))

    resume = alice.create_resume("Alice", "alice's resume")
    db_session.commit()

    assert resume.owner_id == "alice"
    assert [r.id for r in alice.list_resumes()] == [resume.id]
    assert bob.list_resumes() == []
    with pytest.raises(NotFoundError):
        bob.get_resume_by_id(resume.id)
    with pytest.raises(NotFoundError):
        bob.add_contact(resume.id, "email", "bob@example.com")


def test_anonymous_repository_is_unfiltered(db_session):
    ResumeRepository(db_session, AccessContext(owner_id="alice")).create_resume("Alice", "a")
    ResumeRepository(db_session).create_resume("Local", "b")
    assert len(ResumeRepository(db_session).list_resumes()) == 2


def test_feature_map_targets_are_discriminated(repo):
    """Work and education ids are separate sequences; the kind picks the target."""
    resume = repo.create_resume("John", "desc")
    work = repo.add_work_experience(resume.id, "Acme", "Dev", "fulltime", date(2021, 1, 1))
    edu = repo.add_education(resume.id, "MIT", "fulltime", date(2015, 9, 1))
    assert work.id == edu.id

    fm = repo.add_feature_map(ExperienceRef(ExperienceKind.EDUCATION, edu.id), "gpa", "3.9")
    assert fm.experience_kind == "education"
    assert fm.education_id == edu.id
    assert fm.work_experience_id is None
    assert fm.experience_id == edu.id


def test_feature_map_on_missing_experience_raises(repo):
    with pytest.raises(NotFoundError, match="Other experience not found: 42"):
        repo.add_feature_map(ExperienceRef(ExperienceKind.OTHER, 42), "k", "v")


def test_feature_map_check_constraint_rejects_two_targets(repo, db_session):
    resume = repo.create_resume("John", "desc")
    work = repo.add_work_experience(resume.id, "Acme", "Dev", "fulltime", date(2021, 1, 1))
    edu = repo.add_education(resume.id, "MIT", "fulltime", date(2015, 9, 1))
    db_session.commit()

    db_session.add(FeatureMap(
        experience_kind="work", work_experience_id=work.id, education_id=edu.id, key="k", value="v"
    ))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_update_and_delete_feature_map(repo):
    resume = repo.create_resume("John", "desc")
    work = repo.add_work_experience(resume.id, "Acme", "Dev", "fulltime", date(2021, 1, 1))
    fm = repo.add_feature_map(ExperienceRef(ExperienceKind.WORK, work.id), "role", "backend")

    updated = repo.update_feature_map(fm.id, value="platform")
    assert updated.key == "role"
    assert updated.value == "platform"

    repo.delete_feature_map(fm.id)
    with pytest.raises(NotFoundError):
        repo.get_feature_map(fm.id)


def test_delete_experience_removes_its_feature_maps(repo, db_session):
    resume = repo.create_resume("John", "desc")
    work = repo.add_work_experience(resume.id, "Acme", "Dev", "fulltime", date(2021, 1, 1))
    repo.add_feature_map(ExperienceRef(ExperienceKind.WORK, work.id), "role", "backend")
    db_session.commit()

    repo.delete_experience(ExperienceRef(ExperienceKind.WORK, work.id))
    db_session.commit()

    assert db_session.query(WorkExperience).count() == 0
    assert db_session.query(FeatureMap).count() == 0


def test_delete_resume_cascades_to_everything(repo, db_session):
    resume = _seed_full_resume(repo)
    repo.create_preview_session(resume.id, "<h1>{{ name }}</h1>")
    db_session.commit()

    repo.delete_resume(resume.id)
    db_session.commit()

    for model in (Resume, Contact, WorkExperience, Education, FeatureMap, Template, PreviewSession):
        assert db_session.query(model).count() == 0, model.__tablename__


def test_copy_resume_contents_duplicates_graph(repo, db_session):
    source = _seed_full_resume(repo)
    db_session.commit()

    target = repo.create_resume("Jane Copy", "Copied resume")
    repo.copy_resume_contents(source.id, target)
    db_session.commit()
    db_session.expire_all()

    copied = repo.get_resume_by_id(target.id)
    assert copied.name == "Jane Copy"
    assert [(c.key, c.value) for c in copied.contacts] == [("email", "jane@example.com")]
    assert copied.work_experiences[0].company == "Acme"
    assert copied.work_experiences[0].feature_maps[0].key == "stack"
    assert copied.educations[0].end_date == date(2018, 6, 1)
    assert copied.educations[0].feature_maps[0].value == "BSc"
    assert copied.other_experiences[0].feature_maps[0].experience_kind == "other"
    assert [t.name for t in repo.list_templates(target.id)] == ["basic"]

    # Source untouched, copies are new rows
    original = repo.get_resume_by_id(source.id)
    assert original.contacts[0].id != copied.contacts[0].id
    assert db_session.query(FeatureMap).count() == 6


def test_preview_session_lifecycle(repo, db_session):
    resume = repo.create_resume("John", "desc")
    session = repo.create_preview_session(resume.id, "<p>{{ name }}</p>", "body { color: red; }")
    db_session.commit()

    assert len(session.id) == 36
    loaded = repo.get_preview_session(session.id)
    assert loaded.resume.name == "John"

    repo.update_preview_session_css(session.id, "body { color: blue; }")
    assert repo.get_preview_session(session.id).css == "body { color: blue; }"

    with pytest.raises(NotFoundError, match="Preview session not found"):
        repo.get_preview_session("does-not-exist")


def test_template_crud(repo):
    resume = repo.create_resume("John", "desc")
    template = repo.create_template(resume.id, "basic", "<h1>{{ name }}</h1>")
    assert template.description == ""

    repo.update_template(template.id, name="renamed")
    assert repo.get_template(template.id).name == "renamed"
    assert repo.get_template(template.id).template_data == "<h1>{{ name }}</h1>"

    deleted = repo.delete_template(template.id)
    assert deleted.name == "renamed"
    assert repo.list_templates(resume.id) == []
