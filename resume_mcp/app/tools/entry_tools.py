"""
Tools that attach entries to a resume: contact info, work experience, education, other experience.
"""
from resume_mcp.app.core.config import DATE_FORMAT, DEFAULT_EXPERIENCE_TYPE, EXPERIENCE_TYPES
from resume_mcp.app.tools.base import (
    ToolContext,
    ToolResult,
    parse_choice,
    parse_date,
    parse_id,
    parse_optional_date,
    require,
    to_json,
    tool_boundary,
)


def _dated(result: dict, start_date, end_date) -> dict:
    result["start_date"] = start_date.strftime(DATE_FORMAT)
    if end_date is not None:
        result["end_date"] = end_date.strftime(DATE_FORMAT)
    return result


@tool_boundary("Error adding contact info")
def add_contact_info(ctx: ToolContext, resume_id: str, key: str, value: str) -> ToolResult:
    """Add a contact entry (email, phone, website, linkedin, ...) to a resume as a key/value pair."""
    rid = parse_id("resume_id", resume_id)
    require("key", key)
    require("value", value)
    with ctx.repository() as repo:
        contact = repo.add_contact(rid, key, value)
        result = {"id": contact.id, "resume_id": contact.resume_id, "key": contact.key, "value": contact.value}
    return ToolResult.text(f"Contact info added successfully: {to_json(result)}")


@tool_boundary("Error adding work experience")
def add_work_experience(
    ctx: ToolContext,
    resume_id: str,
    company: str,
    job_title: str,
    start_date: str,
    type: str = "",
    end_date: str = "",
) -> ToolResult:
    """
    Add work experience to a resume with company, job title, and date range.
    Use feature maps to add additional details like responsibilities or achievements.
    """
    rid = parse_id("resume_id", resume_id)
    require("company", company)
    require("job_title", job_title)
    work_type = parse_choice("type", type, EXPERIENCE_TYPES, DEFAULT_EXPERIENCE_TYPE)
    start = parse_date("start_date", start_date)
    end = parse_optional_date("end_date", end_date)

    with ctx.repository() as repo:
        work = repo.add_work_experience(rid, company, job_title, work_type, start, end)
        result = {
            "id": work.id,
            "resume_id": work.resume_id,
            "company": work.company,
            "job_title": work.job_title,
            "type": work.type,
        }
    return ToolResult.text(f"Work experience added successfully: {to_json(_dated(result, start, end))}")


@tool_boundary("Error adding education")
def add_education(
    ctx: ToolContext,
    resume_id: str,
    school_name: str,
    start_date: str,
    type: str = "",
    end_date: str = "",
) -> ToolResult:
    """
    Add education experience to a resume with school name and date range.
    Use feature maps to add details like degree, GPA, or coursework.
    """
    rid = parse_id("resume_id", resume_id)
    require("school_name", school_name)
    edu_type = parse_choice("type", type, EXPERIENCE_TYPES, DEFAULT_EXPERIENCE_TYPE)
    start = parse_date("start_date", start_date)
    end = parse_optional_date("end_date", end_date)

    with ctx.repository() as repo:
        education = repo.add_education(rid, school_name, edu_type, start, end)
        result = {
            "id": education.id,
            "resume_id": education.resume_id,
            "school_name": education.school_name,
            "type": education.type,
        }
    return ToolResult.text(f"Education added successfully: {to_json(_dated(result, start, end))}")


@tool_boundary("Error adding other experience")
def add_other_experience(ctx: ToolContext, resume_id: str, category: str) -> ToolResult:
    """
    Add other categorized experiences to a resume (skills, awards, certifications, projects, etc.).
    Use feature maps to add detailed information.
    """
    rid = parse_id("resume_id", resume_id)
    require("category", category)
    with ctx.repository() as repo:
        other = repo.add_other_experience(rid, category)
        result = {"id": other.id, "resume_id": other.resume_id, "category": other.category}
    return ToolResult.text(f"Other experience added successfully: {to_json(result)}")
