"""
Resume-level tools: create (optionally copying another resume), update, fetch, list, delete,
and the schema context used to draft templates.
"""
from resume_mcp.app.schemas.resume import ResumeView
from resume_mcp.app.services.template_service import build_render_context
from resume_mcp.app.tools.base import (
    ToolContext,
    ToolResult,
    parse_id,
    parse_optional_id,
    require,
    to_json,
    tool_boundary,
)


@tool_boundary("Error creating resume")
def create_resume(
    ctx: ToolContext,
    name: str,
    description: str,
    photo: str = "",
    copy_from_resume_id: str = "",
) -> ToolResult:
    """
    Create a new resume with basic information including name, photo, and description.
    Optionally copy all data from an existing resume (contacts, work experiences, education,
    other experiences, feature maps and templates): the new resume keeps the provided name,
    photo and description. If the user asks to create a resume based on an existing one, use
    copy_from_resume_id instead of re-adding everything manually. Returns the created resume ID.
    """
    require("name", name)
    require("description", description)
    source_id = parse_optional_id("copy_from_resume_id", copy_from_resume_id)

    with ctx.repository() as repo:
        resume = repo.create_resume(name=name, description=description, photo=photo)
        if source_id is not None:
            repo.copy_resume_contents(source_id, resume)
        result = {
            "id": resume.id,
            "name": resume.name,
            "photo": resume.photo,
            "description": resume.description,
            "created_at": resume.created_at.isoformat() if resume.created_at else None,
        }

    if source_id is not None:
        result["copied_from_resume_id"] = str(source_id)
        result["message"] = f"Resume created successfully and copied data from resume ID {source_id}"
    return ToolResult.text(f"Resume created successfully: {to_json(result)}")


@tool_boundary("Error updating resume")
def update_basic_info(
    ctx: ToolContext,
    resume_id: str,
    name: str = "",
    photo: str = "",
    description: str = "",
) -> ToolResult:
    """
    Update basic information (name, photo, description) of an existing resume.
    Only non-empty fields are changed.
    """
    rid = parse_id("resume_id", resume_id)
    with ctx.repository() as repo:
        resume = repo.update_resume(rid, name=name, photo=photo, description=description)
        result = {
            "id": resume.id,
            "name": resume.name,
            "photo": resume.photo,
            "description": resume.description,
        }
    return ToolResult.text(f"Resume updated successfully: {to_json(result)}")


@tool_boundary("Error getting resume")
def get_resume_by_name(ctx: ToolContext, name: str) -> ToolResult:
    """
    Retrieve complete structured resume data by name. Returns all associated contacts,
    experiences, education, and feature maps for template generation.
    """
    require("name", name)
    with ctx.repository() as repo:
        view = ResumeView.model_validate(repo.get_resume_by_name(name))
    return ToolResult.text(f"Resume found: for {name}", to_json(view))


@tool_boundary("Error listing resumes")
def list_resumes(ctx: ToolContext) -> ToolResult:
    """List all saved resumes with their IDs and names. Use this to find available resumes before generating previews."""
    with ctx.repository() as repo:
        entries = [f"{r.id}: {r.name}" for r in repo.list_resumes()]
    return ToolResult.text(f"Resumes found: {len(entries)}", to_json(entries))


@tool_boundary("Error deleting resume")
def delete_resume(ctx: ToolContext, resume_id: str) -> ToolResult:
    """Delete a resume and all associated data (contacts, experiences, feature maps, templates, previews)."""
    rid = parse_id("resume_id", resume_id)
    with ctx.repository() as repo:
        repo.delete_resume(rid)
    return ToolResult.text("Resume deleted successfully")


@tool_boundary("Error getting resume context")
def get_resume_context(ctx: ToolContext, resume_id: str) -> ToolResult:
    """
    Get the JSON schema of the resume data structure to help draft templates.

    Returns only the schema, never resume data. Templates are Jinja2; every top-level field
    (name, photo, description, contacts, work_experiences, educations, other_experiences) is
    available directly by name and the whole record as `resume`. Each experience carries a
    `feature_maps` list of {key, value} entries. Call this before creating templates.
    """
    rid = parse_id("resume_id", resume_id)
    with ctx.repository() as repo:
        view = ResumeView.model_validate(repo.get_resume_by_id(rid))

    result = {
        "success": True,
        "message": "Resume JSON schema retrieved successfully",
        "context": {
            "json_schema": ResumeView.model_json_schema(),
            "template_variables": sorted(build_render_context(view)),
        },
    }
    return ToolResult.text(
        "Resume JSON schema retrieved successfully, and please return the following schema in the response: ",
        to_json(result),
    )
