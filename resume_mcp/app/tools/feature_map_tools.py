"""
Feature map tools. A feature map always names its target experience kind; ids of work
experiences, educations and other experiences are separate sequences.
"""
from resume_mcp.app.services.resume_repository import ExperienceKind, ExperienceRef
from resume_mcp.app.tools.base import (
    ToolContext,
    ToolResult,
    parse_choice,
    parse_id,
    require,
    to_json,
    tool_boundary,
)

EXPERIENCE_KINDS = tuple(kind.value for kind in ExperienceKind)


def _feature_map_json(feature_map) -> str:
    return to_json({
        "id": feature_map.id,
        "experience_id": feature_map.experience_id,
        "experience_type": feature_map.experience_kind,
        "key": feature_map.key,
        "value": feature_map.value,
    })


@tool_boundary("Error adding feature map")
def add_feature_map(
    ctx: ToolContext,
    experience_id: str,
    key: str,
    value: str,
    experience_type: str = "",
) -> ToolResult:
    """
    Add flexible key-value features to any experience (work, education, other). Use this for
    details like GPA, salary, responsibilities, achievements, skills, etc. Set experience_type
    to the kind of experience experience_id refers to: work (default), education or other.
    """
    exp_id = parse_id("experience_id", experience_id)
    require("key", key)
    require("value", value)
    kind = ExperienceKind(parse_choice("experience_type", experience_type, EXPERIENCE_KINDS, ExperienceKind.WORK.value))

    with ctx.repository() as repo:
        feature_map = repo.add_feature_map(ExperienceRef(kind, exp_id), key, value)
        payload = _feature_map_json(feature_map)
    return ToolResult.text(f"Feature map added successfully: {payload}")


@tool_boundary("Error updating feature map")
def update_feature_map(ctx: ToolContext, feature_map_id: str, key: str = "", value: str = "") -> ToolResult:
    """Update an existing feature map by ID. Use this to modify specific details attached to experiences."""
    fid = parse_id("feature_map_id", feature_map_id)
    with ctx.repository() as repo:
        feature_map = repo.update_feature_map(fid, key=key, value=value)
        payload = _feature_map_json(feature_map)
    return ToolResult.text(f"Feature map updated successfully: {payload}")


@tool_boundary("Error deleting feature map")
def delete_feature_map(ctx: ToolContext, feature_map_id: str) -> ToolResult:
    """Delete a feature map by ID."""
    fid = parse_id("feature_map_id", feature_map_id)
    with ctx.repository() as repo:
        repo.delete_feature_map(fid)
    return ToolResult.text("Feature map deleted successfully")
