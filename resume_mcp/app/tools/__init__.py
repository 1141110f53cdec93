"""
Tool handlers, one plain function per MCP tool. Each takes a ToolContext plus string
parameters and returns a ToolResult.
"""
from resume_mcp.app.tools.base import ToolContext, ToolResult
from resume_mcp.app.tools.entry_tools import (
    add_contact_info,
    add_education,
    add_other_experience,
    add_work_experience,
)
from resume_mcp.app.tools.feature_map_tools import add_feature_map, delete_feature_map, update_feature_map
from resume_mcp.app.tools.preview_tools import generate_preview, update_preview_style
from resume_mcp.app.tools.resume_tools import (
    create_resume,
    delete_resume,
    get_resume_by_name,
    get_resume_context,
    list_resumes,
    update_basic_info,
)
from resume_mcp.app.tools.template_tools import (
    create_template,
    delete_template,
    get_template,
    list_templates,
    update_template,
)

# Registration order of the MCP surface.
TOOL_HANDLERS = (
    create_resume,
    update_basic_info,
    add_contact_info,
    add_work_experience,
    add_education,
    add_other_experience,
    add_feature_map,
    update_feature_map,
    delete_feature_map,
    get_resume_by_name,
    list_resumes,
    delete_resume,
    generate_preview,
    update_preview_style,
    create_template,
    get_template,
    list_templates,
    update_template,
    delete_template,
    get_resume_context,
)
