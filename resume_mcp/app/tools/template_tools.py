"""
Template CRUD tools. New or changed template source is trial-rendered against the owning
resume before it is stored.
"""
from resume_mcp.app.core.exceptions import TemplateRenderError
from resume_mcp.app.schemas.resume import ResumeView, TemplateView
from resume_mcp.app.tools.base import (
    ToolContext,
    ToolResult,
    parse_id,
    require,
    to_json,
    tool_boundary,
)

EXAMPLE_TEMPLATE = """<div class="max-w-4xl mx-auto p-8 bg-white">
  <h1 class="text-3xl font-bold text-gray-800">{{ name }}</h1>
  <p class="text-gray-600 mt-2">{{ description }}</p>
  {% if contacts %}
  <div class="mt-6">
    <h2 class="text-xl font-semibold text-gray-700">Contact</h2>
    {% for contact in contacts %}<p>{{ contact.key }}: {{ contact.value }}</p>{% endfor %}
  </div>
  {% endif %}
  {% if work_experiences %}
  <div class="mt-6">
    <h2 class="text-xl font-semibold text-gray-700">Work Experience</h2>
    {% for work in work_experiences %}
    <div class="mb-4">
      <h3 class="font-semibold">{{ work.job_title }} at {{ work.company }}</h3>
      <p class="text-sm text-gray-600">{{ work.start_date.strftime("%b %Y") }} - {{ work.end_date.strftime("%b %Y") if work.end_date else "Present" }}</p>
      {% for feature in work.feature_maps %}<p>{{ feature.key }}: {{ feature.value }}</p>{% endfor %}
    </div>
    {% endfor %}
  </div>
  {% endif %}
</div>"""

VALIDATION_HINT = (
    "Please check your Jinja2 template syntax and ensure all referenced fields exist on the resume model."
)


def _validation_failed(error: TemplateRenderError) -> ToolResult:
    return ToolResult.error(f"Template validation failed: {error}. {VALIDATION_HINT}")


@tool_boundary("Failed to create template")
def create_template(
    ctx: ToolContext,
    resume_id: str,
    name: str,
    template_data: str,
    description: str = "",
) -> ToolResult:
    rid = parse_id("resume_id", resume_id)
    require("name", name)
    require("template_data", template_data)

    with ctx.repository() as repo:
        view = ResumeView.model_validate(repo.get_resume_by_id(rid))
        try:
            ctx.template_service.validate(template_data, view)
        except TemplateRenderError as e:
            return _validation_failed(e)
        template = repo.create_template(rid, name, template_data, description)
        result = {"success": True, "template_id": template.id}
    return ToolResult.text(f"Created template successfully: {to_json(result)}")


create_template.__doc__ = (
    "Create a new template for a resume. The template is Jinja2 HTML with the resume fields "
    "available by name (see get_resume_context). Tailwind CSS classes are available.\n\n"
    "Example template:\n" + EXAMPLE_TEMPLATE
)


@tool_boundary("Failed to get template")
def get_template(ctx: ToolContext, template_id: str) -> ToolResult:
    """Get a template by ID, including its Jinja2 source."""
    tid = parse_id("template_id", template_id)
    with ctx.repository() as repo:
        view = TemplateView.model_validate(repo.get_template(tid))
    result = {"success": True, "template": view.model_dump(mode="json")}
    return ToolResult.text(f"Template retrieved successfully: {to_json(result)}")


@tool_boundary("Failed to list templates")
def list_templates(ctx: ToolContext, resume_id: str) -> ToolResult:
    """List all templates that belong to a resume."""
    rid = parse_id("resume_id", resume_id)
    with ctx.repository() as repo:
        views = [TemplateView.model_validate(t).model_dump(mode="json") for t in repo.list_templates(rid)]
    result = {"success": True, "templates": views, "count": len(views)}
    return ToolResult.text(f"Templates listed successfully: {to_json(result)}")


@tool_boundary("Failed to update template")
def update_template(
    ctx: ToolContext,
    template_id: str,
    name: str = "",
    description: str = "",
    template_data: str = "",
) -> ToolResult:
    """
    Update an existing template. Only non-empty fields are changed; new template_data is
    validated against the template's resume before saving.
    """
    tid = parse_id("template_id", template_id)
    with ctx.repository() as repo:
        template = repo.get_template(tid)
        if template_data:
            view = ResumeView.model_validate(repo.get_resume_by_id(template.resume_id))
            try:
                ctx.template_service.validate(template_data, view)
            except TemplateRenderError as e:
                return _validation_failed(e)
        template = repo.update_template(tid, name=name, description=description, template_data=template_data)
        result = {"success": True, "message": f"Template '{template.name}' updated successfully"}
    return ToolResult.text(f"Template updated successfully: {to_json(result)}")


@tool_boundary("Failed to delete template")
def delete_template(ctx: ToolContext, template_id: str) -> ToolResult:
    """Delete a template by ID."""
    tid = parse_id("template_id", template_id)
    with ctx.repository() as repo:
        template = repo.delete_template(tid)
        result = {"success": True, "message": f"Template '{template.name}' deleted successfully"}
    return ToolResult.text(f"Template deleted successfully: {to_json(result)}")
