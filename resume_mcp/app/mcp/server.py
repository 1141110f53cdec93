"""
MCP server - exposes the tool layer through FastMCP.

The same server instance serves stdio (single user, anonymous access) or stateless
streamable HTTP mounted under the FastAPI app at /mcp (access context installed by
MCPAuthMiddleware for each request). Handlers run in the threadpool, which carries the
access context along.
"""
import inspect
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field
from starlette.concurrency import run_in_threadpool

from resume_mcp.app import tools
from resume_mcp.app.core.config import SERVER_NAME, settings
from resume_mcp.app.tools import ToolContext, ToolResult

ResumeId = Annotated[str, Field(description="The ID of the resume")]
TemplateId = Annotated[str, Field(description="The ID of the template")]
FeatureMapId = Annotated[str, Field(description="The ID of the feature map")]
ExperienceType = Annotated[
    str, Field(description="Type: fulltime, parttime, or internship (default: fulltime)")
]
StartDate = Annotated[str, Field(description="Start date in YYYY-MM-DD format")]
EndDate = Annotated[str, Field(description="End date in YYYY-MM-DD format (leave empty if current)")]

INSTRUCTIONS = (
    "Manage resumes for the user: create a resume, add contacts, work experience, education and "
    "other experiences, attach details with feature maps, then create a Jinja2 template "
    "(call get_resume_context first) and generate_preview to get a preview URL and PDF download URL."
)


def _respond(result: ToolResult) -> list[str]:
    if result.is_error:
        raise ToolError(result.joined)
    return result.content


def _describe(handler) -> str:
    return inspect.getdoc(handler) or ""


def build_mcp_server(ctx: ToolContext) -> FastMCP:
    """Create the FastMCP instance and register every tool against ctx."""
    mcp = FastMCP(
        SERVER_NAME,
        instructions=INSTRUCTIONS,
        stateless_http=True,
        streamable_http_path="/mcp",
        # Served by uvicorn on all interfaces; keeps FastMCP's localhost-only Host check off.
        host="0.0.0.0",
        log_level=settings.log_level.upper(),
    )

    async def call(handler, **kwargs):
        return _respond(await run_in_threadpool(handler, ctx, **kwargs))

    @mcp.tool(name="create_resume", description=_describe(tools.create_resume))
    async def create_resume(
        name: Annotated[str, Field(description="The name of the resume owner")],
        description: Annotated[str, Field(description="Brief description or summary")],
        photo: Annotated[str, Field(description="URL or path to the photo")] = "",
        copy_from_resume_id: Annotated[
            str, Field(description="Optional: ID of an existing resume to copy all data from")
        ] = "",
    ):
        return await call(
            tools.create_resume, name=name, description=description, photo=photo, copy_from_resume_id=copy_from_resume_id
        )

    @mcp.tool(name="update_basic_info", description=_describe(tools.update_basic_info))
    async def update_basic_info(
        resume_id: ResumeId,
        name: Annotated[str, Field(description="New name (empty keeps the current value)")] = "",
        photo: Annotated[str, Field(description="New photo URL or path (empty keeps the current value)")] = "",
        description: Annotated[str, Field(description="New description (empty keeps the current value)")] = "",
    ):
        return await call(
            tools.update_basic_info, resume_id=resume_id, name=name, photo=photo, description=description
        )

    @mcp.tool(name="add_contact_info", description=_describe(tools.add_contact_info))
    async def add_contact_info(
        resume_id: ResumeId,
        key: Annotated[str, Field(description="Contact type, e.g. email, phone, github")],
        value: Annotated[str, Field(description="Contact value")],
    ):
        return await call(tools.add_contact_info, resume_id=resume_id, key=key, value=value)

    @mcp.tool(name="add_work_experience", description=_describe(tools.add_work_experience))
    async def add_work_experience(
        resume_id: ResumeId,
        company: Annotated[str, Field(description="The company name")],
        job_title: Annotated[str, Field(description="The job title")],
        start_date: StartDate,
        type: ExperienceType = "",
        end_date: EndDate = "",
    ):
        return await call(
            tools.add_work_experience,
            resume_id=resume_id,
            company=company,
            job_title=job_title,
            start_date=start_date,
            type=type,
            end_date=end_date,
        )

    @mcp.tool(name="add_education", description=_describe(tools.add_education))
    async def add_education(
        resume_id: ResumeId,
        school_name: Annotated[str, Field(description="The name of the school")],
        start_date: StartDate,
        type: ExperienceType = "",
        end_date: EndDate = "",
    ):
        return await call(
            tools.add_education, resume_id=resume_id, school_name=school_name, start_date=start_date, type=type, end_date=end_date
        )

    @mcp.tool(name="add_other_experience", description=_describe(tools.add_other_experience))
    async def add_other_experience(
        resume_id: ResumeId,
        category: Annotated[str, Field(description="The category (skills, awards, certifications, etc.)")],
    ):
        return await call(tools.add_other_experience, resume_id=resume_id, category=category)

    @mcp.tool(name="add_feature_map", description=_describe(tools.add_feature_map))
    async def add_feature_map(
        experience_id: Annotated[str, Field(description="The ID of the experience to add features to")],
        key: Annotated[str, Field(description="The feature key")],
        value: Annotated[str, Field(description="The feature value (plain text or serialized JSON)")],
        experience_type: Annotated[
            str, Field(description="Kind of experience experience_id refers to: work (default), education, other")
        ] = "",
    ):
        return await call(
            tools.add_feature_map, experience_id=experience_id, key=key, value=value, experience_type=experience_type
        )

    @mcp.tool(name="update_feature_map", description=_describe(tools.update_feature_map))
    async def update_feature_map(
        feature_map_id: FeatureMapId,
        key: Annotated[str, Field(description="New key (empty keeps the current value)")] = "",
        value: Annotated[str, Field(description="New value (empty keeps the current value)")] = "",
    ):
        return await call(tools.update_feature_map, feature_map_id=feature_map_id, key=key, value=value)

    @mcp.tool(name="delete_feature_map", description=_describe(tools.delete_feature_map))
    async def delete_feature_map(feature_map_id: FeatureMapId):
        return await call(tools.delete_feature_map, feature_map_id=feature_map_id)

    @mcp.tool(name="get_resume_by_name", description=_describe(tools.get_resume_by_name))
    async def get_resume_by_name(name: Annotated[str, Field(description="The name of the resume to retrieve")]):
        return await call(tools.get_resume_by_name, name=name)

    @mcp.tool(name="list_resumes", description=_describe(tools.list_resumes))
    async def list_resumes():
        return await call(tools.list_resumes)

    @mcp.tool(name="delete_resume", description=_describe(tools.delete_resume))
    async def delete_resume(resume_id: ResumeId):
        return await call(tools.delete_resume, resume_id=resume_id)

    @mcp.tool(name="generate_preview", description=_describe(tools.generate_preview))
    async def generate_preview(
        resume_id: ResumeId,
        template_id: TemplateId,
        css: Annotated[str, Field(description="Additional CSS styles for the preview")] = "",
    ):
        return await call(tools.generate_preview, resume_id=resume_id, template_id=template_id, css=css)

    @mcp.tool(name="update_preview_style", description=_describe(tools.update_preview_style))
    async def update_preview_style(
        session_id: Annotated[str, Field(description="The session ID of the preview to update")],
        css: Annotated[str, Field(description="New CSS styles for the preview")],
    ):
        return await call(tools.update_preview_style, session_id=session_id, css=css)

    @mcp.tool(name="create_template", description=_describe(tools.create_template))
    async def create_template(
        resume_id: ResumeId,
        name: Annotated[str, Field(description="Name of the template")],
        template_data: Annotated[str, Field(description="Jinja2 template source for rendering the resume HTML")],
        description: Annotated[str, Field(description="Description of what this template does")] = "",
    ):
        return await call(
            tools.create_template, resume_id=resume_id, name=name, template_data=template_data, description=description
        )

    @mcp.tool(name="get_template", description=_describe(tools.get_template))
    async def get_template(template_id: TemplateId):
        return await call(tools.get_template, template_id=template_id)

    @mcp.tool(name="list_templates", description=_describe(tools.list_templates))
    async def list_templates(resume_id: ResumeId):
        return await call(tools.list_templates, resume_id=resume_id)

    @mcp.tool(name="update_template", description=_describe(tools.update_template))
    async def update_template(
        template_id: TemplateId,
        name: Annotated[str, Field(description="New name (empty keeps the current value)")] = "",
        description: Annotated[str, Field(description="New description (empty keeps the current value)")] = "",
        template_data: Annotated[str, Field(description="New Jinja2 source (empty keeps the current value)")] = "",
    ):
        return await call(
            tools.update_template, template_id=template_id, name=name, description=description, template_data=template_data
        )

    @mcp.tool(name="delete_template", description=_describe(tools.delete_template))
    async def delete_template(template_id: TemplateId):
        return await call(tools.delete_template, template_id=template_id)

    @mcp.tool(name="get_resume_context", description=_describe(tools.get_resume_context))
    async def get_resume_context(resume_id: ResumeId):
        return await call(tools.get_resume_context, resume_id=resume_id)

    return mcp
