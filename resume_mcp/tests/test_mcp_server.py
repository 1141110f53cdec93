"""Tests for the FastMCP registration: tool list, schemas and error results."""
import asyncio

import anyio
import pytest
from mcp.server.fastmcp.exceptions import ToolError

from resume_mcp.app.mcp.server import build_mcp_server
from resume_mcp.app.services.resume_repository import ResumeRepository
from resume_mcp.app.tools import TOOL_HANDLERS

EXPECTED_TOOLS = [
    "create_resume",
    "update_basic_info",
    "add_contact_info",
    "add_work_experience",
    "add_education",
    "add_other_experience",
    "add_feature_map",
    "update_feature_map",
    "delete_feature_map",
    "get_resume_by_name",
    "list_resumes",
    "delete_resume",
    "generate_preview",
    "update_preview_style",
    "create_template",
    "get_template",
    "list_templates",
    "update_template",
    "delete_template",
    "get_resume_context",
]


@pytest.fixture
def mcp(tool_ctx):
    return build_mcp_server(tool_ctx)


def _list_tools(mcp):
    return anyio.run(mcp.list_tools)


def _call(mcp, name, arguments):
    async def call():
        return await mcp.call_tool(name, arguments)
    return anyio.run(call)


def _texts(result):
    # call_tool returns content blocks, or (content, structured) on newer releases
    content = result[0] if isinstance(result, tuple) else result
    return [block.text for block in content]


def test_registers_every_tool_in_order(mcp):
    assert [t.name for t in _list_tools(mcp)] == EXPECTED_TOOLS
    assert [h.__name__ for h in TOOL_HANDLERS] == EXPECTED_TOOLS


def test_tool_descriptions_come_from_handlers(mcp):
    tools = {t.name: t for t in _list_tools(mcp)}
    assert tools["list_resumes"].description.startswith("List all saved resumes")
    assert "Example template:" in tools["create_template"].description


def test_required_and_optional_parameters(mcp):
    schema = {t.name: t.inputSchema for t in _list_tools(mcp)}["add_work_experience"]
    assert set(schema["required"]) == {"resume_id", "company", "job_title", "start_date"}
    assert schema["properties"]["start_date"]["description"] == "Start date in YYYY-MM-DD format"
    assert schema["properties"]["type"]["type"] == "string"


def test_call_tool_returns_text_content(mcp):
    texts = _texts(_call(mcp, "create_resume", {"name": "John Doe", "description": "Engineer"}))
    assert texts[0].startswith("Resume created successfully: ")

    texts = _texts(_call(mcp, "list_resumes", {}))
    assert texts == ["Resumes found: 1", '["1: John Doe"]']


def test_tool_failure_raises_tool_error(mcp):
    with pytest.raises(ToolError, match="Resume not found: 5"):
        _call(mcp, "delete_resume", {"resume_id": "5"})


def test_invalid_parameter_raises_tool_error(mcp):
    with pytest.raises(ToolError, match="Invalid start_date format"):
        _call(mcp, "add_work_experience", {
            "resume_id": "1",
            "company": "Acme",
            "job_title": "Engineer",
            "start_date": "last year",
        })


def test_handlers_run_in_worker_thread(mcp, monkeypatch):
    seen = []
    original = ResumeRepository.list_resumes

    def recording(self):
        try:
            asyncio.get_running_loop()
            seen.append("event-loop")
        except RuntimeError:
            seen.append("worker-thread")
        return original(self)

    monkeypatch.setattr(ResumeRepository, "list_resumes", recording)
    assert _texts(_call(mcp, "list_resumes", {}))[0] == "Resumes found: 0"
    assert seen == ["worker-thread"]
