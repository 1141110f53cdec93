"""Tests for TemplateService rendering, the preview shell and template errors."""
from datetime import date

import pytest

from resume_mcp.app.core.exceptions import TemplateExecutionError, TemplateParseError
from resume_mcp.app.schemas.resume import ContactView, ResumeView, WorkExperienceView
from resume_mcp.app.services.template_service import TemplateService, build_render_context


@pytest.fixture
def service():
    return TemplateService()


@pytest.fixture
def resume():
    return ResumeView(
        id=1,
        name="John Doe",
        description="Software Engineer",
        contacts=[ContactView(id=1, resume_id=1, key="email", value="john@example.com")],
        work_experiences=[
            WorkExperienceView(
                id=1,
                resume_id=1,
                company="Acme <Corp>",
                job_title="Engineer",
                type="fulltime",
                start_date=date(2020, 1, 1),
            )
        ],
    )


def test_render_context_exposes_fields_and_resume(resume):
    context = build_render_context(resume)
    assert context["name"] == "John Doe"
    assert context["resume"] is resume
    assert {"contacts", "work_experiences", "educations", "other_experiences"} <= set(context)


def test_render_body_uses_resume_fields(service, resume):
    html = service.render_body(
        "<h1>{{ name }}</h1>{% for c in contacts %}<p>{{ c.key }}={{ c.value }}</p>{% endfor %}", resume
    )
    assert html == "<h1>John Doe</h1><p>email=john@example.com</p>"


def test_render_body_escapes_values(service, resume):
    html = service.render_body("{{ work_experiences[0].company }}", resume)
    assert html == "Acme &lt;Corp&gt;"


def test_render_body_date_helpers(service, resume):
    html = service.render_body(
        '{% for w in work_experiences %}{{ w.start_date.strftime("%b %Y") }} - '
        '{{ w.end_date.strftime("%b %Y") if w.end_date else "Present" }}{% endfor %}',
        resume,
    )
    assert html == "Jan 2020 - Present"


def test_parse_error_is_reported_before_execution(service, resume):
    with pytest.raises(TemplateParseError) as exc_info:
        service.render_body("{% if name %}unterminated", resume)
    assert str(exc_info.value).startswith("Template parse error: line 1")


def test_unknown_field_is_execution_error(service, resume):
    with pytest.raises(TemplateExecutionError, match="nickname"):
        service.render_body("{{ resume.nickname }}", resume)


def test_sandbox_blocks_unsafe_attribute_access(service, resume):
    with pytest.raises(TemplateExecutionError):
        service.render_body("{{ resume.__class__.__mro__ }}", resume)


def test_generate_preview_without_download_bar(service, resume):
    html = service.generate_preview("<h1>{{ name }}</h1>", "h1 { color: red; }", resume)
    assert html.startswith("<!DOCTYPE html>")
    assert '<script src="https://cdn.tailwindcss.com"></script>' in html
    assert "<style>h1 { color: red; }</style>" in html
    assert "<title>Resume Preview</title>" in html
    assert "<h1>John Doe</h1>" in html
    assert "download-btn" not in html


def test_generate_preview_omits_empty_css(service, resume):
    html = service.generate_preview("<p>x</p>", "", resume)
    assert "<style>" not in html.split("</head>")[0]


def test_generate_preview_with_download_button(service, resume):
    html = service.generate_preview_with_options(
        "<h1>{{ name }}</h1>", "", resume, include_download_button=True, download_url="/resume/download/abc"
    )
    assert 'id="download-btn"' in html
    assert 'fetch("/resume/download/abc")' in html
    assert 'a.download = "resume.pdf"' in html
    assert html.index("download-btn") < html.index("<h1>John Doe</h1>")


def test_download_button_needs_url(service, resume):
    html = service.generate_preview_with_options("<p>x</p>", "", resume, True, "")
    assert "download-btn" not in html


def test_validate_raises_on_bad_template(service, resume):
    service.validate("{{ name }}", resume)
    with pytest.raises(TemplateParseError):
        service.validate("{{ name ", resume)
