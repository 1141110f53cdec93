"""
Template rendering: user templates are Jinja2 source executed against a ResumeView,
then wrapped in the preview shell (resume_mcp/templates/preview_shell.html).

Rendering doubles as template validation: create/update trial-render against the
owning resume and reject anything that fails to parse or execute.
"""
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment
from markupsafe import Markup

from resume_mcp.app.core.config import PDF_FILENAME, PREVIEW_TITLE, TAILWIND_CDN_URL
from resume_mcp.app.core.exceptions import TemplateExecutionError, TemplateParseError
from resume_mcp.app.core.logging_config import get_logger
from resume_mcp.app.schemas.resume import ResumeView

logger = get_logger("services.template_service")

SHELL_TEMPLATE_DIR = Path(__file__).resolve().parent.parent.parent / "templates"
SHELL_TEMPLATE_NAME = "preview_shell.html"


def build_render_context(resume: ResumeView) -> dict:
    """Resume fields as top-level names (name, contacts, work_experiences, ...) plus `resume` itself."""
    context = {field: getattr(resume, field) for field in ResumeView.model_fields}
    context["resume"] = resume
    return context


class TemplateService:
    def __init__(self, shell_dir: Path | None = None):
        self._user_env = SandboxedEnvironment(autoescape=True, undefined=StrictUndefined)
        self._shell_env = Environment(
            loader=FileSystemLoader(str(shell_dir or SHELL_TEMPLATE_DIR)),
            autoescape=True,
        )

    def render_body(self, template_str: str, resume: ResumeView) -> str:
        """Execute the user template only. Parse errors surface before any execution."""
        try:
            template = self._user_env.from_string(template_str)
        except TemplateSyntaxError as e:
            logger.warning("Template parse error line=%s: %s", e.lineno, e.message)
            raise TemplateParseError(f"line {e.lineno}: {e.message}") from e
        try:
            return template.render(**build_render_context(resume))
        except Exception as e:
            logger.warning("Template execution error: %s", e)
            raise TemplateExecutionError(str(e)) from e

    def generate_preview(self, template_str: str, css: str, resume: ResumeView) -> str:
        return self.generate_preview_with_options(template_str, css, resume, False, "")

    def generate_preview_with_options(
        self,
        template_str: str,
        css: str,
        resume: ResumeView,
        include_download_button: bool,
        download_url: str,
    ) -> str:
        """Full standalone HTML document; the app bar is added only with a non-empty download_url."""
        body = self.render_body(template_str, resume)
        shell = self._shell_env.get_template(SHELL_TEMPLATE_NAME)
        return shell.render(
            title=PREVIEW_TITLE,
            tailwind_cdn_url=TAILWIND_CDN_URL,
            css=Markup(css or ""),
            body=Markup(body),
            download_url=download_url if include_download_button else "",
            pdf_filename=PDF_FILENAME,
        )

    def validate(self, template_str: str, resume: ResumeView) -> None:
        """Trial render; raises TemplateParseError / TemplateExecutionError."""
        self.render_body(template_str, resume)
