"""
Error hierarchy shared by the repository, rendering services and tool layer.
"""


class ResumeMCPError(Exception):
    """Base class for application errors."""


class ToolInputError(ResumeMCPError, ValueError):
    """A tool parameter is missing or malformed. Raised before any persistence access."""


class NotFoundError(ResumeMCPError):
    """An entity lookup missed (or belongs to another owner)."""

    def __init__(self, entity: str, key: object):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class TemplateRenderError(ResumeMCPError):
    """Template could not be rendered. Carries the underlying engine message."""

    prefix = "Template error"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class TemplateParseError(TemplateRenderError):
    prefix = "Template parse error"


class TemplateExecutionError(TemplateRenderError):
    prefix = "Template execution error"


class PdfGenerationError(ResumeMCPError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"PDF generation error: {detail}")


class AuthenticationError(ResumeMCPError):
    """Caller credentials are missing or were rejected."""
