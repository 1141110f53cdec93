"""
Shared plumbing for tool handlers: dependency bundle, result type, parameter parsing
and the error boundary.

Error taxonomy at the tool boundary:
- ToolInputError (missing/malformed parameter) propagates: the call is aborted before persistence.
- NotFoundError, template errors and database errors become ToolResult.error(...) so the
  agent gets a readable message instead of a transport fault.
"""
from __future__ import annotations

import functools
import json
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Iterator

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from resume_mcp.app.core.access import current_access
from resume_mcp.app.core.config import DATE_FORMAT
from resume_mcp.app.core.exceptions import (
    NotFoundError,
    PdfGenerationError,
    TemplateRenderError,
    ToolInputError,
)
from resume_mcp.app.core.logging_config import get_logger
from resume_mcp.app.db.session import session_scope
from resume_mcp.app.services.resume_repository import ResumeRepository
from resume_mcp.app.services.template_service import TemplateService
from resume_mcp.app.utils.urls import download_session_url, preview_session_url

logger = get_logger("tools")


@dataclass
class ToolResult:
    content: list[str] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, *parts: str) -> "ToolResult":
        return cls(content=list(parts))

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[message], is_error=True)

    @property
    def joined(self) -> str:
        return "".join(self.content)


@dataclass
class ToolContext:
    """What every tool needs: a session factory, the renderer, and where previews are served."""
    session_factory: Callable[[], Session]
    template_service: TemplateService
    base_url: str = ""
    port: int | str = 0

    def __post_init__(self):
        # Fail at startup rather than on the first preview.
        preview_session_url(self.base_url, self.port, "check")

    @contextmanager
    def repository(self) -> Iterator[ResumeRepository]:
        """One unit of work scoped to the caller's current access context."""
        with session_scope(self.session_factory) as db:
            yield ResumeRepository(db, current_access())

    def preview_url(self, session_id: str) -> str:
        return preview_session_url(self.base_url, self.port, session_id)

    def download_url(self, session_id: str) -> str:
        return download_session_url(self.base_url, self.port, session_id)


# --- parameter parsing ---

def require(name: str, value: str | None) -> str:
    if value is None or value == "":
        raise ToolInputError(f"{name} parameter is required")
    return value


def parse_id(name: str, value: str | None) -> int:
    raw = require(name, value).strip()
    try:
        parsed = int(raw)
    except ValueError as e:
        raise ToolInputError(f"Invalid {name}: {raw!r} is not an integer") from e
    if parsed <= 0:
        raise ToolInputError(f"Invalid {name}: must be a positive integer")
    return parsed


def parse_optional_id(name: str, value: str | None) -> int | None:
    if not value:
        return None
    return parse_id(name, value)


def parse_date(name: str, value: str | None) -> date:
    raw = require(name, value).strip()
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as e:
        raise ToolInputError(f"Invalid {name} format: expected YYYY-MM-DD, got {raw!r}") from e


def parse_optional_date(name: str, value: str | None) -> date | None:
    if not value:
        return None
    return parse_date(name, value)


def parse_choice(name: str, value: str | None, choices: tuple[str, ...], default: str) -> str:
    chosen = value or default
    if chosen not in choices:
        raise ToolInputError(f"Invalid {name}. Must be: {', '.join(choices)}")
    return chosen


# --- output ---

def to_json(data) -> str:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    elif isinstance(data, list):
        data = [d.model_dump(mode="json") if isinstance(d, BaseModel) else d for d in data]
    return json.dumps(data, default=str)


def tool_boundary(failure: str):
    """
    Turn lookup, template, PDF and database failures into an error result prefixed with `failure`.
    ToolInputError is left to propagate.
    """
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs) -> ToolResult:
            try:
                return fn(*args, **kwargs)
            except (NotFoundError, TemplateRenderError, PdfGenerationError) as e:
                logger.info("%s failed: %s", fn.__name__, e)
                return ToolResult.error(f"{failure}: {e}")
            except SQLAlchemyError as e:
                logger.exception("%s database error", fn.__name__)
                return ToolResult.error(f"{failure}: {e}")
        return wrapper
    return decorator
