"""
Request-scoped authorization context.

The HTTP auth middleware resolves the caller and installs an AccessContext for the
duration of the request; the tool layer reads it and hands it to the repository,
which filters every query by owner when one is set.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class AccessContext:
    owner_id: str | None = None
    roles: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def anonymous(cls) -> "AccessContext":
        """Single-user context: no owner filter."""
        return cls()

    @property
    def is_scoped(self) -> bool:
        return self.owner_id is not None


_current: ContextVar[AccessContext] = ContextVar("resume_mcp_access", default=AccessContext())


def current_access() -> AccessContext:
    return _current.get()


@contextmanager
def use_access(ctx: AccessContext) -> Iterator[AccessContext]:
    """Install ctx as the current access context until the block exits."""
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)
