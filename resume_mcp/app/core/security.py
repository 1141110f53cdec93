"""
JWT helpers for bearer-token callers of the MCP endpoint
"""
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from resume_mcp.app.core.access import AccessContext
from resume_mcp.app.core.config import settings
from resume_mcp.app.core.exceptions import AuthenticationError


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=60))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> AccessContext:
    """Validate signature/expiry and map `sub` (and optional `roles`) to an AccessContext."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e
    sub = payload.get("sub")
    if not sub:
        raise AuthenticationError("Invalid token")
    roles = payload.get("roles") or []
    return AccessContext(owner_id=str(sub), roles=tuple(roles))
