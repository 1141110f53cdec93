"""
Authentication for the MCP endpoint.

Callers present either an API key (X-API-Key, checked against the external authenticator)
or a bearer JWT. The resolved identity is installed as the current AccessContext while the
request is handled, so every repository call it makes is scoped to that owner.
"""
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from resume_mcp.app.core.access import AccessContext, use_access
from resume_mcp.app.core.exceptions import AuthenticationError
from resume_mcp.app.core.logging_config import get_logger
from resume_mcp.app.core.security import decode_access_token
from resume_mcp.app.services.authenticator import ApiKeyAuthenticator

logger = get_logger("api.middleware")

API_KEY_HEADER = "x-api-key"


class MCPAuthMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        authenticator: ApiKeyAuthenticator | None = None,
        protected_prefix: str = "/mcp",
    ):
        self.app = app
        self.authenticator = authenticator or ApiKeyAuthenticator()
        self.protected_prefix = protected_prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.is_protected(scope["path"]):
            await self.app(scope, receive, send)
            return

        try:
            access = await self.resolve(Headers(scope=scope))
        except AuthenticationError as e:
            logger.info("Rejected MCP request path=%s: %s", scope["path"], e)
            response = JSONResponse({"error": "Unauthorized"}, status_code=401)
            await response(scope, receive, send)
            return

        with use_access(access):
            await self.app(scope, receive, send)

    def is_protected(self, path: str) -> bool:
        return path == self.protected_prefix or path.startswith(self.protected_prefix + "/")

    async def resolve(self, headers: Headers) -> AccessContext:
        api_key = headers.get(API_KEY_HEADER)
        if api_key:
            return await run_in_threadpool(self.authenticator.authenticate, api_key)

        authorization = headers.get("authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return decode_access_token(token.strip())

        raise AuthenticationError("Missing credentials")
