"""
API-key authenticator - resolves an MCP caller's API key to a user via the external
authenticator service (MCPROUTER_SERVER_URL), authenticating ourselves with MCPROUTER_SERVER_API_KEY.
"""
import json
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from resume_mcp.app.core.access import AccessContext
from resume_mcp.app.core.config import settings
from resume_mcp.app.core.exceptions import AuthenticationError
from resume_mcp.app.core.logging_config import get_logger

logger = get_logger("services.authenticator")

VERIFY_PATH = "/api/auth/apikey/verify"


class ApiKeyAuthenticator:
    def __init__(self, server_url: str | None = None, server_api_key: str | None = None, timeout: int | None = None):
        self.server_url = (settings.mcprouter_server_url if server_url is None else server_url).rstrip("/")
        self.server_api_key = settings.mcprouter_server_api_key if server_api_key is None else server_api_key
        self.timeout = timeout or settings.http_request_timeout

    @property
    def configured(self) -> bool:
        return bool(self.server_url)

    def authenticate(self, api_key: str) -> AccessContext:
        """Blocking call; run it off the event loop."""
        if not self.configured:
            raise AuthenticationError("API key authentication is not configured")
        request = Request(
            self.server_url + VERIFY_PATH,
            data=json.dumps({"api_key": api_key}).encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "X-API-Key": self.server_api_key,
            },
            method="POST",
        )
        try:
            with urlopen(request, timeout=self.timeout) as resp:
                payload = json.loads(resp.read().decode("utf-8"))
        except HTTPError as e:
            logger.warning("API key rejected by authenticator status=%s", e.code)
            raise AuthenticationError(f"API key rejected ({e.code})") from e
        except (URLError, TimeoutError, ValueError) as e:
            logger.error("Authenticator unavailable url=%s: %s", self.server_url, e)
            raise AuthenticationError(f"Authenticator unavailable: {e}") from e

        user_id = payload.get("id") or payload.get("sub")
        if not user_id:
            raise AuthenticationError("Authenticator response missing user id")
        role = payload.get("role")
        return AccessContext(owner_id=str(user_id), roles=(role,) if role else ())
