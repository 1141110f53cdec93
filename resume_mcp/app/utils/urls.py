"""
Public URLs for preview sessions. BASE_URL (when set) replaces scheme/host; otherwise localhost:<port>.
"""
from urllib.parse import urlparse, urlunparse

from resume_mcp.app.core.config import DOWNLOAD_PATH, PREVIEW_PATH


def _session_url(base_url: str, port: int | str, path: str) -> str:
    if base_url:
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"invalid BASE_URL: {base_url!r}")
        return urlunparse(parsed._replace(path=path, params="", query="", fragment=""))
    return f"http://localhost:{port}{path}"


def preview_session_url(base_url: str, port: int | str, session_id: str) -> str:
    return _session_url(base_url, port, PREVIEW_PATH.format(session_id=session_id))


def download_session_url(base_url: str, port: int | str, session_id: str) -> str:
    return _session_url(base_url, port, DOWNLOAD_PATH.format(session_id=session_id))
