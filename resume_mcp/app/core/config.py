"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

Server settings and the constants shared by tools, rendering and the CLI live here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: project root .env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "resume-mcp"
    app_version: str = "1.0.0"
    port: int = 8080

    # Database. POSTGRES_URL wins over DATABASE_URL when both are set.
    database_url: str = "sqlite:///~/resume.db"
    postgres_url: str = ""

    # Externally reachable base URL for preview/download links
    base_url: str = ""

    # Headless browser (remote CDP endpoint; empty = launch local Chromium)
    browser_remote_url: str = Field(default="", validation_alias="CHROMEDP_REMOTE_URL")
    pdf_timeout_seconds: int = 30

    # Auth
    mcprouter_server_url: str = ""
    mcprouter_server_api_key: str = ""
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"

    # HTTP / network
    http_request_timeout: int = 30

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def resolved_database_url(self) -> str:
        """Database URL with POSTGRES_URL override and ~ expanded for SQLite files."""
        if self.postgres_url:
            return self.postgres_url
        url = self.database_url
        prefix = "sqlite:///"
        if url.startswith(prefix + "~"):
            return prefix + str(Path(url[len(prefix):]).expanduser())
        return url


settings = Settings()


# --- Constants (non-env, business config) ---

SERVER_NAME: str = "Resume MCP Server"
SERVICE_NAME: str = "resume-mcp"

# Work experience / education types
EXPERIENCE_TYPES: tuple[str, ...] = ("fulltime", "parttime", "internship")
DEFAULT_EXPERIENCE_TYPE: str = "fulltime"
DATE_FORMAT: str = "%Y-%m-%d"

# Preview shell
TAILWIND_CDN_URL: str = "https://cdn.tailwindcss.com"
PREVIEW_TITLE: str = "Resume Preview"
PREVIEW_PATH: str = "/resume/preview/{session_id}"
DOWNLOAD_PATH: str = "/resume/download/{session_id}"
PDF_FILENAME: str = "resume.pdf"

# Desktop client integration
DESKTOP_SERVER_KEY: str = "resume-mcp"
DESKTOP_SERVER_PORT: str = "8123"
