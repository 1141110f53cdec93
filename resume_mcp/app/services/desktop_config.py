"""
Register the stdio server with the Claude Desktop client by editing its claude_desktop_config.json.
"""
import json
import os
import sys
from pathlib import Path

from resume_mcp.app.core.config import DESKTOP_SERVER_KEY, DESKTOP_SERVER_PORT
from resume_mcp.app.core.logging_config import get_logger

logger = get_logger("services.desktop_config")

CONFIG_FILENAME = "claude_desktop_config.json"


def desktop_config_dir(home: Path | None = None, platform: str | None = None) -> Path:
    home = home or Path.home()
    platform = platform or sys.platform
    if platform == "darwin":
        return home / "Library" / "Application Support" / "Claude"
    if platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        return Path(appdata) / "Claude" if appdata else home / "AppData" / "Roaming" / "Claude"
    return home / ".config" / "Claude"


def server_entry(home: Path) -> dict:
    return {
        "command": "resume-mcp",
        "args": ["--port", DESKTOP_SERVER_PORT],
        "env": {"HOME": str(home)},
    }


def update_desktop_config(home: Path | None = None, config_dir: Path | None = None) -> Path | None:
    """
    Add or replace the mcpServers entry for this server, keeping every other key.
    Returns the config path, or None when the desktop client is not installed.
    """
    home = home or Path.home()
    config_dir = config_dir or desktop_config_dir(home)
    config_path = config_dir / CONFIG_FILENAME

    if not config_dir.exists():
        logger.info("Claude Desktop not found at %s - skipping configuration", config_dir)
        return None

    config: dict = {}
    if config_path.exists():
        # A malformed file is reported rather than overwritten.
        config = json.loads(config_path.read_text(encoding="utf-8") or "{}")

    servers = config.setdefault("mcpServers", {})
    servers[DESKTOP_SERVER_KEY] = server_entry(home)

    config_path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    logger.info("Updated Claude Desktop config at %s", config_path)
    return config_path
