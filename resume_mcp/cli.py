"""
Console entry points.

  resume-mcp            MCP over stdio, preview server on --port in a background thread
  resume-mcp-http       streamable HTTP MCP plus preview routes on PORT
  resume-mcp-configure  register resume-mcp with the Claude Desktop client
"""
import argparse
import socket
import sys
import threading

import uvicorn

from resume_mcp.app.core.config import settings
from resume_mcp.app.core.logging_config import setup_logging
from resume_mcp.app.mcp.server import build_mcp_server
from resume_mcp.app.services.desktop_config import update_desktop_config
from resume_mcp.main import create_app, default_tool_context, init_db


def bind_preview_socket(port: int, host: str = "0.0.0.0") -> socket.socket:
    """Bind before serving so port 0 resolves to the real port used in preview URLs."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind((host, port))
    return sock


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="resume-mcp", description="Resume MCP server (stdio)")
    parser.add_argument("--port", type=int, default=0, help="preview HTTP port (0 = pick a free port)")
    args = parser.parse_args(argv)

    logger = setup_logging(stream=sys.stderr)
    init_db()

    sock = bind_preview_socket(args.port)
    port = sock.getsockname()[1]
    ctx = default_tool_context(port=port)

    preview_app = create_app(ctx, serve_mcp=False)
    server = uvicorn.Server(uvicorn.Config(preview_app, log_config=None, log_level=settings.log_level.lower()))
    thread = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, name="preview-http", daemon=True)
    thread.start()
    logger.info("Preview server listening on port %d", port)

    try:
        build_mcp_server(ctx).run("stdio")
    finally:
        server.should_exit = True
        thread.join(timeout=5)
    return 0


def serve_http(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="resume-mcp-http", description="Resume MCP server (streamable HTTP)")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args(argv)

    setup_logging()
    uvicorn.run(
        create_app(default_tool_context(port=args.port)),
        host=args.host,
        port=args.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    return 0


def configure_desktop(argv: list[str] | None = None) -> int:
    argparse.ArgumentParser(
        prog="resume-mcp-configure",
        description="Add resume-mcp to the Claude Desktop MCP server config",
    ).parse_args(argv)

    setup_logging()
    try:
        path = update_desktop_config()
    except ValueError as e:
        print(f"Failed to parse existing config: {e}", file=sys.stderr)
        return 1
    if path is None:
        print("Claude Desktop not found - skipping configuration")
        print("Please install Claude Desktop first if you want to use MCP integration with Claude Desktop")
        return 0
    print(f"Successfully updated Claude Desktop config at {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
