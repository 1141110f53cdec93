"""
FastAPI application entry point
"""
from contextlib import AsyncExitStack, asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resume_mcp.app.api.middleware import MCPAuthMiddleware
from resume_mcp.app.api.v1 import preview
from resume_mcp.app.core.config import SERVER_NAME, SERVICE_NAME, settings
from resume_mcp.app.core.logging_config import get_logger
from resume_mcp.app.db import session as db_session
from resume_mcp.app.db.base import Base
from resume_mcp.app.mcp.server import build_mcp_server
from resume_mcp.app.services.authenticator import ApiKeyAuthenticator
from resume_mcp.app.services.pdf_generator import PdfGenerator
from resume_mcp.app.services.template_service import TemplateService
from resume_mcp.app.tools.base import ToolContext

# Import models so they register with Base.metadata
import resume_mcp.app.models  # noqa: F401

logger = get_logger("main")


def init_db() -> None:
    """Create database tables"""
    Base.metadata.create_all(bind=db_session.engine)


def default_tool_context(port: int | str | None = None) -> ToolContext:
    return ToolContext(
        session_factory=db_session.SessionLocal,
        template_service=TemplateService(),
        base_url=settings.base_url,
        port=settings.port if port is None else port,
    )


def create_app(
    tool_context: ToolContext | None = None,
    pdf_generator: PdfGenerator | None = None,
    authenticator: ApiKeyAuthenticator | None = None,
    serve_mcp: bool = True,
) -> FastAPI:
    """
    Build the HTTP app: health, preview and download routes, plus the MCP endpoint
    at /mcp (stateless streamable HTTP behind MCPAuthMiddleware) when serve_mcp is set.
    """
    ctx = tool_context or default_tool_context()
    mcp = build_mcp_server(ctx) if serve_mcp else None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db()
        async with AsyncExitStack() as stack:
            if mcp is not None:
                await stack.enter_async_context(mcp.session_manager.run())
            logger.info("%s ready mcp=%s", SERVER_NAME, mcp is not None)
            yield

    app = FastAPI(
        title=SERVER_NAME,
        description="Resume builder exposed over MCP with HTML preview and PDF download",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.tool_context = ctx
    app.state.pdf_generator = pdf_generator or PdfGenerator(ctx.template_service)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if mcp is not None:
        app.add_middleware(MCPAuthMiddleware, authenticator=authenticator)

    app.include_router(preview.router, prefix="/resume", tags=["preview"])

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "ok", "service": SERVICE_NAME}

    if mcp is not None:
        # Catch-all mount; registered last so the routes above win.
        app.mount("/", mcp.streamable_http_app())

    return app


app = create_app()
