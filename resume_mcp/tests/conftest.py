"""
Pytest fixtures for resume-mcp tests.
Uses in-memory SQLite shared through StaticPool, a stub PDF generator and a TestClient
over the preview app.
"""
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Use in-memory SQLite for tests - set before config/session load
# Must override any .env DATABASE_URL
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["POSTGRES_URL"] = ""
os.environ["BASE_URL"] = ""
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["MCPROUTER_SERVER_URL"] = ""

from resume_mcp.app.db.base import Base
from resume_mcp.app.db.session import build_engine

# In-memory SQLite for tests - StaticPool ensures all sessions share same DB
engine = build_engine("sqlite:///:memory:", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

# Patch the session module before the app is built so everything uses the test engine
import resume_mcp.app.db.session as session_module
session_module.engine = engine
session_module.SessionLocal = TestingSessionLocal

from resume_mcp.app.core.dependencies import get_db
from resume_mcp.app.services.resume_repository import ResumeRepository
from resume_mcp.app.services.template_service import TemplateService
from resume_mcp.app.tools.base import ToolContext
from resume_mcp.main import create_app


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class StubPdfGenerator:
    """Renders through the real template service but skips the browser."""

    def __init__(self, template_service: TemplateService):
        self.template_service = template_service
        self.calls = []

    def generate_pdf(self, template_str, css, resume):
        html = self.template_service.generate_preview(template_str, css, resume)
        self.calls.append(html)
        return b"%PDF-1.4 stub"


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repo(db_session):
    """Anonymous repository on the test session; callers commit."""
    return ResumeRepository(db_session)


@pytest.fixture
def tool_ctx(db_session):
    return ToolContext(
        session_factory=TestingSessionLocal,
        template_service=TemplateService(),
        base_url="",
        port=8080,
    )


@pytest.fixture
def pdf_generator(tool_ctx):
    return StubPdfGenerator(tool_ctx.template_service)


@pytest.fixture
def client(tool_ctx, pdf_generator):
    """TestClient over the preview/health routes, DB overridden."""
    app = create_app(tool_ctx, pdf_generator=pdf_generator, serve_mcp=False)
    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
