"""
Generate PDF from a rendered preview using headless Chromium via Playwright.
Connects to a remote browser over CDP when CHROMEDP_REMOTE_URL is set, otherwise launches one locally.
"""
import time
from urllib.parse import quote

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from resume_mcp.app.core.config import settings
from resume_mcp.app.core.exceptions import PdfGenerationError
from resume_mcp.app.core.logging_config import get_logger
from resume_mcp.app.schemas.resume import ResumeView
from resume_mcp.app.services.template_service import TemplateService

logger = get_logger("services.pdf_generator")


class PdfGenerator:
    """
    Must be called from a thread without a running event loop (sync Playwright);
    FastAPI runs plain `def` endpoints in its threadpool.
    """

    def __init__(
        self,
        template_service: TemplateService,
        remote_url: str | None = None,
        timeout_seconds: int | None = None,
    ):
        self.template_service = template_service
        self.remote_url = settings.browser_remote_url if remote_url is None else remote_url
        self.timeout_seconds = timeout_seconds or settings.pdf_timeout_seconds

    def generate_pdf(self, template_str: str, css: str, resume: ResumeView) -> bytes:
        """Render without the download bar, print to PDF with backgrounds. One attempt, no retry."""
        html = self.template_service.generate_preview(template_str, css, resume)
        deadline = time.monotonic() + self.timeout_seconds

        def remaining_ms() -> float:
            return max(1.0, (deadline - time.monotonic()) * 1000)

        try:
            with sync_playwright() as p:
                if self.remote_url:
                    browser = p.chromium.connect_over_cdp(self.remote_url, timeout=remaining_ms())
                else:
                    browser = p.chromium.launch(headless=True, timeout=remaining_ms())
                try:
                    page = browser.new_page()
                    page.goto("data:text/html," + quote(html), wait_until="load", timeout=remaining_ms())
                    page.set_default_timeout(remaining_ms())
                    pdf_bytes = page.pdf(print_background=True)
                finally:
                    browser.close()
        except PlaywrightError as e:
            logger.error("PDF generation failed resume_id=%s: %s", resume.id, e)
            raise PdfGenerationError(str(e)) from e

        logger.info("PDF generated resume_id=%s bytes=%d", resume.id, len(pdf_bytes))
        return pdf_bytes
