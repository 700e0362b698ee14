"""
Screenshot Renderer
===================

Playwright-based screenshot capture of HTML content.
Launches one Chromium process per request, renders the document into a
configured viewport and returns the image as a base64 data URI.
"""

from typing import Optional, Dict, Any, Protocol, Tuple
import base64
import io

from playwright.async_api import async_playwright, Browser, Page
from PIL import Image  # type: ignore

from html2image.config.logging import get_logger
from html2image.config.settings import Settings, get_settings
from html2image.core.errors import RenderError
from html2image.models.schemas import ImageFormat, RenderRequest, RenderResult

logger = get_logger(__name__)


class ScreenshotRenderer(Protocol):
    """Anything able to turn a render request into an image."""

    async def render(self, request: RenderRequest) -> RenderResult: ...


class PlaywrightScreenshotRenderer:
    """Renders HTML with a fresh headless Chromium for every request."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="screenshot_renderer")  # structlog.BoundLoggerBase

    def launch_options(self) -> Dict[str, Any]:
        """Chromium launch options for constrained/serverless hosts."""
        options: Dict[str, Any] = {
            "headless": self.settings.browser_headless,
            "args": list(self.settings.browser_args),
        }

        # Only add executable_path if it's provided
        if self.settings.browser_executable_path:
            options["executable_path"] = self.settings.browser_executable_path

        return options

    def screenshot_options(self, image_format: ImageFormat) -> Dict[str, Any]:
        """Screenshot options; quality only applies to JPEG."""
        options: Dict[str, Any] = {
            "type": image_format.value,
            "full_page": True,
            "timeout": self.settings.screenshot_timeout_ms,
        }
        if image_format is ImageFormat.JPEG:
            options["quality"] = self.settings.jpeg_quality
        return options

    async def render(self, request: RenderRequest) -> RenderResult:
        """
        Render HTML content to an image.

        Args:
            request: Validated render request

        Returns:
            RenderResult carrying the image data URI

        Raises:
            RenderError: If launching, loading content or capturing fails
        """
        self.logger.info(
            "Rendering HTML",
            html_length=len(request.html),
            width=request.width,
            height=request.height,
            format=request.format.value,
        )

        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(**self.launch_options())
                try:
                    screenshot_bytes = await self._capture(browser, request)
                finally:
                    await self._close_browser(browser)
        except Exception as e:
            self.logger.error("Screenshot capture failed", error=str(e))
            raise RenderError(str(e)) from e

        self._inspect_image(screenshot_bytes, request.format)

        base64_data = base64.b64encode(screenshot_bytes).decode("utf-8")
        return RenderResult(
            success=True,
            image=RenderResult.build_data_uri(request.format, base64_data),
            format=request.format,
            width=request.width,
            height=request.height,
        )

    async def _capture(self, browser: Browser, request: RenderRequest) -> bytes:
        """Load the HTML into a new page and take a full-page screenshot."""
        context = await browser.new_context(ignore_https_errors=self.settings.ignore_https_errors)
        page = await context.new_page()

        await self._configure_page(page, request)

        await page.set_content(
            request.html,
            wait_until="domcontentloaded",
            timeout=self.settings.content_load_timeout_ms,
        )

        return await page.screenshot(**self.screenshot_options(request.format))

    async def _configure_page(self, page: Page, request: RenderRequest) -> None:
        """Configure page viewport."""
        await page.set_viewport_size({"width": request.width, "height": request.height})

    async def _close_browser(self, browser: Browser) -> None:
        # Close errors must not replace the capture outcome
        try:
            await browser.close()
        except Exception as e:
            self.logger.warning("Browser close failed", error=str(e))

    def _inspect_image(
        self, image_bytes: bytes, image_format: ImageFormat
    ) -> Optional[Tuple[int, int]]:
        """
        Read the pixel size of the captured image.

        A full-page capture is usually taller than the viewport, so the real
        size is logged next to the requested one.
        """
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:  # type: ignore[attr-defined]
                size = image.size
        except Exception as e:
            self.logger.warning("Captured image could not be inspected", error=str(e))
            return None

        self.logger.info(
            "Screenshot captured",
            file_size=len(image_bytes),
            format=image_format.value,
            image_width=size[0],
            image_height=size[1],
        )
        return size
