"""
Render Handler
==============

Method-multiplexed request handling for the conversion endpoint, independent
of the web framework serving it.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, NamedTuple, Optional

from pydantic import ValidationError as PydanticValidationError

from html2image.config.logging import get_logger
from html2image.config.settings import Settings, get_settings
from html2image.core.errors import (
    HTMLToImageError,
    MethodNotAllowedError,
    RenderError,
    ValidationError,
)
from html2image.core.rendering.screenshot import PlaywrightScreenshotRenderer, ScreenshotRenderer
from html2image.models.schemas import RenderRequest, RenderResult, ServiceDescriptor

logger = get_logger(__name__)

ALLOWED_METHODS = ("GET", "POST", "OPTIONS")


class HandlerResponse(NamedTuple):
    """Status code, JSON body (None for an empty body) and response headers."""

    status_code: int
    body: Optional[Dict[str, Any]]
    headers: Dict[str, str]


class RenderHandler:
    """Handles OPTIONS, GET and POST requests for the conversion endpoint."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        renderer: Optional[ScreenshotRenderer] = None,
    ):
        self.settings = settings or get_settings()
        self.renderer = renderer or PlaywrightScreenshotRenderer(self.settings)
        self.logger: Any = logger.bind(component="render_handler")  # structlog.BoundLoggerBase

    def cors_headers(self) -> Dict[str, str]:
        """CORS headers attached to every response."""
        return {
            "Access-Control-Allow-Origin": self.settings.cors_allow_origin,
            "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def describe(self) -> ServiceDescriptor:
        """Service descriptor advertising the defaults the POST handler applies."""
        return ServiceDescriptor(
            message="HTML to Image API is running!",
            usage='Send POST request with { "html": "<html>...</html>" }',
            parameters={
                "html": "Required - HTML content to convert",
                "width": f"Optional - Image width (default: {self.settings.default_width})",
                "height": f"Optional - Image height (default: {self.settings.default_height})",
                "format": f"Optional - png or jpeg (default: {self.settings.default_format})",
            },
        )

    async def handle(
        self,
        method: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ) -> HandlerResponse:
        """
        Handle one request.

        Args:
            method: HTTP method
            headers: Request headers
            body: Decoded JSON body

        Returns:
            HandlerResponse with status code, body and CORS headers
        """
        method = (method or "").upper()

        if method == "OPTIONS":
            return self._respond(200, None)

        try:
            if method not in ALLOWED_METHODS:
                raise MethodNotAllowedError(method)

            if method == "GET":
                return self._respond(200, self.describe().model_dump())

            request = self.parse_request(body)
            result = await self._render(request)
            return self._respond(200, result.model_dump(mode="json"))

        except HTMLToImageError as e:
            if isinstance(e, RenderError):
                self.logger.error("Conversion error", error=e.details)
            else:
                self.logger.warning(
                    "Request rejected",
                    method=method,
                    status_code=e.status_code,
                    error=e.message,
                    content_type=(headers or {}).get("content-type"),
                )
            return self._respond(e.status_code, e.to_dict())

    def parse_request(self, body: Any) -> RenderRequest:
        """
        Extract and validate render parameters, applying configured defaults.

        Raises:
            ValidationError: If html is missing or a field is invalid
        """
        if not isinstance(body, Mapping):
            body = {}

        html = body.get("html")
        if not html:
            raise ValidationError("HTML content is required")

        fields = {
            "html": html,
            "width": _value_or(body.get("width"), self.settings.default_width),
            "height": _value_or(body.get("height"), self.settings.default_height),
            "format": _value_or(body.get("format"), self.settings.default_format),
        }

        try:
            return RenderRequest(**fields)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "request"
            raise ValidationError(f"Invalid {field}: {error['msg']}")

    async def _render(self, request: RenderRequest) -> RenderResult:
        start_time = datetime.now(timezone.utc)

        self.logger.info(
            "Render requested",
            html_length=len(request.html),
            width=request.width,
            height=request.height,
            format=request.format.value,
        )

        try:
            result = await self.renderer.render(request)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(str(e)) from e

        processing_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        self.logger.info(
            "Render completed",
            image_length=len(result.image),
            processing_time=processing_time,
        )
        return result

    def _respond(self, status_code: int, body: Optional[Dict[str, Any]]) -> HandlerResponse:
        return HandlerResponse(status_code, body, self.cors_headers())


def _value_or(value: Any, default: Any) -> Any:
    return default if value is None else value
