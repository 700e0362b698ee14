"""
FastAPI Application
==================

FastAPI application exposing the single HTML to image endpoint.
GET, POST and OPTIONS are routed to the render handler. Any other method on the
endpoint raises a 405 that is handed to the same handler, so every response
carries its JSON body and CORS headers.
"""

from contextlib import asynccontextmanager
import json
import uuid
from typing import AsyncGenerator, Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, Response
import uvicorn
from starlette.exceptions import HTTPException as StarletteHTTPException

from html2image.config.settings import get_settings, Settings
from html2image.config.logging import get_logger
from html2image.core.handler import RenderHandler
from html2image.core.rendering.screenshot import ScreenshotRenderer
from html2image.models.schemas import ErrorResponse

logger = get_logger(__name__)

ROUTED_METHODS = ["GET", "POST", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting FastAPI application",
        endpoint=settings.endpoint_path,
        environment=settings.environment,
    )
    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")


def decode_json_body(raw_body: bytes) -> Optional[Any]:
    """Decode a JSON request body; empty or malformed bodies decode to None."""
    if not raw_body:
        return None
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Request body is not valid JSON", body_length=len(raw_body))
        return None


def to_response(
    status_code: int, body: Optional[Dict[str, Any]], headers: Dict[str, str]
) -> Response:
    """Build an empty or JSON response from a handler result."""
    if body is None:
        return Response(status_code=status_code, headers=headers)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def create_app(
    settings: Optional[Settings] = None,
    renderer: Optional[ScreenshotRenderer] = None,
) -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.

    Args:
        settings: Optional settings override (useful for testing)
        renderer: Optional screenshot renderer override (useful for testing)

    Returns:
        FastAPI application instance
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Convert HTML documents to PNG or JPEG images",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.handler = RenderHandler(settings=settings, renderer=renderer)

    # Data URIs are large and compress well
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next) -> Response:  # type: ignore
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

    @app.exception_handler(StarletteHTTPException)
    async def endpoint_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Let the render handler answer unrouted methods on the endpoint."""
        if exc.status_code != 405 or request.url.path != settings.endpoint_path:
            return await http_exception_handler(request, exc)

        handler: RenderHandler = request.app.state.handler
        result = await handler.handle(request.method, request.headers, None)
        headers = {**(exc.headers or {}), **result.headers}
        return to_response(result.status_code, result.body, headers)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        error_response = ErrorResponse(
            error="Internal server error",
            details=str(exc) if settings.debug else None,
        )

        logger.error(
            "Unhandled exception",
            exception=str(exc),
            request_id=getattr(request.state, "request_id", None),
            exc_info=True,
        )

        return JSONResponse(
            status_code=500,
            content=error_response.model_dump(exclude_none=True),
            headers=app.state.handler.cors_headers(),
        )

    @app.api_route(settings.endpoint_path, methods=ROUTED_METHODS, tags=["Rendering"])
    async def html_to_image(request: Request) -> Response:
        """
        Convert HTML to an image.

        OPTIONS answers CORS preflight, GET describes the service and POST
        renders the `html` field to a base64 data URI.
        """
        handler: RenderHandler = request.app.state.handler

        body = None
        if request.method == "POST":
            body = decode_json_body(await request.body())

        result = await handler.handle(request.method, request.headers, body)
        return to_response(result.status_code, result.body, result.headers)

    return app


# Create FastAPI app
app = create_app()


# Development server runner
def run_development_server() -> None:
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        "html2image.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug and settings.environment == "development",
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_development_server()
