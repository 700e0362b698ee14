"""
Error Taxonomy
==============

Exceptions raised while handling a conversion request. Each error knows the
HTTP status it maps to and the JSON body returned to the caller.
"""

from typing import Any, Dict, Optional

from html2image.models.schemas import ErrorResponse


class HTMLToImageError(Exception):
    """Base exception for request handling failures."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON error body."""
        return ErrorResponse(error=self.message).model_dump(exclude_none=True)


class ValidationError(HTMLToImageError):
    """Request body is missing required content or carries an invalid field."""

    status_code = 400


class MethodNotAllowedError(HTMLToImageError):
    """HTTP method is not supported by the endpoint."""

    status_code = 405

    def __init__(self, method: Optional[str] = None):
        super().__init__("Method not allowed")
        self.method = method


class RenderError(HTMLToImageError):
    """Browser launch, content load or screenshot capture failed."""

    status_code = 500

    summary = "Failed to convert HTML to image"
    tip = "Try simpler HTML or smaller dimensions"

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return ErrorResponse(
            error=self.summary, details=self.details, tip=self.tip
        ).model_dump(exclude_none=True)
