"""
Pydantic Models and Schemas
===========================

Data models for render requests, render results and API response bodies.
"""

from typing import Optional, Dict, Any
from enum import Enum
import math
import re

from pydantic import BaseModel, Field, field_validator


_LEADING_INT = re.compile(r"^\s*([+-]?)(0[xX][0-9a-fA-F]*|\d*)")


def parse_int(value: Any) -> Optional[int]:
    """
    Parse an integer the way JavaScript's ``parseInt`` reads request fields.

    Integers pass through, floats are truncated toward zero and strings yield
    their leading run of digits (``"300px"`` -> 300). A ``0x``/``0X`` prefix
    reads the digits as hexadecimal (``"0x1F"`` -> 31).

    Returns:
        The parsed integer, or None when nothing integral can be read
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        sign, digits = match.groups() if match else ("", "")
        base = 10
        if digits[:2].lower() == "0x":
            digits, base = digits[2:], 16
        if digits:
            number = int(digits, base)
            return -number if sign == "-" else number
    return None


# Enums
class ImageFormat(str, Enum):
    """Supported output image formats."""
    PNG = "png"
    JPEG = "jpeg"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


# Request Models
class RenderRequest(BaseModel):
    """Validated HTML to image conversion request."""
    html: str = Field(..., min_length=1, description="HTML content to convert")
    width: int = Field(800, gt=0, description="Viewport width in pixels")
    height: int = Field(600, gt=0, description="Viewport height in pixels")
    format: ImageFormat = Field(ImageFormat.PNG, description="Output image format")

    @field_validator("width", "height", mode="before")
    @classmethod
    def parse_dimension(cls, v: Any) -> int:
        """Read dimensions given as numbers or numeric strings."""
        parsed = parse_int(v)
        if parsed is None:
            raise ValueError("must be an integer")
        return parsed


# Response Models
class RenderResult(BaseModel):
    """Successful conversion result."""
    success: bool = Field(True, description="Whether conversion succeeded")
    image: str = Field(..., description="Image as a base64 data URI")
    format: ImageFormat = Field(..., description="Image format")
    width: int = Field(..., description="Viewport width used for rendering")
    height: int = Field(..., description="Viewport height used for rendering")

    @staticmethod
    def build_data_uri(image_format: ImageFormat, base64_data: str) -> str:
        """Build a ``data:image/<format>;base64,<payload>`` URI."""
        return f"data:{image_format.mime_type};base64,{base64_data}"


class ServiceDescriptor(BaseModel):
    """Usage information returned for GET requests."""
    message: str = Field(..., description="Service status message")
    usage: str = Field(..., description="Example request")
    parameters: Dict[str, str] = Field(..., description="Accepted request parameters")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(None, description="Underlying failure message")
    tip: Optional[str] = Field(None, description="Remediation hint")
