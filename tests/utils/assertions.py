"""
Test Assertions
===============

Custom assertion helpers for testing HTML to image conversion.
"""

from typing import Any, Dict, Mapping, Optional
import base64
import io
import re

from PIL import Image  # type: ignore

__all__ = [
    "DATA_URI_PATTERN",
    "assert_cors_headers",
    "assert_valid_data_uri",
    "assert_successful_render_body",
]

DATA_URI_PATTERN = re.compile(r"^data:image/(png|jpeg);base64,")


def assert_cors_headers(headers: Mapping[str, str], origin: str = "*") -> None:
    """Assert that the three CORS headers are present."""
    assert headers["Access-Control-Allow-Origin"] == origin
    assert headers["Access-Control-Allow-Methods"] == "GET, POST, OPTIONS"
    assert headers["Access-Control-Allow-Headers"] == "Content-Type"


def assert_valid_data_uri(data_uri: str, expected_format: Optional[str] = None) -> bytes:
    """Assert that a data URI carries a decodable image and return its bytes."""
    match = DATA_URI_PATTERN.match(data_uri)
    assert match, f"Not an image data URI: {data_uri[:40]}"

    if expected_format:
        assert match.group(1) == expected_format

    payload = base64.b64decode(data_uri[match.end():], validate=True)
    assert len(payload) > 0
    return payload


def assert_successful_render_body(
    body: Dict[str, Any], expected_format: str, width: int, height: int
) -> None:
    """Assert the shape of a successful POST response body."""
    assert set(body) == {"success", "image", "format", "width", "height"}
    assert body["success"] is True
    assert body["format"] == expected_format
    assert body["width"] == width
    assert body["height"] == height

    payload = assert_valid_data_uri(body["image"], expected_format)
    with Image.open(io.BytesIO(payload)) as image:
        assert image.format == ("PNG" if expected_format == "png" else "JPEG")
