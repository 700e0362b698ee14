"""
Unit Tests for Schemas
======================

Tests for request parsing rules, data URI building and error bodies.
"""

import math

import pytest
from pydantic import ValidationError as PydanticValidationError

from html2image.core.errors import MethodNotAllowedError, RenderError, ValidationError
from html2image.models.schemas import (
    ErrorResponse,
    ImageFormat,
    RenderRequest,
    RenderResult,
    parse_int,
)


class TestParseInt:
    """Test parseInt-compatible integer parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (300, 300),
            ("300", 300),
            ("  42", 42),
            ("300px", 300),
            ("-5", -5),
            ("+7", 7),
            (12.9, 12),
            (-12.9, -12),
            ("0x1F", 31),
            ("0X1f", 31),
            ("-0x10", -16),
            ("0x1Fpx", 31),
            ("012", 12),
        ],
    )
    def test_parsable_values(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize(
        "value", ["", "px300", "abc", "0x", "0xZ", "-", None, True, [], {}, math.nan, math.inf]
    )
    def test_unparsable_values(self, value):
        assert parse_int(value) is None


class TestRenderRequest:
    """Test render request validation."""

    def test_defaults(self):
        request = RenderRequest(html="<p>x</p>")

        assert request.width == 800
        assert request.height == 600
        assert request.format is ImageFormat.PNG

    def test_empty_html_rejected(self):
        with pytest.raises(PydanticValidationError):
            RenderRequest(html="")

    def test_uppercase_format_rejected(self):
        with pytest.raises(PydanticValidationError):
            RenderRequest(html="<p>x</p>", format="PNG")


class TestRenderResult:
    """Test result serialization."""

    def test_build_data_uri(self):
        assert RenderResult.build_data_uri(ImageFormat.JPEG, "abc") == "data:image/jpeg;base64,abc"

    def test_json_dump(self):
        result = RenderResult(image="data:image/png;base64,abc", format="png", width=1, height=2)

        assert result.model_dump(mode="json") == {
            "success": True,
            "image": "data:image/png;base64,abc",
            "format": "png",
            "width": 1,
            "height": 2,
        }


class TestErrors:
    """Test error taxonomy bodies and status codes."""

    def test_validation_error(self):
        error = ValidationError("HTML content is required")

        assert error.status_code == 400
        assert error.to_dict() == {"error": "HTML content is required"}

    def test_method_not_allowed_error(self):
        error = MethodNotAllowedError("DELETE")

        assert error.status_code == 405
        assert error.method == "DELETE"
        assert error.to_dict() == {"error": "Method not allowed"}

    def test_render_error(self):
        error = RenderError("net::ERR_ABORTED")

        assert error.status_code == 500
        assert str(error) == "net::ERR_ABORTED"
        assert error.to_dict()["details"] == "net::ERR_ABORTED"

    def test_error_response_omits_unset_fields(self):
        assert ErrorResponse(error="boom").model_dump(exclude_none=True) == {"error": "boom"}
