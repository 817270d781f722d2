"""Tests for era_blender.api.models — Pydantic request/response models.

Tests cover:
- camelCase aliases on the wire (``imageUrl``).
- Optional request fields (presence is checked by the service, not the schema).
- Building a response from a core GenerationResult.
"""

from __future__ import annotations

from era_blender.api.models import ErrorResponse, GenerateRequest, GenerateResponse
from era_blender.core.eras import get_era
from era_blender.core.transformer import GenerationResult


class TestGenerateRequest:
    def test_empty_body_is_schema_valid(self):
        req = GenerateRequest()
        assert req.content is None
        assert req.era is None

    def test_image_url_alias(self):
        req = GenerateRequest.model_validate({"imageUrl": "data:image/png;base64,AAAA", "era": 1900})
        assert req.image_url == "data:image/png;base64,AAAA"

    def test_field_name_also_accepted(self):
        req = GenerateRequest(image_url="AAAA", era=1900)
        assert req.image_url == "AAAA"

    def test_era_keeps_string_form(self):
        req = GenerateRequest.model_validate({"text": "x", "era": "2050"})
        assert req.era == "2050"

    def test_era_int(self):
        req = GenerateRequest.model_validate({"text": "x", "era": 2050})
        assert req.era == 2050


class TestGenerateResponse:
    def test_from_text_result(self):
        result = GenerationResult(
            era=get_era(2050),
            description="neon",
            prompt="p",
            image_url="https://example.test/2050s",
            text="a quiet village square",
        )
        data = GenerateResponse.from_result(result).model_dump(by_alias=True, exclude_none=True)
        assert data["imageUrl"] == "https://example.test/2050s"
        assert data["text"] == "a quiet village square"
        assert data["era"] == 2050
        assert data["description"] == "neon"

    def test_image_result_omits_text(self):
        result = GenerationResult(
            era=get_era(1900), description="sepia", prompt="p", image_url="AAAA"
        )
        data = GenerateResponse.from_result(result).model_dump(by_alias=True, exclude_none=True)
        assert "text" not in data


class TestErrorResponse:
    def test_available_endpoints_alias(self):
        resp = ErrorResponse(error="Endpoint not found", available_endpoints=["GET /health"])
        data = resp.model_dump(by_alias=True, exclude_none=True)
        assert data == {"error": "Endpoint not found", "availableEndpoints": ["GET /health"]}
