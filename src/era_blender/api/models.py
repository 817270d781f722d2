"""Pydantic request and response models for the Era Blender API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for request parsing, serialisation, and OpenAPI documentation.

Field names are snake_case in Python and camelCase (``imageUrl``,
``availableEndpoints``) on the wire, matching what browser clients send.

Every request field is optional at the schema level.  Presence and era
checks happen in :func:`era_blender.core.transformer.build_request` so that
a missing field yields the service's own ``MissingField`` error (400) rather
than FastAPI's generic 422.

Models
------
GenerateRequest
    Payload for ``POST /api/generate``.
GenerateResponse
    Successful result of ``POST /api/generate`` and ``POST /api/upload``.
HealthResponse
    Body of ``GET /health``.
EraInfo / ErasResponse
    Body of ``GET /api/eras``.
ErrorResponse
    Body of every error response.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from era_blender.core.transformer import GenerationResult


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        content: Either a base64 / data-URL image or free scene text; the
            server decides which.
        image_url: Base64 or data-URL image (always treated as an image).
        text: Free-text scene description (always treated as text).
        era: Era year (``1900``, ``1950``, ``2000`` or ``2050``), as a number
            or numeric string.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str | None = Field(
        default=None,
        description="Base64/data-URL image or free scene text.",
    )
    image_url: str | None = Field(
        default=None,
        alias="imageUrl",
        description="Base64 or data-URL encoded image.",
    )
    text: str | None = Field(
        default=None,
        description="Free-text scene description.",
    )
    era: int | str | None = Field(
        default=None,
        description="Era year: 1900, 1950, 2000 or 2050.",
    )


class GenerateResponse(BaseModel):
    """Successful transformation result.

    Attributes:
        image_url: The original image (image input) or a placeholder URL
            (text input).  No image synthesis is performed.
        text: The echoed scene text (text input only).
        description: The model's description of the restyled content.
        era: The era year.
        prompt: The exact prompt sent to the model.
        message: Advisory note that real image synthesis is not performed.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl")
    text: str | None = None
    description: str
    era: int
    prompt: str
    message: str

    @classmethod
    def from_result(cls, result: GenerationResult) -> GenerateResponse:
        return cls(
            image_url=result.image_url,
            text=result.text,
            description=result.description,
            era=result.era.year,
            prompt=result.prompt,
            message=result.message,
        )


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str = "Era Blender API is running"


class EraInfo(BaseModel):
    """Presentation metadata for one era."""

    year: int
    label: str
    description: str
    color: str


class ErasResponse(BaseModel):
    eras: list[EraInfo]


class ErrorResponse(BaseModel):
    """Error body.  ``details`` is only present outside production."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    code: str | None = None
    details: str | None = None
    available_endpoints: list[str] | None = Field(default=None, alias="availableEndpoints")
