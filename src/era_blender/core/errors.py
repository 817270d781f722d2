"""Error taxonomy for Era Blender.

Every failure the service reports to a caller is an :class:`EraBlenderError`
subclass.  Each class carries the HTTP status it maps to, a stable machine
``code`` and a user-facing default message.  Core code raises these; the
FastAPI layer turns them into ``{"error", "code", "details"}`` JSON bodies.

=========================  ======  ==========================================
Class                      Status  Raised when
=========================  ======  ==========================================
MissingFieldError          400     content or era absent / body malformed
UnsupportedEraError        400     era is not 1900, 1950, 2000 or 2050
InvalidImageEncodingError  400     image payload is not valid base64
PayloadTooLargeError       413     upload or JSON body over its ceiling
MissingCredentialError     500     no Gemini API key configured
GenerationFailedError      500     the model call failed (generic)
InvalidCredentialError     500     upstream rejected the API key
QuotaExceededError         500     upstream quota exhausted
RateLimitedError           500     upstream rate limit hit
=========================  ======  ==========================================

Upstream failures are classified by :func:`classify_generation_error`.  It
prefers the structured ``code``/``status`` exposed by
``google.genai.errors.APIError`` and falls back to substring matching on the
error message for anything else.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class EraBlenderError(Exception):
    """Base class for all errors surfaced to API and UI callers.

    Args:
        message: User-facing message.  Defaults to the class's
            ``default_message``.
        details: Raw underlying error text.  Only shown to clients outside
            production.
    """

    status_code: int = 500
    code: str = "InternalError"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, details: str | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_payload(self, include_details: bool = False) -> dict:
        """Build the JSON error body for this error."""
        payload = {"error": self.message, "code": self.code}
        if include_details and self.details:
            payload["details"] = self.details
        return payload


# ---------------------------------------------------------------------------
# Client and configuration errors.
# ---------------------------------------------------------------------------


class MissingFieldError(EraBlenderError):
    status_code = 400
    code = "MissingField"
    default_message = "Missing required fields: content and era"


class UnsupportedEraError(EraBlenderError):
    """The requested era is not one of the fixed presets."""

    status_code = 400
    code = "UnsupportedEra"

    def __init__(self, era: object, supported: list[int]) -> None:
        self.era = era
        self.supported = supported
        super().__init__(
            f"Unsupported era: {era}. Supported eras: {', '.join(str(y) for y in supported)}"
        )


class InvalidImageEncodingError(EraBlenderError):
    status_code = 400
    code = "InvalidImageEncoding"
    default_message = "Invalid image format. Please provide a valid base64 image."


class PayloadTooLargeError(EraBlenderError):
    status_code = 413
    code = "PayloadTooLarge"
    default_message = "Request payload is too large"


class MissingCredentialError(EraBlenderError):
    status_code = 500
    code = "MissingCredential"
    default_message = "Gemini API key not configured"


# ---------------------------------------------------------------------------
# Upstream (generative model) errors.
# ---------------------------------------------------------------------------


class GenerationFailedError(EraBlenderError):
    status_code = 500
    code = "GenerationFailed"
    default_message = "Failed to generate image transformation"


class InvalidCredentialError(GenerationFailedError):
    code = "InvalidCredential"
    default_message = "Invalid or missing Gemini API key"


class QuotaExceededError(GenerationFailedError):
    code = "QuotaExceeded"
    default_message = "API quota exceeded. Please try again later."


class RateLimitedError(GenerationFailedError):
    code = "RateLimited"
    default_message = "Rate limit exceeded. Please try again in a moment."


_CREDENTIAL_STATUSES = {"UNAUTHENTICATED", "PERMISSION_DENIED"}


def _classify_structured(
    code: int | None, status: str | None, message: str
) -> type[GenerationFailedError] | None:
    """Map an SDK error code/status to an error class, or ``None`` if unknown."""
    status = (status or "").upper()
    if code in (401, 403) or status in _CREDENTIAL_STATUSES:
        return InvalidCredentialError
    if code == 429 or status == "RESOURCE_EXHAUSTED":
        # Gemini reports both quota exhaustion and throttling as 429.
        if "quota" in message.lower():
            return QuotaExceededError
        return RateLimitedError
    return None


def _classify_message(message: str) -> type[GenerationFailedError]:
    lowered = message.lower()
    if "api key" in lowered:
        return InvalidCredentialError
    if "quota" in lowered:
        return QuotaExceededError
    if "rate limit" in lowered:
        return RateLimitedError
    return GenerationFailedError


def classify_generation_error(exc: BaseException) -> GenerationFailedError:
    """Convert an exception raised by the model call into a taxonomy error.

    Args:
        exc: The exception raised by the Gemini client (or anything else
            raised while generating).

    Returns:
        A :class:`GenerationFailedError` (or subclass) whose ``details``
        hold the raw exception text.
    """
    if isinstance(exc, GenerationFailedError):
        return exc

    raw = str(exc)
    message = getattr(exc, "message", None) or raw
    error_cls = _classify_structured(
        getattr(exc, "code", None),
        getattr(exc, "status", None),
        message,
    )
    if error_cls is None:
        error_cls = _classify_message(message)

    logger.debug(f"Classified {type(exc).__name__} as {error_cls.code}")
    return error_cls(details=raw)
