"""Era transformation service.

This module provides :class:`EraTransformer`, the single point of control for
turning a user's image or scene text into an era-styled description.  It owns
the only external call in the system: one Gemini ``generate_content`` request
per transformation.

Key Responsibilities
--------------------
- **Validation** — content and era must both be present and the era must be
  one of the four presets.  Invalid requests never reach the network.
- **Credential gate** — without a configured API key every transformation
  fails fast with :class:`MissingCredentialError`.
- **Prompt resolution** — delegated to :mod:`era_blender.core.eras`.
- **Error classification** — any failure of the model call becomes a
  :class:`GenerationFailedError` subclass via
  :func:`~era_blender.core.errors.classify_generation_error`.

No image synthesis happens here.  Image input is echoed back unchanged and
text input gets a placeholder image URL; the model's text is the payload.

Usage
-----
::

    from era_blender.core.config import config
    from era_blender.core.transformer import EraTransformer, build_request

    transformer = EraTransformer(config)
    request = build_request(text="a quiet village square", era=2050)
    result = await transformer.transform(request)
    print(result.description)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from era_blender.core.config import EraBlenderConfig
from era_blender.core.encoding import decode_image, looks_like_image
from era_blender.core.eras import (
    Era,
    build_image_prompt,
    build_text_prompt,
    get_era,
    placeholder_image_url,
)
from era_blender.core.errors import (
    GenerationFailedError,
    MissingCredentialError,
    MissingFieldError,
    classify_generation_error,
)

logger = logging.getLogger(__name__)

ADVISORY_MESSAGE = (
    "Note: This is a demo response. In production, this would return the actual "
    "transformed image."
)


@dataclass(frozen=True)
class GenerationRequest:
    """A validated transformation request.

    Exactly one of ``image_url`` (base64 or data URL) and ``text`` is set.
    """

    era: Era
    image_url: str | None = None
    text: str | None = None

    @property
    def is_image(self) -> bool:
        return self.image_url is not None


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one transformation, returned to the caller and discarded."""

    era: Era
    description: str
    prompt: str
    image_url: str
    text: str | None = None
    message: str = ADVISORY_MESSAGE


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def build_request(
    *,
    content: str | None = None,
    image_url: str | None = None,
    text: str | None = None,
    era: int | str | None = None,
) -> GenerationRequest:
    """Validate raw request fields and build a :class:`GenerationRequest`.

    ``image_url`` is always treated as an image and ``text`` as scene text.
    ``content`` is classified with :func:`looks_like_image`.  When several are
    given, ``image_url`` wins over ``text``, which wins over ``content``.

    Raises:
        MissingFieldError: If no content field or no era is supplied.
        UnsupportedEraError: If the era is not recognised.
    """
    if _is_blank(era) or all(_is_blank(v) for v in (content, image_url, text)):
        raise MissingFieldError()

    resolved = get_era(era)

    if not _is_blank(image_url):
        return GenerationRequest(era=resolved, image_url=image_url)
    if not _is_blank(text):
        return GenerationRequest(era=resolved, text=text)
    if looks_like_image(content):
        return GenerationRequest(era=resolved, image_url=content)
    return GenerationRequest(era=resolved, text=content)


class EraTransformer:
    """Forward era-styled prompts to Gemini and shape the results.

    Args:
        config: Frozen application configuration.
        client: Optional pre-built ``google.genai.Client``.  When omitted a
            client is created lazily on the first call, and only if an API
            key is configured.
    """

    def __init__(self, config: EraBlenderConfig, client: Any | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def has_credential(self) -> bool:
        return self.config.has_credential

    def _get_client(self) -> Any:
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.config.gemini_api_key)
            logger.info(f"Gemini client initialised for model {self.config.gemini_model}")
        return self._client

    async def _generate_text(self, contents: list[Any]) -> str:
        """Run the single model call and return its text."""
        client = self._get_client()
        response = await client.aio.models.generate_content(
            model=self.config.gemini_model,
            contents=contents,
        )
        text = getattr(response, "text", None)
        if not text:
            raise GenerationFailedError(details="Model returned an empty response")
        return text

    async def transform(self, request: GenerationRequest) -> GenerationResult:
        """Describe *request*'s content restyled for its era.

        Raises:
            MissingCredentialError: If no API key is configured.
            InvalidImageEncodingError: If the image payload is not valid base64.
            GenerationFailedError: If the model call fails (classified).
        """
        era = request.era
        if not self.has_credential:
            raise MissingCredentialError()

        logger.info(
            f"Processing {'image' if request.is_image else 'text'} transformation "
            f"for era: {era.year}"
        )

        if request.is_image:
            from google.genai import types

            image = decode_image(request.image_url)
            prompt = build_image_prompt(era)
            contents = [prompt, types.Part.from_bytes(data=image.data, mime_type=image.mime_type)]
        else:
            prompt = build_text_prompt(era, request.text)
            contents = [prompt]

        logger.info("Sending request to Gemini API...")
        try:
            description = await self._generate_text(contents)
        except Exception as e:
            error = classify_generation_error(e)
            logger.error(f"Generation failed for era {era.year}: {error.code}", exc_info=True)
            if error is e:
                raise
            raise error from e

        logger.debug(f"Generated description: {description}")

        if request.is_image:
            return GenerationResult(
                era=era,
                description=description,
                prompt=prompt,
                image_url=request.image_url,
            )
        return GenerationResult(
            era=era,
            description=description,
            prompt=prompt,
            image_url=placeholder_image_url(era, self.config.placeholder_image_url),
            text=request.text,
        )
