"""UI event handlers for the Era Blender Gradio app.

The plain async functions (``transform_single``, ``transform_across_eras``)
hold the workflow logic and are unit-tested directly.  The ``handle_*``
functions wrap them for Gradio: they format Markdown for the page and raise
toast notifications.
"""

import logging
from pathlib import Path

import gradio as gr

from era_blender.core.encoding import encode_data_url
from era_blender.core.eras import Era, list_eras
from era_blender.core.errors import (
    EraBlenderError,
    InvalidImageEncodingError,
    MissingFieldError,
)
from era_blender.core.transformer import (
    EraTransformer,
    GenerationResult,
    build_request,
)

from .models import BatchOutcome

logger = logging.getLogger(__name__)


def era_for_position(position: float | None) -> Era:
    """Map a slider position (0-3) to its era.

    Positions are rounded and clamped, so any slider value yields an era.
    """
    eras = list_eras()
    index = int(round(position or 0))
    return eras[max(0, min(index, len(eras) - 1))]


def describe_position(position: float | None) -> str:
    """Caption shown under the era slider."""
    era = era_for_position(position)
    return f"**{era.label}** · {era.description}"


def _load_input(image_path: str | None, text: str | None) -> tuple[str | None, str | None]:
    """Read the UI inputs once as ``(image_url, text)``; an image wins over text.

    Raises:
        InvalidImageEncodingError: If the uploaded file cannot be read.
        MissingFieldError: If there is neither an image nor scene text.
    """
    if image_path:
        try:
            data = Path(image_path).read_bytes()
        except OSError as e:
            raise InvalidImageEncodingError("Could not read the uploaded image", details=str(e)) from e
        return encode_data_url(data), None
    if text and text.strip():
        return None, text.strip()
    raise MissingFieldError("Upload an image or describe a scene first")


async def transform_single(
    transformer: EraTransformer,
    image_path: str | None,
    text: str | None,
    position: float | None,
) -> GenerationResult:
    """Transform the current input into the era selected on the slider."""
    era = era_for_position(position)
    image_url, scene = _load_input(image_path, text)
    return await transformer.transform(build_request(image_url=image_url, text=scene, era=era.year))


async def transform_across_eras(
    transformer: EraTransformer,
    image_path: str | None,
    text: str | None,
    eras: list[Era] | None = None,
) -> BatchOutcome:
    """Transform the input into each era in turn.

    The input is read once and shared by every request.  Requests are
    issued one at a time.  The first failure stops the batch; results
    completed before it are kept in the outcome.
    """
    eras = eras or list_eras()
    outcome = BatchOutcome()
    try:
        image_url, scene = _load_input(image_path, text)
    except EraBlenderError as e:
        logger.warning(f"Batch aborted before era {eras[0].year}: {e.code}")
        outcome.failed_era = eras[0]
        outcome.error = e
        return outcome

    for era in eras:
        try:
            request = build_request(image_url=image_url, text=scene, era=era.year)
            result = await transformer.transform(request)
        except EraBlenderError as e:
            logger.warning(f"Batch aborted at era {era.year}: {e.code}")
            outcome.failed_era = era
            outcome.error = e
            break
        outcome.results.append(result)
    return outcome


def format_result(result: GenerationResult) -> str:
    """Render one result as Markdown."""
    return f"### {result.era.label}\n\n{result.description}\n\n*{result.message}*"


def format_batch(outcome: BatchOutcome) -> str:
    """Render a batch outcome as Markdown, including any abort notice."""
    sections = [format_result(r) for r in outcome.results]
    if outcome.error is not None:
        sections.append(
            f"**Stopped at {outcome.failed_era.label}:** {outcome.error.message}"
        )
    return "\n\n---\n\n".join(sections) if sections else "*No results*"


# ---------------------------------------------------------------------------
# Gradio event wrappers.
# ---------------------------------------------------------------------------


async def handle_transform(
    transformer: EraTransformer,
    image_path: str | None,
    text: str | None,
    position: float | None,
) -> str:
    """Gradio handler for the single-era "Transform" button."""
    try:
        result = await transform_single(transformer, image_path, text, position)
    except EraBlenderError as e:
        gr.Warning(e.message)
        return f"**Error:** {e.message}"
    gr.Info(f"Transformed to {result.era.label} style!")
    return format_result(result)


async def handle_transform_all(
    transformer: EraTransformer,
    image_path: str | None,
    text: str | None,
) -> str:
    """Gradio handler for the "Generate Across Eras" button."""
    outcome = await transform_across_eras(transformer, image_path, text)
    if outcome.completed:
        gr.Info(f"Generated {len(outcome.results)} era variations")
    else:
        gr.Warning(f"Stopped at {outcome.failed_era.label}: {outcome.error.message}")
    return format_batch(outcome)
