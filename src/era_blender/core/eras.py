"""Era presets and prompt resolution.

Era Blender knows exactly four eras, each identified by a representative
year.  Every era carries presentation metadata (label, caption, colour tag)
used by the UI, and a hand-written style template that conditions the
generative model.

Prompt Structure
----------------
Image input::

    [Era template]

    (image bytes are sent as a separate multimodal part)

Text input::

    [Era template]

    Scene: [user text]

The text variant is plain concatenation.  The user text is neither escaped
nor truncated.

Usage
-----
::

    from era_blender.core.eras import build_text_prompt, get_era

    era = get_era("1950")
    prompt = build_text_prompt(era.year, "a quiet village square")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from era_blender.core.errors import UnsupportedEraError

EraColor = Literal["vintage", "classic", "modern", "future"]

TEXT_SCENE_SEPARATOR = "\n\nScene: "


@dataclass(frozen=True)
class Era:
    """A fixed style preset identified by a representative year."""

    year: int
    label: str
    description: str
    color: EraColor
    template: str

    def to_dict(self) -> dict:
        """Presentation fields for API clients (the template is omitted)."""
        return {
            "year": self.year,
            "label": self.label,
            "description": self.description,
            "color": self.color,
        }


# ---------------------------------------------------------------------------
# Era table.
# Templates are fixed; users pick an era, they never edit its style.
# ---------------------------------------------------------------------------

_ERAS: tuple[Era, ...] = (
    Era(
        year=1900,
        label="1900s",
        description="Victorian Era - Sepia tones, formal portraits",
        color="vintage",
        template=(
            "Transform this image to look like it was taken in the 1900s Victorian era. Apply:\n"
            "- Sepia tones and vintage coloring\n"
            "- Formal, posed composition typical of early photography\n"
            "- Soft, diffused lighting reminiscent of early film photography\n"
            "- Slightly blurred or grainy texture\n"
            "- Formal clothing and accessories from the 1900s period\n"
            "- Ornate backgrounds or simple studio settings\n"
            "- Maintain the original subject and scene composition"
        ),
    ),
    Era(
        year=1950,
        label="1950s",
        description="Golden Age - Classic photography, vibrant colors",
        color="classic",
        template=(
            "Transform this image to look like it was taken in the 1950s Golden Age. Apply:\n"
            "- Rich, saturated colors typical of Kodachrome film\n"
            "- Classic mid-century modern aesthetic\n"
            "- Clean, optimistic styling\n"
            "- 1950s fashion, hairstyles, and design elements\n"
            "- Bright, well-lit photography style\n"
            "- Vintage cars, architecture, and objects from the era\n"
            "- Maintain the original subject and scene composition"
        ),
    ),
    Era(
        year=2000,
        label="2000s",
        description="Digital Era - Sharp, modern aesthetics",
        color="modern",
        template=(
            "Transform this image to look like it was taken in the 2000s digital era. Apply:\n"
            "- Crisp, digital camera quality\n"
            "- Bright, saturated colors\n"
            "- Modern lighting and composition\n"
            "- Y2K-era fashion and technology\n"
            "- Digital photography aesthetics\n"
            "- Contemporary urban or suburban settings\n"
            "- Maintain the original subject and scene composition"
        ),
    ),
    Era(
        year=2050,
        label="2050s",
        description="Future Vision - Holographic, enhanced reality",
        color="future",
        template=(
            "Transform this image to look like it could be from the 2050s future. Apply:\n"
            "- Holographic and enhanced digital aesthetics\n"
            "- Neon accents and futuristic lighting\n"
            "- Advanced technology integration\n"
            "- Sleek, minimalist futuristic design\n"
            "- Enhanced reality effects\n"
            "- Futuristic fashion and environments\n"
            "- Subtle sci-fi elements\n"
            "- Maintain the original subject and scene composition"
        ),
    ),
)

ERAS: dict[int, Era] = {era.year: era for era in _ERAS}
SUPPORTED_YEARS: list[int] = [era.year for era in _ERAS]


def list_eras() -> list[Era]:
    """Return all eras in chronological order."""
    return list(_ERAS)


def get_era(era: int | str | Era | None) -> Era:
    """Look up an era by year.

    Args:
        era: The era year as an int, a numeric string (form fields and some
            JSON clients send ``"2050"``), or an :class:`Era` instance.

    Returns:
        The matching :class:`Era`.

    Raises:
        UnsupportedEraError: If the value is not one of the four known years.
    """
    if isinstance(era, Era):
        return era

    year: int | None = None
    if isinstance(era, int) and not isinstance(era, bool):
        year = era
    elif isinstance(era, str) and era.strip().isdecimal():
        year = int(era.strip())

    if year is None or year not in ERAS:
        raise UnsupportedEraError(era, SUPPORTED_YEARS)
    return ERAS[year]


def resolve(era: int | str | Era | None) -> str:
    """Return the style template for *era*.

    Raises:
        UnsupportedEraError: If the era is not recognised.
    """
    return get_era(era).template


def build_image_prompt(era: int | str | Era) -> str:
    """Prompt for image input: the template alone."""
    return resolve(era)


def build_text_prompt(era: int | str | Era, text: str) -> str:
    """Prompt for text input: the template followed by the user's scene text."""
    return resolve(era) + TEXT_SCENE_SEPARATOR + text


def placeholder_image_url(era: Era, url_template: str) -> str:
    """Fill the configured placeholder URL template for *era*."""
    return url_template.format(year=era.year, label=era.label)
