"""Data models for the Era Blender UI."""

from dataclasses import dataclass, field

from era_blender.core.eras import Era
from era_blender.core.errors import EraBlenderError
from era_blender.core.transformer import GenerationResult


@dataclass
class BatchOutcome:
    """Result of transforming one input across several eras.

    Eras are processed in order and the batch stops at the first failure.
    ``results`` holds everything that completed before that point.
    """

    results: list[GenerationResult] = field(default_factory=list)
    failed_era: Era | None = None
    error: EraBlenderError | None = None

    @property
    def completed(self) -> bool:
        """True if every era was transformed."""
        return self.error is None

    @property
    def completed_years(self) -> list[int]:
        return [r.era.year for r in self.results]
