"""Era Blender - re-imagine images and scenes in the style of four historical eras."""

__version__ = "0.1.0"

from era_blender.core.config import EraBlenderConfig, config
from era_blender.core.eras import ERAS, Era, get_era, list_eras, resolve
from era_blender.core.transformer import EraTransformer, GenerationRequest, GenerationResult

__all__ = [
    "ERAS",
    "Era",
    "EraBlenderConfig",
    "EraTransformer",
    "GenerationRequest",
    "GenerationResult",
    "config",
    "get_era",
    "list_eras",
    "resolve",
]
