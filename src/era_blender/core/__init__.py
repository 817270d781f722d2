"""Core functionality for era transformation.

This package holds everything that is independent of the HTTP and UI layers:

1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with ERA_BLENDER_ in .env files

2. **Prompt Layer** (eras.py):
   - The four era presets and their style templates
   - Prompt resolution for image and text input

3. **Service Layer** (transformer.py):
   - Request validation and the single Gemini call
   - Result shaping (echoed image or placeholder URL)

4. **Support Utilities**:
   - encoding.py: data-URL and base64 handling, MIME sniffing with Pillow
   - errors.py: error taxonomy and upstream error classification
"""

from era_blender.core.config import EraBlenderConfig, config
from era_blender.core.eras import ERAS, Era, get_era, list_eras, resolve
from era_blender.core.errors import EraBlenderError
from era_blender.core.transformer import EraTransformer

__all__ = [
    "ERAS",
    "Era",
    "EraBlenderConfig",
    "EraBlenderError",
    "EraTransformer",
    "config",
    "get_era",
    "list_eras",
    "resolve",
]
