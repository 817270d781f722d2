"""Shared pytest fixtures for Era Blender tests."""

import io
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from era_blender.api.main import create_app
from era_blender.core.config import EraBlenderConfig
from era_blender.core.transformer import EraTransformer

FAKE_DESCRIPTION = "A sepia-toned scene with formal Victorian attire and soft, grainy light."


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real Gemini settings out of every test."""
    for name in ("GEMINI_API_KEY", "ERA_BLENDER_GEMINI_API_KEY", "ERA_BLENDER_ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config() -> EraBlenderConfig:
    """Create a development configuration with a dummy API key.

    Returns:
        EraBlenderConfig instance for testing
    """
    return EraBlenderConfig(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        environment="development",
        _env_file=None,
    )


@pytest.fixture
def no_key_config() -> EraBlenderConfig:
    """Create a configuration without any Gemini credential."""
    return EraBlenderConfig(environment="development", _env_file=None)


@pytest.fixture
def fake_description() -> str:
    return FAKE_DESCRIPTION


@pytest.fixture
def fake_client() -> MagicMock:
    """Create a stand-in for ``google.genai.Client``.

    ``client.aio.models.generate_content`` is an AsyncMock returning a
    response whose ``text`` is :data:`FAKE_DESCRIPTION`.
    """
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=FAKE_DESCRIPTION)
    )
    return client


@pytest.fixture
def transformer(test_config: EraBlenderConfig, fake_client: MagicMock) -> EraTransformer:
    return EraTransformer(test_config, client=fake_client)


@pytest.fixture
def test_client(test_config: EraBlenderConfig, transformer: EraTransformer) -> TestClient:
    """FastAPI TestClient wired to the fake Gemini client."""
    return TestClient(create_app(test_config, transformer))


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 150, 100)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A tiny valid JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(10, 20, 30)).save(buffer, format="JPEG")
    return buffer.getvalue()
