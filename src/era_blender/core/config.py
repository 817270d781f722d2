"""Configuration management for Era Blender.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ERA_BLENDER_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (ERA_BLENDER_* prefix)
2. .env file in the project root
3. Default values defined in EraBlenderConfig

The Gemini credential is also accepted under the plain ``GEMINI_API_KEY``
name, which is what most Gemini tooling documents.

Example .env file:
    GEMINI_API_KEY=your-key-here
    ERA_BLENDER_GEMINI_MODEL=gemini-2.5-flash
    ERA_BLENDER_ENVIRONMENT=development
    ERA_BLENDER_SERVER_PORT=3001

Usage Example
-------------
    from era_blender.core.config import config

    print(config.gemini_model)
    print(config.has_credential)

The configuration is frozen after initialization.  The API application and
the transformer receive it explicitly (see :func:`era_blender.api.main.create_app`);
the module-level ``config`` instance is only the default used by the CLI
entry points.
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_MEGABYTE = 1024 * 1024


class EraBlenderConfig(BaseSettings):
    """Main configuration for Era Blender.

    Attributes
    ----------
    Gemini Settings:
        gemini_api_key : str | None
            API key for the Gemini text model.  When unset, generation
            endpoints answer with ``MissingCredential`` without any network I/O.
        gemini_model : str
            Gemini model name used for ``generate_content``.

    Server Settings:
        environment : Literal["development", "production"]
            Outside production, raw upstream error text is attached to error
            responses as ``details``.
        server_host : str
            Bind address for the uvicorn server.
        server_port : int
            Port for the uvicorn server (1024-65535).
        cors_origins : list[str]
            Origins allowed by the CORS middleware.
        log_level : str
            Root log level applied by the entry points.

    Limits:
        max_upload_bytes : int
            Largest accepted multipart image upload (10 MB).
        max_json_bytes : int
            Largest accepted JSON request body (50 MB).

    Output:
        placeholder_image_url : str
            Image URL returned for text input.  ``{year}`` and ``{label}`` are
            substituted with the era's values.

    UI Settings:
        gradio_server_name : str
            Gradio bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Gradio port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = EraBlenderConfig(
        ...     gemini_api_key="test-key",
        ...     environment="development",
        ... )
        >>> custom_config.include_error_details
        True
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ERA_BLENDER_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Gemini settings
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ERA_BLENDER_GEMINI_API_KEY", "GEMINI_API_KEY"),
        description="API key for the Gemini generative text service",
        repr=False,
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used to describe the era transformation",
    )

    # Server settings
    environment: Literal["development", "production"] = Field(
        default="production",
        description="Deployment environment (controls error details in responses)",
    )
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=3001,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the entry points",
    )

    # Request limits
    max_upload_bytes: int = Field(
        default=10 * _MEGABYTE,
        description="Maximum multipart image upload size in bytes",
        ge=1,
    )
    max_json_bytes: int = Field(
        default=50 * _MEGABYTE,
        description="Maximum JSON request body size in bytes",
        ge=1,
    )

    placeholder_image_url: str = Field(
        default="https://placehold.co/1024x1024?text={label}",
        description="Image URL returned for text input ({year} and {label} are substituted)",
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    @property
    def has_credential(self) -> bool:
        """Whether a non-blank Gemini API key is configured."""
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    @property
    def include_error_details(self) -> bool:
        """Whether raw upstream error messages may be returned to clients."""
        return self.environment != "production"


# Global configuration instance used by the CLI entry points.
# It loads values from environment variables (ERA_BLENDER_* prefix) and .env file.
config = EraBlenderConfig()
