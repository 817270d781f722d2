"""Era Blender — FastAPI Application.

This module is the single entry point for the web service.  It defines the
:func:`create_app` factory, all REST API routes, the error handlers that turn
:class:`~era_blender.core.errors.EraBlenderError` into JSON bodies, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application follows a stateless REST pattern:

- **Configuration** is an immutable :class:`EraBlenderConfig` passed to
  :func:`create_app`; nothing reads the environment per request.
- **Transformation** is performed by :class:`~era_blender.core.transformer.EraTransformer`,
  stored on ``app.state``.  It makes exactly one Gemini call per request.
- **Errors** are raised as taxonomy exceptions and rendered by the handlers
  registered in :func:`_register_error_handlers`.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/health``         Liveness check
GET       ``/api/eras``       Era presets (year, label, caption, colour)
POST      ``/api/generate``   Transform inline content (JSON)
POST      ``/api/upload``     Transform an uploaded image (multipart)
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    era-blender

Direct invocation::

    python -m era_blender.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from era_blender import __version__
from era_blender.api.models import (
    EraInfo,
    ErasResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    HealthResponse,
)
from era_blender.core.config import EraBlenderConfig, config
from era_blender.core.encoding import encode_data_url
from era_blender.core.eras import list_eras
from era_blender.core.errors import (
    EraBlenderError,
    MissingFieldError,
    PayloadTooLargeError,
)
from era_blender.core.transformer import EraTransformer, build_request

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /api/eras",
    "POST /api/generate",
    "POST /api/upload",
]

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing field, unsupported era or bad image data"},
    413: {"model": ErrorResponse, "description": "Request body or upload too large"},
    500: {"model": ErrorResponse, "description": "Missing credential or generation failure"},
}


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the service configuration on startup.

    The transformer itself is created in :func:`create_app`; the Gemini
    client is built lazily on the first generation request.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    cfg: EraBlenderConfig = app.state.config
    logger.info(f"Era Blender API v{__version__} starting (model: {cfg.gemini_model})")
    if cfg.has_credential:
        logger.info("Gemini API key configured")
    else:
        logger.warning("GEMINI_API_KEY not found in environment variables")
        logger.warning("Generation endpoints will answer with MissingCredential until it is set")

    yield  # Application runs here.

    logger.info("Era Blender API shutting down.")


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


def _transformer(request: Request) -> EraTransformer:
    return request.app.state.transformer


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return a static OK status."""
    return HealthResponse()


@router.get("/api/eras", response_model=ErasResponse)
async def get_eras() -> ErasResponse:
    """List the four era presets for clients building an era picker."""
    return ErasResponse(eras=[EraInfo(**era.to_dict()) for era in list_eras()])


@router.post(
    "/api/generate",
    response_model=GenerateResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def generate(req: GenerateRequest, request: Request) -> GenerateResponse:
    """Describe inline content re-imagined in the requested era.

    The body carries either an image (``imageUrl``, or ``content`` holding a
    base64 / data-URL image) or scene text (``text``, or plain ``content``).

    Args:
        req: Validated :class:`GenerateRequest` payload.
        request: The incoming request (used to reach ``app.state``).

    Returns:
        The echoed input, the model's description, the era, the prompt used
        and an advisory message.

    Raises:
        MissingFieldError: 400 when content or era is absent.
        UnsupportedEraError: 400 for an unknown era.
        InvalidImageEncodingError: 400 for undecodable image data.
        MissingCredentialError: 500 when no API key is configured.
        GenerationFailedError: 500 (classified) when the model call fails.
    """
    gen_request = build_request(
        content=req.content,
        image_url=req.image_url,
        text=req.text,
        era=req.era,
    )
    result = await _transformer(request).transform(gen_request)
    return GenerateResponse.from_result(result)


@router.post(
    "/api/upload",
    response_model=GenerateResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def upload(
    request: Request,
    image: UploadFile | None = File(default=None),
    era: str | None = Form(default=None),
) -> GenerateResponse:
    """Describe an uploaded image re-imagined in the requested era.

    The file is read into memory, re-encoded as a data URL and then handled
    exactly like an ``imageUrl`` sent to ``POST /api/generate``.

    Raises:
        MissingFieldError: 400 when the file or era is absent.
        PayloadTooLargeError: 413 when the file exceeds the upload ceiling.
    """
    if image is None:
        raise MissingFieldError("No image file provided")

    limit: int = request.app.state.config.max_upload_bytes
    data = await image.read(limit + 1)
    if len(data) > limit:
        raise PayloadTooLargeError(f"Image exceeds the upload limit of {limit} bytes")
    if not data:
        raise MissingFieldError("No image file provided")

    logger.info(f"Received upload {image.filename!r} ({len(data)} bytes)")
    mime_type = image.content_type if (image.content_type or "").startswith("image/") else None
    gen_request = build_request(image_url=encode_data_url(data, mime_type), era=era)
    result = await _transformer(request).transform(gen_request)
    return GenerateResponse.from_result(result)


# ---------------------------------------------------------------------------
# Error handling.
# ---------------------------------------------------------------------------


def _register_error_handlers(app: FastAPI, cfg: EraBlenderConfig) -> None:
    """Render every failure as a JSON ``{"error": ...}`` body."""

    @app.exception_handler(EraBlenderError)
    async def handle_era_blender_error(request: Request, exc: EraBlenderError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_payload(include_details=cfg.include_error_details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = MissingFieldError("Invalid request body", details=str(exc.errors()))
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_payload(include_details=cfg.include_error_details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Endpoint not found",
                    "availableEndpoints": AVAILABLE_ENDPOINTS,
                },
            )
        if exc.status_code == 405:
            return JSONResponse(
                status_code=405,
                content={
                    "error": str(exc.detail),
                    "availableEndpoints": AVAILABLE_ENDPOINTS,
                },
                headers=exc.headers,
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}", exc_info=exc)
        content = {"error": "Internal server error"}
        if cfg.include_error_details:
            content["details"] = str(exc)
        return JSONResponse(status_code=500, content=content)


# ---------------------------------------------------------------------------
# Request size limit.
# ---------------------------------------------------------------------------


class JsonBodyLimitMiddleware:
    """Reject JSON bodies larger than ``max_bytes``.

    A declared ``Content-Length`` is checked up front.  Bodies without one
    (chunked transfer) are read and counted before the route sees them, so
    the limit holds either way.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self._is_json(scope):
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_bytes:
                await self._reject(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_bytes:
                await self._reject(scope, receive, send)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    @staticmethod
    def _is_json(scope: Scope) -> bool:
        return Headers(scope=scope).get("content-type", "").startswith("application/json")

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        error = PayloadTooLargeError(f"Request body exceeds the limit of {self.max_bytes} bytes")
        response = JSONResponse(status_code=error.status_code, content=error.to_payload())
        await response(scope, receive, send)


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    app_config: EraBlenderConfig | None = None,
    transformer: EraTransformer | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_config: Configuration to use.  Defaults to the global
            :data:`~era_blender.core.config.config`.
        transformer: Pre-built transformer (tests inject one with a fake
            Gemini client).  Defaults to ``EraTransformer(app_config)``.

    Returns:
        The configured FastAPI application.
    """
    cfg = app_config or config

    app = FastAPI(
        title="Era Blender",
        description="Re-imagine images and scenes in the style of four historical eras.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = cfg
    app.state.transformer = transformer or EraTransformer(cfg)

    # Added before CORS so that CORS wraps it and 413 responses carry CORS headers.
    app.add_middleware(JsonBodyLimitMiddleware, max_bytes=cfg.max_json_bytes)
    # Allow cross-origin requests so the UI can be served from a different
    # port during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app, cfg)
    app.include_router(router)
    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~era_blender.core.config.config` (which
    loads from ``ERA_BLENDER_SERVER_HOST`` and ``ERA_BLENDER_SERVER_PORT``
    environment variables).  Defaults to ``0.0.0.0:3001``.

    This function is registered as the ``era-blender`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "era_blender.api.main:create_app",
        factory=True,
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
