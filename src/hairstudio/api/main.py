"""Hair Studio: FastAPI Application.

This module is the single entry point for the web application.  It defines
the application factory, the module-level ``app`` instance, all routes, and
the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application is stateless between requests:

- **Configuration** comes from :class:`~hairstudio.core.config.HairStudioConfig`
  (environment variables and ``.env``).
- **Logging** goes through one logger built at startup by
  :func:`~hairstudio.core.logging_setup.build_logger` and injected into the
  route handlers as a dependency.
- **Image generation** is performed by
  :class:`~hairstudio.core.orchestrator.GenerationOrchestrator` against an
  :class:`~hairstudio.core.provider.ImageProviderBase` (Gemini by default).
- **The client bundle** is served from ``static_dir``; unmatched paths fall
  back to ``index.html`` so client-side routes keep working on reload.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
POST      ``/api/verify-access``        Check the shared access key
POST      ``/api/generate-hairstyle``   Generate a restyled selfie
GET       ``/api/options``              Preset styles, colours and modes
ANY       ``/{path}``                   Static asset or ``index.html``
========  ============================  ====================================

Error Mapping
-------------
``AccessDenied`` → 401, ``ValidationError`` → 400, ``ProviderError`` and
any other failure during generation → 500.  Every mapped error is logged.

Usage
-----
CLI (installed entry point)::

    hairstudio

Direct invocation::

    python -m hairstudio.api.main
"""

from __future__ import annotations

import logging
import socket
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError as PayloadValidationError
from starlette.concurrency import run_in_threadpool

from hairstudio import __version__
from hairstudio.api.models import (
    AccessRequest,
    AccessResponse,
    ErrorResponse,
    GenerateResponse,
    OptionsResponse,
)
from hairstudio.api.uploads import read_upload
from hairstudio.core.access import verify_access
from hairstudio.core.adapters import GeminiImageProvider
from hairstudio.core.config import HairStudioConfig, config
from hairstudio.core.errors import AccessDenied, HairStudioError, ProviderError, ValidationError
from hairstudio.core.logging_setup import build_logger
from hairstudio.core.models import GenerationRequest, normalize_mode
from hairstudio.core.orchestrator import GenerationOrchestrator
from hairstudio.core.prompt_builder import GENERATION_MODES, HAIR_COLOR_PRESETS, HAIRSTYLE_PRESETS
from hairstudio.core.provider import ImageProviderBase

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle: logger, provider and orchestrator setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Builds the application logger from the configuration, creates the
        provider (unless one was injected through :func:`create_app`) and
        stores a :class:`GenerationOrchestrator` on ``app.state``.

    On shutdown:
        Logs the shutdown.  There is nothing to release.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    cfg: HairStudioConfig = app.state.config

    # --- Startup -----------------------------------------------------------
    app_logger = build_logger(cfg)
    app.state.logger = app_logger

    provider: ImageProviderBase | None = app.state.provider
    if provider is None:
        provider = GeminiImageProvider(api_key=cfg.gemini_api_key, model=cfg.gemini_model)
        app.state.provider = provider
    app.state.orchestrator = GenerationOrchestrator(provider, logger=app_logger)

    if not cfg.access_gate_enabled:
        app_logger.warning("No access key configured; all access requests will be denied.")
    if not cfg.gemini_api_key and isinstance(provider, GeminiImageProvider):
        app_logger.warning("No Gemini API key configured; generation requests will fail.")
    app_logger.info(f"Using provider '{provider.name}' (model: {provider.model or 'n/a'}).")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    app_logger.info("Hair Studio shutting down.")


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_logger(request: Request) -> logging.Logger:
    """Return the application logger built at startup."""
    return request.app.state.logger


def get_config(request: Request) -> HairStudioConfig:
    """Return the configuration the application was created with."""
    return request.app.state.config


def get_orchestrator(request: Request) -> GenerationOrchestrator:
    """Return the shared generation orchestrator."""
    return request.app.state.orchestrator


# ---------------------------------------------------------------------------
# Error mapping.
# ---------------------------------------------------------------------------


async def _access_denied_handler(request: Request, exc: AccessDenied) -> JSONResponse:
    get_logger(request).warning("Access denied.")
    return JSONResponse(status_code=401, content={"success": False, "error": str(exc)})


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    get_logger(request).warning(f"Rejected request: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    get_logger(request).error(f"Provider error: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ---------------------------------------------------------------------------
# API routes.
# ---------------------------------------------------------------------------

router = APIRouter()


@router.post(
    "/api/verify-access",
    response_model=AccessResponse,
    response_model_exclude_none=True,
    responses={401: {"model": AccessResponse}},
)
async def verify_access_route(
    request: Request,
    cfg: HairStudioConfig = Depends(get_config),
    app_logger: logging.Logger = Depends(get_logger),
) -> AccessResponse:
    """Check the submitted access key against the configured secret.

    The body is parsed leniently: malformed JSON or a non-string ``key`` is
    treated as a missing key and denied like any wrong key.

    Returns:
        ``{"success": true}`` when access is granted.

    Raises:
        AccessDenied: (mapped to 401) for a wrong or missing key, or when
            no key is configured.
    """
    try:
        payload = AccessRequest.model_validate_json(await request.body())
    except PayloadValidationError:
        payload = AccessRequest()

    if not verify_access(payload.key, cfg.access_key):
        raise AccessDenied()

    app_logger.info("Access granted.")
    return AccessResponse(success=True)


@router.post(
    "/api/generate-hairstyle",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_hairstyle(
    image: UploadFile | str | None = File(default=None),
    reference_image: UploadFile | str | None = File(default=None),
    mode: str = Form(default="preset"),
    description: str = Form(default=""),
    style: str = Form(default=""),
    color: str = Form(default=""),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
    app_logger: logging.Logger = Depends(get_logger),
) -> GenerateResponse | JSONResponse:
    """Generate a restyled version of the uploaded selfie.

    This endpoint:

    1. Reads the base image (required) and reference image (optional)
       into memory.
    2. Builds a :class:`GenerationRequest` from the form fields.
    3. Runs the orchestrator in a worker thread (the provider call blocks).
    4. Returns the first generated image and any text.

    Returns:
        Dictionary with keys ``success``, ``description`` and ``image``.

    Raises:
        ValidationError: (mapped to 400) when the base image is missing or
            an upload is not an image.
        ProviderError: (mapped to 500) when the provider call fails.
    """
    try:
        req = GenerationRequest(
            base_image=await read_upload(image),
            reference_image=await read_upload(reference_image),
            mode=normalize_mode(mode),
            description=description,
            style=style,
            color=color,
        )
        result = await run_in_threadpool(orchestrator.generate, req)
    except HairStudioError:
        raise
    except Exception as e:
        app_logger.exception("Unexpected error during generation.")
        return JSONResponse(status_code=500, content={"error": str(e) or e.__class__.__name__})

    return GenerateResponse(success=True, description=result.text, image=result.image)


@router.get("/api/options", response_model=OptionsResponse)
async def get_options() -> OptionsResponse:
    """Return the preset catalogue shown in the client form."""
    return OptionsResponse(
        modes=list(GENERATION_MODES),
        styles=list(HAIRSTYLE_PRESETS),
        colors=list(HAIR_COLOR_PRESETS),
    )


# ---------------------------------------------------------------------------
# Client bundle.  Registered last so the API routes take precedence.
# ---------------------------------------------------------------------------


def _resolve_static_file(static_dir: Path, relative: str) -> Path | None:
    """Resolve a request path to a file inside ``static_dir``.

    Returns ``None`` for directories, missing files and paths that escape
    ``static_dir``.
    """
    if not relative:
        return None
    base = static_dir.resolve()
    try:
        candidate = (base / relative).resolve()
    except (ValueError, OSError):
        return None
    if not candidate.is_relative_to(base):
        logger.warning(f"Path traversal attempt detected: {relative}")
        return None
    if not candidate.is_file():
        return None
    return candidate


@router.api_route(
    "/{full_path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def serve_client(
    full_path: str,
    cfg: HairStudioConfig = Depends(get_config),
) -> FileResponse:
    """Serve a file from the client bundle, or ``index.html`` for anything else.

    Raises:
        HTTPException: 404 if ``index.html`` itself is missing.
    """
    asset = _resolve_static_file(cfg.static_dir, full_path)
    if asset is not None:
        return FileResponse(asset)

    index_path = cfg.static_dir / "index.html"
    if index_path.is_file():
        return FileResponse(index_path, media_type="text/html")
    raise HTTPException(status_code=404, detail="index.html not found")


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    app_config: HairStudioConfig | None = None,
    provider: ImageProviderBase | None = None,
) -> FastAPI:
    """Create a configured FastAPI application.

    Args:
        app_config: Configuration to use.  Defaults to the global
            :data:`~hairstudio.core.config.config`.
        provider: Image provider to use.  Defaults to a
            :class:`GeminiImageProvider` built from the configuration at
            startup.

    Returns:
        The FastAPI application.
    """
    app = FastAPI(
        title="Hair Studio",
        description="Preview new hairstyles on your own selfie.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = app_config or config
    app.state.provider = provider

    # The client is normally served from the same origin; CORS stays open so
    # a development server on another port can call the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AccessDenied, _access_denied_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(ProviderError, _provider_error_handler)

    app.include_router(router)
    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def get_local_ip_address() -> str:
    """Return this machine's LAN IPv4 address, or ``"localhost"``.

    Opens a UDP socket towards a public address to learn which local
    interface would route it.  No packet is sent.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            sock.connect(("8.8.8.8", 80))
            address = sock.getsockname()[0]
        except OSError:
            return "localhost"
    if not address or address.startswith("127."):
        return "localhost"
    return address


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~hairstudio.core.config.config` (which
    loads from ``HAIRSTUDIO_SERVER_HOST`` and ``HAIRSTUDIO_SERVER_PORT`` or
    ``PORT``).  Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``hairstudio`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    startup_logger = build_logger(config)
    startup_logger.info(f"Server running on port {config.server_port}")
    startup_logger.info(f"Local Network URL: http://{get_local_ip_address()}:{config.server_port}")
    startup_logger.info(f"Localhost URL: http://localhost:{config.server_port}")

    uvicorn.run(
        "hairstudio.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
