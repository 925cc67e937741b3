"""
Landing CMS - FastAPI Application
===================================
Creates and configures the FastAPI web application.

Responsibilities:
    - Create the FastAPI app instance with CORS and metadata
    - Build the content, credential and avatar stores (or accept injected ones)
    - Seed site.json with the default document on first boot
    - Reject oversized JSON bodies before they reach a handler
    - Render every error as {"error": "<message>"}
    - Register API routes
    - Serve the public site from public/ when that directory exists

API endpoints are prefixed with /api/.
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from landing import __version__
from landing.auth import AuthManager, CredentialStore, JsonCredentialStore
from landing.avatar import AvatarStore, DirectoryAvatarStore, MAX_AVATAR_BYTES
from landing.config import ConfigManager
from landing.content import ContentStore, JsonContentStore
from landing.defaults import default_content
from landing.errors import SiteError
from landing.limits import BodySizeLimitMiddleware
from landing.routes import create_router


logger = logging.getLogger(__name__)

# Cap for JSON request bodies.
MAX_JSON_BODY_BYTES = 2 * 1024 * 1024


def create_app(
    project_dir: str | None = None,
    *,
    content_store: ContentStore | None = None,
    credential_store: CredentialStore | None = None,
    avatar_store: AvatarStore | None = None,
) -> FastAPI:
    """
    Application factory: create and configure the FastAPI instance.

    Stores default to files under the configured data directory. Tests pass
    in-memory stores instead.

    Args:
        project_dir:      Root directory of the project.
                          If None, auto-detected from this file's location.
        content_store:    Page document store override.
        credential_store: Credential store override.
        avatar_store:     Avatar store override.

    Returns:
        Configured FastAPI application ready to run with uvicorn.
    """
    # -- Resolve directories ---------------------------------------------------
    if project_dir is None:
        project_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    config_manager = ConfigManager(project_dir)
    config = config_manager.load()
    if "_config_error" in config:
        logger.warning("Configuration problem: %s", config["_config_error"])

    data_dir = config_manager.data_dir(config)
    public_dir = config_manager.public_dir(config)

    # -- Initialize stores -----------------------------------------------------
    if content_store is None or credential_store is None or avatar_store is None:
        os.makedirs(data_dir, exist_ok=True)

    content_store = content_store or JsonContentStore(data_dir)
    credential_store = credential_store or JsonCredentialStore(data_dir)
    avatar_store = avatar_store or DirectoryAvatarStore(data_dir)
    auth_manager = AuthManager(credential_store)

    # First boot: write the seed document so there is something to edit.
    if not content_store.exists():
        content_store.save(default_content())
        logger.info("Seeded page document with defaults")

    # -- Create FastAPI app ----------------------------------------------------
    app = FastAPI(
        title="Landing CMS",
        description="Content backend for a single marketing landing page",
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
    )

    # -- CORS middleware -------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Body size limit -------------------------------------------------------
    app.add_middleware(
        BodySizeLimitMiddleware,
        max_body_bytes=MAX_JSON_BODY_BYTES,
        upload_paths=["/api/avatar"],
        max_upload_bytes=MAX_AVATAR_BYTES,
    )

    # -- Error rendering -------------------------------------------------------
    @app.exception_handler(SiteError)
    async def site_error_handler(request: Request, exc: SiteError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # -- Store managers on app state -------------------------------------------
    app.state.config_manager = config_manager
    app.state.auth_manager = auth_manager
    app.state.content_store = content_store
    app.state.avatar_store = avatar_store

    # -- Register API routes ---------------------------------------------------
    app.include_router(
        create_router(
            auth_manager=auth_manager,
            content_store=content_store,
            avatar_store=avatar_store,
        )
    )

    # -- Public site -----------------------------------------------------------
    # Mounted last so /api/* always wins.
    if os.path.isdir(public_dir):
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")

    return app
