"""
Landing CMS - REST API Routes
===============================
All HTTP API endpoints.

Route groups:
    /api/data        - Public page document (+ computed hasAvatar)
    /api/avatar      - Avatar download (public), upload / delete (admin)
    /api/auth/*      - Authentication (status, setup, login, reset)
    /api/<section>   - Replace one section of the page document (admin)
    /api/health      - Liveness probe

Section routes accept any JSON value and store it verbatim; the editor
always sends the whole section (services and channels as full lists).

See auth.py for authentication details.
"""

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse, Response
from pydantic import BaseModel, Field

from landing.auth import AuthManager, require_auth
from landing.avatar import AvatarStore, MAX_AVATAR_BYTES
from landing.content import ContentStore
from landing.defaults import EDITABLE_SECTIONS
from landing.errors import InvalidInput, NotFound


# =============================================================================
# Request/Response Models (Pydantic)
# =============================================================================

class HashRequest(BaseModel):
    """Setup or login: the client-side hash of the admin password."""
    password_hash: str | None = Field(None, alias="passwordHash")

class ResetRequest(BaseModel):
    """Clear the admin password. Requires the current hash."""
    current_password_hash: str | None = Field(None, alias="currentPasswordHash")

class OkResponse(BaseModel):
    ok: bool = True

class TokenResponse(BaseModel):
    """Bearer token returned after a successful login (equals the hash)."""
    ok: bool = True
    token: str

class StatusResponse(BaseModel):
    hasPassword: bool = Field(description="Whether an admin password is set")


async def read_json_body(request: Request):
    """
    Decode a JSON request body of any shape.

    Raises:
        InvalidInput: If the content type is not JSON or the body does not parse.
    """
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != "application/json" and not media_type.endswith("+json"):
        raise InvalidInput("Expected a JSON body")
    try:
        return await request.json()
    except ValueError:
        raise InvalidInput("Invalid JSON body")


# =============================================================================
# Router Factory
# =============================================================================

def create_router(
    auth_manager: AuthManager,
    content_store: ContentStore,
    avatar_store: AvatarStore,
) -> APIRouter:
    """
    Create and configure the API router with all endpoints.

    Args:
        auth_manager:  Two-state auth gate over the credential store.
        content_store: Reads/writes the page document.
        avatar_store:  Holds the single avatar image.

    Returns:
        Configured APIRouter with all endpoints registered.
    """
    router = APIRouter(prefix="/api")

    # Shorthand for the auth dependency
    auth = Depends(require_auth(auth_manager))

    # =========================================================================
    # PUBLIC ROUTES
    # =========================================================================

    @router.get("/health", response_model=OkResponse)
    async def health():
        return OkResponse()

    @router.get("/data")
    async def get_data():
        """The full page document, plus whether an avatar is available."""
        site = content_store.load()
        site["hasAvatar"] = avatar_store.find() is not None
        return site

    @router.get("/avatar")
    async def get_avatar():
        path = avatar_store.path()
        if path is not None:
            return FileResponse(path, media_type=avatar_store.media_type(path))

        found = avatar_store.read()
        if found is None:
            raise NotFound("Avatar not found")
        data, media_type = found
        return Response(content=data, media_type=media_type)

    # =========================================================================
    # AUTH ROUTES - Guarded by auth state, not by token
    # =========================================================================

    @router.get("/auth/status", response_model=StatusResponse)
    async def auth_status():
        """Whether a password is set. Decides between setup and login in the editor."""
        return StatusResponse(hasPassword=auth_manager.is_configured())

    @router.post("/auth/setup", response_model=OkResponse)
    async def setup(req: HashRequest):
        """First-time setup. Rejected once a password exists."""
        auth_manager.setup(req.password_hash)
        return OkResponse()

    @router.post("/auth/login", response_model=TokenResponse)
    async def login(req: HashRequest):
        """Exchange the hash for a token. The token is the hash itself."""
        token = auth_manager.login(req.password_hash)
        return TokenResponse(token=token)

    @router.post("/auth/reset", response_model=OkResponse)
    async def reset(req: ResetRequest):
        """Remove the password. The next visitor can run setup again."""
        auth_manager.reset(req.current_password_hash)
        return OkResponse()

    # =========================================================================
    # CONTENT ROUTES - Requires authentication
    # =========================================================================

    def _section_handler(name: str):
        async def replace_section(request: Request):
            payload = await read_json_body(request)
            content_store.update_section(name, payload)
            return OkResponse()

        replace_section.__name__ = f"replace_{name}"
        replace_section.__doc__ = f"Replace the '{name}' section wholesale."
        return replace_section

    for section in EDITABLE_SECTIONS:
        router.add_api_route(
            f"/{section}",
            _section_handler(section),
            methods=["POST"],
            response_model=OkResponse,
            dependencies=[auth],
        )

    # =========================================================================
    # AVATAR ROUTES - Requires authentication
    # =========================================================================

    @router.post("/avatar", response_model=OkResponse, dependencies=[auth])
    async def upload_avatar(avatar: UploadFile | None = File(None)):
        """
        Replace the avatar with the uploaded image (multipart field "avatar").
        The previous avatar is kept if the upload is rejected.
        """
        if avatar is None:
            raise InvalidInput("No file")

        # One byte past the limit is enough to reject oversized uploads.
        data = await avatar.read(MAX_AVATAR_BYTES + 1)
        avatar_store.store(data, avatar.content_type, avatar.filename)
        return OkResponse()

    @router.delete("/avatar", response_model=OkResponse, dependencies=[auth])
    async def delete_avatar():
        avatar_store.remove()
        return OkResponse()

    return router
