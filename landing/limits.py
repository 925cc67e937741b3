"""
Landing CMS - Request Body Limits
===================================
ASGI middleware capping the size of every request body.

The declared Content-Length is checked up front. Bodies without one
(chunked transfer) are counted as they stream in, and reading past the
cap raises a 413 from inside the handler that is consuming the body.

Limits:
    POST /api/avatar -> avatar cap plus room for multipart framing
    everything else  -> JSON cap
"""

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers


# Boundaries, part headers and the filename around a single file field.
MULTIPART_SLACK_BYTES = 64 * 1024

TOO_LARGE = "Payload too large"


class BodySizeLimitMiddleware:
    """
    Attributes:
        max_body_bytes:   Cap for ordinary (JSON) request bodies.
        upload_paths:     Paths that accept a file upload.
        max_upload_bytes: Cap for bodies sent to upload_paths.
    """

    def __init__(self, app, max_body_bytes: int, upload_paths=(), max_upload_bytes: int = 0):
        self.app = app
        self.max_body_bytes = max_body_bytes
        self.upload_paths = frozenset(upload_paths)
        self.max_upload_bytes = max_upload_bytes + MULTIPART_SLACK_BYTES

    def limit_for(self, path: str) -> int:
        if path in self.upload_paths:
            return self.max_upload_bytes
        return self.max_body_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.limit_for(scope["path"])

        length = Headers(scope=scope).get("content-length")
        if length and length.isdigit() and int(length) > limit:
            response = JSONResponse(status_code=413, content={"error": TOO_LARGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise HTTPException(status_code=413, detail=TOO_LARGE)
            return message

        started = False

        async def tracked_send(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracked_send)
        except HTTPException as exc:
            # Raised outside any route's exception handling.
            if exc.status_code != 413 or started:
                raise
            response = JSONResponse(status_code=413, content={"error": TOO_LARGE})
            await response(scope, receive, send)
