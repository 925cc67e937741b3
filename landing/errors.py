"""
Landing CMS - Error Types
==========================
Exceptions raised by the stores and the auth gate.

Each error carries the HTTP status it maps to. The application factory
registers a single handler that renders any SiteError as a terse JSON body:

    {"error": "<message>"}

Taxonomy:
    NotConfigured  (401) -> operation needs a password but none is set
    Unauthorized   (401) -> missing, wrong or mismatched token / hash
    InvalidInput   (400) -> malformed setup payload, missing or rejected upload
    NotFound       (404) -> avatar absent
    StorageFailure (500) -> a write to disk failed
"""


class SiteError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotConfigured(SiteError):
    status_code = 401

    def __init__(self, message: str = "No password set"):
        super().__init__(message)


class Unauthorized(SiteError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidInput(SiteError):
    status_code = 400


class NotFound(SiteError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class StorageFailure(SiteError):
    """A write to the data directory failed. Always fatal for the request."""

    status_code = 500
