"""
Landing CMS - Server Package
============================
Content backend for a single marketing landing page.

This package provides:
- FastAPI application serving the page document as JSON
- Password-gated endpoints for editing page sections
- Profile avatar upload / download / delete
- Single-secret bearer authentication (the stored hash is the token)

Architecture:
    main.py     -> FastAPI app creation, error handlers, body-size limit
    routes.py   -> All REST API endpoint handlers
    auth.py     -> Credential store, auth gate, route protection
    content.py  -> Page document store (JSON file or in-memory)
    avatar.py   -> Single avatar image store (directory or in-memory)
    config.py   -> Read config.yaml and environment overrides
    defaults.py -> Compiled-in seed document
    errors.py   -> Error types mapped to HTTP statuses
"""

__version__ = "1.0.0"
