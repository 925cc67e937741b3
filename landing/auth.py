"""
Landing CMS - Authentication Module
=====================================
Single-secret authentication for the content editor.

Security model:
- Single admin credential (no user accounts)
- The client hashes the password itself and sends only the hash
- The hash is stored as-is in data/auth.json: {"passwordHash": "..."}
- The stored hash doubles as the bearer token: no expiry, no sessions
- All mutating API routes require "Authorization: Bearer <hash>"

First-time setup flow:
    1. auth.json is missing or empty -> /api/auth/status reports hasPassword=false
    2. Client sends POST /api/auth/setup with {"passwordHash": "..."}
    3. Hash is saved to data/auth.json

Subsequent visits:
    1. Client sends POST /api/auth/login with the same hash
    2. On match the stored hash is returned as the token
    3. POST /api/auth/reset with {"currentPasswordHash": "..."} clears it

Anyone who has seen the hash stays authenticated until a reset.
"""

import copy
import hmac
import json
import logging
import os

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from landing.errors import InvalidInput, NotConfigured, StorageFailure, Unauthorized


logger = logging.getLogger(__name__)

# Shallow sanity check only; real hashing happens client-side.
MIN_HASH_LENGTH = 10

# Security scheme for FastAPI dependency injection
security = HTTPBearer(auto_error=False)


# =============================================================================
# Credential Stores
# =============================================================================

class CredentialStore:
    """
    Base class for the single credential record.

    load() never raises: an unreadable record is the same as no record.
    """

    def load(self) -> dict:
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            logger.warning("Credential store unreadable, treating as unset: %s", e)
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, cred: dict) -> None:
        """
        Overwrite the record. save({}) removes the password.

        Raises:
            StorageFailure: If the underlying write fails.
        """
        try:
            self._write(cred)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write credential store: %s", e)
            raise StorageFailure(f"Failed to save credential: {e}") from e

    def _read(self):
        raise NotImplementedError

    def _write(self, cred: dict) -> None:
        raise NotImplementedError


class JsonCredentialStore(CredentialStore):
    """
    Credential kept in a JSON file.

    Attributes:
        auth_file: Path to auth.json.
    """

    def __init__(self, data_dir: str, filename: str = "auth.json"):
        self.auth_file = os.path.join(data_dir, filename)

    def _read(self):
        if not os.path.exists(self.auth_file):
            return {}
        with open(self.auth_file, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, cred: dict) -> None:
        text = json.dumps(cred, indent=2, ensure_ascii=False)
        os.makedirs(os.path.dirname(self.auth_file), exist_ok=True)
        with open(self.auth_file, "w", encoding="utf-8") as f:
            f.write(text)


class MemoryCredentialStore(CredentialStore):
    """In-memory credential record for tests."""

    def __init__(self, cred: dict | None = None):
        self._cred = copy.deepcopy(cred) if cred else {}

    def _read(self):
        return copy.deepcopy(self._cred)

    def _write(self, cred: dict) -> None:
        self._cred = copy.deepcopy(cred)


# =============================================================================
# Auth Gate
# =============================================================================

def is_authorized(stored_hash: str | None, presented_token: str | None) -> bool:
    """
    Check a presented bearer token against the stored hash.

    False when no hash is stored or no token is presented. Comparison is
    exact (and constant-time); the token must equal the hash byte for byte.
    """
    if not stored_hash or not presented_token:
        return False
    if not isinstance(stored_hash, str) or not isinstance(presented_token, str):
        return False
    return hmac.compare_digest(
        stored_hash.encode("utf-8"), presented_token.encode("utf-8")
    )


class AuthManager:
    """
    Two-state auth machine (Unconfigured / Configured) over a CredentialStore.

    Attributes:
        store: The credential store holding {"passwordHash": ...} or {}.
    """

    def __init__(self, store: CredentialStore):
        self.store = store

    def stored_hash(self) -> str | None:
        value = self.store.load().get("passwordHash")
        return value if isinstance(value, str) and value else None

    def is_configured(self) -> bool:
        """True if a password hash has been set."""
        return self.stored_hash() is not None

    def setup(self, password_hash) -> None:
        """
        Set the admin credential. Only allowed while Unconfigured.

        Raises:
            InvalidInput: If a password is already set, or the hash is
                          missing, not a string, or shorter than 10 chars.
        """
        if self.is_configured():
            raise InvalidInput("Password already set")

        if not isinstance(password_hash, str) or len(password_hash) < MIN_HASH_LENGTH:
            raise InvalidInput("Invalid hash")

        self.store.save({"passwordHash": password_hash})
        logger.info("Admin password configured")

    def login(self, password_hash) -> str:
        """
        Verify a candidate hash and return the bearer token.

        Returns:
            The stored hash, which is the token.

        Raises:
            NotConfigured: If no password is set.
            Unauthorized:  If the candidate does not match.
        """
        stored = self.stored_hash()
        if stored is None:
            raise NotConfigured()
        if not is_authorized(stored, password_hash):
            logger.info("Rejected login attempt")
            raise Unauthorized("Wrong password")
        return stored

    def reset(self, current_password_hash) -> None:
        """
        Clear the credential, returning to Unconfigured.

        Raises:
            NotConfigured: If no password is set.
            Unauthorized:  If the supplied current hash does not match.
        """
        stored = self.stored_hash()
        if stored is None:
            raise NotConfigured()
        if not is_authorized(stored, current_password_hash):
            logger.info("Rejected password reset attempt")
            raise Unauthorized("Wrong password")
        self.store.save({})
        logger.info("Admin password cleared")

    def check(self, token: str | None) -> None:
        """
        Gate check for protected operations.

        Raises:
            NotConfigured: If no password is set.
            Unauthorized:  If the token is missing or does not match.
        """
        stored = self.stored_hash()
        if stored is None:
            raise NotConfigured()
        if not is_authorized(stored, token):
            raise Unauthorized()


def require_auth(auth_manager: AuthManager):
    """
    Create a FastAPI dependency that enforces authentication.

    Usage in routes:
        @router.post("/api/hero", dependencies=[Depends(require_auth(auth_mgr))])
        async def update_hero(): ...

    Args:
        auth_manager: The AuthManager instance to check tokens against.

    Returns:
        A FastAPI dependency function.
    """
    async def _verify(
        credentials: HTTPAuthorizationCredentials | None = Depends(security),
    ):
        token = credentials.credentials if credentials is not None else None
        auth_manager.check(token)
        return True

    return _verify
