"""
Landing CMS - Avatar Store
============================
Keeps at most one profile image.

The image lives under a fixed base name with whatever extension the
upload had (data/avatar.png, data/avatar.webp, ...). There is no metadata
record: the current avatar is found by scanning for the "avatar." prefix.

Upload rules:
    - declared mime type must start with "image/"
    - payload must be at most 2 MiB
    - extension comes from the original filename, ".jpg" if it has none
    - a rejected upload leaves the current avatar untouched
    - an accepted upload deletes the current avatar before writing
"""

import logging
import mimetypes
import os
import re

from landing.errors import InvalidInput, StorageFailure


logger = logging.getLogger(__name__)

AVATAR_BASENAME = "avatar"
AVATAR_PREFIX = AVATAR_BASENAME + "."
DEFAULT_EXTENSION = ".jpg"
MAX_AVATAR_BYTES = 2 * 1024 * 1024

_EXTENSION_RE = re.compile(r"^\.[a-z0-9]+$")


def avatar_extension(filename: str | None) -> str:
    """
    Derive the stored extension from an uploaded filename.

    Returns the lower-cased extension including the dot, or ".jpg" when the
    name has none or it contains anything but letters and digits.
    """
    if not filename:
        return DEFAULT_EXTENSION
    ext = os.path.splitext(os.path.basename(filename.replace("\\", "/")))[1].lower()
    if not _EXTENSION_RE.match(ext):
        return DEFAULT_EXTENSION
    return ext


def validate_upload(data: bytes, mime_type: str | None) -> None:
    """
    Raises:
        InvalidInput: If the payload is not an image or is too large.
    """
    if not mime_type or not mime_type.startswith("image/"):
        raise InvalidInput("Only image uploads are accepted")
    if len(data) > MAX_AVATAR_BYTES:
        raise InvalidInput("Image is too large (max 2 MB)")


class AvatarStore:
    """Capability set shared by the directory and in-memory stores."""

    def find(self) -> str | None:
        raise NotImplementedError

    def store(self, data: bytes, mime_type: str | None, filename: str | None = None) -> str:
        raise NotImplementedError

    def remove(self) -> bool:
        raise NotImplementedError

    def read(self) -> tuple[bytes, str] | None:
        raise NotImplementedError

    def path(self) -> str | None:
        """Filesystem path of the current avatar, for stores that keep one on disk."""
        return None

    def media_type(self, name: str) -> str:
        return mimetypes.guess_type(name)[0] or "application/octet-stream"


class DirectoryAvatarStore(AvatarStore):
    """
    Avatar kept as a file in the data directory.

    Attributes:
        directory: Directory scanned for the avatar file.
    """

    def __init__(self, directory: str):
        self.directory = directory

    def find(self) -> str | None:
        """
        Return the filename of the current avatar, or None.

        Never raises; an unreadable directory means no avatar.
        """
        try:
            names = sorted(os.listdir(self.directory))
        except OSError:
            return None
        for name in names:
            if name.startswith(AVATAR_PREFIX):
                return name
        return None

    def path(self) -> str | None:
        """Full path of the current avatar, or None."""
        name = self.find()
        return os.path.join(self.directory, name) if name else None

    def store(self, data: bytes, mime_type: str | None, filename: str | None = None) -> str:
        """
        Validate, replace the current avatar, and write the new one.

        Returns:
            The stored filename (e.g. "avatar.png").

        Raises:
            InvalidInput:   If the upload is rejected (nothing is touched).
            StorageFailure: If deleting the old file or writing fails.
        """
        validate_upload(data, mime_type)
        name = AVATAR_BASENAME + avatar_extension(filename)

        try:
            self._remove_all()
            os.makedirs(self.directory, exist_ok=True)
            with open(os.path.join(self.directory, name), "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error("Failed to store avatar: %s", e)
            raise StorageFailure(f"Failed to store avatar: {e}") from e

        logger.info("Avatar stored as %s (%d bytes)", name, len(data))
        return name

    def remove(self) -> bool:
        """
        Delete the current avatar. No-op when there is none.

        Returns:
            True if a file was removed.
        """
        try:
            removed = self._remove_all()
        except OSError as e:
            logger.error("Failed to remove avatar: %s", e)
            raise StorageFailure(f"Failed to remove avatar: {e}") from e
        if removed:
            logger.info("Avatar removed")
        return removed

    def read(self) -> tuple[bytes, str] | None:
        path = self.path()
        if path is None:
            return None
        try:
            with open(path, "rb") as f:
                return f.read(), self.media_type(path)
        except OSError:
            return None

    def _remove_all(self) -> bool:
        # Sweep every match so a stray second file cannot survive a replace.
        removed = False
        while True:
            name = self.find()
            if name is None:
                return removed
            os.remove(os.path.join(self.directory, name))
            removed = True


class MemoryAvatarStore(AvatarStore):
    """In-memory avatar for tests."""

    def __init__(self):
        self._name: str | None = None
        self._data: bytes = b""

    def find(self) -> str | None:
        return self._name

    def store(self, data: bytes, mime_type: str | None, filename: str | None = None) -> str:
        validate_upload(data, mime_type)
        self._name = AVATAR_BASENAME + avatar_extension(filename)
        self._data = bytes(data)
        return self._name

    def remove(self) -> bool:
        removed = self._name is not None
        self._name = None
        self._data = b""
        return removed

    def read(self) -> tuple[bytes, str] | None:
        if self._name is None:
            return None
        return self._data, self.media_type(self._name)
