"""
Landing CMS - Content Store
=============================
Loads and saves the page document (data/site.json).

Read path is fail-open: a missing or corrupt file yields a fresh copy of
the default document, so the public page can always render. Write path is
fail-closed: any OSError is raised to the caller as StorageFailure.

No field-level merging happens here. Handlers replace whole top-level
sections through update_section(), which is a plain load-modify-save.

Usage:
    store = JsonContentStore("/path/to/data")
    site = store.load()
    store.update_section("hero", {"title": "..."})
"""

import json
import logging
import os
from typing import Any

from landing.defaults import default_content
from landing.errors import StorageFailure


logger = logging.getLogger(__name__)

# Computed on read, never persisted.
TRANSIENT_KEYS = ("hasAvatar",)


class ContentStore:
    """
    Base class for page document stores.

    Subclasses implement _read() and _write(); load/save semantics
    (default fallback, transient key stripping) live here.
    """

    def load(self) -> dict:
        """
        Return the persisted document, or the default document.

        Never raises. Anything that is not a JSON object counts as corrupt.
        """
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            logger.warning("Content store unreadable, serving defaults: %s", e)
            return default_content()

        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Content store holds %s, serving defaults", type(data).__name__)
            return default_content()
        return data

    def save(self, doc: dict) -> None:
        """
        Overwrite the stored document.

        Raises:
            StorageFailure: If the underlying write fails.
        """
        clean = {k: v for k, v in doc.items() if k not in TRANSIENT_KEYS}
        # Serialize before touching storage so a bad value cannot truncate the file.
        try:
            text = json.dumps(clean, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error("Content is not serializable: %s", e)
            raise StorageFailure(f"Failed to save content: {e}") from e

        try:
            self._write(text)
        except OSError as e:
            logger.error("Failed to write content store: %s", e)
            raise StorageFailure(f"Failed to save content: {e}") from e

    def update_section(self, name: str, value: Any) -> dict:
        """Replace one top-level key wholesale and persist the document."""
        site = self.load()
        site[name] = value
        self.save(site)
        logger.info("Section '%s' replaced", name)
        return site

    def exists(self) -> bool:
        raise NotImplementedError

    def _read(self) -> Any:
        """Return the decoded document, or None when nothing is stored."""
        raise NotImplementedError

    def _write(self, text: str) -> None:
        raise NotImplementedError


class JsonContentStore(ContentStore):
    """
    Page document kept in a pretty-printed JSON file.

    Attributes:
        path: Full path to site.json.
    """

    def __init__(self, data_dir: str, filename: str = "site.json"):
        self.path = os.path.join(data_dir, filename)

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def _read(self) -> Any:
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, text: str) -> None:
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)


class MemoryContentStore(ContentStore):
    """In-memory store for tests. Holds the serialized text, like the file would."""

    def __init__(self, doc: dict | None = None):
        self._text = json.dumps(doc) if doc is not None else None

    def exists(self) -> bool:
        return self._text is not None

    def _read(self) -> Any:
        return json.loads(self._text) if self._text is not None else None

    def _write(self, text: str) -> None:
        self._text = text
