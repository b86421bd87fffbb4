"""Key-value storage adapters for persisted carts.

The adapters mirror the browser's Web Storage API (``getItem`` / ``setItem`` /
``removeItem``): string keys, string values, no expiry. ``CartStore`` only ever
uses a single key per adapter, so one adapter instance stands for one shopper's
session.
"""

import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

_UNSAFE_SESSION_CHARS = re.compile(r"[^A-Za-z0-9_\-]")


class CartStorage(ABC):
    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key has never been set."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove_item(self, key: str) -> None: ...


class MemoryCartStorage(CartStorage):
    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._values.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove_item(self, key: str) -> None:
        self._values.pop(key, None)


class FileCartStorage(CartStorage):
    """One JSON document per session, holding a ``{key: value}`` map.

    Writes go to a temporary file that is then renamed over the document, so a
    reader never sees a half-written cart.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @classmethod
    def for_session(cls, directory: Path | str, session_id: str) -> "FileCartStorage":
        safe_id = _UNSAFE_SESSION_CHARS.sub("_", session_id or "")[:128] or "anonymous"
        return cls(Path(directory) / f"{safe_id}.json")

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("cart_storage_unreadable", path=str(self.path), error=str(exc))
            return {}

        if not isinstance(data, dict):
            logger.warning("cart_storage_unreadable", path=str(self.path), error="not a key-value document")
            return {}

        return data

    def _write(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".cart-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(values, fh)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self._write(values)

    def remove_item(self, key: str) -> None:
        values = self._read()
        if key in values:
            del values[key]
            self._write(values)
