"""Durable key-value storage for the view state and marker catalog.

Two logical keys are used: ``view-state`` and ``marker-catalog``. Reads never
raise: a missing key or a value that cannot be decoded reads as ``None`` and
callers fall back to defaults.
"""

import json
import logging
import math
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from .core.errors import MalformedPersistedState

logger = logging.getLogger(__name__)

VIEW_KEY = "view-state"
MARKERS_KEY = "marker-catalog"

# Keys written by the first release, which only remembered the map position
LEGACY_CENTER_KEY = "mapCenter"
LEGACY_ZOOM_KEY = "mapZoom"
_INT_PREFIX = re.compile(r"\s*[-+]?\d+")


class PersistenceAdapter(ABC):
    """Blob store keyed by fixed logical keys.

    Subclasses implement ``_read`` and ``_write``. ``_read`` returns ``None``
    for an absent key and raises MalformedPersistedState for garbage.
    """

    @abstractmethod
    def _read(self, key: str) -> Any: ...

    @abstractmethod
    def _write(self, key: str, value: Any) -> None: ...

    def _get(self, key: str) -> Any:
        try:
            return self._read(key)
        except MalformedPersistedState as e:
            logger.warning("Ignoring malformed %r record: %s", key, e)
            return None

    def load_view(self) -> Optional[dict]:
        raw = self._get(VIEW_KEY)
        if raw is None:
            return self._legacy_view()
        if not isinstance(raw, dict):
            logger.warning("Ignoring %r record of type %s", VIEW_KEY, type(raw).__name__)
            return None
        return raw

    def save_view(self, raw: dict) -> None:
        self._write(VIEW_KEY, raw)

    def load_markers(self) -> Optional[list]:
        raw = self._get(MARKERS_KEY)
        if raw is None:
            return None
        if not isinstance(raw, list):
            logger.warning("Ignoring %r record of type %s", MARKERS_KEY, type(raw).__name__)
            return None
        return raw

    def save_markers(self, raw: list) -> None:
        self._write(MARKERS_KEY, raw)

    def _legacy_view(self) -> Optional[dict]:
        center = self._get(LEGACY_CENTER_KEY)
        zoom = self._get(LEGACY_ZOOM_KEY)
        if center is None and zoom is None:
            return None
        view = {}
        if center is not None:
            try:
                view["center"] = json.loads(center) if isinstance(center, str) else center
            except ValueError as e:
                logger.warning("Ignoring malformed legacy %r: %s", LEGACY_CENTER_KEY, e)
        if zoom is not None:
            parsed = _leading_int(zoom)
            if parsed is None:
                logger.warning("Ignoring malformed legacy %r: %r", LEGACY_ZOOM_KEY, zoom)
            else:
                view["zoom"] = parsed
        if not view:
            return None
        logger.info("Read view from legacy %r/%r keys", LEGACY_CENTER_KEY, LEGACY_ZOOM_KEY)
        return view


def _leading_int(value) -> Optional[int]:
    """Integer prefix of a number or numeric string; "12.5" and 12.5 give 12."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            return int(match.group())
    return None


class MemoryStore(PersistenceAdapter):
    """In-process store holding serialized JSON strings, like browser storage."""

    def __init__(self, data: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(data or {})

    def _read(self, key: str) -> Any:
        blob = self.data.get(key)
        if blob is None:
            return None
        try:
            return json.loads(blob)
        except (TypeError, ValueError) as e:
            raise MalformedPersistedState(str(e)) from e

    def _write(self, key: str, value: Any) -> None:
        self.data[key] = json.dumps(value)


class JsonFileStore(PersistenceAdapter):
    """All keys in one JSON document, rewritten atomically on every save."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Store %s is unreadable, starting empty: %s", self.path, e)
            return {}
        if not isinstance(doc, dict):
            logger.warning("Store %s does not hold a JSON object, starting empty", self.path)
            return {}
        return doc

    def _read(self, key: str) -> Any:
        return self._load_document().get(key)

    def _write(self, key: str, value: Any) -> None:
        doc = self._load_document()
        doc[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        logger.debug("Wrote %r to %s", key, self.path)
