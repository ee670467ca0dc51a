"""Persisted map view: center, zoom and active base layer."""

import logging
from typing import Optional

from pydantic import ValidationError

from .config import DEFAULT_BASE_LAYER, DEFAULT_CENTER, DEFAULT_ZOOM
from .core.errors import InvalidCoordinate
from .core.geo import as_coordinate
from .models import ViewState
from .persistence import PersistenceAdapter

logger = logging.getLogger(__name__)


def default_view() -> ViewState:
    return ViewState(
        center=DEFAULT_CENTER, zoom=DEFAULT_ZOOM, active_base_layer=DEFAULT_BASE_LAYER
    )


def valid_zoom(zoom) -> bool:
    return isinstance(zoom, int) and not isinstance(zoom, bool) and zoom >= 0


def _valid_layer(layer) -> bool:
    return isinstance(layer, str) and bool(layer.strip())


class ViewStateStore:
    """Single-owner store for the map view, written through on every change."""

    def __init__(self, adapter: PersistenceAdapter, default: Optional[ViewState] = None):
        self.adapter = adapter
        self.default = default or default_view()
        self._current = self.default

    @property
    def current(self) -> ViewState:
        return self._current

    def load(self) -> ViewState:
        """Read the persisted view, keeping valid fields and defaulting the rest."""
        raw = self.adapter.load_view()
        if raw is None:
            self._current = self.default
            return self._current

        center = self.default.center
        try:
            center = as_coordinate(raw.get("center"))
        except (InvalidCoordinate, ValidationError):
            logger.warning("Persisted view center %r is invalid, using default", raw.get("center"))

        zoom = raw.get("zoom")
        if not valid_zoom(zoom):
            if zoom is not None:
                logger.warning("Persisted zoom %r is invalid, using default", zoom)
            zoom = self.default.zoom

        layer = raw.get("activeBaseLayer")
        if not _valid_layer(layer):
            layer = self.default.active_base_layer

        self._current = ViewState(center=center, zoom=zoom, active_base_layer=layer)
        return self._current

    def update(
        self,
        center=None,
        zoom: Optional[int] = None,
        active_base_layer: Optional[str] = None,
    ) -> ViewState:
        """Merge the given fields and persist.

        An invalid field rejects the whole update: the prior state is kept and
        nothing is written.
        """
        fields = {}
        if center is not None:
            try:
                fields["center"] = as_coordinate(center)
            except (InvalidCoordinate, ValidationError):
                logger.warning("Ignoring view update with invalid center %r", center)
                return self._current
        if zoom is not None:
            if not valid_zoom(zoom):
                logger.warning("Ignoring view update with invalid zoom %r", zoom)
                return self._current
            fields["zoom"] = zoom
        if active_base_layer is not None:
            if not _valid_layer(active_base_layer):
                logger.warning("Ignoring view update with invalid base layer %r", active_base_layer)
                return self._current
            fields["active_base_layer"] = active_base_layer
        if not fields:
            return self._current

        merged = self._current.model_dump()
        merged.update(fields)
        updated = ViewState(**merged)
        self.adapter.save_view(updated.to_raw())
        self._current = updated
        return self._current
