"""Marker placement flow: place a draft at the view center, then confirm or cancel.

    IDLE --place_at_center--> DRAFTING --confirm--> IDLE (record created)
                                       --cancel---> IDLE (nothing stored)

Placing again while DRAFTING replaces the draft.
"""

import html
import logging
from enum import Enum
from typing import Any, Optional

from .catalog import MarkerCatalog
from .core.errors import PlacementError
from .core.geo import require_valid
from .models import Coordinate, DraftMarker, MarkerRecord, MarkerType
from .view_state import ViewStateStore, valid_zoom
from .viewport import MapViewport

logger = logging.getLogger(__name__)


class PlacementState(str, Enum):
    IDLE = "idle"
    DRAFTING = "drafting"


def popup_html(name: str, description: str) -> str:
    return f"<strong>{html.escape(name)}</strong><br>{html.escape(description)}"


class MarkerPlacement:
    """Glue between the map widget, the view store and the marker catalog."""

    def __init__(self, catalog: MarkerCatalog, view_store: ViewStateStore, viewport: MapViewport):
        self.catalog = catalog
        self.view_store = view_store
        self.viewport = viewport
        self.picker_open = False
        self.draft: Optional[DraftMarker] = None
        self._handles: dict[str, Any] = {}
        center = view_store.current.center
        self._center: tuple = (center.lat, center.lng)

    @property
    def state(self) -> PlacementState:
        return PlacementState.DRAFTING if self.draft is not None else PlacementState.IDLE

    def render_initial(self) -> None:
        view = self.view_store.current
        self.viewport.set_view(view.center, view.zoom)
        self.viewport.add_layer(view.active_base_layer)
        for record in self.catalog.list():
            self._show(record)

    def _show(self, record: MarkerRecord) -> None:
        handle = self.viewport.place_marker_icon(record.coordinate, record.type)
        self.viewport.set_popup_content(handle, popup_html(record.name, record.description))
        self._handles[record.id] = handle

    # Events from the map widget

    def on_move(self, center, zoom: Optional[int] = None) -> bool:
        """Record a pan/zoom. Returns whether the view was saved.

        A bad zoom discards the whole event. An out-of-range center is kept
        for the next placement, which then refuses it, but is never saved.
        """
        if zoom is not None and not valid_zoom(zoom):
            logger.warning("Ignoring map move with invalid zoom %r", zoom)
            return False
        if isinstance(center, Coordinate):
            center = (center.lat, center.lng)
        self._center = tuple(center)
        before = self.view_store.current
        return self.view_store.update(center=center, zoom=zoom) is not before

    def on_base_layer_change(self, base_layer_id: str) -> None:
        self.view_store.update(active_base_layer=base_layer_id)

    # User actions

    def toggle_type_picker(self) -> bool:
        self.picker_open = not self.picker_open
        return self.picker_open

    def place_at_center(self, marker_type) -> DraftMarker:
        """Start a draft at the current center.

        Raises InvalidCoordinate (and stays IDLE) if the center is out of
        range, or ValueError for an unknown marker type.
        """
        kind = MarkerType(marker_type)
        coordinate = require_valid(*self._center)

        if self.draft is not None:
            self._discard_draft()

        handle = self.viewport.place_marker_icon(coordinate, kind)
        self.draft = DraftMarker(coordinate=coordinate, type=kind, handle=handle)
        self.picker_open = False
        logger.debug("Drafting %s marker at (%.6f, %.6f)", kind.value, coordinate.lat, coordinate.lng)
        return self.draft

    def confirm(self, name: str, description: str = "") -> str:
        """Store the draft as a marker and return its id."""
        if self.draft is None:
            raise PlacementError("No marker is being placed. Place a marker first.")
        draft = self.draft
        name = (name or "").strip()
        description = (description or "").strip()
        marker_id = self.catalog.add(draft.coordinate, draft.type, name, description)
        self.viewport.set_popup_content(draft.handle, popup_html(name, description))
        self._handles[marker_id] = draft.handle
        self.draft = None
        return marker_id

    def cancel(self) -> bool:
        """Drop the draft. Returns False if there was none."""
        if self.draft is None:
            return False
        self._discard_draft()
        return True

    def delete(self, marker_id: str) -> bool:
        removed = self.catalog.remove(marker_id)
        handle = self._handles.pop(marker_id, None)
        if handle is not None:
            self.viewport.remove_marker_icon(handle)
        return removed

    def _discard_draft(self) -> None:
        self.viewport.remove_marker_icon(self.draft.handle)
        self.draft = None
