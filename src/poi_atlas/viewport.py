"""Commands the annotation store issues to the map widget."""

import itertools
from typing import Any, Protocol

from .models import Coordinate, MarkerType


class MapViewport(Protocol):
    def set_view(self, center: Coordinate, zoom: int) -> None: ...

    def add_layer(self, base_layer_id: str) -> None: ...

    def place_marker_icon(self, coordinate: Coordinate, marker_type: MarkerType) -> Any: ...

    def remove_marker_icon(self, handle: Any) -> None: ...

    def set_popup_content(self, handle: Any, html: str) -> None: ...


class HeadlessViewport:
    """In-memory MapViewport used by the tool server, where nothing is drawn.

    Keeps what a real widget would display so it can be inspected.
    """

    def __init__(self):
        self.center: Coordinate | None = None
        self.zoom: int | None = None
        self.layers: list[str] = []
        self.icons: dict[int, dict] = {}
        self._handles = itertools.count(1)

    def set_view(self, center: Coordinate, zoom: int) -> None:
        self.center = center
        self.zoom = zoom

    def add_layer(self, base_layer_id: str) -> None:
        if base_layer_id in self.layers:
            self.layers.remove(base_layer_id)
        self.layers.append(base_layer_id)

    def place_marker_icon(self, coordinate: Coordinate, marker_type: MarkerType) -> int:
        handle = next(self._handles)
        self.icons[handle] = {"coordinate": coordinate, "type": marker_type, "popup": ""}
        return handle

    def remove_marker_icon(self, handle: int) -> None:
        self.icons.pop(handle, None)

    def set_popup_content(self, handle: int, html: str) -> None:
        if handle in self.icons:
            self.icons[handle]["popup"] = html

    def summary(self) -> dict:
        return {
            "center": self.center.as_pair() if self.center else None,
            "zoom": self.zoom,
            "layers": list(self.layers),
            "icons": len(self.icons),
        }
