"""Map view tools: get_view, move_map, set_base_layer, list_base_layers."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..config import BASE_LAYERS
from ..state import AtlasSession
from ..view_state import valid_zoom


def register_view_tools(mcp: FastMCP, session: AtlasSession):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_view() -> str:
        """Return the saved map center, zoom and active base layer."""
        return json.dumps(session.view_store.current.to_raw(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def move_map(lat: float, lng: float, zoom: int | None = None) -> str:
        """Pan (and optionally zoom) the map. The new view is saved immediately.

        An out-of-range center is not saved, and place_marker will refuse it.

        Args:
            lat: New center latitude (degrees).
            lng: New center longitude (degrees).
            zoom: New zoom level (0 or more). Keeps the current zoom if omitted.
        """
        if zoom is not None and not valid_zoom(zoom):
            return f"Error: Invalid zoom {zoom}. Zoom must be a whole number, 0 or more. View unchanged."
        if not session.placement.on_move((lat, lng), zoom):
            return (
                f"Warning: center ({lat}, {lng}) is out of range and was not saved. "
                "Markers cannot be placed here."
            )
        view = session.view_store.current
        session.viewport.set_view(view.center, view.zoom)
        return (
            f"View: center ({view.center.lat:.6f}, {view.center.lng:.6f}), "
            f"zoom {view.zoom}, base layer {view.active_base_layer}"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_base_layers() -> str:
        """List the selectable base layers."""
        return json.dumps(
            {layer_id: layer.model_dump() for layer_id, layer in BASE_LAYERS.items()},
            indent=2,
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_base_layer(layer_id: str) -> str:
        """Switch the map's base layer and save the choice.

        Args:
            layer_id: One of the ids from list_base_layers.
        """
        if layer_id not in BASE_LAYERS:
            return f"Error: Unknown base layer '{layer_id}'. Choose one of: {', '.join(BASE_LAYERS)}."
        session.viewport.add_layer(layer_id)
        session.placement.on_base_layer_change(layer_id)
        return f"Base layer set to {layer_id}."
