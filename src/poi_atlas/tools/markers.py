"""Marker tools: pick a type, place at center, submit/cancel the form, delete, list."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..config import MARKER_ICONS
from ..models import MarkerRecord, MarkerType
from ..state import AtlasSession
from ._prereqs import require_state


def _describe(record: MarkerRecord) -> dict:
    return {
        "id": record.id,
        "type": record.type.value,
        "lat": record.coordinate.lat,
        "lng": record.coordinate.lng,
        "name": record.name,
        "description": record.description,
    }


def register_marker_tools(mcp: FastMCP, session: AtlasSession):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_marker_types() -> str:
        """List the marker types that can be placed, with their icons."""
        return json.dumps(
            {kind.value: MARKER_ICONS[kind].icon_url for kind in MarkerType},
            indent=2,
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def toggle_marker_types() -> str:
        """Show or hide the marker-type picker.

        **Next:** place_marker with one of the listed types.
        """
        if session.placement.toggle_type_picker():
            types = ", ".join(kind.value for kind in MarkerType)
            return f"Marker types: {types}"
        return "Marker type picker closed."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def place_marker(marker_type: str) -> str:
        """Place a draft marker of the given type at the current map center.

        Replaces any draft that has not been submitted yet.
        **Next:** submit_marker with a name and description, or cancel_marker.

        Args:
            marker_type: One of post, crossing-point, water-point.
        """
        try:
            draft = session.placement.place_at_center(marker_type)
        except ValueError as e:
            return f"Error: {e}"
        return (
            f"Draft {draft.type.value} marker placed at "
            f"({draft.coordinate.lat:.6f}, {draft.coordinate.lng:.6f}). "
            "Now call submit_marker with a name and description, or cancel_marker."
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def submit_marker(name: str, description: str = "") -> str:
        """Save the draft marker with a name and description.

        **Requires:** place_marker first.

        Args:
            name: Short name shown in bold in the marker popup.
            description: Free text shown under the name.
        """
        try:
            require_state(session, draft=True)
            marker_id = session.placement.confirm(name, description)
        except ValueError as e:
            return f"Error: {e}"
        return f"Marker saved with id {marker_id}."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def cancel_marker() -> str:
        """Discard the draft marker without saving anything."""
        if session.placement.cancel():
            return "Draft marker discarded."
        return "No draft marker to discard."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def delete_marker(marker_id: str) -> str:
        """Delete a saved marker by id. Deleting an unknown id does nothing.

        Args:
            marker_id: The id returned by submit_marker or list_markers.
        """
        if session.placement.delete(marker_id):
            return f"Marker {marker_id} deleted."
        return f"No marker with id {marker_id}; nothing deleted."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_markers() -> str:
        """List saved markers in the order they were added."""
        return json.dumps([_describe(r) for r in session.catalog.list()], indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_marker(marker_id: str) -> str:
        """Show one saved marker.

        Args:
            marker_id: The marker id.
        """
        record = session.catalog.get(marker_id)
        if record is None:
            return f"Error: No marker with id {marker_id}."
        return json.dumps(_describe(record), indent=2)
