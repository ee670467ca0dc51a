"""Prerequisite checking helpers for MCP tools."""


def require_state(session, *, draft: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(session, draft=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if draft and session.placement.draft is None:
        raise ValueError(
            "No marker is being placed. Place one first with place_marker."
        )