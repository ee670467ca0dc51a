"""Tests for tool prerequisite helpers."""
import pytest

from poi_atlas.persistence import MemoryStore
from poi_atlas.state import AtlasSession


def test_require_state_raises_when_no_draft():
    from poi_atlas.tools._prereqs import require_state

    session = AtlasSession(MemoryStore())
    with pytest.raises(ValueError, match="place_marker"):
        require_state(session, draft=True)


def test_require_state_passes_when_drafting():
    from poi_atlas.tools._prereqs import require_state

    session = AtlasSession(MemoryStore())
    session.placement.place_at_center("post")
    # Should not raise
    require_state(session, draft=True)


def test_require_state_no_flags_does_not_raise():
    from poi_atlas.tools._prereqs import require_state

    # No flags — should never raise
    require_state(AtlasSession(MemoryStore()))
