"""Tests for the key-value persistence adapters."""
import json

import pytest

from poi_atlas.persistence import (
    MARKERS_KEY,
    VIEW_KEY,
    JsonFileStore,
    MemoryStore,
)


VIEW = {"center": [48.85, 2.35], "zoom": 14, "activeBaseLayer": "osm"}
MARKERS = [
    {"id": "a", "lat": 1.0, "lng": 2.0, "type": "post", "name": "A", "description": ""},
]


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(tmp_path / "store.json")


def test_absent_keys_read_as_none(store):
    assert store.load_view() is None
    assert store.load_markers() is None


def test_view_round_trip(store):
    store.save_view(VIEW)
    assert store.load_view() == VIEW


def test_markers_round_trip(store):
    store.save_markers(MARKERS)
    assert store.load_markers() == MARKERS


def test_empty_marker_list_is_not_absent(store):
    store.save_markers([])
    assert store.load_markers() == []


def test_saving_one_key_keeps_the_other(store):
    store.save_view(VIEW)
    store.save_markers(MARKERS)
    assert store.load_view() == VIEW


class TestMemoryStore:
    def test_values_are_serialized(self):
        store = MemoryStore()
        store.save_view(VIEW)
        assert json.loads(store.data[VIEW_KEY]) == VIEW

    def test_garbage_reads_as_none(self):
        store = MemoryStore({VIEW_KEY: "{not json", MARKERS_KEY: "[1, 2"})
        assert store.load_view() is None
        assert store.load_markers() is None

    def test_wrong_types_read_as_none(self):
        store = MemoryStore({VIEW_KEY: "[1, 2]", MARKERS_KEY: '{"a": 1}'})
        assert store.load_view() is None
        assert store.load_markers() is None

    def test_legacy_view_keys(self):
        store = MemoryStore({"mapCenter": "[45.5, 6.1]", "mapZoom": "9"})
        assert store.load_view() == {"center": [45.5, 6.1], "zoom": 9}

    def test_legacy_zoom_only(self):
        store = MemoryStore({"mapZoom": "15"})
        assert store.load_view() == {"zoom": 15}

    def test_malformed_legacy_keys(self):
        store = MemoryStore({"mapZoom": '"high"'})
        assert store.load_view() is None

    def test_new_key_wins_over_legacy(self):
        store = MemoryStore({"mapCenter": "[45.5, 6.1]", "mapZoom": "9"})
        store.save_view(VIEW)
        assert store.load_view() == VIEW


class TestJsonFileStore:
    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "store.json"
        JsonFileStore(path).save_view(VIEW)
        assert path.exists()
        assert json.loads(path.read_text())[VIEW_KEY] == VIEW

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{ definitely not json")
        store = JsonFileStore(path)
        assert store.load_view() is None
        assert store.load_markers() is None

    def test_non_object_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]")
        assert JsonFileStore(path).load_markers() is None

    def test_corrupt_file_is_replaced_on_save(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("garbage")
        store = JsonFileStore(path)
        store.save_markers(MARKERS)
        assert store.load_markers() == MARKERS

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileStore(tmp_path / "store.json")
        store.save_view(VIEW)
        store.save_markers(MARKERS)
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_legacy_center_as_list(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"mapCenter": [45.5, 6.1], "mapZoom": "9"}))
        assert JsonFileStore(path).load_view() == {"center": [45.5, 6.1], "zoom": 9}


class TestLegacyZoomParsing:
    def test_fractional_zoom_string_truncates(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"mapCenter": "[45.5, 6.1]", "mapZoom": "12.5"}))
        assert JsonFileStore(path).load_view() == {"center": [45.5, 6.1], "zoom": 12}

    def test_fractional_zoom_number_truncates(self):
        store = MemoryStore({"mapZoom": "12.5"})
        assert store.load_view() == {"zoom": 12}

    def test_bad_zoom_keeps_center(self):
        store = MemoryStore({"mapCenter": "[45.5, 6.1]", "mapZoom": '"high"'})
        assert store.load_view() == {"center": [45.5, 6.1]}

    def test_bad_center_keeps_zoom(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"mapCenter": "[45.5,", "mapZoom": "9"}))
        assert JsonFileStore(path).load_view() == {"zoom": 9}
