"""Runtime configuration and static map tables."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from .models import Coordinate, MarkerType


class MarkerIcon(BaseModel):
    icon_url: str
    icon_size: tuple[int, int] = (48, 48)
    icon_anchor: tuple[int, int] = (24, 48)


class BaseLayer(BaseModel):
    url_template: str
    attribution: str = ""


MARKER_ICONS: dict[MarkerType, MarkerIcon] = {
    MarkerType.POST: MarkerIcon(icon_url="assets/icon/poste.png"),
    MarkerType.CROSSING_POINT: MarkerIcon(icon_url="assets/icon/passage.png"),
    MarkerType.WATER_POINT: MarkerIcon(icon_url="assets/icon/eau.png"),
}

BASE_LAYERS: dict[str, BaseLayer] = {
    "osm": BaseLayer(
        url_template="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution="© OpenStreetMap contributors",
    ),
}

DEFAULT_CENTER = Coordinate(lat=48.866667, lng=2.333333)
DEFAULT_ZOOM = 12
DEFAULT_BASE_LAYER = "osm"


def _default_store_path() -> Path:
    return Path.home() / ".cache" / "poi-atlas" / "store.json"


class AtlasConfig(BaseModel):
    store_path: Path = Field(default_factory=_default_store_path)
    log_level: str = "INFO"
    default_center: Coordinate = DEFAULT_CENTER
    default_zoom: int = Field(default=DEFAULT_ZOOM, ge=0)
    default_base_layer: str = Field(default=DEFAULT_BASE_LAYER, min_length=1)

    @classmethod
    def from_env(cls) -> "AtlasConfig":
        """Build a config from POI_ATLAS_* environment variables."""
        values = {}
        if os.environ.get("POI_ATLAS_STORE"):
            values["store_path"] = Path(os.environ["POI_ATLAS_STORE"]).expanduser()
        if os.environ.get("POI_ATLAS_LOG_LEVEL"):
            values["log_level"] = os.environ["POI_ATLAS_LOG_LEVEL"].upper()
        return cls(**values)
