"""Pydantic domain models for markers and the map view."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def as_pair(self) -> list[float]:
        return [self.lat, self.lng]


class MarkerType(str, Enum):
    """Kinds of point-of-interest. Each one has an icon in config.MARKER_ICONS."""

    POST = "post"
    CROSSING_POINT = "crossing-point"
    WATER_POINT = "water-point"

    @classmethod
    def _missing_(cls, value):
        # Labels written by the first release of the app
        if isinstance(value, str):
            key = value.strip().lower()
            alias = _LEGACY_LABELS.get(key)
            if alias is not None:
                return cls(alias)
            for member in cls:
                if member.value == key:
                    return member
        return None


_LEGACY_LABELS = {
    "poste": "post",
    "lieu de passage": "crossing-point",
    "point eau": "water-point",
}


class MarkerRecord(BaseModel):
    """A confirmed point-of-interest. Immutable; edits are delete + re-add."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    coordinate: Coordinate
    type: MarkerType
    name: str = ""
    description: str = ""

    def to_raw(self) -> dict[str, Any]:
        """Persisted layout of one catalog entry."""
        return {
            "id": self.id,
            "lat": self.coordinate.lat,
            "lng": self.coordinate.lng,
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
        }


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    center: Coordinate
    zoom: int = Field(ge=0)
    active_base_layer: str = Field(min_length=1)

    def to_raw(self) -> dict[str, Any]:
        return {
            "center": self.center.as_pair(),
            "zoom": self.zoom,
            "activeBaseLayer": self.active_base_layer,
        }


class DraftMarker(BaseModel):
    """A marker shown on the map while its name/description form is open."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    coordinate: Coordinate
    type: MarkerType
    handle: Optional[Any] = None
