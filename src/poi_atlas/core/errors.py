"""Error types raised by the annotation store."""


class InvalidCoordinate(ValueError):
    """A latitude/longitude pair outside the legal range."""

    def __init__(self, lat, lng):
        self.lat = lat
        self.lng = lng
        super().__init__(
            f"Invalid coordinates ({lat}, {lng}): latitude must be within [-90, 90] "
            "and longitude within [-180, 180]."
        )


class MalformedPersistedState(ValueError):
    """A stored record could not be decoded. Absorbed by the persistence layer."""


class PlacementError(ValueError):
    """A placement action was attempted in the wrong state."""
