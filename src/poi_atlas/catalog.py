"""The ordered, id-keyed set of confirmed markers."""

import logging
import uuid
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from .core.errors import InvalidCoordinate
from .core.geo import as_coordinate, is_valid
from .models import MarkerRecord, MarkerType
from .persistence import PersistenceAdapter

logger = logging.getLogger(__name__)


def new_marker_id() -> str:
    return uuid.uuid4().hex


def _parse_record(raw, id_factory: Callable[[], str]) -> tuple[MarkerRecord, bool]:
    """Build a record from its persisted layout.

    Returns the record and whether its id was freshly minted.
    Raises ValueError/ValidationError for entries that must be dropped.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"entry is a {type(raw).__name__}, not an object")
    lat, lng = raw.get("lat"), raw.get("lng")
    if not is_valid(lat, lng):
        raise InvalidCoordinate(lat, lng)

    marker_id = raw.get("id")
    minted = False
    if marker_id is None or marker_id == "":
        marker_id = id_factory()
        minted = True
    elif not isinstance(marker_id, str):
        marker_id = str(marker_id)

    for key in ("name", "description"):
        if not isinstance(raw.get(key, ""), str):
            raise ValueError(f"{key} must be a string")

    record = MarkerRecord(
        id=marker_id,
        coordinate={"lat": lat, "lng": lng},
        type=raw.get("type"),
        name=raw.get("name", ""),
        description=raw.get("description", ""),
    )
    return record, minted


class MarkerCatalog:
    """Markers in insertion order. All lookups and removals go by id.

    Each mutation persists the whole catalog through the adapter before it
    returns.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        records: Iterable[MarkerRecord] = (),
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.adapter = adapter
        self._id_factory = id_factory or new_marker_id
        self._records: dict[str, MarkerRecord] = {}
        for record in records:
            self._records.setdefault(record.id, record)

    @classmethod
    def restore(
        cls,
        raw_records,
        adapter: PersistenceAdapter,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> "MarkerCatalog":
        """Rebuild a catalog from persisted entries, dropping the invalid ones."""
        catalog, _ = cls._restore(raw_records, adapter, id_factory)
        return catalog

    @classmethod
    def _restore(cls, raw_records, adapter, id_factory):
        catalog = cls(adapter, id_factory=id_factory)
        changed = False
        if raw_records is None:
            return catalog, changed
        if isinstance(raw_records, (str, bytes, dict)) or not isinstance(raw_records, Iterable):
            logger.warning("Ignoring marker catalog of type %s", type(raw_records).__name__)
            return catalog, changed

        for index, raw in enumerate(raw_records):
            try:
                record, minted = _parse_record(raw, catalog._id_factory)
            except (ValueError, ValidationError) as e:
                logger.warning("Dropping persisted marker #%d: %s", index, e)
                changed = True
                continue
            if record.id in catalog._records:
                logger.warning("Dropping persisted marker #%d: duplicate id %s", index, record.id)
                changed = True
                continue
            if minted:
                logger.info("Assigned id %s to legacy marker #%d", record.id, index)
                changed = True
            catalog._records[record.id] = record
        return catalog, changed

    @classmethod
    def open(
        cls,
        adapter: PersistenceAdapter,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> "MarkerCatalog":
        """Load the catalog from the adapter.

        If any entry was dropped or given a new id the cleaned catalog is
        written back once, so legacy ids stay stable across restarts.
        """
        catalog, changed = cls._restore(adapter.load_markers(), adapter, id_factory)
        if changed:
            catalog._persist()
        logger.info("Restored %d marker(s)", len(catalog))
        return catalog

    def add(self, coordinate, marker_type, name: str = "", description: str = "") -> str:
        """Append a new marker and return its id.

        Raises InvalidCoordinate for an out-of-range coordinate and ValueError
        for an unknown marker type.
        """
        coord = as_coordinate(coordinate)
        kind = MarkerType(marker_type)
        marker_id = self._id_factory()
        while marker_id in self._records:
            marker_id = self._id_factory()
        record = MarkerRecord(
            id=marker_id, coordinate=coord, type=kind, name=name, description=description
        )
        records = dict(self._records)
        records[marker_id] = record
        self._commit(records)
        logger.info("Added %s marker %s at (%.6f, %.6f)", kind.value, marker_id, coord.lat, coord.lng)
        return marker_id

    def remove(self, marker_id: str) -> bool:
        """Remove a marker by id. Unknown ids are a no-op; returns whether one was removed."""
        if marker_id not in self._records:
            logger.debug("Remove of unknown marker id %r ignored", marker_id)
            return False
        records = {k: v for k, v in self._records.items() if k != marker_id}
        self._commit(records)
        logger.info("Removed marker %s", marker_id)
        return True

    def get(self, marker_id: str) -> Optional[MarkerRecord]:
        return self._records.get(marker_id)

    def serialize(self) -> list[dict]:
        return [record.to_raw() for record in self._records.values()]

    def _persist(self) -> None:
        self.adapter.save_markers(self.serialize())

    def _commit(self, records: dict) -> None:
        # Memory changes only once the write has succeeded
        self.adapter.save_markers([record.to_raw() for record in records.values()])
        self._records = records

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, marker_id) -> bool:
        return marker_id in self._records

    def __iter__(self):
        return iter(self.list())

    def list(self) -> tuple[MarkerRecord, ...]:
        """Snapshot in insertion order."""
        return tuple(self._records.values())
