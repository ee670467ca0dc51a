"""Session state for the poi-atlas MCP server.

An AtlasSession owns the stores for one process. It is built explicitly by
the server and handed to each tool group.
"""

import logging
from typing import Optional

from .catalog import MarkerCatalog
from .config import AtlasConfig
from .models import ViewState
from .persistence import JsonFileStore, PersistenceAdapter
from .placement import MarkerPlacement
from .view_state import ViewStateStore
from .viewport import HeadlessViewport, MapViewport

logger = logging.getLogger(__name__)


class AtlasSession:
    def __init__(
        self,
        adapter: PersistenceAdapter,
        viewport: Optional[MapViewport] = None,
        config: Optional[AtlasConfig] = None,
    ):
        self.config = config or AtlasConfig()
        self.adapter = adapter
        self.viewport = viewport if viewport is not None else HeadlessViewport()

        default = ViewState(
            center=self.config.default_center,
            zoom=self.config.default_zoom,
            active_base_layer=self.config.default_base_layer,
        )
        self.view_store = ViewStateStore(adapter, default=default)
        self.view_store.load()
        self.catalog = MarkerCatalog.open(adapter)
        self.placement = MarkerPlacement(self.catalog, self.view_store, self.viewport)
        self.placement.render_initial()

    @classmethod
    def from_config(cls, config: AtlasConfig, viewport: Optional[MapViewport] = None) -> "AtlasSession":
        logger.info("Opening store %s", config.store_path)
        return cls(JsonFileStore(config.store_path), viewport=viewport, config=config)

    def summary(self) -> dict:
        view = self.view_store.current
        draft = self.placement.draft
        return {
            "view": {
                "center": view.center.as_pair(),
                "zoom": view.zoom,
                "active_base_layer": view.active_base_layer,
            },
            "markers": {
                "count": len(self.catalog),
                "by_type": {
                    kind.value: n
                    for kind, n in _count_by_type(self.catalog).items()
                },
            },
            "placement": {
                "state": self.placement.state.value,
                "type_picker_open": self.placement.picker_open,
                "draft": {
                    "type": draft.type.value,
                    "center": draft.coordinate.as_pair(),
                } if draft else None,
            },
            "viewport": (
                self.viewport.summary() if isinstance(self.viewport, HeadlessViewport) else None
            ),
        }


def _count_by_type(catalog: MarkerCatalog) -> dict:
    counts: dict = {}
    for record in catalog.list():
        counts[record.type] = counts.get(record.type, 0) + 1
    return counts
