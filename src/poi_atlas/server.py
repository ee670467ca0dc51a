"""MCP server for poi-atlas.

Registers all tools against one explicitly built session and runs via stdio
transport.
"""

import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import AtlasConfig
from .state import AtlasSession
from .tools.markers import register_marker_tools
from .tools.status import register_status_tools
from .tools.view import register_view_tools


def create_server(session: AtlasSession) -> FastMCP:
    mcp = FastMCP(
        "poi-atlas",
        instructions=(
            "Annotate a map with named points of interest. Move the map, place a "
            "typed marker at the center, then submit a name and description. "
            "The view and markers are saved after every change."
        ),
    )

    # Register all tool groups
    register_view_tools(mcp, session)
    register_marker_tools(mcp, session)
    register_status_tools(mcp, session)
    return mcp


def main(config: Optional[AtlasConfig] = None):
    config = config or AtlasConfig.from_env()
    # stdout carries the stdio transport
    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    session = AtlasSession.from_config(config)
    create_server(session).run(transport="stdio")


if __name__ == "__main__":
    main()
