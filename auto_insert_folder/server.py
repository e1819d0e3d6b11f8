"""FastMCP server initialization, watcher lifespan and tool registration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from auto_insert_folder.config import get_vault_configuration
from auto_insert_folder.constants import LOG_LEVEL
from auto_insert_folder.watcher import start_watchers, stop_watchers

# Initialize logger
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def watch_vaults_lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Watch every configured vault for new notes while the server is running."""
    watchers = await start_watchers(get_vault_configuration().vaults.values())
    try:
        yield
    finally:
        await stop_watchers(watchers)


# Initialize FastMCP server
mcp = FastMCP("auto_insert_folder", lifespan=watch_vaults_lifespan)

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def run_server():
    """Start the MCP server with stdio transport."""
    logger.info("Starting Auto Insert Folder MCP Server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
