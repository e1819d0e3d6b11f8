"""MCP tool definitions for the auto insert folder service.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from auto_insert_folder.tools import vault_tools
from auto_insert_folder.tools import settings_tools

__all__ = [
    "vault_tools",
    "settings_tools",
]
