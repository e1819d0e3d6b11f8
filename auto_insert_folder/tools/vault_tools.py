"""MCP tools for choosing which watched vault the settings tools act on."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from auto_insert_folder.server import mcp
from auto_insert_folder.models import ListVaultsInput, SetActiveVaultInput
from auto_insert_folder.config import get_vault_configuration
from auto_insert_folder.session import (
    set_active_vault as set_active_vault_session,
    get_active_vault,
    get_session_key,
)

logger = logging.getLogger(__name__)


@mcp.tool()
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List the vaults watched for new notes.

    ``exists`` is false for a vault whose directory is missing; it is not
    watched. ``settings_saved`` tells whether insert settings were ever saved
    for the vault, otherwise the defaults apply.

    Returns:
        {
            "default": str,
            "active": str | None,
            "vaults": [
                {"name": str, "path": str, "description": str, "exists": bool,
                 "settings_path": str, "settings_saved": bool}
            ]
        }
    """
    configuration = get_vault_configuration()
    active = None
    if ctx is not None:
        try:
            active = get_active_vault(ctx).name
        except ValueError:
            active = None

    return {
        "default": configuration.default_vault,
        "active": active,
        "vaults": [
            {**metadata.as_payload(), "settings_saved": metadata.settings_path.is_file()}
            for metadata in configuration.vaults.values()
        ],
    }


@mcp.tool()
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Choose the vault that settings, preview and insertion calls use when they name none.

    Returns:
        {"vault": str, "path": str, "settings_path": str, "status": "active"}
    """
    metadata = set_active_vault_session(ctx, input.vault)
    logger.info("Session %s now edits insert settings of vault '%s'", get_session_key(ctx), metadata.name)
    return {
        "vault": metadata.name,
        "path": str(metadata.path),
        "settings_path": str(metadata.settings_path),
        "status": "active",
    }
