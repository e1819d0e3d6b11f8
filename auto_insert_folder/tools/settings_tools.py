"""Settings and insertion MCP tools.

This module is the configuration surface of the service:
- Read and update the insertion settings of a vault
- Preview what a new note in a given folder would receive
- Run the insertion on an existing empty note

Settings changes apply to the next note created in the vault.
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from auto_insert_folder.server import mcp
from auto_insert_folder.session import resolve_vault
from auto_insert_folder.settings import settings_store_for
from auto_insert_folder.processor import processor_for
from auto_insert_folder.core.vault_operations import ensure_vault_ready
from auto_insert_folder.models import (
    GetSettingsInput,
    UpdateSettingsInput,
    PreviewInsertionInput,
    InsertFolderInput,
)

logger = logging.getLogger(__name__)


@mcp.tool()
async def get_insert_settings(
    input: GetSettingsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read the folder insertion settings of a vault.

    Returns:
        {
            "vault": str,
            "settings_path": str,
            "settings": {
                "insert_position": "top" | "bottom",
                "format": str,
                "allowed_folders": list[str],
                "enable_for_all_folders": bool,
                "insert_mode": "body" | "frontmatter" | "both",
                "frontmatter_property": str,
                "frontmatter_format": str
            }
        }
    """
    vault = resolve_vault(input.vault, ctx)
    store = settings_store_for(vault)
    return {
        "vault": vault.name,
        "settings_path": str(store.path),
        "settings": (await store.current()).as_payload(),
    }


@mcp.tool()
async def update_insert_settings(
    input: UpdateSettingsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Change one or more folder insertion settings and persist them.

    Fields that are omitted keep their current value. ``allowed_folders`` only
    matters while ``enable_for_all_folders`` is false; subfolders of an allowed
    folder are included.

    Returns:
        {"vault": str, "status": "updated", "fields_updated": list[str], "settings": dict}

    Error Handling:
        - ValidationError: Unknown position/mode, empty property, or no fields supplied
    """
    vault = resolve_vault(input.vault, ctx)
    store = settings_store_for(vault)
    changes = input.changes()
    settings = await store.update_async(**changes)

    changed_fields = sorted(changes.keys())
    logger.info(
        "Insert settings updated for vault '%s' (fields=%s)",
        vault.name,
        ", ".join(changed_fields),
    )
    return {
        "vault": vault.name,
        "status": "updated",
        "fields_updated": changed_fields,
        "settings": settings.as_payload(),
    }


@mcp.tool()
async def preview_folder_insertion(
    input: PreviewInsertionInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Show the text a new empty note at the given path would receive.

    Nothing is read or written; the note does not need to exist.

    Returns:
        {
            "vault": str,
            "note": str,
            "folder": str,
            "folder_path": str,
            "allowed": bool,
            "insert_mode": str,
            "content": str,
            "frontmatter": dict,
            "body": str,
            "frontmatter_error": str | None
        }
    """
    vault = resolve_vault(input.vault, ctx)
    preview = await processor_for(vault).preview(input.note)
    return {"vault": vault.name, **preview}


@mcp.tool()
async def insert_folder_into_note(
    input: InsertFolderInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Insert folder metadata into an existing note, exactly as for a new note.

    The same safety rules apply: the folder must be enabled and the note must
    be empty (whitespace only). Non-empty notes are never modified.

    Returns:
        {"vault": str, "note": str, "status": "inserted" | "in_flight" | "missing"
         | "not_allowed" | "not_empty" | "failed"}

    Error Handling:
        - ValidationError: Invalid note path or path traversal attempt
        - Vault path inaccessible → FileNotFoundError
    """
    vault = resolve_vault(input.vault, ctx)
    ensure_vault_ready(vault)
    processor = processor_for(vault)
    status = await processor.handle_new_note(input.note)
    return {"vault": vault.name, "note": input.note, "status": status}
