"""Which vault the settings tools act on when a call names none."""

from typing import Dict, Optional
from mcp.server.fastmcp import Context

from auto_insert_folder.config import get_vault_configuration
from auto_insert_folder.data_models import VaultMetadata

# Session key -> name of the vault chosen with set_active_vault
_ACTIVE_VAULTS: Dict[int, str] = {}


def get_session_key(ctx: Context) -> int:
    """Key of the MCP session behind ``ctx``; the same for every call in a session."""
    return id(ctx.session)


def set_active_vault(ctx: Context, vault_name: str) -> VaultMetadata:
    """Make ``vault_name`` the vault whose insert settings this session edits.

    Raises:
        ValueError: If no watched vault has that name.
    """
    metadata = get_vault_configuration().get(vault_name)
    _ACTIVE_VAULTS[get_session_key(ctx)] = metadata.name
    return metadata


def get_active_vault(ctx: Context) -> VaultMetadata:
    configuration = get_vault_configuration()
    vault_name = _ACTIVE_VAULTS.get(get_session_key(ctx), configuration.default_vault)
    return configuration.get(vault_name)


def resolve_vault(vault: Optional[str], ctx: Optional[Context] = None) -> VaultMetadata:
    """Pick the vault a settings or insertion tool call applies to.

    An explicit ``vault`` wins, then the session's active vault, then the
    configured default.

    Raises:
        ValueError: If ``vault`` names no configured vault.
    """
    configuration = get_vault_configuration()
    if vault:
        return configuration.get(vault)
    if ctx is not None:
        return get_active_vault(ctx)
    return configuration.get(configuration.default_vault)
