"""Auto Insert Folder

Stamps newly created Obsidian notes with the name of their folder, in the note
body, in the YAML frontmatter, or both. Settings are exposed via Model Context
Protocol tools.
"""

from auto_insert_folder.config import get_vault_configuration, load_vault_configuration
from auto_insert_folder.data_models import (
    FolderRef,
    NoteAncestry,
    VaultMetadata,
    VaultConfiguration,
)
from auto_insert_folder.settings import InsertSettings, SettingsStore, merge_settings
from auto_insert_folder.core.folder_policy import is_folder_allowed
from auto_insert_folder.core.templating import resolve_placeholders
from auto_insert_folder.core.frontmatter_operations import merge_frontmatter_property
from auto_insert_folder.core.composer import compose_content
from auto_insert_folder.processor import NoteProcessor
from auto_insert_folder.watcher import VaultWatcher, run_watcher
from auto_insert_folder.session import resolve_vault, set_active_vault, get_active_vault
from auto_insert_folder.server import mcp, run_server

# Import tools to register them with the MCP server
from auto_insert_folder import tools  # noqa: F401

__version__ = "1.0.0"
__all__ = [
    "get_vault_configuration",
    "load_vault_configuration",
    "FolderRef",
    "NoteAncestry",
    "VaultMetadata",
    "VaultConfiguration",
    "InsertSettings",
    "SettingsStore",
    "merge_settings",
    "is_folder_allowed",
    "resolve_placeholders",
    "merge_frontmatter_property",
    "compose_content",
    "NoteProcessor",
    "VaultWatcher",
    "run_watcher",
    "resolve_vault",
    "set_active_vault",
    "get_active_vault",
    "mcp",
    "run_server",
]
