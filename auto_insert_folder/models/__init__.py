"""Pydantic input models for MCP tool validation.

Each model represents the input schema for one or more tools, with field-level
validation and descriptive error messages.

Architecture:
- base: Base models (BaseVaultInput, BaseNoteInput) for common validation
- settings_models: Input models for settings and insertion tools
- vault_models: Input models for vault management operations
"""

from .base import BaseVaultInput, BaseNoteInput
from .settings_models import (
    GetSettingsInput,
    UpdateSettingsInput,
    PreviewInsertionInput,
    InsertFolderInput,
)
from .vault_models import (
    ListVaultsInput,
    SetActiveVaultInput,
)

__all__ = [
    # Base models
    "BaseVaultInput",
    "BaseNoteInput",
    # Settings and insertion models
    "GetSettingsInput",
    "UpdateSettingsInput",
    "PreviewInsertionInput",
    "InsertFolderInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
]
