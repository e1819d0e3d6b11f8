"""Base Pydantic models for MCP tool input validation.

Base Models:
- BaseVaultInput: Optional vault selection shared by every vault-scoped tool
- BaseNoteInput: Adds note identifier validation for note-scoped tools
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from auto_insert_folder.core.vault_operations import normalize_note_id


class BaseVaultInput(BaseModel):
    """Base model for tools that act on one vault."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Validate vault name format.

        Raises:
            ValueError: If vault name is empty string
        """
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list_vaults()."
            )

        return v.strip() if v else None


class BaseNoteInput(BaseVaultInput):
    """Base model for note operations.

    The note identifier is normalized to a vault-relative path with forward
    slashes and a ``.md`` suffix.
    """

    note: str = Field(
        min_length=1,
        description=(
            "Note path inside the vault, with or without .md. "
            "Examples: 'Work/Projects/Kickoff', 'Inbox.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Work/Projects/Kickoff", "Daily Notes/2025-10-27.md", "Inbox"]
    )

    @field_validator('note')
    @classmethod
    def validate_note(cls, v: str) -> str:
        """Validate the note identifier for safety and format.

        Enforces:
        - Non-empty identifier
        - No path traversal attempts (.., .)
        - Relative path only (no absolute paths)
        """
        try:
            return normalize_note_id(v)
        except ValueError as exc:
            raise ValueError(f"{exc} Invalid note: '{v.strip()}'") from exc
