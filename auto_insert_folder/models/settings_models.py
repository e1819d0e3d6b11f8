"""Pydantic input models for insertion settings and insertion tools.

- Read the vault's insertion settings
- Update one or more settings fields
- Preview the text inserted into a note
- Insert folder metadata into an existing empty note
"""

from __future__ import annotations

from typing import Any, Literal, Optional
from pydantic import Field, field_validator, model_validator

from .base import BaseNoteInput, BaseVaultInput


class GetSettingsInput(BaseVaultInput):
    """Input model for get_insert_settings tool.

    Examples:
        >>> GetSettingsInput()
        >>> GetSettingsInput(vault="work")
    """


class UpdateSettingsInput(BaseVaultInput):
    """Input model for update_insert_settings tool.

    Only the fields supplied are changed; everything else keeps its current value.

    Examples:
        >>> UpdateSettingsInput(insert_mode="both", frontmatter_property="location")
        >>> UpdateSettingsInput(enable_for_all_folders=False, allowed_folders=["Work"])
    """

    insert_position: Optional[Literal["top", "bottom"]] = Field(
        None,
        description="Where body text goes: 'top' or 'bottom'.",
    )
    format: Optional[str] = Field(
        None,
        description=(
            "Body template. Placeholders: {{folder}}/{{parent}} (folder name), "
            "{{grandparent}} (parent folder)."
        ),
        examples=["Folder: {{folder}}", "Filed under {{grandparent}}/{{folder}}"],
    )
    allowed_folders: Optional[list[str]] = Field(
        None,
        description="Folder paths where insertion is enabled. Subfolders are included.",
        examples=[["Projects", "Work/Notes"]],
    )
    enable_for_all_folders: Optional[bool] = Field(
        None,
        description="Enable insertion in every folder, ignoring allowed_folders.",
    )
    insert_mode: Optional[Literal["body", "frontmatter", "header", "both"]] = Field(
        None,
        description="Insert into the note 'body', the 'frontmatter' ('header'), or 'both'.",
    )
    frontmatter_property: Optional[str] = Field(
        None,
        min_length=1,
        description="Frontmatter key, e.g. 'folder', 'location', 'category'.",
    )
    frontmatter_format: Optional[str] = Field(
        None,
        description="Frontmatter value template, e.g. '[[{{folder}}]]'.",
    )

    @field_validator('frontmatter_property')
    @classmethod
    def validate_property(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Frontmatter property cannot be empty.")
        if ":" in cleaned or "\n" in cleaned:
            raise ValueError(
                "Frontmatter property cannot contain ':' or line breaks. "
                f"Invalid property: '{cleaned}'"
            )
        return cleaned

    @model_validator(mode='after')
    def require_change(self) -> "UpdateSettingsInput":
        if not self.changes():
            raise ValueError("Provide at least one setting to update.")
        return self

    def changes(self) -> dict[str, Any]:
        """Settings fields explicitly supplied by the caller."""
        return {
            name: value
            for name, value in self.model_dump(exclude={"vault"}).items()
            if value is not None
        }


class PreviewInsertionInput(BaseNoteInput):
    """Input model for preview_folder_insertion tool.

    The note does not need to exist.

    Examples:
        >>> PreviewInsertionInput(note="Work/Projects/Kickoff")
    """


class InsertFolderInput(BaseNoteInput):
    """Input model for insert_folder_into_note tool.

    Examples:
        >>> InsertFolderInput(note="Work/Projects/Kickoff", vault="work")
    """
