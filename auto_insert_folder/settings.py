"""Insertion settings: pydantic record, defaults overlay and YAML persistence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from auto_insert_folder.data_models import VaultMetadata

logger = logging.getLogger(__name__)

InsertPosition = Literal["top", "bottom"]
InsertMode = Literal["body", "frontmatter", "both"]

# Accepted spellings for insert modes besides the canonical ones
_MODE_SYNONYMS = {"header": "frontmatter"}


class InsertSettings(BaseModel):
    """Settings controlling what is inserted into new notes and where.

    Field names are snake_case; the camelCase names used by the Obsidian plugin's
    ``data.json`` (``insertPosition``, ``allowedFolders``, ...) are accepted as
    aliases. Unknown keys are kept so that they survive a load/save cycle.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    insert_position: InsertPosition = Field(
        "top",
        description="Where body text goes: 'top' or 'bottom' of the note.",
    )
    format: str = Field(
        "Folder: {{folder}}",
        description="Body template. Placeholders: {{folder}}, {{parent}}, {{grandparent}}.",
    )
    allowed_folders: list[str] = Field(
        default_factory=list,
        description="Folder paths (subtrees) where insertion is enabled when not enabled for all folders.",
    )
    enable_for_all_folders: bool = Field(
        True,
        description="Process notes in every folder, ignoring allowed_folders.",
    )
    insert_mode: InsertMode = Field(
        "body",
        description="Insert into the note 'body', the 'frontmatter', or 'both'.",
    )
    frontmatter_property: str = Field(
        "folder",
        description="Frontmatter key written when the mode includes frontmatter.",
    )
    frontmatter_format: str = Field(
        "{{folder}}",
        description="Template for the frontmatter value, e.g. '[[{{folder}}]]'.",
    )

    @field_validator("insert_mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: Any) -> Any:
        if isinstance(v, str):
            cleaned = v.strip().lower()
            return _MODE_SYNONYMS.get(cleaned, cleaned)
        return v

    @field_validator("insert_position", mode="before")
    @classmethod
    def normalize_position(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("allowed_folders", mode="before")
    @classmethod
    def split_allowed_folders(cls, v: Any) -> Any:
        """Accept one path per line (the settings text area form) or a list.

        Entries are stripped and blank entries dropped.
        """
        if isinstance(v, str):
            v = v.split("\n")
        if isinstance(v, (list, tuple)):
            return [entry.strip() for entry in v if isinstance(entry, str) and entry.strip()]
        return v

    @property
    def includes_body(self) -> bool:
        return self.insert_mode in ("body", "both")

    @property
    def includes_frontmatter(self) -> bool:
        return self.insert_mode in ("frontmatter", "both")

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation (known fields only)."""
        return self.model_dump(include=set(type(self).model_fields))


def merge_settings(persisted: Optional[Mapping[str, Any]]) -> InsertSettings:
    """Overlay a persisted, possibly partial, record on top of the defaults.

    Each known field present in ``persisted`` (by snake_case name or camelCase
    alias) is validated on its own; an invalid value is logged and the default
    kept. Unknown keys are carried over untouched.

    Args:
        persisted: Record loaded from disk, or ``None`` when nothing was saved.

    Returns:
        A complete :class:`InsertSettings`.
    """
    if persisted is None:
        return InsertSettings()
    if not isinstance(persisted, Mapping):
        logger.warning(
            "Ignoring persisted settings of type '%s'; using defaults",
            type(persisted).__name__,
        )
        return InsertSettings()

    merged: dict[str, Any] = {}
    consumed: set[str] = set()
    for name, field in InsertSettings.model_fields.items():
        keys = [name] + ([field.alias] if field.alias and field.alias != name else [])
        consumed.update(keys)
        key = next((candidate for candidate in keys if candidate in persisted), None)
        if key is None:
            continue

        try:
            single = InsertSettings.model_validate({name: persisted[key]})
        except ValidationError as exc:
            logger.warning(
                "Persisted setting '%s' is invalid (%s); falling back to default",
                key,
                exc.errors()[0].get("msg", exc),
            )
            continue
        merged[name] = getattr(single, name)

    extras = {
        key: value
        for key, value in persisted.items()
        if isinstance(key, str) and key not in consumed
    }
    return InsertSettings.model_validate({**extras, **merged})


class SettingsStore:
    """Loads and saves :class:`InsertSettings` for one vault as YAML.

    The store holds the live settings object; the note processor reads it on
    every event, so updates apply to the next created note. Code running on the
    event loop uses :meth:`current` and :meth:`update_async`, which keep the
    file I/O in worker threads.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._settings: Optional[InsertSettings] = None

    @property
    def settings(self) -> InsertSettings:
        if self._settings is None:
            return self.load()
        return self._settings

    async def current(self) -> InsertSettings:
        """Return the live settings, loading them off the event loop on first use."""
        if self._settings is None:
            return await asyncio.to_thread(self.load)
        return self._settings

    def load_persisted(self) -> Optional[dict[str, Any]]:
        """Read the raw persisted record.

        Returns:
            The stored mapping, or ``None`` when the settings file does not exist
            or is empty.

        Raises:
            ValueError: If the file exists but is not valid YAML.
        """
        if not self.path.is_file():
            return None

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"Settings file {self.path} is not valid YAML: {exc}") from exc
        return data

    def save_persisted(self, data: Mapping[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )

    def load(self) -> InsertSettings:
        self._settings = merge_settings(self.load_persisted())
        logger.info("Loaded insert settings from %s", self.path)
        return self._settings

    def save(self) -> None:
        self.save_persisted(self.settings.model_dump())
        logger.info("Saved insert settings to %s", self.path)

    def _with_changes(self, current: InsertSettings, changes: Mapping[str, Any]) -> InsertSettings:
        unknown = sorted(set(changes) - set(InsertSettings.model_fields))
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")
        return InsertSettings.model_validate({**current.model_dump(), **changes})

    def update(self, **changes: Any) -> InsertSettings:
        """Apply field changes, validate the whole record and persist it.

        Raises:
            ValueError: If a change names an unknown setting.
            ValidationError: If a value is invalid; nothing is saved.
        """
        self._settings = self._with_changes(self.settings, changes)
        self.save()
        return self._settings

    async def update_async(self, **changes: Any) -> InsertSettings:
        """Like :meth:`update`, with loading and saving run in a worker thread.

        The live settings are replaced only after the file has been written.
        """
        updated = self._with_changes(await self.current(), changes)
        await asyncio.to_thread(self.save_persisted, updated.model_dump())
        self._settings = updated
        logger.info("Saved insert settings to %s", self.path)
        return updated


_STORES: Dict[str, SettingsStore] = {}


def settings_store_for(vault: VaultMetadata) -> SettingsStore:
    """Return the shared settings store for ``vault``."""
    store = _STORES.get(vault.name)
    if store is None or store.path != vault.settings_path:
        store = SettingsStore(vault.settings_path)
        _STORES[vault.name] = store
    return store
