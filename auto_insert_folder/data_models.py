"""Data models for vaults and note folder ancestry."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from auto_insert_folder.constants import ROOT_FOLDER_NAME, ROOT_FOLDER_PATH


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool
    settings_path: Path

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
            "settings_path": str(self.settings_path),
        }


class VaultConfiguration:
    """Holds vault metadata and default resolution helpers.

    Loaded lazily from vaults.yaml; provides vault lookup by name.
    """

    def __init__(self, default_vault: str, vaults: dict[str, VaultMetadata]) -> None:
        self.default_vault = default_vault
        self.vaults = vaults

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            raise ValueError(f"Unknown vault '{name}'") from exc


@dataclass(frozen=True)
class FolderRef:
    """A folder containing a note, identified by display name and vault-relative path."""

    name: str
    path: str
    is_root: bool = False

    @property
    def display_name(self) -> str:
        return ROOT_FOLDER_NAME if self.is_root else self.name


ROOT_FOLDER = FolderRef(name="", path=ROOT_FOLDER_PATH, is_root=True)


@dataclass(frozen=True)
class NoteAncestry:
    """Chain of folders from a note's immediate parent up to the vault root."""

    folders: tuple[FolderRef, ...]

    @property
    def parent(self) -> Optional[FolderRef]:
        return self.folders[0] if self.folders else None

    @property
    def grandparent(self) -> Optional[FolderRef]:
        return self.folders[1] if len(self.folders) > 1 else None

    @classmethod
    def from_folder_path(cls, folder_path: str) -> "NoteAncestry":
        """Build the ancestry for a note living in ``folder_path``.

        ``folder_path`` is vault-relative with forward slashes. An empty string or
        ``"/"`` denotes the vault root.

        Examples:
            >>> NoteAncestry.from_folder_path("Work/Projects").parent
            FolderRef(name='Projects', path='Work/Projects', is_root=False)
        """
        cleaned = folder_path.replace("\\", "/").strip("/")
        if not cleaned:
            return cls(folders=(ROOT_FOLDER,))

        parts = cleaned.split("/")
        folders = [
            FolderRef(name=parts[index], path="/".join(parts[: index + 1]))
            for index in range(len(parts) - 1, -1, -1)
        ]
        folders.append(ROOT_FOLDER)
        return cls(folders=tuple(folders))
