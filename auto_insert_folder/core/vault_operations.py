"""Core vault operations: note identifiers, path resolution and the note store."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath
from typing import Protocol

from auto_insert_folder.constants import NOTE_SUFFIX, ROOT_FOLDER_PATH
from auto_insert_folder.data_models import NoteAncestry, VaultMetadata


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def normalize_note_id(identifier: str) -> str:
    """Turn a caller-supplied note reference into a vault-relative note id.

    Separators become forward slashes and ``.md`` is appended when missing. An
    existing suffix is kept as written (``Inbox.MD`` stays ``Inbox.MD``) so the
    id matches the file name the watcher reports.

    Raises:
        ValueError: If the identifier is empty, absolute, or contains ``.``/``..``
            segments.

    Examples:
        >>> normalize_note_id("Work\\\\Projects\\\\Plan")
        'Work/Projects/Plan.md'
    """
    cleaned = identifier.strip().replace("\\", "/")
    if not cleaned:
        raise ValueError("Note identifier cannot be empty.")
    if cleaned.startswith("/"):
        raise ValueError("Note identifier must be a relative path within the vault.")

    parts = cleaned.split("/")
    if any(part in {"", ".", ".."} for part in parts):
        raise ValueError("Note identifier cannot contain empty, '.' or '..' segments.")

    if not cleaned.lower().endswith(NOTE_SUFFIX):
        cleaned = f"{cleaned}{NOTE_SUFFIX}"
    return cleaned


def note_folder_path(note_id: str) -> str:
    """Vault-relative folder containing ``note_id``; ``"/"`` for the vault root.

    Examples:
        >>> note_folder_path("Work/Projects/Plan.md")
        'Work/Projects'
        >>> note_folder_path("Inbox.md")
        '/'
    """
    parent = PurePosixPath(note_id).parent.as_posix()
    return ROOT_FOLDER_PATH if parent in ("", ".") else parent


def note_ancestry(note_id: str) -> NoteAncestry:
    return NoteAncestry.from_folder_path(note_folder_path(note_id))


def resolve_note_path(vault: VaultMetadata, note_id: str) -> Path:
    """Resolve a note id to an absolute path inside ``vault``.

    Raises:
        ValueError: If the resolved path escapes the vault root.
    """
    candidate = (vault.path / PurePosixPath(note_id)).resolve(strict=False)
    vault_root = vault.path.resolve(strict=False)

    if not candidate.is_relative_to(vault_root):
        raise ValueError("Note path escapes the configured vault.")

    return candidate


def note_id_for_path(vault: VaultMetadata, path: Path) -> str:
    """Convert an absolute note path into a forward-slash note id.

    Raises:
        ValueError: If ``path`` is not inside the vault.
    """
    relative = path.resolve(strict=False).relative_to(vault.path.resolve(strict=False))
    return relative.as_posix()


def note_display_name(note_id: str) -> str:
    """Note id without the ``.md`` suffix, as shown in the Obsidian UI."""
    return note_id[: -len(NOTE_SUFFIX)] if note_id.lower().endswith(NOTE_SUFFIX) else note_id


# ==============================================================================
# NOTE STORE
# ==============================================================================


class NoteStore(Protocol):
    """Content store the note processor reads from and writes to."""

    async def exists(self, note_id: str) -> bool: ...

    async def read_content(self, note_id: str) -> str: ...

    async def write_content(self, note_id: str, content: str) -> None: ...

    def ancestry(self, note_id: str) -> NoteAncestry: ...


class LocalNoteStore:
    """Note store backed by a vault directory on the local file system.

    Blocking file I/O runs in worker threads so the event loop keeps serving
    other notes.
    """

    def __init__(self, vault: VaultMetadata) -> None:
        self.vault = vault

    def _path(self, note_id: str) -> Path:
        return resolve_note_path(self.vault, note_id)

    async def exists(self, note_id: str) -> bool:
        return await asyncio.to_thread(self._path(note_id).is_file)

    async def read_content(self, note_id: str) -> str:
        path = self._path(note_id)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(
                f"Note '{note_display_name(note_id)}' is not UTF-8 encoded and cannot be processed."
            ) from exc

    async def write_content(self, note_id: str, content: str) -> None:
        path = self._path(note_id)
        await asyncio.to_thread(path.write_text, content, encoding="utf-8")

    def ancestry(self, note_id: str) -> NoteAncestry:
        return note_ancestry(note_id)
