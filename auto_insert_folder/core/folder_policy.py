"""Folder inclusion policy: which folders trigger automatic insertion."""

from __future__ import annotations

from collections.abc import Iterable

from auto_insert_folder.settings import InsertSettings


def normalize_folder_path(path: str) -> str:
    """Use forward slashes and drop trailing separators.

    Examples:
        >>> normalize_folder_path("Work\\\\Projects\\\\")
        'Work/Projects'
    """
    normalized = path.replace("\\", "/").strip()
    if normalized == "/":
        return normalized
    return normalized.rstrip("/")


def folder_in_subtree(folder_path: str, root: str) -> bool:
    """Return True when ``folder_path`` is ``root`` or lies beneath it.

    Comparison happens on whole path segments, so ``"Proj"`` is not a root of
    ``"Projects"``.
    """
    candidate = normalize_folder_path(folder_path)
    allowed = normalize_folder_path(root)
    if not allowed:
        return False
    return candidate == allowed or candidate.startswith(allowed + "/")


def matches_allow_list(folder_path: str, allowed_folders: Iterable[str]) -> bool:
    return any(folder_in_subtree(folder_path, entry) for entry in allowed_folders)


def is_folder_allowed(folder_path: str, settings: InsertSettings) -> bool:
    """Decide whether notes created in ``folder_path`` should be processed.

    Args:
        folder_path: Vault-relative folder path (``"/"`` for the vault root).
        settings: Active insertion settings.

    Returns:
        True if insertion is enabled for every folder, or if the folder equals or
        is nested inside an entry of the allow-list.
    """
    if settings.enable_for_all_folders:
        return True
    return matches_allow_list(folder_path, settings.allowed_folders)
