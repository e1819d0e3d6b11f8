"""Placeholder substitution for insertion templates."""

from __future__ import annotations

import re

from auto_insert_folder.data_models import FolderRef, NoteAncestry

PLACEHOLDER_PATTERN = re.compile(r"\{\{(folder|parent|grandparent)\}\}")


def _display(folder: FolderRef | None) -> str:
    return folder.display_name if folder is not None else ""


def placeholder_values(ancestry: NoteAncestry) -> dict[str, str]:
    """Map each supported placeholder name to its value for ``ancestry``."""
    folder_name = _display(ancestry.parent)
    return {
        "folder": folder_name,
        "parent": folder_name,
        "grandparent": _display(ancestry.grandparent),
    }


def resolve_placeholders(template: str, ancestry: NoteAncestry) -> str:
    """Substitute ``{{folder}}``, ``{{parent}}`` and ``{{grandparent}}`` in ``template``.

    Every occurrence is replaced in a single pass, so a folder name that itself
    looks like a placeholder is never expanded again. Unknown placeholders are
    left as written.

    Examples:
        >>> resolve_placeholders("{{grandparent}}/{{folder}}",
        ...                      NoteAncestry.from_folder_path("Work/Projects"))
        'Work/Projects'
    """
    values = placeholder_values(ancestry)
    return PLACEHOLDER_PATTERN.sub(lambda match: values[match.group(1)], template)
