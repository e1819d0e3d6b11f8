"""Compose the text written into a newly created note."""

from __future__ import annotations

from auto_insert_folder.core.frontmatter_operations import merge_frontmatter_property
from auto_insert_folder.core.templating import resolve_placeholders
from auto_insert_folder.data_models import NoteAncestry
from auto_insert_folder.settings import InsertSettings


def place_body_text(text: str, position: str) -> str:
    """Body-only layout: text followed by a blank line, or preceded by one."""
    if position == "top":
        return f"{text}\n\n"
    return f"\n\n{text}"


def attach_body_to_frontmatter(header: str, text: str, position: str) -> str:
    """Combine a header-bearing note with body text.

    ``header`` ends with the closing marker line. At the top the body follows
    after one blank line and is itself followed by a blank line; at the bottom
    it is appended after a blank-line separator.
    """
    if position == "top":
        return f"{header}\n{text}\n\n"
    return f"{header}\n\n{text}"


def compose_content(ancestry: NoteAncestry, settings: InsertSettings, content: str = "") -> str:
    """Produce the new text for a note according to ``settings``.

    Args:
        ancestry: Folders containing the note, nearest first.
        settings: Active insertion settings.
        content: Current note text. Callers only compose for notes whose content
            is whitespace-only; anything here is replaced, not preserved.

    Returns:
        The full note text to write.
    """
    new_content = ""

    if settings.includes_frontmatter:
        value = resolve_placeholders(settings.frontmatter_format, ancestry)
        new_content = merge_frontmatter_property(content, settings.frontmatter_property, value)

    if settings.includes_body:
        body_text = resolve_placeholders(settings.format, ancestry)
        if settings.insert_mode == "both":
            new_content = attach_body_to_frontmatter(new_content, body_text, settings.insert_position)
        else:
            new_content = place_body_text(body_text, settings.insert_position)

    return new_content
