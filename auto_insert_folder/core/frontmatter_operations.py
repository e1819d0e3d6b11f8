"""YAML frontmatter helpers: property merging and read-back parsing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import frontmatter
import yaml

from auto_insert_folder.constants import FRONTMATTER_MARKER

logger = logging.getLogger(__name__)

_MARKER_LENGTH = len(FRONTMATTER_MARKER)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def has_frontmatter_block(text: str) -> bool:
    """Return True when ``text`` opens with the frontmatter marker."""
    return text.startswith(FRONTMATTER_MARKER)


def find_closing_marker(text: str) -> int:
    """Locate the marker that closes a frontmatter block opened at offset 0.

    The search starts right after the opening marker and only accepts a marker
    at the beginning of a line, so ``---`` inside a value does not end the block.

    Returns:
        Offset of the closing marker, or ``-1`` when the block is unterminated.
    """
    index = text.find("\n" + FRONTMATTER_MARKER, _MARKER_LENGTH)
    return -1 if index < 0 else index + 1


def format_property(key: str, value: str) -> str:
    return f"{key}: {value}"


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter metadata and note body from raw text.

    Args:
        text: Raw markdown text, possibly containing a frontmatter block.

    Returns:
        A tuple of ``(metadata, content)`` where ``metadata`` is the parsed YAML
        dictionary (empty when no frontmatter is present) and ``content`` is the
        markdown body without the frontmatter block.

    Raises:
        ValueError: If the frontmatter block exists but cannot be parsed as YAML.
    """
    if not text:
        return {}, ""

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Frontmatter contains invalid YAML: {exc}") from exc

    def _convert(value: Any) -> Any:
        if isinstance(value, Mapping):
            return {k: _convert(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_convert(item) for item in value]
        return value

    metadata = {key: _convert(value) for key, value in (post.metadata or {}).items()}
    content = post.content if post.content is not None else ""
    return metadata, content


# ==============================================================================
# FRONTMATTER OPERATIONS
# ==============================================================================


def merge_frontmatter_property(content: str, key: str, value: str) -> str:
    """Append ``key: value`` to the frontmatter of ``content``.

    Without a leading marker a fresh block is produced, ``---\\nkey: value\\n---\\n``,
    and nothing else (any body is added separately by the composer). With a
    terminated block the new line goes after the existing interior and the text
    following the closing marker is kept byte for byte. An opening marker without
    a closing one leaves ``content`` untouched.

    Existing keys are never inspected: merging the same key twice yields two lines.

    Args:
        content: Full current note text.
        key: Frontmatter property name.
        value: Already-resolved property value.

    Returns:
        The new note text. This function performs no I/O and never raises.
    """
    new_line = format_property(key, value)

    if not has_frontmatter_block(content):
        return f"{FRONTMATTER_MARKER}\n{new_line}\n{FRONTMATTER_MARKER}\n"

    closing = find_closing_marker(content)
    if closing < 0:
        logger.warning(
            "Frontmatter block has no closing marker; leaving content untouched (property=%s)",
            key,
        )
        return content

    interior = content[_MARKER_LENGTH:closing].strip()
    rest = content[closing + _MARKER_LENGTH:]
    merged = f"{interior}\n{new_line}" if interior else new_line
    return f"{FRONTMATTER_MARKER}\n{merged}\n{FRONTMATTER_MARKER}{rest}"
