"""Per-note handling of creation events."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Literal

from auto_insert_folder.constants import SETTLE_DELAY_SECONDS
from auto_insert_folder.core.composer import compose_content
from auto_insert_folder.core.folder_policy import is_folder_allowed
from auto_insert_folder.core.frontmatter_operations import parse_frontmatter
from auto_insert_folder.core.vault_operations import LocalNoteStore, NoteStore
from auto_insert_folder.data_models import VaultMetadata
from auto_insert_folder.settings import SettingsStore, settings_store_for

logger = logging.getLogger(__name__)

InsertionResult = Literal["inserted", "in_flight", "missing", "not_allowed", "not_empty", "failed"]


class NoteProcessor:
    """Insert folder metadata into newly created, empty notes.

    The processor owns the set of note ids currently being handled. It is only
    touched from the event loop thread: an id is added before the first
    ``await`` and removed in ``finally``, so at most one composition per note
    is in flight and a failed note can be handled again on a later event.
    """

    def __init__(
        self,
        store: NoteStore,
        settings_store: SettingsStore,
        settle_delay: float = SETTLE_DELAY_SECONDS,
    ) -> None:
        self.store = store
        self.settings_store = settings_store
        self.settle_delay = settle_delay
        self._in_flight: set[str] = set()

    def is_in_flight(self, note_id: str) -> bool:
        return note_id in self._in_flight

    async def handle_new_note(self, note_id: str) -> InsertionResult:
        """Process one creation event for ``note_id``.

        Never raises: unexpected errors are logged and reported as ``"failed"``.
        """
        if note_id in self._in_flight:
            logger.debug("Note '%s' is already being processed", note_id)
            return "in_flight"
        self._in_flight.add(note_id)

        try:
            return await self._process(note_id)
        except Exception:
            logger.exception("Error handling new note '%s'", note_id)
            return "failed"
        finally:
            self._in_flight.discard(note_id)

    async def _process(self, note_id: str) -> InsertionResult:
        if self.settle_delay > 0:
            await asyncio.sleep(self.settle_delay)

        if not await self.store.exists(note_id):
            logger.debug("Note '%s' disappeared before processing", note_id)
            return "missing"

        settings = await self.settings_store.current()
        ancestry = self.store.ancestry(note_id)
        if not is_folder_allowed(ancestry.parent.path, settings):
            logger.debug("Folder '%s' is not enabled for insertion", ancestry.parent.path)
            return "not_allowed"

        content = await self.store.read_content(note_id)
        if content.strip():
            logger.debug("Note '%s' already has content; leaving it untouched", note_id)
            return "not_empty"

        new_content = compose_content(ancestry, settings, content)
        await self.store.write_content(note_id, new_content)
        logger.info(
            "Inserted folder '%s' into note '%s' (mode=%s)",
            ancestry.parent.display_name,
            note_id,
            settings.insert_mode,
        )
        return "inserted"

    async def preview(self, note_id: str) -> dict[str, Any]:
        """Compose what would be written to an empty ``note_id`` without touching it."""
        settings = await self.settings_store.current()
        ancestry = self.store.ancestry(note_id)
        content = compose_content(ancestry, settings)
        frontmatter_error = None
        try:
            metadata, body = parse_frontmatter(content)
        except ValueError as exc:
            # Templates are free text and need not form valid YAML
            metadata, body, frontmatter_error = {}, content, str(exc)
        return {
            "note": note_id,
            "folder": ancestry.parent.display_name,
            "folder_path": ancestry.parent.path,
            "allowed": is_folder_allowed(ancestry.parent.path, settings),
            "insert_mode": settings.insert_mode,
            "content": content,
            "frontmatter": metadata,
            "body": body,
            "frontmatter_error": frontmatter_error,
        }


_PROCESSORS: Dict[str, NoteProcessor] = {}


def processor_for(vault: VaultMetadata) -> NoteProcessor:
    """Return the shared processor for ``vault``, creating it on first use.

    The watcher and the tools share this processor so its in-flight guard
    covers both.
    """
    processor = _PROCESSORS.get(vault.name)
    if processor is None:
        processor = NoteProcessor(LocalNoteStore(vault), settings_store_for(vault))
        _PROCESSORS[vault.name] = processor
    return processor
