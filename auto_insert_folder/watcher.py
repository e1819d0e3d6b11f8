"""Vault watching: turn file creation events into per-note processing tasks."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from auto_insert_folder.config import get_vault_configuration
from auto_insert_folder.constants import LOG_LEVEL, NOTE_SUFFIX
from auto_insert_folder.core.vault_operations import ensure_vault_ready, note_id_for_path
from auto_insert_folder.data_models import VaultMetadata
from auto_insert_folder.processor import NoteProcessor, processor_for

logger = logging.getLogger(__name__)


class NoteCreatedHandler(FileSystemEventHandler):
    """Forward creation of Markdown notes from the observer thread to the event loop.

    Only note ids cross the thread boundary; all processing state lives on the
    loop.
    """

    def __init__(
        self,
        vault: VaultMetadata,
        loop: asyncio.AbstractEventLoop,
        queue: "asyncio.Queue[str]",
    ) -> None:
        super().__init__()
        self.vault = vault
        self.loop = loop
        self.queue = queue

    def note_id_for(self, src_path: str | bytes) -> Optional[str]:
        """Map an event path to a note id, or ``None`` when it is not a vault note.

        Files other than ``.md`` and anything inside a dot-folder such as
        ``.obsidian`` or ``.trash`` are ignored.
        """
        path = Path(os.fsdecode(src_path))
        if path.suffix.lower() != NOTE_SUFFIX:
            return None

        try:
            note_id = note_id_for_path(self.vault, path)
        except ValueError:
            return None

        if any(part.startswith(".") for part in PurePosixPath(note_id).parts):
            return None
        return note_id

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return

        note_id = self.note_id_for(event.src_path)
        if note_id is None:
            return

        try:
            self.loop.call_soon_threadsafe(self.queue.put_nowait, note_id)
        except RuntimeError:
            logger.debug("Event loop closed; dropping creation event for '%s'", note_id)


class VaultWatcher:
    """Observe one vault and spawn an independent task per created note."""

    def __init__(self, vault: VaultMetadata, processor: NoteProcessor) -> None:
        self.vault = vault
        self.processor = processor
        self._queue: Optional[asyncio.Queue[str]] = None
        self._observer: Optional[Observer] = None
        self._dispatcher: Optional[asyncio.Task] = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._dispatcher is not None

    def submit(self, note_id: str) -> asyncio.Task:
        """Schedule processing of ``note_id`` and keep the task alive until it finishes."""
        task = asyncio.create_task(self.processor.handle_new_note(note_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _dispatch(self) -> None:
        assert self._queue is not None
        while True:
            note_id = await self._queue.get()
            logger.debug("Creation event for '%s' in vault '%s'", note_id, self.vault.name)
            self.submit(note_id)

    async def start(self) -> None:
        """Start observing the vault directory recursively.

        Raises:
            FileNotFoundError: If the vault directory is not accessible.
        """
        if self.running:
            return
        ensure_vault_ready(self.vault)

        loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        handler = NoteCreatedHandler(self.vault, loop, self._queue)

        observer = Observer()
        observer.schedule(handler, str(self.vault.path), recursive=True)
        observer.start()
        self._observer = observer
        self._dispatcher = asyncio.create_task(self._dispatch())
        logger.info("Watching vault '%s' at %s", self.vault.name, self.vault.path)

    async def stop(self) -> None:
        """Stop observing and wait for notes already being processed."""
        if self._observer is not None:
            self._observer.stop()
            await asyncio.to_thread(self._observer.join)
            self._observer = None

        if self._dispatcher is not None:
            self._dispatcher.cancel()
            try:
                await self._dispatcher
            except asyncio.CancelledError:
                pass
            self._dispatcher = None

        if self._tasks:
            await asyncio.gather(*self._tasks)
        logger.info("Stopped watching vault '%s'", self.vault.name)


async def start_watchers(vaults: Iterable[VaultMetadata]) -> list[VaultWatcher]:
    """Start a watcher for every accessible vault, skipping missing ones."""
    watchers: list[VaultWatcher] = []
    for vault in vaults:
        if not vault.path.is_dir():
            logger.warning("Vault '%s' is not accessible at %s; not watching it", vault.name, vault.path)
            continue
        watcher = VaultWatcher(vault, processor_for(vault))
        await watcher.start()
        watchers.append(watcher)
    return watchers


async def stop_watchers(watchers: Iterable[VaultWatcher]) -> None:
    for watcher in watchers:
        await watcher.stop()


async def watch_vaults(vaults: Iterable[VaultMetadata]) -> None:
    """Watch ``vaults`` until the surrounding task is cancelled."""
    watchers = await start_watchers(vaults)
    if not watchers:
        logger.error("No accessible vaults to watch")
        return
    try:
        await asyncio.Event().wait()
    finally:
        await stop_watchers(watchers)


def run_watcher() -> None:
    """Watch every configured vault from the command line until interrupted."""
    logging.basicConfig(level=LOG_LEVEL)
    configuration = get_vault_configuration()
    try:
        asyncio.run(watch_vaults(configuration.vaults.values()))
    except KeyboardInterrupt:
        logger.info("Watcher interrupted; exiting")


if __name__ == "__main__":
    run_watcher()
