"""
BlockNotes — Note Page Controller
===================================

What:  Loads one note into a BlockEditor and autosaves it.
How:   Every editor change (and every committed title edit) bumps a revision
       counter and restarts a 1 second debounce timer. When the timer fires,
       the current title and blocks are PUT as a whole document.
Who:   Driven by the note page UI; one controller per open note.

Save ordering:
    Saves run one at a time under an asyncio.Lock. Each save carries the
    revision it snapshotted; a save whose revision is not newer than the last
    stored one is dropped. An older document can therefore never overwrite
    a newer one from the same page.

Failure states:
    load fails  → error = "Failed to load note", no editor
    save fails  → error = "Failed to save note", edits stay in memory
Nothing is retried automatically; the next edit schedules a fresh save.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, List, Optional

from blocknotes.client.api_client import NotesApiClient
from blocknotes.client.debounce import Debouncer
from blocknotes.config import settings
from blocknotes.editor.block_editor import BlockEditor
from blocknotes.exceptions import ApiRequestError, BlockShapeError
from blocknotes.schemas.block import Block, dump_blocks, normalize_content

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load note"
SAVE_ERROR = "Failed to save note"
UNTITLED = "Untitled Note"


class NotePageController:
    """
    Args:
        note_id:        id of the note to edit
        api:            client for the notes API
        autosave_delay: quiet period before saving (default settings.autosave_delay)
        loop:           timer loop for the debouncer (tests inject a manual one)
    """

    def __init__(
        self,
        note_id: str,
        api: NotesApiClient,
        autosave_delay: Optional[float] = None,
        loop: Optional[Any] = None,
    ):
        self.note_id = note_id
        self.api = api

        self.title = ""
        self.blocks: List[Block] = []
        self.created_at: Optional[datetime] = None
        self.updated_at: Optional[datetime] = None
        self.editor: Optional[BlockEditor] = None

        self.loading = False
        self.is_saving = False
        self.editing_title = False
        self.error: Optional[str] = None

        self._revision = 0
        self._saved_revision = 0
        self._save_lock = asyncio.Lock()
        self._debouncer = Debouncer(
            autosave_delay if autosave_delay is not None else settings.autosave_delay,
            self._save_latest,
            loop=loop,
        )

    # ── Display state ─────────────────────────────────────────────────────

    @property
    def display_title(self) -> str:
        return self.title or UNTITLED

    @property
    def status_text(self) -> str:
        return "Saving..." if self.is_saving else "All changes saved"

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def saved_revision(self) -> int:
        return self._saved_revision

    @property
    def save_pending(self) -> bool:
        return self._debouncer.pending

    # ── Loading ───────────────────────────────────────────────────────────

    async def load(self) -> bool:
        """
        Fetch the note and build the editor. Legacy string content and empty
        content are normalized to blocks here, not on the server.
        """
        self.loading = True
        try:
            note = await self.api.get_note(self.note_id)
            blocks = normalize_content(note.content)
        except (ApiRequestError, BlockShapeError) as e:
            logger.error("Error loading note %s: %s", self.note_id, e.message)
            self.error = LOAD_ERROR
            return False
        finally:
            self.loading = False

        self.title = note.title
        self.created_at = note.created_at
        self.updated_at = note.updated_at
        self.blocks = blocks
        self.editor = BlockEditor(blocks, on_change=self._on_blocks_change)
        return True

    # ── Edits ─────────────────────────────────────────────────────────────

    def _schedule_save(self) -> None:
        self._revision += 1
        self._debouncer.trigger()

    def _on_blocks_change(self, blocks: List[Block]) -> None:
        self.blocks = blocks
        self._schedule_save()

    def start_title_edit(self) -> None:
        self.editing_title = True

    def set_title(self, title: str) -> None:
        """Keystrokes in the title field; held in memory until commit."""
        self.title = title

    def commit_title(self) -> None:
        """Title field blurred or Enter pressed."""
        self.editing_title = False
        self._schedule_save()

    # ── Saving ────────────────────────────────────────────────────────────

    async def _save_latest(self) -> None:
        revision = self._revision
        title = self.title
        content = dump_blocks(self.blocks)

        async with self._save_lock:
            if revision <= self._saved_revision:
                logger.debug("Skipping stale save of revision %d", revision)
                return

            self.is_saving = True
            try:
                await self.api.update_note(self.note_id, title, content)
            except ApiRequestError as e:
                logger.error("Error saving note %s: %s", self.note_id, e.message)
                self.error = SAVE_ERROR
                return
            finally:
                self.is_saving = False

            self._saved_revision = revision
            logger.debug("Saved note %s at revision %d", self.note_id, revision)

    async def flush(self) -> None:
        """Save now if a save is waiting on the timer."""
        await self._debouncer.flush()

    async def wait_idle(self) -> None:
        """Wait for saves that have already started."""
        await self._debouncer.wait()

    async def close(self) -> None:
        """Cancel the pending timer and let in-flight saves finish."""
        await self._debouncer.aclose()

    def dismiss_error(self) -> None:
        self.error = None
