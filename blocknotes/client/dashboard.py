"""
BlockNotes — Dashboard Controller
===================================

What:  State behind the notes list: collection name, recent notes, and the
       create / delete actions.
How:   Each action calls NotesApiClient; failures become a dismissible
       `error` message instead of exceptions.

Display helpers:
    excerpt()      preview text from legacy string or block-array content
    format_date()  "Mar 5, 2024"
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel

from blocknotes.client.api_client import NotesApiClient
from blocknotes.exceptions import ApiRequestError
from blocknotes.schemas.note import NoteOut

logger = logging.getLogger(__name__)

NEW_NOTE_TITLE = "Untitled Note"
EXCERPT_LENGTH = 100

_PREVIEW_TYPES = ("text", "heading", "todo")


def _block_text(block: Any) -> Optional[str]:
    """Text of a text/heading/todo entry, or None for anything else."""
    if isinstance(block, BaseModel):
        block = block.model_dump()
    if not isinstance(block, dict) or block.get("type") not in _PREVIEW_TYPES:
        return None
    content = block.get("content")
    if block["type"] == "text":
        return content if isinstance(content, str) else None
    if isinstance(content, dict) and isinstance(content.get("text"), str):
        return content["text"]
    return None


def excerpt(content: Any, max_length: int = EXCERPT_LENGTH) -> str:
    """
    Preview for a note card.

    Legacy string content is used as-is; for block arrays the first text,
    heading or todo block supplies the text. Longer text is cut to
    `max_length` characters followed by "...".
    """
    if not content:
        return ""
    if isinstance(content, str):
        text = content
    elif isinstance(content, list):
        text = next((t for t in map(_block_text, content) if t is not None), "")
    else:
        return ""

    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_date(value: Union[datetime, str, None]) -> str:
    if not value:
        return "Unknown date"
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{value:%b} {value.day}, {value.year}"


@dataclass
class NoteCard:
    id: str
    title: str
    excerpt: str
    date: str


class DashboardController:

    def __init__(self, api: NotesApiClient):
        self.api = api
        self.collection = "notes"
        self.notes: List[NoteOut] = []
        self.loading = False
        self.error: Optional[str] = None

    @property
    def cards(self) -> List[NoteCard]:
        return [
            NoteCard(
                id=note.id,
                title=note.title or NEW_NOTE_TITLE,
                excerpt=excerpt(note.content),
                date=format_date(note.updated_at),
            )
            for note in self.notes
        ]

    async def refresh(self) -> bool:
        self.loading = True
        try:
            listing = await self.api.list_notes()
        except ApiRequestError as e:
            logger.error("Error loading notes: %s", e.message)
            self.error = "Failed to load notes"
            return False
        finally:
            self.loading = False

        self.collection = listing.collection or "notes"
        self.notes = listing.data
        return True

    async def create_note(self) -> Optional[str]:
        """Create an empty note; returns its id for navigation."""
        try:
            note_id = await self.api.create_note(NEW_NOTE_TITLE, [])
        except ApiRequestError as e:
            logger.error("Error creating note: %s", e.message)
            self.error = "Failed to create note"
            return None
        logger.info("Created note %s", note_id)
        return note_id

    async def delete_note(self, note_id: str) -> bool:
        try:
            await self.api.delete_note(note_id)
        except ApiRequestError as e:
            logger.error("Error deleting note %s: %s", note_id, e.message)
            self.error = "Failed to delete note"
            return False
        await self.refresh()
        return True

    def dismiss_error(self) -> None:
        self.error = None
