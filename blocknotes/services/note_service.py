"""
BlockNotes — Note Service (Business Logic)
============================================

What:  CRUD operations on note documents, independent of HTTP concerns.
Why:   Keeps routes thin; identifier validation, content normalization and
       error translation live in one testable place.
How:   Receives an AsyncSession per call; returns response schemas; raises
       application exceptions that the global handlers map to status codes.
Who:   Called by the /api/notes route handlers.

Write policy:
    Notes are replaced wholesale. PUT overwrites title and content of the
    stored record and stamps updated_at; there is no version check, so the
    last write to land wins.
"""

import logging
import uuid
from typing import Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from blocknotes.config import settings
from blocknotes.exceptions import BlockNotesError, DatabaseError, NotFoundError, ValidationError
from blocknotes.models.note import Note, utcnow
from blocknotes.schemas.block import content_for_storage
from blocknotes.schemas.note import (
    NoteCreate,
    NoteCreatedResponse,
    NoteDetailResponse,
    NoteListResponse,
    NoteOut,
    NoteUpdate,
    SuccessResponse,
)

logger = logging.getLogger(__name__)


def parse_note_id(raw: Optional[str]) -> UUID:
    """
    Convert a client-supplied identifier into a UUID.

    Raises:
        ValidationError: id missing (→ 400 "Note ID is required") or not a
                         well-formed UUID (→ 400 "Invalid note ID")
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError(message="Note ID is required", field="id")
    try:
        return UUID(str(raw).strip())
    except ValueError:
        raise ValidationError(
            message="Invalid note ID",
            field="id",
            context={"received": str(raw)[:64]},
        )


def to_note_out(note: Note) -> NoteOut:
    return NoteOut(
        id=str(note.id),
        title=note.title or "",
        content=note.content,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        ValidationError / NotFoundError propagate as-is. Anything else raised
        while talking to the database is logged and wrapped in DatabaseError,
        which hides driver details from API consumers.
    """

    async def _fetch(self, db: AsyncSession, note_id: UUID) -> Note:
        result = await db.execute(select(Note).where(Note.id == note_id))
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def list_notes(self, db: AsyncSession, limit: Optional[int] = None) -> NoteListResponse:
        """
        List the most recently updated notes for the dashboard.

        Query plan:
            SELECT * FROM notes ORDER BY updated_at DESC LIMIT :limit
            → idx_notes_updated_at
        """
        limit = limit or settings.notes_list_limit
        try:
            result = await db.execute(
                select(Note).order_by(desc(Note.updated_at)).limit(limit)
            )
            notes = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch notes",
                context={"error_type": type(e).__name__},
            )

        return NoteListResponse(
            collection=settings.notes_collection,
            data=[to_note_out(note) for note in notes],
        )

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteCreatedResponse:
        """
        Insert a new note.

        Legacy string content in the body is converted to the block-array
        form before it is stored.
        """
        now = utcnow()
        note = Note(
            id=uuid.uuid4(),
            title=payload.title,
            content=content_for_storage(payload.content),
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(note)
            await db.flush()
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create note",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note created: %s (%d blocks)", note.id, len(note.content))
        return NoteCreatedResponse(id=str(note.id))

    async def update_note(self, db: AsyncSession, payload: NoteUpdate) -> SuccessResponse:
        """
        Replace title and content of an existing note.

        Raises:
            ValidationError: id missing or malformed (→ 400)
            NotFoundError: no note with that id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        note_id = parse_note_id(payload.id)
        content = content_for_storage(payload.content)
        try:
            note = await self._fetch(db, note_id)
            note.title = payload.title
            note.content = content
            note.updated_at = utcnow()
            await db.flush()
        except BlockNotesError:
            raise
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Failed to update note",
                context={"note_id": str(note_id)},
            )

        logger.debug("Note %s saved (%d blocks)", note_id, len(content))
        return SuccessResponse()

    async def delete_note(self, db: AsyncSession, raw_id: Optional[str]) -> SuccessResponse:
        """
        Delete a note by id.

        Raises:
            ValidationError: id missing or malformed (→ 400)
            NotFoundError: no note with that id (→ 404)
        """
        note_id = parse_note_id(raw_id)
        try:
            note = await self._fetch(db, note_id)
            await db.delete(note)
            await db.flush()
        except BlockNotesError:
            raise
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Failed to delete note",
                context={"note_id": str(note_id)},
            )

        logger.info("Note deleted: %s", note_id)
        return SuccessResponse()

    async def get_note(self, db: AsyncSession, raw_id: str) -> NoteDetailResponse:
        """
        Retrieve a single note.

        The id is validated before the database is touched, so a malformed
        id is always a 400 and never a 404 or 500.
        """
        note_id = parse_note_id(raw_id)
        try:
            note = await self._fetch(db, note_id)
        except BlockNotesError:
            raise
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Failed to fetch note",
                context={"note_id": str(note_id)},
            )
        return NoteDetailResponse(note=to_note_out(note))


note_service = NoteService()
