"""
BlockNotes — Note SQLAlchemy Model
====================================

What:  ORM model representing the `notes` table.
Why:   Maps note records to Python objects; Alembic reads this for migrations.
Who:   Used by NoteService for CRUD operations.

Table Design:
    - UUID primary key: ids are handed to the browser and used in URLs
    - content: the block array as JSON (JSONB on PostgreSQL). Older rows may
      still hold a bare string; readers normalize both shapes
    - created_at / updated_at: UTC, server-assigned
    - Index on updated_at DESC: the dashboard lists recently edited notes first
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from blocknotes.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
ContentType = JSON().with_variant(JSONB(), "postgresql")


class Note(Base):
    """
    One note document.

    Lifecycle:
        1. Created by POST /api/notes with an empty block list
        2. Replaced wholesale by PUT /api/notes on every autosave
        3. Deleted by DELETE /api/notes?id=
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
    )

    # list of block dicts, or a legacy plain string
    content: Mapped[Any] = mapped_column(
        ContentType,
        nullable=True,
        default=list,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_notes_updated_at", updated_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, updated_at='{self.updated_at}')>"
