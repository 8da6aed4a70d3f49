"""
BlockNotes — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the notes API contract.
Why:   Input validation, serialization with camelCase field names, and
       OpenAPI doc generation.
How:   FastAPI validates request bodies against the *In models and
       serializes responses through the response models by alias.

Wire shape of a note:
    {"id": "...", "title": "...", "content": [...blocks] | "legacy text",
     "createdAt": "...", "updatedAt": "..."}
"""

from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from blocknotes.schemas.block import Block

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes.

    `content` may be the legacy string form; it is stored as a block array.
    Client-supplied timestamps are ignored (the server assigns them).
    """
    title: str = Field(default="", description="Note title")
    content: Union[List[Block], str, None] = Field(
        default_factory=list,
        description="Ordered blocks, or legacy plain text",
    )

    model_config = _camel


class NoteUpdate(NoteCreate):
    """
    Body of PUT /api/notes: the full note including its id.

    `id` is optional at the schema level so that a missing id is reported as
    a 400 by the service rather than a 422 by FastAPI.
    """
    id: Optional[str] = Field(default=None, description="Identifier of the note to replace")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteOut(BaseModel):
    """
    A stored note as returned to clients.

    `content` is passed through as stored: older records may still hold a
    plain string, newer ones a block array. Readers normalize both.
    """
    id: str = Field(description="Note identifier (UUID)")
    title: str = Field(description="Note title")
    content: Any = Field(default=None, description="Block array or legacy string")
    created_at: datetime = Field(description="Creation time (UTC)")
    updated_at: datetime = Field(description="Last modification time (UTC)")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteListResponse(BaseModel):
    """Returned by GET /api/notes."""
    collection: str = Field(description="Name of the note collection")
    data: List[NoteOut] = Field(description="Most recently updated notes")


class NoteDetailResponse(BaseModel):
    """Returned by GET /api/notes/{id}."""
    note: NoteOut


class NoteCreatedResponse(BaseModel):
    """Returned by POST /api/notes."""
    success: bool = True
    id: str = Field(description="Identifier of the new note")


class SuccessResponse(BaseModel):
    """Returned by PUT and DELETE /api/notes."""
    success: bool = True


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Note ID is required",
            "details": {"field": "id"},
            "request_id": "550e8400"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
