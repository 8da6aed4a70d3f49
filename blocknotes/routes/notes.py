"""
BlockNotes — Notes Route Handlers
===================================

What:  The notes JSON API.
           GET    /api/notes         list (capped)
           POST   /api/notes         create
           PUT    /api/notes         full replace, id in body
           DELETE /api/notes?id=     delete
           GET    /api/notes/{id}    detail
How:   Extracts parameters, delegates to NoteService, returns JSON.
Who:   Called by the dashboard and note page controllers (blocknotes.client).

Ids are taken as plain strings and validated by the service, so a malformed
id produces our 400 validation_error rather than FastAPI's 422.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blocknotes.database import get_db_session
from blocknotes.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteCreatedResponse,
    NoteDetailResponse,
    NoteListResponse,
    NoteUpdate,
    SuccessResponse,
)
from blocknotes.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List notes",
    description="Returns the most recently updated notes (at most 20 by default).",
)
async def list_notes(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    result = await note_service.list_notes(db=db)
    # Dashboard data changes on every autosave
    response.headers["Cache-Control"] = "no-store"
    return result


@router.post(
    "/notes",
    response_model=NoteCreatedResponse,
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteCreatedResponse:
    """
    Create a note from the given title and content.

    The dashboard posts `{"title": "Untitled Note", "content": []}` and then
    navigates to the returned id.
    """
    return await note_service.create_note(db=db, payload=payload)


@router.put(
    "/notes",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Missing or invalid id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Replace a note",
)
async def update_note(
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    """
    Replace the stored note with the body.

    Called by the note page's autosave with the full document; title and
    content are overwritten, timestamps are assigned by the server.
    """
    return await note_service.update_note(db=db, payload=payload)


@router.delete(
    "/notes",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Missing or invalid id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    id: Optional[str] = Query(default=None, description="Identifier of the note to delete"),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await note_service.delete_note(db=db, raw_id=id)


@router.get(
    "/notes/{note_id}",
    response_model=NoteDetailResponse,
    responses={
        400: {"description": "Invalid id format", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Get a single note",
)
async def get_note(
    note_id: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteDetailResponse:
    result = await note_service.get_note(db=db, raw_id=note_id)
    response.headers["Cache-Control"] = "no-store"
    return result
