"""
Notes API - Notes Route Handlers
================================

What:  CRUD endpoints of the notes feature module.
How:   Extract parameters, delegate to NoteService, set headers/status.
Who:   Mounted by the application under the global prefix, so the public
       paths are /api/v1/notes and /api/v1/notes/{note_id}.

This router is the only one whose routes appear in the generated API
documentation (see modules.NoteModule).
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from notes_api.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(db=db, payload=payload)


@router.get(
    "",
    response_model=NoteListResponse,
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List notes with pagination",
    description=(
        "Returns a page of notes. Pass `next_cursor` from the previous response "
        "as `cursor` to fetch the following page. The total number of notes is "
        "also returned in the X-Total-Count header."
    ),
)
async def list_notes(
    response: Response,
    limit: int = Query(default=20, ge=1, le=100, description="Items per page (max 100)"),
    cursor: str | None = Query(
        default=None,
        description="Pagination cursor (ISO 8601 datetime of last item from previous page)",
    ),
    sort: str = Query(
        default="created_at_desc",
        pattern="^created_at_(asc|desc)$",
        description="Sort order: 'created_at_desc' (newest first) or 'created_at_asc'",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    result = await note_service.list_notes(db=db, limit=limit, cursor=cursor, sort=sort)
    response.headers["X-Total-Count"] = str(result.total_count)
    return result


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Invalid UUIDs in the path are rejected by FastAPI with 422.
    """
    return await note_service.get_note(db=db, note_id=note_id)


@router.patch(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Nothing to update", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note",
)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db=db, note_id=note_id, payload=payload)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
