"""
Notes API - Note Service (Business Logic)
=========================================

What:  Create, read, list, update and delete notes.
How:   Works on an AsyncSession handed in by the route layer; translates
       missing rows into NotFoundError and driver failures into DatabaseError.
Who:   Called by the notes route handlers.

NoteService is stateless: every call receives its session, so tests can
pass a mock and no state is shared between requests.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from notes_api.models.note import Note
from notes_api.schemas.note import (
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)

logger = logging.getLogger(__name__)


def _to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        Application exceptions (NotFoundError, ValidationError) propagate
        unchanged. Anything else is logged and wrapped in DatabaseError so
        no driver detail reaches the client.
    """

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Insert a new note.

        The row is flushed (not committed) so the id and timestamps are
        populated; get_db_session commits when the request succeeds.
        """
        try:
            note = Note(title=payload.title, content=payload.content)
            db.add(note)
            await db.flush()
            logger.info("Note created: %s", note.id)
            return _to_response(note)
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_note(self, db: AsyncSession, note_id: UUID) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        note = await self._load(db, note_id)
        return _to_response(note)

    async def list_notes(
        self,
        db: AsyncSession,
        limit: int = 20,
        cursor: Optional[str] = None,
        sort: str = "created_at_desc",
    ) -> NoteListResponse:
        """
        List notes with cursor-based pagination.

        How:
            - Default sort: created_at DESC (newest first)
            - Cursor: ISO datetime of the last item of the previous page;
              an unparseable cursor is ignored and the first page returned
            - One extra row is fetched to compute has_more without a
              second query; total_count comes from a COUNT(*)

        Args:
            db: Async database session
            limit: Maximum items per page (1-100, default 20)
            cursor: ISO datetime cursor from previous page (None for first page)
            sort: 'created_at_desc' or 'created_at_asc'
        """
        try:
            query = select(Note)

            if cursor:
                try:
                    cursor_dt = datetime.fromisoformat(cursor)
                except ValueError:
                    cursor_dt = None

                if cursor_dt:
                    if sort == "created_at_asc":
                        query = query.where(Note.created_at > cursor_dt)
                    else:
                        query = query.where(Note.created_at < cursor_dt)

            if sort == "created_at_asc":
                query = query.order_by(asc(Note.created_at))
            else:
                query = query.order_by(desc(Note.created_at))

            query = query.limit(limit + 1)

            result = await db.execute(query)
            notes = list(result.scalars().all())

            count_result = await db.execute(select(func.count(Note.id)))
            total_count = count_result.scalar() or 0

            has_more = len(notes) > limit
            if has_more:
                notes = notes[:limit]

            next_cursor = None
            if has_more and notes:
                next_cursor = notes[-1].created_at.isoformat()

            return NoteListResponse(
                notes=[_to_response(note) for note in notes],
                total_count=total_count,
                next_cursor=next_cursor,
                has_more=has_more,
            )

        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_note(
        self, db: AsyncSession, note_id: UUID, payload: NoteUpdate
    ) -> NoteResponse:
        """
        Apply a partial update.

        Raises:
            ValidationError: The payload sets no field (→ 400)
            NotFoundError: Note does not exist (→ 404)
        """
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationError(
                message="Provide at least one of 'title' or 'content' to update",
                context={"allowed_fields": ["title", "content"]},
            )

        note = await self._load(db, note_id)
        try:
            for field, value in changes.items():
                setattr(note, field, value)
            await db.flush()
            await db.refresh(note)
            logger.info("Note %s updated: %s", note.id, ", ".join(sorted(changes)))
            return _to_response(note)
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note_id)},
            )

    async def delete_note(self, db: AsyncSession, note_id: UUID) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: Note does not exist (→ 404)
        """
        note = await self._load(db, note_id)
        try:
            await db.delete(note)
            await db.flush()
            logger.info("Note deleted: %s", note_id)
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note_id)},
            )

    async def _load(self, db: AsyncSession, note_id: UUID) -> Note:
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(note_id)},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note


# Stateless, so one shared instance serves every request
note_service = NoteService()
