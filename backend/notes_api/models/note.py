"""
Notes API - Note SQLAlchemy Model
=================================

What:  ORM model for the `notes` table.
Who:   NoteService for CRUD; Alembic for schema management.

Columns:
    - id:          UUID primary key, generated client-side (portable across
                   PostgreSQL and the SQLite test database)
    - title:       short heading, required
    - content:     note body, may be empty
    - created_at:  UTC creation time; drives list ordering and cursors
    - updated_at:  UTC time of the last change

Index on created_at DESC serves the default "newest first" listing.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single note.

    Query Patterns:
        - List recent notes: ORDER BY created_at DESC LIMIT n
          → idx_notes_created_at
        - Get / update / delete one note: WHERE id = :uuid → primary key
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique note identifier",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Note title",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
        comment="Note body",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # Stored in UTC; conversion to local time happens in the client
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
