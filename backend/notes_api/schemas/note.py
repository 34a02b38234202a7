"""
Notes API - Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the HTTP contract of the notes feature.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and derives the OpenAPI document from them.

Schemas are kept separate from the SQLAlchemy model so the API contract
can change independently of the table layout.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/v1/notes."""
    title: str = Field(min_length=1, max_length=255, description="Note title")
    content: str = Field(default="", description="Note body (may be empty)")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("title must not be blank")
        return stripped


class NoteUpdate(BaseModel):
    """
    Body of PATCH /api/v1/notes/{id}.

    Only fields present in the request are applied. Sending neither field
    is rejected by the service with a 400.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        stripped = v.strip()
        if not stripped:
            raise ValueError("title must not be blank")
        return stripped


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note."""
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last modified (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    """
    Paginated response wrapper for GET /api/v1/notes.

    How cursor works:
        - next_cursor: created_at of the last item in the current page
        - the client sends it back as ?cursor= to get the next page
    """
    notes: List[NoteResponse] = Field(description="Page of notes")
    total_count: int = Field(description="Total number of notes")
    next_cursor: Optional[str] = Field(
        default=None,
        description="Cursor for next page (ISO datetime). Null if no more pages."
    )
    has_more: bool = Field(description="Whether more pages are available")


# ══════════════════════════════════════════════════════════════════════════
# Error and Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body returned by the global exception handlers.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /api/v1/health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
