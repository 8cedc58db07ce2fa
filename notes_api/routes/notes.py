"""
Notes API — Notes Route Handlers
==================================

What:  CRUD endpoints for notes under {api_prefix}/notes.
How:   Parses the path id, delegates to NoteService, returns JSON. Errors
       are raised as exceptions and turned into responses by the global
       handlers in main.py.

Endpoints:
    POST   /notes        → 201 created note
    GET    /notes        → 200 list of notes (X-Total-Count header)
    GET    /notes/{id}   → 200 note
    PATCH  /notes/{id}   → 200 updated note
    DELETE /notes/{id}   → 200 {"message": "Note deleted successfully"}
"""

import logging
import re
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from notes_api.config import settings
from notes_api.exceptions import ValidationError
from notes_api.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
)
from notes_api.services.note_service import note_service
from notes_api.services.note_store import MAX_NOTE_ID, NoteStore
from notes_api.storage import get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.api_prefix}/notes", tags=["Notes"])

_NOTE_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
MIN_PATH_ID = -(2**63)


def parse_note_id(note_id: str = Path(description="Numeric note identifier")) -> int:
    """
    Parse the {note_id} path segment.

    Declared as a string so that a non-numeric id produces our own 400
    response instead of FastAPI's 422. Accepts an optionally signed run of
    ASCII digits within the signed 64-bit range; no padding, no underscores.
    """
    if _NOTE_ID_PATTERN.fullmatch(note_id):
        value = int(note_id)
        if MIN_PATH_ID <= value <= MAX_NOTE_ID:
            return value
    raise ValidationError(
        message="Invalid note ID",
        field="id",
        context={"value": note_id},
    )


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid JSON or blank title", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreateRequest,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return note_service.create_note(store, payload)


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
    description="Returns every note in creation order. An empty store returns [].",
)
async def list_notes(
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    notes = note_service.list_notes(store)
    response.headers["X-Total-Count"] = str(len(notes))
    return notes


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid note ID", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int = Depends(parse_note_id),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return note_service.get_note(store, note_id)


@router.patch(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid ID, no fields, or blank title", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Partially update a note",
    description=(
        "Changes only the fields present in the body. Omitted or null fields are "
        "left unchanged; an empty string for content clears it."
    ),
)
async def patch_note(
    payload: NoteUpdateRequest,
    note_id: int = Depends(parse_note_id),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return note_service.update_note(store, note_id, payload)


@router.delete(
    "/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid note ID", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int = Depends(parse_note_id),
    store: NoteStore = Depends(get_note_store),
) -> MessageResponse:
    note_service.delete_note(store, note_id)
    return MessageResponse(message="Note deleted successfully")
