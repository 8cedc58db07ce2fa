"""
Notes API — Note Service (Request Rules and Store Orchestration)
==================================================================

What:  Applies the request rules of the HTTP API and drives NoteStore.
How:   Validates input, calls the store, re-reads written notes, and converts
       them into response schemas.
Who:   Called by route handlers; calls NoteStore.
When:  For every note create, read, update, delete and listing.

Flow (PATCH /api/notes/{id}):
    ┌──────────┐    ┌─────────────┐    ┌────────────────┐    ┌───────────┐
    │  Route   │───▶│  Validate   │───▶│ update_partial │───▶│ get_by_id │
    └──────────┘    └─────────────┘    └────────────────┘    └───────────┘

Error Handling:
    ValidationError  - raised here for blank titles and empty patches
    NotFoundError    - propagated unchanged from the store (→ 404)
    StoreError       - propagated unchanged from the store (→ 500)
    anything else    - logged and wrapped in StoreError (→ 500)

NoteService is stateless: the store is passed in on every call.
"""

import logging
from typing import List, Optional

from notes_api.exceptions import NotesAPIError, NotFoundError, StoreError, ValidationError
from notes_api.schemas.note import (
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
)
from notes_api.services.note_store import NoteStore

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class NoteService:
    """
    Business rules for note operations.

    Responsibilities:
        - create_note(): Validate title, insert, return the stored note
        - get_note(): Single note retrieval
        - list_notes(): Every note, oldest first
        - update_note(): Validate patch, apply, return the stored note
        - delete_note(): Remove a note
    """

    def create_note(self, store: NoteStore, payload: NoteCreateRequest) -> NoteResponse:
        """
        Create a note and return it as stored.

        Raises:
            ValidationError: Missing or blank title
            StoreError: The store could not insert or re-read the note
        """
        if _is_blank(payload.title):
            raise ValidationError(message="Title is required", field="title")

        note_id = self._call(store.create, payload.to_draft(), operation="create")
        logger.info("Note %d created", note_id)

        try:
            note = store.get_by_id(note_id)
        except NotFoundError as e:
            # Deleted by a concurrent request between the two calls.
            raise StoreError(
                message="Failed to retrieve created note",
                context={"note_id": note_id},
            ) from e
        return NoteResponse.from_note(note)

    def get_note(self, store: NoteStore, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: No note with that id (→ 404)
        """
        note = self._call(store.get_by_id, note_id, operation="get")
        return NoteResponse.from_note(note)

    def list_notes(self, store: NoteStore) -> List[NoteResponse]:
        """Return every note in insertion order (an empty list when there are none)."""
        notes = self._call(store.get_all, operation="list")
        return [NoteResponse.from_note(note) for note in notes]

    def update_note(
        self, store: NoteStore, note_id: int, payload: NoteUpdateRequest
    ) -> NoteResponse:
        """
        Apply a partial update and return the resulting note.

        Raises:
            ValidationError: No fields supplied, or a blank title supplied
            NotFoundError: No note with that id (→ 404)
        """
        fields = payload.to_update()
        if fields.is_empty:
            raise ValidationError(message="No fields to update")
        if fields.title is not None and _is_blank(fields.title):
            raise ValidationError(message="Title cannot be empty", field="title")

        self._call(store.update_partial, note_id, fields, operation="update")
        logger.info(
            "Note %d updated (%s)",
            note_id,
            ", ".join(name for name in ("title", "content") if getattr(fields, name) is not None),
        )

        try:
            note = store.get_by_id(note_id)
        except NotFoundError as e:
            raise StoreError(
                message="Failed to retrieve updated note",
                context={"note_id": note_id},
            ) from e
        return NoteResponse.from_note(note)

    def delete_note(self, store: NoteStore, note_id: int) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: No note with that id (→ 404)
        """
        self._call(store.delete, note_id, operation="delete")
        logger.info("Note %d deleted", note_id)

    @staticmethod
    def _call(func, *args, operation: str):
        """
        Run a store operation, passing application errors through untouched
        and wrapping anything unexpected in StoreError.
        """
        try:
            return func(*args)
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Unexpected error during note %s: %s", operation, str(e), exc_info=True)
            raise StoreError(
                message=f"Failed to {operation} note",
                context={"operation": operation, "original_error": type(e).__name__},
            ) from e


note_service = NoteService()
