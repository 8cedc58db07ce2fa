"""
Notes API — In-Memory Note Store
==================================

What:  The single source of truth for every note in the process.
How:   A dict keyed by note id plus an id counter, both guarded by one
       threading.Lock held for the whole body of each operation.
Who:   Owned by the FastAPI app (app.state.note_store); used by NoteService.
When:  Constructed once in create_app(); discarded at process exit.

Guarantees:
    - Ids start at 1, strictly increase, and are never reused after delete.
    - Operations are linearizable: a create() that returns k is visible to
      any get_by_id(k) issued afterwards from any thread.
    - Reads return frozen Note values; updates replace the stored value.
    - get_all() lists notes in insertion order (dicts keep it).

The store never logs, never retries and never swallows an error. Missing
ids raise NotFoundError; anything else the store cannot do raises StoreError.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from notes_api.exceptions import NotFoundError, StoreError
from notes_api.models.note import Note, NoteDraft, NoteUpdate

# Identifiers are signed 64-bit on the wire.
MAX_NOTE_ID = 2**63 - 1


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NoteStore:
    """
    Thread-safe in-memory collection of notes.

    Operations:
        create(draft)              -> new id
        get_by_id(id)              -> Note            (NotFoundError)
        get_all()                  -> List[Note]
        update_partial(id, fields) -> None            (NotFoundError)
        delete(id)                 -> None            (NotFoundError)
        count()                    -> int

    Args:
        clock:  Zero-argument callable returning the current aware datetime.
        max_id: Largest id the store may issue; create() past it raises StoreError.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        max_id: int = MAX_NOTE_ID,
    ):
        self._clock = clock or _utc_now
        self._max_id = max_id
        self._lock = threading.Lock()
        self._notes: Dict[int, Note] = {}
        self._last_id = 0

    def create(self, draft: NoteDraft) -> int:
        """
        Insert a new note and return its id.

        The title is not re-validated here; the caller has already rejected
        blank titles.

        Raises:
            StoreError: The id space is exhausted.
        """
        with self._lock:
            if self._last_id >= self._max_id:
                raise StoreError(
                    message="Note id space exhausted",
                    context={"last_id": self._last_id, "max_id": self._max_id},
                )
            self._last_id += 1
            now = self._clock()
            note = Note(
                id=self._last_id,
                title=draft.title,
                content=draft.content,
                created_at=now,
                updated_at=now,
            )
            self._notes[note.id] = note
            return note.id

    def get_by_id(self, note_id: int) -> Note:
        """Return the note with the given id, or raise NotFoundError."""
        with self._lock:
            note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    def get_all(self) -> List[Note]:
        """Return every note in insertion order; an empty store gives []."""
        with self._lock:
            return list(self._notes.values())

    def update_partial(self, note_id: int, fields: NoteUpdate) -> None:
        """
        Apply the supplied fields to an existing note.

        Fields left as None are untouched. Either every supplied field is
        applied and updated_at refreshed, or (missing id) nothing changes.

        Raises:
            NotFoundError: No note with that id.
        """
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                raise NotFoundError(resource="note", resource_id=str(note_id))

            changes = {"updated_at": self._clock()}
            if fields.title is not None:
                changes["title"] = fields.title
            if fields.content is not None:
                changes["content"] = fields.content
            self._notes[note_id] = replace(note, **changes)

    def delete(self, note_id: int) -> None:
        """Remove a note; raise NotFoundError if it does not exist."""
        with self._lock:
            if self._notes.pop(note_id, None) is None:
                raise NotFoundError(resource="note", resource_id=str(note_id))

    def count(self) -> int:
        with self._lock:
            return len(self._notes)
