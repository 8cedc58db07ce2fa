"""
Notes API — Note Domain Models
================================

What:  Plain value types shared by the store and the service layer.
How:   Frozen dataclasses; the store hands these out and replaces them on
       update, so a value a caller holds never changes underneath it.
Who:   Created by NoteStore; read by NoteService and the route handlers.

Types:
    Note        - a stored note (id, title, content, timestamps)
    NoteDraft   - the {title, content} payload for NoteStore.create()
    NoteUpdate  - sparse set of field updates for NoteStore.update_partial()
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Note:
    """
    A single note as held by the store.

    Lifecycle:
        1. Created by NoteStore.create() with created_at == updated_at
        2. Replaced by NoteStore.update_partial() (same id, new updated_at)
        3. Removed by NoteStore.delete(); the id is never issued again
    """

    id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NoteDraft:
    """Title and content of a note that does not have an id yet."""

    title: str
    content: str = ""


@dataclass(frozen=True)
class NoteUpdate:
    """
    Fields to change on an existing note.

    None means "not provided, leave as is". Any string, including the
    empty string, replaces the current value.
    """

    title: Optional[str] = None
    content: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """True when neither field was supplied."""
        return self.title is None and self.content is None
