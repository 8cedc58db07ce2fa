"""
Notes API — Note Store Lifecycle and Dependency
=================================================

What:  Attaches a NoteStore to the application and hands it to route handlers.
How:   create_app() calls attach_note_store(); routes declare
       `store: NoteStore = Depends(get_note_store)`.
When:  The store is attached once per app instance and discarded on shutdown.
       Nothing is persisted.

Example usage in a route:
    @router.get("/notes")
    async def list_notes(store: NoteStore = Depends(get_note_store)):
        return note_service.list_notes(store)
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request

from notes_api.exceptions import StoreError
from notes_api.services.note_store import NoteStore

logger = logging.getLogger(__name__)


def attach_note_store(app: FastAPI, store: Optional[NoteStore] = None) -> NoteStore:
    """
    Bind a store to app.state and return it.

    With no `store`, the one the app was first built with is bound again,
    so an app that is shut down and started once more keeps serving the
    store it was given. A fresh NoteStore is created only when there is none.
    """
    if store is None:
        store = getattr(app.state, "configured_note_store", None)
    if store is None:
        store = NoteStore()
    app.state.configured_note_store = store
    app.state.note_store = store
    return store


def get_note_store(request: Request) -> NoteStore:
    """
    FastAPI dependency that returns the application's NoteStore.

    Raises:
        StoreError: The app was built without a store (→ 500).
    """
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        raise StoreError(message="Note store is not initialized")
    return store


def release_note_store(app: FastAPI) -> None:
    """Detach the store at shutdown, logging how many notes are discarded."""
    store = getattr(app.state, "note_store", None)
    if store is None:
        return
    logger.info("Discarding %d in-memory notes", store.count())
    app.state.note_store = None
