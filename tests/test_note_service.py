"""
Notes API — Note Service Unit Tests
=====================================

What:  Tests for NoteService request rules (validation, re-reads, wrapping).
How:   Uses a real NoteStore; failures are injected with unittest.mock.

What we test:
    ✅ Create rejects missing/blank titles and returns the stored note
    ✅ Update rejects empty patches and blank titles
    ✅ Not-found propagates unchanged
    ✅ Unexpected store failures become StoreError
    ✅ A note vanishing between write and re-read is a StoreError
"""

from unittest.mock import MagicMock, patch

import pytest

from notes_api.exceptions import NotFoundError, StoreError, ValidationError
from notes_api.models.note import NoteDraft
from notes_api.schemas.note import NoteCreateRequest, NoteUpdateRequest
from notes_api.services.note_service import NoteService


class TestNoteServiceCreate:
    """Tests for create_note."""

    def setup_method(self):
        self.service = NoteService()

    def test_create_returns_stored_note(self, store):
        result = self.service.create_note(store, NoteCreateRequest(title="A", content="x"))

        assert result.id == 1
        assert result.title == "A"
        assert result.content == "x"
        assert result.created_at == result.updated_at

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_create_blank_title_rejected(self, store, title):
        with pytest.raises(ValidationError) as exc_info:
            self.service.create_note(store, NoteCreateRequest(title=title))

        assert exc_info.value.message == "Title is required"
        assert exc_info.value.field == "title"
        assert store.count() == 0

    def test_create_missing_title_rejected(self, store):
        with pytest.raises(ValidationError):
            self.service.create_note(store, NoteCreateRequest())

    def test_create_store_error_propagates(self, store):
        with patch.object(store, "create", side_effect=StoreError(message="Note id space exhausted")):
            with pytest.raises(StoreError) as exc_info:
                self.service.create_note(store, NoteCreateRequest(title="A"))

        assert exc_info.value.message == "Note id space exhausted"

    def test_create_unexpected_error_wrapped(self, store):
        with patch.object(store, "create", side_effect=RuntimeError("boom")):
            with pytest.raises(StoreError) as exc_info:
                self.service.create_note(store, NoteCreateRequest(title="A"))

        assert exc_info.value.context["original_error"] == "RuntimeError"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_create_then_missing_is_store_error(self):
        store = MagicMock()
        store.create.return_value = 5
        store.get_by_id.side_effect = NotFoundError(resource="note", resource_id="5")

        with pytest.raises(StoreError) as exc_info:
            self.service.create_note(store, NoteCreateRequest(title="A"))

        assert exc_info.value.message == "Failed to retrieve created note"


class TestNoteServiceRead:
    """Tests for get_note and list_notes."""

    def setup_method(self):
        self.service = NoteService()

    def test_get_note_found(self, store):
        note_id = store.create(NoteDraft(title="A", content="x"))

        result = self.service.get_note(store, note_id)

        assert result.id == note_id
        assert result.title == "A"

    def test_get_note_not_found(self, store):
        with pytest.raises(NotFoundError):
            self.service.get_note(store, 99)

    def test_list_notes_empty(self, store):
        assert self.service.list_notes(store) == []

    def test_list_notes_order(self, store):
        store.create(NoteDraft(title="A"))
        store.create(NoteDraft(title="B"))

        result = self.service.list_notes(store)

        assert [n.title for n in result] == ["A", "B"]


class TestNoteServiceUpdate:
    """Tests for update_note."""

    def setup_method(self):
        self.service = NoteService()

    def test_update_content_only(self, store):
        note_id = store.create(NoteDraft(title="A", content="x"))

        result = self.service.update_note(store, note_id, NoteUpdateRequest(content="z"))

        assert result.title == "A"
        assert result.content == "z"
        assert result.updated_at > result.created_at

    def test_update_to_empty_content(self, store):
        note_id = store.create(NoteDraft(title="A", content="x"))

        result = self.service.update_note(store, note_id, NoteUpdateRequest(content=""))

        assert result.content == ""

    def test_update_no_fields_rejected(self, store):
        note_id = store.create(NoteDraft(title="A"))

        with pytest.raises(ValidationError) as exc_info:
            self.service.update_note(store, note_id, NoteUpdateRequest())

        assert exc_info.value.message == "No fields to update"

    def test_update_blank_title_rejected(self, store):
        note_id = store.create(NoteDraft(title="A"))

        with pytest.raises(ValidationError) as exc_info:
            self.service.update_note(store, note_id, NoteUpdateRequest(title="  ", content="x"))

        assert exc_info.value.message == "Title cannot be empty"
        note = store.get_by_id(note_id)
        assert (note.title, note.content) == ("A", "")

    def test_validation_runs_before_lookup(self, store):
        """An empty patch is a 400 even for an id that does not exist."""
        with pytest.raises(ValidationError):
            self.service.update_note(store, 123, NoteUpdateRequest())

    def test_update_not_found(self, store):
        with pytest.raises(NotFoundError):
            self.service.update_note(store, 123, NoteUpdateRequest(title="B"))


class TestNoteServiceDelete:
    """Tests for delete_note."""

    def setup_method(self):
        self.service = NoteService()

    def test_delete(self, store):
        note_id = store.create(NoteDraft(title="A"))

        self.service.delete_note(store, note_id)

        assert store.count() == 0

    def test_delete_not_found(self, store):
        with pytest.raises(NotFoundError):
            self.service.delete_note(store, 1)

    def test_delete_unexpected_error_wrapped(self, store):
        with patch.object(store, "delete", side_effect=KeyError("x")):
            with pytest.raises(StoreError) as exc_info:
                self.service.delete_note(store, 1)

        assert exc_info.value.context["operation"] == "delete"
