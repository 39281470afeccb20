"""Tests for the annotation store."""

import dataclasses
from datetime import datetime, timezone
from itertools import count

import pytest

from collapsible_editor import AnnotationStore, DeletionNotFoundError, EditorState


def make_store(document: str = "The quick brown fox") -> AnnotationStore:
    """Create a store with predictable IDs and timestamps."""
    ids = count(1)
    store = AnnotationStore(
        id_factory=lambda: f"d{next(ids)}",
        clock=lambda: datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    )
    store.replace_document(document)
    return store


class TestRecordDeletion:
    """Tests for record_deletion."""

    def test_records_collapsed_deletion(self):
        """A new deletion is collapsed and numbered 1."""
        store = make_store()
        deletion = store.record_deletion("quick ", 4)

        assert deletion is not None
        assert deletion.id == "d1"
        assert deletion.sequence_number == 1
        assert deletion.deleted_text == "quick "
        assert deletion.start_offset == 4
        assert deletion.length == 6
        assert deletion.end_offset == 10
        assert deletion.collapsed is True
        assert store.deletions == (deletion,)

    def test_empty_text_is_noop(self):
        """An empty selection records nothing and consumes no number."""
        store = make_store()
        assert store.record_deletion("", 3) is None
        assert len(store) == 0
        assert store.state.next_sequence == 1

        deletion = store.record_deletion("fox", 16)
        assert deletion.sequence_number == 1

    def test_sequence_numbers_strictly_increase(self):
        """Successive deletions are numbered 1, 2, 3."""
        store = make_store()
        first = store.record_deletion("The", 0)
        store.record_deletion("", 5)
        second = store.record_deletion("brown", 10)
        third = store.record_deletion("fox", 16)
        assert [first.sequence_number, second.sequence_number, third.sequence_number] == [1, 2, 3]

    def test_offset_clamped_to_document_length(self):
        """An offset past the end clamps to the document length."""
        store = make_store("short")
        deletion = store.record_deletion("gone", 99)
        assert deletion.start_offset == 5
        assert deletion.length == 4

    def test_negative_offset_clamped_to_zero(self):
        """A negative offset clamps to zero."""
        store = make_store("short")
        assert store.record_deletion("sh", -3).start_offset == 0

    def test_length_matches_text(self):
        """Length is always the length of the captured text."""
        store = make_store()
        deletion = store.record_deletion("brown fox", 10)
        assert deletion.length == len(deletion.deleted_text)


class TestToggleCollapse:
    """Tests for toggle_collapse."""

    def test_toggle_flips_state(self):
        """Toggling expands a collapsed deletion."""
        store = make_store()
        deletion = store.record_deletion("quick ", 4)

        updated = store.toggle_collapse(deletion.id)
        assert updated.collapsed is False
        assert store.find(deletion.id).collapsed is False

    def test_toggle_twice_restores_state(self):
        """Two toggles restore the state and change nothing else."""
        store = make_store()
        original = store.record_deletion("quick ", 4)

        store.toggle_collapse(original.id)
        restored = store.toggle_collapse(original.id)

        assert restored == original

    def test_toggle_keeps_other_fields(self):
        """Only collapsed differs after a toggle."""
        store = make_store()
        original = store.record_deletion("quick ", 4)
        updated = store.toggle_collapse(original.id)

        assert dataclasses.replace(updated, collapsed=True) == original

    def test_toggle_unknown_id_is_noop(self):
        """Unknown IDs return None and leave the store alone."""
        store = make_store()
        deletion = store.record_deletion("quick ", 4)

        assert store.toggle_collapse("missing") is None
        assert store.deletions == (deletion,)

    def test_toggle_preserves_insertion_order(self):
        """The toggled deletion stays at its position in the list."""
        store = make_store()
        first = store.record_deletion("The", 0)
        second = store.record_deletion("fox", 16)

        store.toggle_collapse(first.id)
        assert [d.id for d in store.deletions] == [first.id, second.id]


class TestReplaceDocument:
    """Tests for replace_document."""

    def test_replace_keeps_offsets(self):
        """Existing deletions are not shifted when the document changes."""
        store = make_store()
        deletion = store.record_deletion("brown", 10)

        store.replace_document("A different and much longer document text")
        assert store.document.startswith("A different")
        assert store.find(deletion.id) == deletion

    def test_replace_to_shorter_keeps_offsets(self):
        """Offsets may point past the end of a shorter document."""
        store = make_store()
        deletion = store.record_deletion("fox", 16)
        store.replace_document("The")
        assert store.find(deletion.id).start_offset == 16


class TestLookup:
    """Tests for lookups."""

    def test_get_raises_for_unknown_id(self):
        """Strict lookup raises with the available IDs listed."""
        store = make_store()
        store.record_deletion("quick ", 4)

        with pytest.raises(DeletionNotFoundError) as exc_info:
            store.get("nope")

        assert exc_info.value.deletion_id == "nope"
        assert exc_info.value.available_ids == ["d1"]
        assert "d1" in str(exc_info.value)

    def test_get_on_empty_store(self):
        """The message says that nothing has been recorded."""
        with pytest.raises(DeletionNotFoundError, match="No deletions have been recorded"):
            make_store().get("nope")

    def test_by_sequence(self):
        """Deletions can be found by footnote number."""
        store = make_store()
        store.record_deletion("The", 0)
        second = store.record_deletion("fox", 16)
        assert store.by_sequence(2) == second
        assert store.by_sequence(3) is None

    def test_sorted_by_sequence(self):
        """sorted_by_sequence orders by footnote number."""
        store = make_store()
        a = store.record_deletion("fox", 16)
        b = store.record_deletion("The", 0)
        assert store.sorted_by_sequence() == [a, b]


class TestEditorState:
    """Tests for EditorState."""

    def test_store_uses_given_state(self):
        """A store mutates the state it was given."""
        state = EditorState(document="abc")
        store = AnnotationStore(state)
        store.record_deletion("b", 1)
        assert len(state.deletions) == 1
        assert state.next_sequence == 2

    def test_snapshot_is_independent(self):
        """A snapshot does not see later deletions."""
        store = make_store()
        store.record_deletion("The", 0)
        snapshot = store.state.snapshot()
        store.record_deletion("fox", 16)

        assert len(snapshot.deletions) == 1
        assert len(store.state.deletions) == 2

    def test_default_ids_are_unique(self):
        """Default IDs are unique strings."""
        store = AnnotationStore()
        store.replace_document("abcdef")
        ids = {store.record_deletion("a", 0).id for _ in range(5)}
        assert len(ids) == 5
