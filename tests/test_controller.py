"""Tests for the edit controller."""

from collapsible_editor import (
    AnnotationStore,
    EditController,
    EditorConfig,
    EditorState,
    FoldAnimationState,
    export_markdown,
    render_state,
)


def make_controller(text: str = "The quick brown fox", **kwargs) -> EditController:
    """Create a controller with a document already typed."""
    controller = EditController(**kwargs)
    controller.text_changed(text, caret=len(text))
    return controller


class TestTextEvents:
    """Tests for text and selection events."""

    def test_text_changed_replaces_document(self):
        """Text changes replace the document and move the caret."""
        controller = make_controller()
        controller.text_changed("Hello", caret=3)
        assert controller.state.document == "Hello"
        assert controller.caret == 3

    def test_caret_clamped(self):
        """A caret past the end is clamped."""
        controller = make_controller()
        controller.text_changed("Hi", caret=10)
        assert controller.caret == 2

    def test_caret_defaults_to_start(self):
        """Without a caret offset the caret goes to the start."""
        controller = make_controller()
        controller.text_changed("Hi")
        assert controller.caret == 0

    def test_selection_changed_moves_caret(self):
        """The caret follows the selection start."""
        controller = make_controller()
        controller.selection_changed(4, 10)
        assert controller.caret == 4

    def test_selection_changed_records_end(self):
        """The selection end is tracked and clamped."""
        controller = make_controller()
        controller.selection_changed(4, 10)
        assert controller.state.selection_end == 10

        controller.selection_changed(4, 99)
        assert controller.state.selection_end == 19

    def test_selection_without_end_is_empty(self):
        """A bare caret move leaves an empty selection."""
        controller = make_controller()
        controller.selection_changed(7)
        assert controller.state.selection_end == 7

    def test_text_changed_clears_selection(self):
        """Typing collapses the selection onto the caret."""
        controller = make_controller()
        controller.selection_changed(4, 10)
        controller.text_changed("The quick brown fox!", caret=20)
        assert (controller.caret, controller.state.selection_end) == (20, 20)

    def test_text_change_keeps_deletion_offsets(self):
        """Typing after a deletion does not move it."""
        controller = make_controller()
        deletion = controller.delete_range(4, 10).deletion
        controller.text_changed("Inserted text. The quick brown fox", caret=15)
        assert controller.store.find(deletion.id).start_offset == 4


class TestDeleteRange:
    """Tests for delete_range."""

    def test_delete_records_selection(self):
        """The selected text is recorded and the document unchanged."""
        controller = make_controller()
        result = controller.delete_range(4, 10)

        assert result.recorded
        assert result.prevent_default
        assert result.deletion.deleted_text == "quick "
        assert result.deletion.start_offset == 4
        assert result.deletion.sequence_number == 1
        assert result.deletion.collapsed
        assert controller.state.document == "The quick brown fox"

    def test_empty_selection_rejected(self):
        """Single-position delete is disabled."""
        controller = make_controller()
        result = controller.delete_range(5, 5)

        assert not result.recorded
        assert result.prevent_default
        assert result.reason == "no selection"
        assert len(controller.store) == 0

    def test_reversed_selection_rejected(self):
        """A reversed selection records nothing."""
        controller = make_controller()
        result = controller.delete_range(10, 4)
        assert not result.recorded
        assert result.reason == "reversed selection"
        assert controller.state.next_sequence == 1

    def test_selection_outside_document_rejected(self):
        """A selection beyond the document captures nothing."""
        controller = make_controller("abc")
        result = controller.delete_range(10, 20)
        assert not result.recorded
        assert controller.state.next_sequence == 1

    def test_selection_end_clamped(self):
        """A selection running past the end captures what exists."""
        controller = make_controller("abcdef")
        result = controller.delete_range(3, 50)
        assert result.deletion.deleted_text == "def"

    def test_new_deletion_starts_folding(self):
        """A new deletion is marked for the fold animation."""
        controller = make_controller()
        deletion = controller.delete_range(4, 10).deletion
        assert controller.animation.is_folding(deletion.id)
        assert render_state(controller.state, animation=controller.animation)[1].width == 6

        controller.tick()
        assert not controller.animation.is_folding(deletion.id)

    def test_result_str(self):
        """Results describe what happened."""
        controller = make_controller()
        assert "quick" in str(controller.delete_range(4, 10))
        assert "no selection" in str(controller.delete_range(1, 1))


class TestKeyPressed:
    """Tests for key_pressed."""

    def test_backspace_with_selection(self):
        """Backspace with a selection records a deletion."""
        controller = make_controller()
        result = controller.key_pressed("Backspace", 4, 10)

        assert result.handled
        assert result.prevent_default
        assert result.delete.deletion.deleted_text == "quick "

    def test_backspace_without_selection_suppressed(self):
        """Backspace without a selection is swallowed."""
        controller = make_controller()
        result = controller.key_pressed("Backspace")

        assert result.handled
        assert result.prevent_default
        assert not result.delete.recorded
        assert controller.state.document == "The quick brown fox"

    def test_backspace_uses_tracked_selection(self):
        """Without bounds the key deletes the last reported selection."""
        controller = make_controller()
        controller.selection_changed(4, 10)
        result = controller.key_pressed("Backspace")

        assert result.delete.deletion.deleted_text == "quick "
        assert result.delete.deletion.start_offset == 4

    def test_other_keys_pass_through(self):
        """Ordinary keys are left to the input surface."""
        controller = make_controller()
        result = controller.key_pressed("a", 4, 10)
        assert not result.handled
        assert not result.prevent_default
        assert result.delete is None

    def test_configured_delete_keys(self):
        """The Delete key can be configured as a delete key."""
        controller = make_controller(config=EditorConfig(delete_keys=("Backspace", "Delete")))
        result = controller.key_pressed("Delete", 0, 3)
        assert result.delete.deletion.deleted_text == "The"


class TestToggle:
    """Tests for toggle."""

    def test_toggle_expands_and_collapses(self):
        """Toggling switches between expanded and collapsed."""
        controller = make_controller()
        deletion = controller.delete_range(4, 10).deletion

        expanded = controller.toggle(deletion.id)
        assert expanded.found
        assert expanded.collapsed is False

        collapsed = controller.toggle(deletion.id)
        assert collapsed.collapsed is True

    def test_toggle_unknown_id(self):
        """Unknown IDs are reported, not raised."""
        controller = make_controller()
        result = controller.toggle("missing")
        assert not result.found
        assert result.collapsed is None
        assert "unknown" in str(result)

    def test_toggle_returns_focus(self):
        """Focus goes back to the editor after every toggle."""
        calls = []
        controller = make_controller(focus_editor=lambda: calls.append("focus"))
        deletion = controller.delete_range(4, 10).deletion

        controller.toggle(deletion.id)
        controller.toggle("missing")
        assert calls == ["focus", "focus"]

    def test_collapsing_starts_fold(self):
        """Collapsing again restarts the fold animation."""
        controller = make_controller()
        deletion = controller.delete_range(4, 10).deletion
        controller.tick()

        controller.toggle(deletion.id)
        assert not controller.animation.is_folding(deletion.id)
        controller.toggle(deletion.id)
        assert controller.animation.is_folding(deletion.id)

    def test_uses_given_store(self):
        """The controller mutates the store it is given."""
        store = AnnotationStore()
        controller = EditController(store=store)
        controller.text_changed("abc")
        controller.delete_range(0, 1)
        assert len(store) == 1

    def test_keeps_empty_store(self):
        """An empty store is used as given, with its state and ID factory."""
        store = AnnotationStore(state=EditorState(document="abc"), id_factory=lambda: "d1")
        controller = EditController(store=store)

        assert controller.store is store
        assert controller.state is store.state
        assert controller.delete_range(0, 1).deletion.id == "d1"

    def test_keeps_empty_animation_state(self):
        """A given animation state is used even before anything folds."""
        animation = FoldAnimationState()
        controller = EditController(animation=animation)
        controller.text_changed("abc")
        deletion = controller.delete_range(0, 2).deletion

        assert controller.animation is animation
        assert animation.is_folding(deletion.id)


class TestScenario:
    """End-to-end editing session."""

    def test_quick_brown_fox_session(self):
        """Delete, export, toggle, export."""
        controller = make_controller()
        deletion = controller.key_pressed("Backspace", 4, 10).delete.deletion

        segments = render_state(controller.state)
        assert [(s.kind, s.text) for s in segments] == [
            ("text", "The "),
            ("placeholder", "…"),
            ("text", "brown fox"),
        ]
        assert export_markdown(controller.state) == (
            "The [ … ]brown fox\n\n## Footnotes\n[^1]: ~~quick ~~\n"
        )

        controller.toggle(deletion.id)
        segments = render_state(controller.state)
        assert [(s.kind, s.text) for s in segments] == [
            ("text", "The "),
            ("struck", "quick "),
            ("text", "brown fox"),
        ]
        assert export_markdown(controller.state) == (
            "The ~~quick ~~brown fox\n\n## Footnotes\n[^1]: ~~quick ~~\n"
        )
