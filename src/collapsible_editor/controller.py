"""
Edit controller bridging input events to the annotation store.

The controller receives already-resolved events from an input surface
(text changed, selection moved, key pressed, toggle activated) and turns
them into store mutations. A range delete never shortens the document:
the selected text is recorded as a deletion and the input surface is told
to skip its own removal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .config import EditorConfig
from .models.deletion import Deletion
from .rendering import FoldAnimationState
from .results import DeleteResult, KeyResult, ToggleResult
from .store import AnnotationStore, EditorState

logger = logging.getLogger(__name__)


class EditController:
    """Routes input events to an AnnotationStore.

    Example:
        >>> controller = EditController()
        >>> controller.text_changed("The quick brown fox", caret=19)
        >>> result = controller.delete_range(4, 10)
        >>> result.deletion.deleted_text
        'quick '
        >>> controller.state.document
        'The quick brown fox'
    """

    def __init__(
        self,
        store: AnnotationStore | None = None,
        config: EditorConfig | None = None,
        focus_editor: Callable[[], None] | None = None,
        animation: FoldAnimationState | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Store to mutate (a fresh one is created if None)
            config: Editor configuration (delete keys)
            focus_editor: Called after every toggle to hand focus back to
                the editing surface
            animation: Presentation state notified when deletions collapse
        """
        self.store = store if store is not None else AnnotationStore()
        self.config = config if config is not None else EditorConfig()
        self.animation = animation if animation is not None else FoldAnimationState()
        self._focus_editor = focus_editor

    @property
    def state(self) -> EditorState:
        """The application state owned by this controller."""
        return self.store.state

    @property
    def caret(self) -> int:
        return self.state.caret

    def text_changed(self, text: str, caret: int | None = None) -> None:
        """Handle a text change carrying the full current text.

        Args:
            text: The new document text
            caret: Caret offset after the change (defaults to the start)
        """
        self.store.replace_document(text)
        self.state.caret = max(0, min(caret if caret is not None else 0, len(text)))
        self.state.selection_end = self.state.caret

    def selection_changed(self, start: int, end: int | None = None) -> None:
        """Handle a selection change.

        The caret follows the selection start. Without an end the selection
        is empty.
        """
        size = len(self.state.document)
        self.state.caret = max(0, min(start, size))
        self.state.selection_end = max(0, min(end if end is not None else start, size))

    def delete_range(self, start: int, end: int) -> DeleteResult:
        """Record the selected range ``[start, end)`` as a deletion.

        An empty or reversed selection is ignored; deleting a single
        character at the caret is disabled. The document is never modified.
        """
        if start == end:
            logger.debug("Ignoring delete without a selection at %d", start)
            return DeleteResult(deletion=None, reason="no selection")
        if start > end:
            logger.debug("Ignoring reversed selection %d..%d", start, end)
            return DeleteResult(deletion=None, reason="reversed selection")

        selected = self.state.document[max(0, start) : end]
        deletion = self.store.record_deletion(selected, start)
        if deletion is None:
            return DeleteResult(deletion=None, reason="selection outside document")

        self.animation.mark(deletion.id)
        return DeleteResult(deletion=deletion)

    def key_pressed(
        self, key: str, selection_start: int | None = None, selection_end: int | None = None
    ) -> KeyResult:
        """Handle a key press.

        Delete keys are always intercepted and their default action
        suppressed. Missing selection bounds fall back to the last selection
        reported through ``selection_changed``; with no selection that is the
        caret alone, which makes the delete a no-op.
        """
        if key not in self.config.delete_keys:
            return KeyResult(handled=False)

        start = selection_start if selection_start is not None else self.caret
        end = selection_end if selection_end is not None else self.state.selection_end
        return KeyResult(handled=True, prevent_default=True, delete=self.delete_range(start, end))

    def toggle(self, deletion_id: str) -> ToggleResult:
        """Flip a deletion between collapsed and expanded.

        Unknown IDs are ignored. Focus is handed back to the editing surface
        either way.
        """
        updated: Deletion | None = self.store.toggle_collapse(deletion_id)
        if updated is not None and updated.collapsed:
            self.animation.mark(updated.id)

        if self._focus_editor is not None:
            self._focus_editor()

        if updated is None:
            return ToggleResult(deletion_id=deletion_id, found=False)
        return ToggleResult(deletion_id=deletion_id, found=True, collapsed=updated.collapsed)

    def tick(self) -> None:
        """Advance presentation state by one scheduling tick."""
        self.animation.tick()
