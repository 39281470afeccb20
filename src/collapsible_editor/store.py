"""
Annotation store for non-destructive deletions.

The store holds the base document and the set of deletions recorded
against it. Deletions are snapshots: they keep the text and offset they
were captured with, and replacing the document never moves or
re-validates them. Offsets that no longer fit the current document are
clamped when the overlay is computed.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .errors import DeletionNotFoundError
from .models.deletion import Deletion

logger = logging.getLogger(__name__)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


@dataclass
class EditorState:
    """Application state shared by the controller and the projections.

    Attributes:
        document: Current base document text
        deletions: Recorded deletions in insertion order (not significant;
            consumers sort as they need)
        next_sequence: Sequence number the next deletion will receive
        caret: Last known caret offset reported by the input surface
        selection_end: End of the last reported selection (equal to the
            caret when nothing is selected)
    """

    document: str = ""
    deletions: list[Deletion] = field(default_factory=list)
    next_sequence: int = 1
    caret: int = 0
    selection_end: int = 0

    def snapshot(self) -> EditorState:
        """Return a copy whose deletion list is independent of this one."""
        return dataclasses.replace(self, deletions=list(self.deletions))


class AnnotationStore:
    """Holds the base document and the recorded deletions.

    Mutations are synchronous; there is a single caller (the edit
    controller), so no locking is done.

    Example:
        >>> store = AnnotationStore()
        >>> store.replace_document("The quick brown fox")
        >>> d = store.record_deletion("quick ", 4)
        >>> d.sequence_number, d.collapsed
        (1, True)
    """

    def __init__(
        self,
        state: EditorState | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            state: Existing state to operate on (a fresh one is created if None)
            id_factory: Produces unique deletion IDs (defaults to UUID4 strings)
            clock: Produces creation timestamps (defaults to UTC now)
        """
        self.state = state if state is not None else EditorState()
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def document(self) -> str:
        """The current base document."""
        return self.state.document

    @property
    def deletions(self) -> tuple[Deletion, ...]:
        """All recorded deletions, in insertion order."""
        return tuple(self.state.deletions)

    def __len__(self) -> int:
        return len(self.state.deletions)

    def __iter__(self) -> Iterator[Deletion]:
        return iter(tuple(self.state.deletions))

    def record_deletion(self, selected_text: str, at_offset: int) -> Deletion | None:
        """Record a deletion of ``selected_text`` captured at ``at_offset``.

        An empty selection is a no-op: nothing is recorded and no sequence
        number is consumed. The offset is clamped into the current document.

        Args:
            selected_text: The text that was selected when deleting
            at_offset: Where the selection started in the document

        Returns:
            The new Deletion (collapsed), or None for an empty selection
        """
        if not selected_text:
            logger.debug("Ignoring empty deletion at offset %d", at_offset)
            return None

        deletion = Deletion(
            id=self._id_factory(),
            sequence_number=self.state.next_sequence,
            deleted_text=selected_text,
            start_offset=_clamp(at_offset, 0, len(self.state.document)),
            created_at=self._clock(),
            collapsed=True,
        )
        self.state.deletions.append(deletion)
        self.state.next_sequence += 1
        logger.debug(
            "Recorded deletion [^%d] at %d (%d chars)",
            deletion.sequence_number,
            deletion.start_offset,
            deletion.length,
        )
        return deletion

    def toggle_collapse(self, deletion_id: str) -> Deletion | None:
        """Flip the collapsed state of a deletion.

        Only ``collapsed`` changes; every other field is carried over.

        Returns:
            The updated Deletion, or None if no deletion has that ID
        """
        for index, deletion in enumerate(self.state.deletions):
            if deletion.id == deletion_id:
                updated = dataclasses.replace(deletion, collapsed=not deletion.collapsed)
                self.state.deletions[index] = updated
                logger.debug("Deletion [^%d] is now %s", updated.sequence_number, updated.state)
                return updated

        logger.warning("Cannot toggle unknown deletion %s", deletion_id)
        return None

    def replace_document(self, new_text: str) -> None:
        """Replace the base document.

        Existing deletions keep their captured offsets; they are not shifted
        to follow the edit.
        """
        self.state.document = new_text
        logger.debug("Document replaced (%d chars)", len(new_text))

    def find(self, deletion_id: str) -> Deletion | None:
        """Look up a deletion by ID, returning None if it does not exist."""
        for deletion in self.state.deletions:
            if deletion.id == deletion_id:
                return deletion
        return None

    def get(self, deletion_id: str) -> Deletion:
        """Look up a deletion by ID.

        Raises:
            DeletionNotFoundError: If no deletion has that ID
        """
        deletion = self.find(deletion_id)
        if deletion is None:
            raise DeletionNotFoundError(
                deletion_id, available_ids=[d.id for d in self.state.deletions]
            )
        return deletion

    def by_sequence(self, sequence_number: int) -> Deletion | None:
        """Look up a deletion by its footnote number."""
        for deletion in self.state.deletions:
            if deletion.sequence_number == sequence_number:
                return deletion
        return None

    def sorted_by_sequence(self) -> list[Deletion]:
        """Deletions ordered by footnote number."""
        return sorted(self.state.deletions, key=lambda d: d.sequence_number)
