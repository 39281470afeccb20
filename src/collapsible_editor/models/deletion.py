"""
Deletion model class for non-destructive deletions.

A Deletion records a span of the document the user removed. The text is
never taken out of the document; the span is folded away in the preview
and marked as struck through in exports instead.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Deletion:
    """A recorded deletion of a text span.

    Instances are immutable. The store flips ``collapsed`` by replacing the
    instance with ``dataclasses.replace``, so every other field keeps the
    value it had when the deletion was captured.

    Attributes:
        id: Opaque unique identifier, stable for the lifetime of the deletion
        sequence_number: Footnote number, strictly increasing in creation order
        deleted_text: Snapshot of the text that was selected when deleting
        start_offset: Offset into the document at capture time
        created_at: When the deletion was captured
        collapsed: True to show a placeholder, False to show struck-through text

    Example:
        >>> d = Deletion(id="a1", sequence_number=1, deleted_text="quick ", start_offset=4)
        >>> d.length, d.end_offset
        (6, 10)
    """

    id: str
    sequence_number: int
    deleted_text: str
    start_offset: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collapsed: bool = True

    @property
    def length(self) -> int:
        """Length of the deleted text."""
        return len(self.deleted_text)

    @property
    def end_offset(self) -> int:
        """Offset just past the span, ``start_offset + length``."""
        return self.start_offset + self.length

    @property
    def footnote_ref(self) -> str:
        """Footnote reference for this deletion, e.g. ``[^3]``."""
        return f"[^{self.sequence_number}]"

    @property
    def state(self) -> str:
        """Display state: ``"collapsed"`` or ``"expanded"``."""
        return "collapsed" if self.collapsed else "expanded"

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"Deletion(id={self.id!r}, n={self.sequence_number}, "
            f"text={self.deleted_text!r}, at={self.start_offset}, {self.state})"
        )
