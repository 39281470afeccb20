"""
Segment model for the overlay of deletions onto a document.

Segments are plain data. They carry no behaviour; the presentation layer
decides what a span segment looks like and what activating it does.
"""

from dataclasses import dataclass
from enum import Enum


class SegmentKind(Enum):
    """Kinds of overlay segments.

    Attributes:
        LITERAL: Document text outside every deletion span
        SPAN: Document text covered by a deletion
    """

    LITERAL = "literal"
    SPAN = "span"


@dataclass(frozen=True)
class Segment:
    """A piece of the overlay output.

    Attributes:
        kind: Literal text or a deletion span
        text: The covered slice of the document (may be empty for a span
            whose offsets fall past the end of the document)
        start: Offset of the slice in the document
        end: Offset just past the slice
        deletion_id: Owning deletion for span segments, None for literals
        sequence_number: Footnote number of the owning deletion
        collapsed: Display state of the owning deletion
    """

    kind: SegmentKind
    text: str
    start: int
    end: int
    deletion_id: str | None = None
    sequence_number: int | None = None
    collapsed: bool | None = None

    @property
    def is_span(self) -> bool:
        """Whether this segment belongs to a deletion."""
        return self.kind is SegmentKind.SPAN
