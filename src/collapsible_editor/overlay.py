"""
Overlay of deletions onto a document.

Both the preview renderer and the Markdown exporter walk the document the
same way: deletions are sorted by start offset (longest first on ties) and
a cursor moves through the text, emitting literal text between spans and
one span segment per deletion. The two projections only differ in what
they substitute for a span.

Overlapping deletions are never rendered as overlapping. A span that
starts before the cursor is truncated to begin at the cursor, and a span
that lies entirely behind the cursor is absorbed by the earlier one.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models.deletion import Deletion
from .models.segment import Segment, SegmentKind
from .store import EditorState


def sort_for_overlay(notes: Iterable[Deletion]) -> list[Deletion]:
    """Sort deletions into overlay order.

    Start offset ascending, then length descending so the longest of several
    deletions starting at the same point wins. Sequence number breaks any
    remaining tie.
    """
    return sorted(notes, key=lambda d: (d.start_offset, -d.length, d.sequence_number))


def overlay_segments(text: str, notes: Iterable[Deletion]) -> list[Segment]:
    """Project deletions onto ``text`` as an ordered list of segments.

    The covered text of every segment, concatenated in order, is exactly
    ``text``. Deletion offsets are clamped into the text, so a deletion
    captured against a longer version of the document yields a short or
    empty span at the end instead of an error.

    Args:
        text: Document to render against
        notes: Deletions to overlay (any order)

    Returns:
        Literal and span segments in document order

    Example:
        >>> quick = Deletion(id="d1", sequence_number=1, deleted_text="quick ", start_offset=4)
        >>> segs = overlay_segments("The quick brown fox", [quick])
        >>> [s.text for s in segs]
        ['The ', 'quick ', 'brown fox']
    """
    size = len(text)
    segments: list[Segment] = []
    cursor = 0

    for deletion in sort_for_overlay(notes):
        start = max(0, min(deletion.start_offset, size))
        overlapped = start < cursor
        start = max(start, cursor)
        end = max(start, min(deletion.end_offset, size))

        if overlapped and start == end:
            # Fully inside an earlier span
            continue

        if start > cursor:
            segments.append(
                Segment(SegmentKind.LITERAL, text[cursor:start], start=cursor, end=start)
            )

        segments.append(
            Segment(
                SegmentKind.SPAN,
                text[start:end],
                start=start,
                end=end,
                deletion_id=deletion.id,
                sequence_number=deletion.sequence_number,
                collapsed=deletion.collapsed,
            )
        )
        cursor = end

    if cursor < size:
        segments.append(Segment(SegmentKind.LITERAL, text[cursor:], start=cursor, end=size))

    return segments


def overlay_state(state: EditorState) -> list[Segment]:
    """Overlay the state's deletions onto its current document."""
    return overlay_segments(state.document, state.deletions)


def reconstruct_text(segments: Iterable[Segment]) -> str:
    """Join the covered text of segments, ignoring collapse state."""
    return "".join(segment.text for segment in segments)
