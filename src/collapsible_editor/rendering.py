"""
Preview rendering of a document with folded deletions.

Turns overlay segments into display segments: literal text, a placeholder
glyph for collapsed deletions, or struck-through text for expanded ones.
Display segments are data only. A front end binds activation of a
placeholder or struck span to ``EditController.toggle`` using the
segment's ``deletion_id``.

Two concrete front ends are provided: an HTML fragment built with
lxml and a terminal rendering styled with typer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import typer
from lxml import html as lxml_html
from lxml.html import builder as E

from .config import EditorConfig
from .models.deletion import Deletion
from .models.segment import Segment
from .overlay import overlay_segments
from .store import EditorState


class FoldAnimationState:
    """Presentation-only record of deletions that have just been collapsed.

    A freshly collapsed placeholder starts as wide as the text it hides and
    shrinks to a single cell. The mark is set when a deletion is created or
    collapsed and cleared on the next ``tick()``. None of this touches the
    deletions themselves or the overlay.
    """

    def __init__(self) -> None:
        self._folding: set[str] = set()

    def mark(self, deletion_id: str) -> None:
        """Start the fold animation for a deletion."""
        self._folding.add(deletion_id)

    def tick(self) -> None:
        """Advance to the next frame, ending every running fold."""
        self._folding.clear()

    def is_folding(self, deletion_id: str) -> bool:
        return deletion_id in self._folding

    def placeholder_width(self, deletion: Deletion, max_width: int = 40) -> int:
        """Width of the placeholder in character cells."""
        if self.is_folding(deletion.id):
            return max(1, min(max_width, deletion.length))
        return 1


@dataclass(frozen=True)
class DisplaySegment:
    """A piece of the rendered preview.

    Attributes:
        kind: ``"text"``, ``"placeholder"`` or ``"struck"``
        text: What is shown: the literal text, the placeholder glyph, or
            the struck-through covered text
        deletion_id: Owning deletion (None for text)
        sequence_number: Footnote number of the owning deletion
        title: Tooltip for the activation target
        aria_label: Accessible label for the activation target
        width: Placeholder width in character cells (placeholders only)
    """

    kind: str
    text: str
    deletion_id: str | None = None
    sequence_number: int | None = None
    title: str | None = None
    aria_label: str | None = None
    width: int | None = field(default=None, compare=False)

    @property
    def interactive(self) -> bool:
        """Whether activating this segment toggles a deletion."""
        return self.deletion_id is not None


def _display_segment(
    segment: Segment,
    deletion: Deletion | None,
    config: EditorConfig,
    animation: FoldAnimationState | None,
) -> DisplaySegment:
    if not segment.is_span:
        return DisplaySegment(kind="text", text=segment.text)

    n = segment.sequence_number
    if segment.collapsed:
        width = 1
        if animation is not None and deletion is not None:
            width = animation.placeholder_width(deletion, config.max_fold_width)
        return DisplaySegment(
            kind="placeholder",
            text=config.placeholder_glyph,
            deletion_id=segment.deletion_id,
            sequence_number=n,
            title=f"Click to expand hidden text [^{n}]",
            aria_label=f"Expand deletion {n}",
            width=width,
        )
    return DisplaySegment(
        kind="struck",
        text=segment.text,
        deletion_id=segment.deletion_id,
        sequence_number=n,
        title=f"Click to collapse text [^{n}]",
        aria_label=f"Collapse deletion {n}",
    )


def render_segments(
    text: str,
    notes: Iterable[Deletion],
    config: EditorConfig | None = None,
    animation: FoldAnimationState | None = None,
) -> list[DisplaySegment]:
    """Render a document and its deletions as display segments.

    Args:
        text: Document to render
        notes: Deletions to fold into the document
        config: Glyph configuration (defaults to EditorConfig())
        animation: Optional fold animation state for placeholder widths

    Returns:
        Display segments in document order
    """
    config = config or EditorConfig()
    notes = list(notes)
    by_id = {d.id: d for d in notes}
    return [
        _display_segment(
            segment,
            by_id.get(segment.deletion_id) if segment.deletion_id else None,
            config,
            animation,
        )
        for segment in overlay_segments(text, notes)
    ]


def render_state(
    state: EditorState,
    config: EditorConfig | None = None,
    animation: FoldAnimationState | None = None,
) -> list[DisplaySegment]:
    """Render the current document of an editor state."""
    return render_segments(state.document, state.deletions, config, animation)


def render_html(segments: Iterable[DisplaySegment]) -> str:
    """Render display segments as an HTML fragment.

    Text is whitespace-preserving. Every deletion becomes a ``<span>`` with
    class ``deletion collapsed`` or ``deletion expanded`` and a
    ``data-deletion-id`` attribute for the front end to bind clicks to.
    """
    children: list = []
    for seg in segments:
        if seg.kind == "text":
            children.append(seg.text)
            continue

        attrs = {
            "data-deletion-id": seg.deletion_id or "",
            "title": seg.title or "",
            "aria-label": seg.aria_label or "",
        }
        if seg.kind == "placeholder":
            attrs["class"] = "deletion collapsed"
            attrs["style"] = f"display: inline-block; width: {seg.width or 1}ch"
        else:
            attrs["class"] = "deletion expanded"
            attrs["style"] = "text-decoration: line-through"
        children.append(E.SPAN(attrs, seg.text))

    root = E.DIV({"class": "preview", "style": "white-space: pre-wrap"}, *children)
    return lxml_html.tostring(root, encoding="unicode")


def render_terminal(segments: Iterable[DisplaySegment], color: bool = True) -> str:
    """Render display segments for a terminal.

    Expanded deletions are struck through and placeholders dimmed. With
    ``color=False`` struck text falls back to the ``~~`` markers so the
    result stays readable without ANSI support.
    """
    parts: list[str] = []
    for seg in segments:
        if seg.kind == "text":
            parts.append(seg.text)
        elif seg.kind == "placeholder":
            parts.append(typer.style(seg.text, dim=True) if color else seg.text)
        elif color:
            parts.append(typer.style(seg.text, strikethrough=True))
        else:
            parts.append(f"~~{seg.text}~~")
    return "".join(parts)
