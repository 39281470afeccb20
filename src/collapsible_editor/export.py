"""
Export of a document with deletions.

This module writes the document to Markdown with every deletion replaced
inline, followed by a footnotes block that reveals the original deleted
text. It also provides a plain-text deletion log and a JSON dump of the
recorded deletions.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .config import EditorConfig
from .models.deletion import Deletion
from .overlay import overlay_segments
from .store import EditorState

logger = logging.getLogger(__name__)

MARKDOWN_MEDIA_TYPE = "text/markdown;charset=utf-8"


def generate_markdown_body(
    text: str, notes: Iterable[Deletion], config: EditorConfig | None = None
) -> str:
    """Render the document body with deletions substituted inline.

    Collapsed deletions become the redaction marker; expanded ones become
    the covered text wrapped in the strikethrough token.

    Example:
        >>> generate_markdown_body("The quick brown fox", [quick])
        'The [ … ]brown fox'
    """
    config = config or EditorConfig()
    parts: list[str] = []
    for segment in overlay_segments(text, notes):
        if not segment.is_span:
            parts.append(segment.text)
        elif segment.collapsed:
            parts.append(config.redaction_marker)
        else:
            parts.append(config.strike(segment.text))
    return "".join(parts)


def generate_footnotes(notes: Iterable[Deletion], config: EditorConfig | None = None) -> str:
    """Render one footnote line per deletion, by sequence number.

    Footnotes always show the text captured at deletion time, whatever the
    current collapse state. Returns an empty string when there are no
    deletions.
    """
    config = config or EditorConfig()
    ordered = sorted(notes, key=lambda d: d.sequence_number)
    return "\n".join(f"{d.footnote_ref}: {config.strike(d.deleted_text)}" for d in ordered)


def export_markdown(state: EditorState, config: EditorConfig | None = None) -> str:
    """Export the full Markdown document.

    Without deletions the export is exactly the document text. Otherwise
    the body is followed by a blank line, the footnotes heading, the
    footnote lines and a trailing newline.
    """
    config = config or EditorConfig()
    body = generate_markdown_body(state.document, state.deletions, config)
    footnotes = generate_footnotes(state.deletions, config)
    if footnotes:
        return f"{body}\n\n{config.footnotes_heading}\n{footnotes}\n"
    return body


def write_markdown(
    state: EditorState,
    path: str | Path | None = None,
    config: EditorConfig | None = None,
) -> Path:
    """Write the Markdown export to a file.

    Args:
        state: Editor state to export
        path: Destination file or directory. A directory (or None, meaning
            the current directory) receives ``config.export_filename``.
        config: Export configuration

    Returns:
        Path of the written file
    """
    config = config or EditorConfig()
    target = Path(path) if path is not None else Path.cwd()
    if target.is_dir():
        target = target / config.export_filename

    content = export_markdown(state, config)
    target.write_text(content, encoding="utf-8")
    logger.debug("Wrote %d chars of Markdown to %s", len(content), target)
    return target


def format_deletion_log(notes: Iterable[Deletion]) -> str:
    """Format the deletion log, one line per deletion by sequence number.

    Example:
        >>> print(format_deletion_log([quick]))
        [^1] @4–10 (collapsed)
    """
    ordered = sorted(notes, key=lambda d: d.sequence_number)
    if not ordered:
        return "No collapsed items yet."
    return "\n".join(
        f"{d.footnote_ref} @{d.start_offset}–{d.end_offset} ({d.state})" for d in ordered
    )


def _deletion_to_dict(deletion: Deletion) -> dict[str, Any]:
    """Convert a Deletion to a dictionary for JSON serialization."""
    return {
        "id": deletion.id,
        "sequence_number": deletion.sequence_number,
        "deleted_text": deletion.deleted_text,
        "start_offset": deletion.start_offset,
        "length": deletion.length,
        "created_at": deletion.created_at.isoformat(),
        "collapsed": deletion.collapsed,
    }


def export_deletions_json(state: EditorState, indent: int | None = 2) -> str:
    """Export the document and its deletions to JSON.

    Args:
        state: Editor state to export
        indent: JSON indentation level, or None for compact output

    Returns:
        JSON string with the document text and deletions by sequence number
    """
    ordered = sorted(state.deletions, key=lambda d: d.sequence_number)
    result = {
        "document": state.document,
        "total_deletions": len(ordered),
        "deletions": [_deletion_to_dict(d) for d in ordered],
    }
    return json.dumps(result, indent=indent, ensure_ascii=False)
