"""
Data model classes for collapsible_editor.

These classes describe recorded deletions and the segments produced when
deletions are overlaid onto a document.
"""

from collapsible_editor.models.deletion import Deletion
from collapsible_editor.models.segment import Segment, SegmentKind

__all__ = [
    "Deletion",
    "Segment",
    "SegmentKind",
]
