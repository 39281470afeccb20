"""
collapsible_editor - A non-destructive deletion model for text editors.

Deleting a selection does not remove text. The selected span is recorded as
a deletion that the preview folds into a clickable ellipsis (or shows struck
through when expanded), and the Markdown export marks it inline and lists the
original text as a footnote.

Example:
    >>> from collapsible_editor import EditController, export_markdown
    >>> controller = EditController()
    >>> controller.text_changed("The quick brown fox")
    >>> result = controller.delete_range(4, 10)
    >>> print(export_markdown(controller.state))
    The [ … ]brown fox

    ## Footnotes
    [^1]: ~~quick ~~
"""

__version__ = "0.1.0"
__all__ = [
    "AnnotationStore",
    "EditorState",
    "EditController",
    "EditorConfig",
    "EventReplay",
    "Deletion",
    "Segment",
    "SegmentKind",
    "DisplaySegment",
    "FoldAnimationState",
    "CollapsibleError",
    "DeletionNotFoundError",
    "ValidationError",
    "DeleteResult",
    "KeyResult",
    "ToggleResult",
    "EventResult",
    "overlay_segments",
    "overlay_state",
    "reconstruct_text",
    "sort_for_overlay",
    "render_segments",
    "render_state",
    "render_html",
    "render_terminal",
    # Export functionality
    "generate_markdown_body",
    "generate_footnotes",
    "export_markdown",
    "write_markdown",
    "format_deletion_log",
    "export_deletions_json",
]

from .config import EditorConfig
from .controller import EditController
from .errors import CollapsibleError, DeletionNotFoundError, ValidationError
from .events import EventReplay

# Import export functionality
from .export import (
    export_deletions_json,
    export_markdown,
    format_deletion_log,
    generate_footnotes,
    generate_markdown_body,
    write_markdown,
)

# Import model classes
from .models.deletion import Deletion
from .models.segment import Segment, SegmentKind
from .overlay import overlay_segments, overlay_state, reconstruct_text, sort_for_overlay
from .rendering import (
    DisplaySegment,
    FoldAnimationState,
    render_html,
    render_segments,
    render_state,
    render_terminal,
)

# Import result types
from .results import DeleteResult, EventResult, KeyResult, ToggleResult
from .store import AnnotationStore, EditorState
