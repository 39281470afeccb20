"""
Result classes for editor operations.

This module provides result types that report what the edit controller
did with an input event and how each step of an event script went.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.deletion import Deletion


@dataclass
class DeleteResult:
    """Result of a range delete request.

    Attributes:
        deletion: The recorded deletion, or None when the request was rejected
        prevent_default: Whether the input surface must skip its own character
            removal. Always True for an intercepted delete key, even when
            nothing was recorded.
        reason: Why the request was rejected (None when a deletion was recorded)
    """

    deletion: "Deletion | None"
    prevent_default: bool = True
    reason: str | None = None

    @property
    def recorded(self) -> bool:
        """Whether a deletion was created."""
        return self.deletion is not None

    def __str__(self) -> str:
        """Get string representation of the result."""
        if self.deletion is None:
            return f"✗ delete rejected: {self.reason}"
        return f"✓ deleted [^{self.deletion.sequence_number}] {self.deletion.deleted_text!r}"


@dataclass
class KeyResult:
    """Result of a key press routed through the controller.

    Attributes:
        handled: Whether the controller intercepted the key
        prevent_default: Whether the input surface must suppress its default action
        delete: The delete result when the key was a delete key
    """

    handled: bool
    prevent_default: bool = False
    delete: DeleteResult | None = None


@dataclass
class ToggleResult:
    """Result of a toggle request.

    Attributes:
        deletion_id: The ID that was requested
        found: Whether a deletion with that ID exists
        collapsed: The new collapsed state (None when not found)
    """

    deletion_id: str
    found: bool
    collapsed: bool | None = None

    def __str__(self) -> str:
        """Get string representation of the result."""
        if not self.found:
            return f"○ toggle ignored: unknown deletion {self.deletion_id}"
        state = "collapsed" if self.collapsed else "expanded"
        return f"✓ deletion {self.deletion_id} {state}"


@dataclass
class EventResult:
    """Result of replaying a single scripted event.

    Attributes:
        success: Whether the event was applied without error
        event_type: Type of event (e.g., "text", "delete", "toggle")
        message: Human-readable message about the result
        error: Optional exception that occurred while applying the event
    """

    success: bool
    event_type: str
    message: str
    error: Exception | None = None

    def __str__(self) -> str:
        """Get string representation of the result."""
        status = "✓" if self.success else "✗"
        return f"{status} {self.event_type}: {self.message}"
