"""
Custom exception classes for the collapsible_editor package.

Core editing operations never raise for bad offsets or empty selections;
they clamp or ignore instead. These exceptions cover the strict lookup API
and the loading of configuration and event script files.
"""


class CollapsibleError(Exception):
    """Base exception for all collapsible_editor errors."""

    pass


class DeletionNotFoundError(CollapsibleError):
    """Raised when a deletion cannot be found by ID.

    Only the strict lookup raises this. Toggling an unknown ID is a no-op.

    Attributes:
        deletion_id: The ID that was searched for
        available_ids: List of valid IDs in the store
    """

    def __init__(self, deletion_id: str, available_ids: list[str] | None = None) -> None:
        self.deletion_id = str(deletion_id)
        self.available_ids = available_ids or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message with available IDs."""
        msg = f"Deletion with ID '{self.deletion_id}' not found"
        if self.available_ids:
            ids_str = ", ".join(self.available_ids)
            msg += f"\n\nAvailable deletion IDs: {ids_str}"
        else:
            msg += "\n\nNo deletions have been recorded"
        return msg


class ValidationError(CollapsibleError):
    """Raised when a configuration or event script is malformed.

    Attributes:
        errors: List of specific validation error messages (optional)
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Append the individual problems, one per line."""
        if not self.errors:
            return message
        details = "\n".join(f"  • {error}" for error in self.errors)
        return f"{message}\n{details}"
