"""
Replay of scripted input events.

An event script is a YAML or JSON file holding an ``events`` list. Each
event is dispatched to the edit controller in order, which makes it
possible to reproduce an editing session from the command line.

Example YAML file:
    ```yaml
    events:
      - type: text
        text: "The quick brown fox"
      - type: delete
        start: 4
        end: 10
      - type: toggle
        sequence: 1
    ```
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .controller import EditController
from .errors import ValidationError
from .results import EventResult


def _require_int(event: dict[str, Any], key: str, default: int | None = None) -> int:
    value = event.get(key, default)
    if value is None:
        raise ValidationError(f"Missing required parameter: '{key}'")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Parameter '{key}' must be an integer")
    return value


def _optional_int(event: dict[str, Any], key: str) -> int | None:
    if event.get(key) is None:
        return None
    return _require_int(event, key)


class EventReplay:
    """Applies scripted events through an EditController.

    Example:
        >>> replay = EventReplay(EditController())
        >>> results = replay.apply_events([
        ...     {"type": "text", "text": "The quick brown fox"},
        ...     {"type": "delete", "start": 4, "end": 10},
        ... ])
        >>> print(f"Applied {sum(r.success for r in results)}/{len(results)} events")
    """

    def __init__(self, controller: EditController) -> None:
        self._controller = controller

    def apply_events(
        self, events: list[dict[str, Any]], stop_on_error: bool = False
    ) -> list[EventResult]:
        """Apply events in sequence.

        Args:
            events: List of event dictionaries, each with a ``type`` key
            stop_on_error: If True, stop processing on the first failure

        Returns:
            List of EventResult objects, one per processed event
        """
        results = []

        for i, event in enumerate(events):
            if (
                not isinstance(event, dict)
                or not isinstance(event.get("type"), str)
                or not event["type"]
            ):
                results.append(
                    EventResult(
                        success=False,
                        event_type="unknown",
                        message=f"Event {i}: Missing or invalid 'type' field",
                        error=ValidationError("Missing or invalid 'type' field"),
                    )
                )
                if stop_on_error:
                    break
                continue

            result = self._apply_single_event(event["type"], event)
            results.append(result)
            if not result.success and stop_on_error:
                break

        return results

    def _apply_single_event(self, event_type: str, event: dict[str, Any]) -> EventResult:
        """Dispatch one event to its handler."""
        handlers = {
            "text": self._handle_text,
            "select": self._handle_select,
            "key": self._handle_key,
            "delete": self._handle_delete,
            "toggle": self._handle_toggle,
        }

        handler = handlers.get(event_type)
        if handler is None:
            return EventResult(
                success=False,
                event_type=event_type,
                message=f"Unknown event type: {event_type}",
                error=ValidationError(f"Unknown event type: {event_type}"),
            )

        try:
            return handler(event_type, event)
        except ValidationError as e:
            return EventResult(success=False, event_type=event_type, message=str(e), error=e)
        except Exception as e:
            return EventResult(
                success=False, event_type=event_type, message=f"Error: {str(e)}", error=e
            )

    def _handle_text(self, event_type: str, event: dict[str, Any]) -> EventResult:
        """Handle a text replacement."""
        text = event.get("text")
        if not isinstance(text, str):
            raise ValidationError("Parameter 'text' must be a string")
        caret = _optional_int(event, "caret")
        self._controller.text_changed(text, caret=caret if caret is not None else len(text))
        return EventResult(
            success=True, event_type=event_type, message=f"Document is {len(text)} chars"
        )

    def _handle_select(self, event_type: str, event: dict[str, Any]) -> EventResult:
        """Handle a selection change."""
        start = _require_int(event, "start")
        end = _optional_int(event, "end")
        self._controller.selection_changed(start, end)
        return EventResult(
            success=True, event_type=event_type, message=f"Caret at {self._controller.caret}"
        )

    def _handle_key(self, event_type: str, event: dict[str, Any]) -> EventResult:
        """Handle a key press."""
        key = event.get("key")
        if not isinstance(key, str) or not key:
            raise ValidationError("Parameter 'key' must be a non-empty string")
        result = self._controller.key_pressed(
            key, _optional_int(event, "start"), _optional_int(event, "end")
        )
        if result.delete is None:
            return EventResult(success=True, event_type=event_type, message=f"Passed '{key}'")
        return EventResult(success=True, event_type=event_type, message=str(result.delete))

    def _handle_delete(self, event_type: str, event: dict[str, Any]) -> EventResult:
        """Handle a range delete request."""
        result = self._controller.delete_range(
            _require_int(event, "start"), _require_int(event, "end")
        )
        return EventResult(success=True, event_type=event_type, message=str(result))

    def _handle_toggle(self, event_type: str, event: dict[str, Any]) -> EventResult:
        """Handle a toggle request by ``id`` or ``sequence``."""
        deletion_id = event.get("id")
        if deletion_id is None:
            sequence = _require_int(event, "sequence")
            deletion = self._controller.store.by_sequence(sequence)
            if deletion is None:
                return EventResult(
                    success=False,
                    event_type=event_type,
                    message=f"No deletion with sequence number {sequence}",
                )
            deletion_id = deletion.id

        result = self._controller.toggle(str(deletion_id))
        return EventResult(success=result.found, event_type=event_type, message=str(result))

    def apply_event_file(
        self, path: str | Path, format: str = "yaml", stop_on_error: bool = False
    ) -> list[EventResult]:
        """Apply events from a YAML or JSON file.

        Args:
            path: Path to the event script
            format: File format - "yaml" or "json" (default: "yaml")
            stop_on_error: If True, stop processing on the first failure

        Returns:
            List of EventResult objects, one per processed event

        Raises:
            ValidationError: If the file cannot be parsed or has an invalid format
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path)

        if not file_path.exists():
            raise FileNotFoundError(f"Event file not found: {path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                if format == "yaml":
                    data = yaml.safe_load(f)
                elif format == "json":
                    data = json.load(f)
                else:
                    raise ValidationError(f"Unsupported format: {format}")
        except yaml.YAMLError as e:
            raise ValidationError(f"Failed to parse YAML file: {e}") from e
        except json.JSONDecodeError as e:
            raise ValidationError(f"Failed to parse JSON file: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError("Event file must contain a dictionary/object")
        if "events" not in data:
            raise ValidationError("Event file must contain an 'events' key")

        events = data["events"]
        if not isinstance(events, list):
            raise ValidationError("'events' must be a list")

        return self.apply_events(events, stop_on_error=stop_on_error)
