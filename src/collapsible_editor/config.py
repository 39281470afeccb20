"""
Editor configuration.

Holds the glyphs and markers used by the preview and the Markdown export,
the keys treated as "delete", and the default download filename. The
configuration is passed explicitly to the components that need it.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ValidationError


@dataclass
class EditorConfig:
    """Configuration for rendering and export.

    Attributes:
        placeholder_glyph: Shown in the preview in place of a collapsed span
        redaction_marker: Written to the export in place of a collapsed span
        strike_token: Wraps struck-through text in the export (both sides)
        footnotes_heading: Heading line that opens the footnotes block
        delete_keys: Key names the controller intercepts as a range delete
        export_filename: Default filename for the downloaded export
        max_fold_width: Upper bound, in character cells, of the placeholder
            width while the fold animation is running
    """

    placeholder_glyph: str = "…"
    redaction_marker: str = "[ … ]"
    strike_token: str = "~~"
    footnotes_heading: str = "## Footnotes"
    delete_keys: tuple[str, ...] = ("Backspace",)
    export_filename: str = "draft.md"
    max_fold_width: int = 40

    def strike(self, text: str) -> str:
        """Wrap text in the strikethrough token."""
        return f"{self.strike_token}{text}{self.strike_token}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditorConfig:
        """Build a configuration from a mapping of overrides.

        Args:
            data: Field names mapped to values. Missing fields keep their defaults.

        Returns:
            EditorConfig with the overrides applied

        Raises:
            ValidationError: If a key is unknown or a value has the wrong type
        """
        known = {f.name: f for f in fields(cls)}
        errors: list[str] = []
        values: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                errors.append(f"Unknown option '{key}'")
                continue
            if key == "delete_keys":
                if isinstance(value, str):
                    value = [value]
                if not isinstance(value, list | tuple) or not all(
                    isinstance(k, str) for k in value
                ):
                    errors.append("'delete_keys' must be a string or a list of strings")
                    continue
                values[key] = tuple(value)
            elif key == "max_fold_width":
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    errors.append("'max_fold_width' must be a positive integer")
                    continue
                values[key] = value
            else:
                if not isinstance(value, str):
                    errors.append(f"'{key}' must be a string")
                    continue
                values[key] = value

        if errors:
            raise ValidationError("Invalid editor configuration", errors)
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> EditorConfig:
        """Load a configuration from a YAML file.

        An empty file yields the default configuration.

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the file cannot be parsed or has invalid options
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"Failed to parse YAML file: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError("Config file must contain a dictionary/object")
        return cls.from_dict(data)
