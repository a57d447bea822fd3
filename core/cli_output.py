"""CLI output formatting utilities.

Renders command results as text, JSON, YAML or a simple table. Dataclasses,
enums and datetimes are normalized to plain values first so the JSON and
YAML emitters never see rich objects.
"""
from __future__ import annotations

import datetime as _dt
import json
import sys
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO


class OutputFormat(str, Enum):
    """Output format options."""
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False
    quiet: bool = False
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        return self.file or sys.stdout


def normalize(data: Any) -> Any:
    """Convert dataclasses/enums/datetimes into JSON- and YAML-safe values."""
    if is_dataclass(data) and not isinstance(data, type):
        return {f.name: normalize(getattr(data, f.name)) for f in fields(data)}
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, (_dt.datetime, _dt.date)):
        return data.isoformat()
    if isinstance(data, dict):
        return {str(k): normalize(v) for k, v in data.items()}
    if isinstance(data, (list, tuple, set, frozenset)):
        return [normalize(v) for v in data]
    return data


class OutputWriter:
    """Handles formatted output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    @property
    def structured(self) -> bool:
        """True when the format is machine-readable (JSON/YAML)."""
        return self.config.format in (OutputFormat.JSON, OutputFormat.YAML)

    def print(self, *args, **kwargs) -> None:
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        print(f"Warning: {message}", file=sys.stderr)

    def print_data(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print data in the configured format."""
        fmt = self.config.format
        if fmt == OutputFormat.JSON:
            self._print_json(data)
        elif fmt == OutputFormat.YAML:
            self._print_yaml(data)
        elif fmt == OutputFormat.TABLE:
            self._print_table(data, headers)
        else:
            self._print_text(data)

    def print_dict(self, data: Dict[str, Any], *, separator: str = ": ", indent: int = 0) -> None:
        if self.structured:
            self.print_data(data)
            return
        prefix = " " * indent
        for key, value in data.items():
            self.print(f"{prefix}{key}{separator}{value}")

    def _print_json(self, data: Any) -> None:
        self.print(json.dumps(normalize(data), indent=2, ensure_ascii=False, default=str))

    def _print_yaml(self, data: Any) -> None:
        import yaml

        self.print(
            yaml.safe_dump(normalize(data), default_flow_style=False, sort_keys=False, allow_unicode=True),
            end="",
        )

    def _print_table(self, data: Any, headers: Optional[List[str]] = None) -> None:
        rows = normalize(data)
        if not isinstance(rows, list):
            rows = [rows]
        if not rows:
            return
        if headers is None and isinstance(rows[0], dict):
            headers = list(rows[0].keys())
        if not headers:
            for row in rows:
                self.print(" | ".join(str(v) for v in row) if isinstance(row, list) else str(row))
            return

        str_rows = [
            [str(row.get(h, "")) for h in headers] if isinstance(row, dict) else [str(v) for v in row]
            for row in rows
        ]
        widths = [len(h) for h in headers]
        for str_row in str_rows:
            for i, val in enumerate(str_row[: len(widths)]):
                widths[i] = max(widths[i], len(val))

        header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
        self.print(header_line)
        self.print("-" * len(header_line))
        for str_row in str_rows:
            self.print(" | ".join(v.ljust(widths[i]) for i, v in enumerate(str_row[: len(widths)])))

    def _print_text(self, data: Any) -> None:
        if isinstance(data, str):
            self.print(data)
        elif isinstance(data, dict):
            self.print_dict(data)
        elif isinstance(data, (list, tuple)):
            for item in data:
                self.print(item)
        elif is_dataclass(data):
            self.print_dict(normalize(data))
        else:
            self.print(str(data))
