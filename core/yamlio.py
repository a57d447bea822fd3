"""Shared YAML read helpers for config and bundled data files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

__all__ = ["load_config", "load_mapping", "Pathish"]

Pathish = Union[str, Path]


def _require_yaml():
    try:
        import yaml  # type: ignore

        return yaml
    except Exception as exc:  # pragma: no cover - runtime guard
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml") from exc


def _read_yaml(path: Pathish) -> Any:
    yaml = _require_yaml()
    text = Path(path).read_text(encoding="utf-8")
    if not text.strip():
        return None
    return yaml.safe_load(text)


def load_config(path: Optional[Pathish]) -> Dict[str, Any]:
    """Load a YAML file into a dict; returns {} if missing/empty."""
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    data = _read_yaml(p)
    if data is None:
        return {}
    return data


def load_mapping(path: Pathish) -> Dict[str, Any]:
    """Load a YAML file that must exist and hold a mapping at the root.

    Raises:
        FileNotFoundError: the file is missing.
        ValueError: the root is not a mapping.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"YAML file not found: {p}")
    data = _read_yaml(p)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping (dict): {p}")
    return data

