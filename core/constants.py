"""Shared constants and config-path resolution."""

from __future__ import annotations

import os
from typing import List, Optional

# -----------------------------------------------------------------------------
# Config roots
# -----------------------------------------------------------------------------


def config_roots() -> List[str]:
    """Return ordered list of config root directories (XDG first)."""
    roots: List[str] = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        roots.append(os.path.expanduser(xdg))
    roots.append(os.path.expanduser("~/.config"))
    # Dedupe while preserving order
    seen: set[str] = set()
    unique: List[str] = []
    for r in roots:
        if r and r not in seen:
            seen.add(r)
            unique.append(r)
    return unique


def app_config_paths(app_id: str, env_var: Optional[str] = None, filename: str = "config.yaml") -> List[str]:
    """Return ordered candidate config file paths for an app.

    Resolution order: environment override > each config root.
    """
    paths: List[str] = []
    if env_var:
        env_path = os.environ.get(env_var)
        if env_path:
            paths.append(os.path.expanduser(env_path))
    for root in config_roots():
        paths.append(os.path.join(root, app_id, filename))
    return paths


def app_data_dir(app_id: str, name: str) -> str:
    """Default per-app state directory under the first config root."""
    return os.path.join(config_roots()[0], app_id, name)

