"""YAML application config: where settings live and which mock data to load."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from core.cli_errors import ConfigError
from core.constants import app_config_paths, app_data_dir
from core.yamlio import load_config

from . import constants as C

LOG = logging.getLogger(__name__)


@dataclass
class AppConfig:
    settings_dir: Path
    locale: str = C.DEFAULT_LOCALE
    roster: Optional[Path] = None
    locations: Optional[Path] = None
    notifications: Optional[Path] = None
    documents: Optional[Path] = None
    ocr_delay_seconds: float = C.OCR_DELAY_SECONDS
    speech: bool = True
    source: Optional[Path] = None


def default_settings_dir() -> Path:
    return Path(app_data_dir(C.APP_ID, "settings"))


def resolve_config_path(explicit: Optional[str] = None) -> Optional[Path]:
    """First existing candidate: explicit path, env var, then config roots."""
    if explicit:
        return Path(os.path.expanduser(explicit))
    for candidate in app_config_paths(C.APP_ID, env_var=C.CONFIG_ENV_VAR):
        if os.path.exists(candidate):
            return Path(candidate)
    return None


def _optional_path(data: Dict[str, Any], key: str, base: Optional[Path]) -> Optional[Path]:
    raw = data.get(key)
    if raw in (None, ""):
        return None
    p = Path(os.path.expanduser(str(raw)))
    if not p.is_absolute() and base is not None:
        p = base / p
    return p


def config_from_mapping(data: Any, source: Optional[Path] = None) -> AppConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {source}")
    base = source.parent if source else None
    try:
        delay = float(data.get("ocr_delay_seconds", C.OCR_DELAY_SECONDS))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"ocr_delay_seconds must be a number: {exc}") from exc
    if delay < 0:
        raise ConfigError("ocr_delay_seconds must not be negative")
    speech = data.get("speech", True)
    if not isinstance(speech, bool):
        raise ConfigError("speech must be true or false")

    return AppConfig(
        settings_dir=_optional_path(data, "settings_dir", base) or default_settings_dir(),
        locale=str(data.get("locale") or C.DEFAULT_LOCALE),
        roster=_optional_path(data, "roster", base),
        locations=_optional_path(data, "locations", base),
        notifications=_optional_path(data, "notifications", base),
        documents=_optional_path(data, "documents", base),
        ocr_delay_seconds=delay,
        speech=speech,
        source=source,
    )


def load_app_config(explicit: Optional[str] = None) -> AppConfig:
    path = resolve_config_path(explicit)
    if path is None:
        LOG.debug("No config file found; using defaults")
        return config_from_mapping({})
    if explicit and not path.exists():
        raise ConfigError(f"Config file not found: {path}", hint="Check the --config path")
    try:
        data = load_config(path)
    except Exception as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    LOG.debug("Loaded config from %s", path)
    return config_from_mapping(data, source=path)
