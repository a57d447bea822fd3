"""Shared test fixtures and utilities.

This module provides common builders and helpers to simplify testing
across the inclusivo test suite.
"""

from __future__ import annotations

import datetime as _dt
import io
import os
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from typing import Optional

# 2024-01-15 is a Monday
MONDAY = _dt.date(2024, 1, 15)


def at(day_offset: int, hhmm: str) -> _dt.datetime:
    """Datetime ``day_offset`` days after MONDAY at ``HH:MM``."""
    h, m = (int(p) for p in hhmm.split(":"))
    return _dt.datetime.combine(MONDAY + _dt.timedelta(days=day_offset), _dt.time(h, m))


# -----------------------------------------------------------------------------
# YAML config helpers
# -----------------------------------------------------------------------------


def write_yaml(data, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    """Write data to a temporary YAML file, return the path."""
    import yaml

    td = dir or tempfile.mkdtemp()
    p = os.path.join(td, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_output():
    """Capture stdout and stderr; yields (out, err) buffers."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err


# -----------------------------------------------------------------------------
# Domain builders
# -----------------------------------------------------------------------------


def make_session(id: str = "1", day: str = "Monday", start: str = "14:00", end: str = "16:00", **kwargs):
    from inclusivo.models import ClassSession

    fields = {
        "subject": f"Subject {id}",
        "professor": "Dr. Test",
        "room": "101",
        "building": "Building A",
    }
    fields.update(kwargs)
    return ClassSession(id=id, start_time=start, end_time=end, day=day, **fields)


def make_location(id: str, building: str = "Building A", floor: int = 1, elevator: bool = True, **kwargs):
    from inclusivo.models import Location, LocationAccessibility

    fields = {
        "name": f"Place {id}",
        "type": "classroom",
        "room": None,
        "accessibility": LocationAccessibility(
            wheelchair_accessible=kwargs.pop("wheelchair", True),
            has_elevator=elevator,
            has_braille_signage=kwargs.pop("braille", False),
        ),
    }
    fields.update(kwargs)
    return Location(id=id, building=building, floor=floor, **fields)


def make_app(now: Optional[_dt.datetime] = None, engine=None, vibrator=None, store=None, **config):
    """App wired with bundled data, an in-memory store and a frozen clock."""
    from inclusivo.app import build_app
    from inclusivo.config import config_from_mapping
    from inclusivo.storage import MemoryKeyValueStore
    from tests.fakes import FakeVoiceEngine, FrozenClock

    cfg = config_from_mapping({"settings_dir": tempfile.mkdtemp(), "ocr_delay_seconds": 0.01, **config})
    return build_app(
        cfg,
        store=store if store is not None else MemoryKeyValueStore(),
        clock=FrozenClock(now or at(0, "13:00")),
        engine=engine if engine is not None else FakeVoiceEngine(auto_complete=True),
        vibrator=vibrator,
    )
