"""Global presentation flags driven by the visual settings.

The UI layer reads these (CSS-like class names and variables on the root
element); the core only sets them.
"""
from __future__ import annotations

from typing import Dict, Set

from . import constants as C
from .settings import VisualSettings


class PresentationState:
    """Root-level presentation classes and variables shared by every screen."""

    def __init__(self) -> None:
        self.classes: Set[str] = set()
        self.variables: Dict[str, str] = {}

    @property
    def high_contrast(self) -> bool:
        return C.CLASS_HIGH_CONTRAST in self.classes

    @property
    def reduce_motion(self) -> bool:
        return C.CLASS_REDUCE_MOTION in self.classes

    @property
    def font_scale(self) -> float:
        return float(self.variables.get(C.VAR_FONT_SIZE, "1.0"))

    def toggle(self, name: str, on: bool) -> None:
        if on:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    def apply_visual_settings(self, visual: VisualSettings) -> None:
        self.toggle(C.CLASS_HIGH_CONTRAST, visual.high_contrast)
        self.toggle(C.CLASS_REDUCE_MOTION, not visual.animations_enabled)
        self.variables[C.VAR_FONT_SIZE] = str(visual.font_size)
