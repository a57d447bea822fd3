"""Inclusivo package.

Domain services and settings state for a student accessibility app:
weekly class schedule with next-class lookup, indoor route steps between
campus locations, notifications, scanned documents, and the persisted
accessibility settings that drive speech and haptic feedback.

Public CLI entry lives in inclusivo.cli (``python -m inclusivo``).
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
