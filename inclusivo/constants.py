"""Inclusivo module constants.

Persistence keys, route template distances, presentation lookup tables and
timing defaults shared by the services and the CLI.
"""

from __future__ import annotations

APP_ID = "inclusivo"
CONFIG_ENV_VAR = "INCLUSIVO_CONFIG"

# Persisted key-value entries (values are JSON text)
KEY_PROFILE = "profile"
KEY_VOICE = "voice-settings"
KEY_VISUAL = "visual-settings"
KEY_ACCESSIBILITY = "accessibility-settings"
KEY_NOTIFICATIONS = "notification-settings"
KEY_AUTH = "auth-flag"

# Consumers poll next-class data on this cadence; the engine holds no timers
SCHEDULE_REFRESH_SECONDS = 60

# Route template (meters); walking speed in meters per minute
WALKING_SPEED_M_PER_MIN = 50
STEP_LEAVE_ORIGIN = 10
STEP_TO_BUILDING = 120
STEP_BUILDING_ENTRANCE = 15
STEP_ELEVATOR = 20
STEP_STAIRS = 25
STEP_CORRIDOR_TO_ROOM = 40
FAVORITES_LIMIT = 5

# Speech
DEFAULT_LOCALE = "en-US"
DOCUMENT_LOCALES = {
    "es": "es-ES",
    "en": "en-US",
}

# OCR stub
OCR_DELAY_SECONDS = 2.0
OCR_STUB_TEXT = (
    "Text extracted from the document by OCR. "
    "This is an example of optical character recognition."
)
OCR_STUB_CONFIDENCE = 0.95
OCR_STUB_LANGUAGE = "en"

# Presentation (global flags applied from visual settings)
CLASS_HIGH_CONTRAST = "high-contrast"
CLASS_REDUCE_MOTION = "reduce-motion"
VAR_FONT_SIZE = "--user-font-size"

# Notification priority -> presentation color token
PRIORITY_COLORS = {
    "low": "success",
    "medium": "info",
    "high": "warning",
    "critical": "destructive",
}

# Notification type -> icon name
TYPE_ICONS = {
    "academic": "Calendar",
    "grade": "Star",
    "emergency": "AlertTriangle",
    "reminder": "Clock",
    "material": "FileText",
}

# Haptic patterns (milliseconds)
HAPTIC_TAP = 50
HAPTIC_SUCCESS = (100, 50, 100)
HAPTIC_ERROR = (200, 100, 200)
HAPTIC_LONG_PRESS = (50, 50, 50)
HAPTIC_CONFIRM = 200
