"""Configuration normalization.

``normalize`` is total: any mapping (or Configuration, or None) comes back as a
Configuration with every field present and in range. It is idempotent.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from .config_model import (
    DEFAULT_DISPLAY_TIME,
    MAX_DISPLAY_TIME,
    MIN_DISPLAY_TIME,
    Configuration,
    Corner,
    NotificationKind,
    Theme,
)

_KNOWN_FIELDS = ("theme", "display_time", "corner", "custom_images")
_THEMES = {theme.value for theme in Theme}
_CORNERS = {corner.value for corner in Corner}


def normalize(raw) -> Configuration:
    """Return a normalized copy of ``raw``; never raises."""
    if isinstance(raw, Configuration):
        data = raw.to_dict()
    elif isinstance(raw, Mapping):
        data = dict(raw)
    else:
        data = {}

    extras = {key: value for key, value in data.items() if key not in _KNOWN_FIELDS}

    return Configuration(
        theme=_choice(data.get("theme"), _THEMES, Theme.DARK.value),
        display_time=_display_time(data.get("display_time")),
        corner=_choice(data.get("corner"), _CORNERS, Corner.BOTTOM_RIGHT.value),
        custom_images=_custom_images(data.get("custom_images")),
        extras=extras,
    )


def _choice(value, allowed: set[str], default: str) -> str:
    # Enum members are str subclasses; store the plain value.
    value = getattr(value, "value", value)
    if not isinstance(value, str) or value not in allowed:
        return default
    return str(value)


def _display_time(value) -> int:
    if isinstance(value, bool) or value is None:
        seconds = DEFAULT_DISPLAY_TIME
    elif isinstance(value, int):
        seconds = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            number = math.nan
        seconds = DEFAULT_DISPLAY_TIME if not math.isfinite(number) else int(number)
    return max(MIN_DISPLAY_TIME, min(MAX_DISPLAY_TIME, seconds))


def _custom_images(value) -> dict[str, str]:
    images = dict(value) if isinstance(value, Mapping) else {}
    for kind in NotificationKind:
        path = images.get(kind.value)
        images[kind.value] = str(path) if path else ""
    return images
