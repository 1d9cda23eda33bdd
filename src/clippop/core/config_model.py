"""Core configuration model."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum


MIN_DISPLAY_TIME = 1
MAX_DISPLAY_TIME = 60
DEFAULT_DISPLAY_TIME = 3


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"
    CUSTOM = "custom"


class Corner(str, Enum):
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"
    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"


class NotificationKind(str, Enum):
    COPY = "copy"
    CLEAR = "clear"

    @classmethod
    def parse(cls, value) -> "NotificationKind":
        """Return the kind for ``value``; raises ValueError for anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown notification kind: {value!r}") from None


@dataclass
class Configuration:
    """User-facing overlay configuration.

    Instances handed out by the core are always normalized
    (see :func:`clippop.core.normalizer.normalize`).
    """

    theme: str = Theme.DARK.value
    display_time: int = DEFAULT_DISPLAY_TIME
    corner: str = Corner.BOTTOM_RIGHT.value
    custom_images: dict[str, str] = field(
        default_factory=lambda: {NotificationKind.COPY.value: "", NotificationKind.CLEAR.value: ""}
    )
    extras: dict = field(default_factory=dict)

    def image_for(self, kind: NotificationKind | str) -> str:
        return self.custom_images.get(NotificationKind.parse(kind).value, "")

    def clone(self) -> "Configuration":
        """Deep copy; the clone never shares mutable state with self."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Wire/persistence shape, unknown fields included."""
        data = copy.deepcopy(self.extras)
        data.update(
            {
                "theme": self.theme,
                "display_time": self.display_time,
                "corner": self.corner,
                "custom_images": dict(self.custom_images),
            }
        )
        return data


DEFAULT_CONFIG = {
    "theme": Theme.DARK.value,
    "display_time": DEFAULT_DISPLAY_TIME,
    "corner": Corner.BOTTOM_RIGHT.value,
    "custom_images": {"copy": "", "clear": ""},
}


@dataclass(frozen=True)
class AppSettings:
    """Process-level settings (environment), not user configuration."""

    debug: bool
    backend_cmd: tuple[str, ...]
    backend_timeout: float
    target: str
    locale: str
    poll_interval: float
    image_picker: str
