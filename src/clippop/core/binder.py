"""Maps a configuration and an event kind onto a visual target.

The binder keeps no per-target state, so the same instance drives the live
notification and the settings preview.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config_model import Configuration, NotificationKind, Theme
from .locale import Messages
from .ports import VisualTarget

ICON_KINDS = frozenset({"copy", "clear", "settings", "power"})

# (locale key, fallback)
MESSAGE_KEYS: dict[NotificationKind, tuple[str, str]] = {
    NotificationKind.COPY: ("copied", "Copied!"),
    NotificationKind.CLEAR: ("cleared", "Cleared"),
}


def icon_for(kind: str) -> str:
    return kind if kind in ICON_KINDS else "copy"


def file_resource(path: str) -> str:
    """Default resource resolver: an absolute filesystem path."""
    return str(Path(path).expanduser().resolve())


class PresentationBinder:
    def __init__(
        self,
        messages: Messages | None = None,
        resolve_resource: Callable[[str], str] = file_resource,
    ):
        self.messages = messages or Messages()
        self._resolve_resource = resolve_resource

    def message_for(self, kind: NotificationKind | str) -> str:
        key, fallback = MESSAGE_KEYS[NotificationKind.parse(kind)]
        return self.messages.text(key, fallback)

    def render(self, target: VisualTarget, config: Configuration, kind: NotificationKind | str) -> bool:
        """Configure ``target`` for ``kind``; returns whether anything should be shown."""
        kind = NotificationKind.parse(kind)
        target.apply_theme(config.theme)
        target.apply_corner(config.corner)

        if config.theme == Theme.CUSTOM.value:
            target.set_icon(None)
            target.set_message(None)
            path = config.image_for(kind)
            if not path:
                target.set_image(None)
                return False
            target.set_image(self._resolve_resource(path))
            return True

        target.set_image(None)
        target.set_icon(icon_for(kind.value))
        target.set_message(self.message_for(kind))
        return True
