"""Active/pending configuration ownership and the commit protocol.

The active config is what the overlay renders with; the pending config is the
settings working copy. The two never alias. Every pending edit commits right
away and is persisted in the background; a failed save is logged and does not
roll back the in-memory config.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

from .config_model import DEFAULT_CONFIG, Configuration, NotificationKind
from .normalizer import normalize
from .ports import ClipboardBackend, Scheduler

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("theme", "display_time", "corner", "custom_image")


@dataclass(frozen=True)
class FieldEdit:
    """A single settings change."""

    field: str
    value: object
    kind: str | None = None

    def __post_init__(self):
        if self.field not in _EDITABLE_FIELDS:
            raise ValueError(f"unknown config field: {self.field!r}")
        if self.field == "custom_image":
            object.__setattr__(self, "kind", NotificationKind.parse(self.kind).value)

    @classmethod
    def theme(cls, value: str) -> "FieldEdit":
        return cls("theme", value)

    @classmethod
    def display_time(cls, value) -> "FieldEdit":
        return cls("display_time", value)

    @classmethod
    def corner(cls, value: str) -> "FieldEdit":
        return cls("corner", value)

    @classmethod
    def custom_image(cls, kind: str, path: str | None) -> "FieldEdit":
        return cls("custom_image", path, kind=kind)

    def apply(self, config: Configuration) -> None:
        if self.field == "custom_image":
            config.custom_images[self.kind] = self.value
        else:
            setattr(config, self.field, self.value)


class ConfigSync:
    """Owns the active and pending configuration copies."""

    def __init__(self, backend: ClipboardBackend, scheduler: Scheduler):
        self._backend = backend
        self._scheduler = scheduler
        self._active: Configuration | None = None
        self._pending: Configuration | None = None
        self._listeners: list[Callable[[Configuration], None]] = []

    @property
    def active(self) -> Configuration | None:
        return self._active

    @property
    def pending(self) -> Configuration | None:
        return self._pending

    def on_commit(self, listener: Callable[[Configuration], None]) -> None:
        """Register a callback invoked with the pending config after each commit."""
        self._listeners.append(listener)

    async def load(self) -> Configuration:
        """Fetch the stored config, falling back to the built-in default."""
        try:
            raw = await self._backend.load_config()
        except Exception as exc:
            logger.error("Failed to load config, using defaults: %s", exc)
            raw = DEFAULT_CONFIG
        self._active = normalize(raw)
        logger.debug("Active config: %s", self._active)
        return self._active

    def begin_edit(self) -> Configuration:
        """Start (or restart) an edit session from the active config."""
        source = self._active if self._active is not None else normalize(DEFAULT_CONFIG)
        self._pending = normalize(source.clone())
        return self._pending

    def mutate_pending(self, edit: FieldEdit) -> Configuration | None:
        """Apply one field change to the pending config and commit it."""
        if self._pending is None:
            logger.warning("Ignoring %s edit: no edit session", edit.field)
            return None
        edit.apply(self._pending)
        return self.commit()

    def commit(self) -> Configuration | None:
        """Normalize pending, copy it into active and persist in the background."""
        if self._pending is None:
            return None
        self._pending = normalize(self._pending)
        self._active = self._pending.clone()
        self._scheduler.spawn(self._persist(self._active.to_dict()))
        for listener in list(self._listeners):
            listener(self._pending)
        return self._active

    async def _persist(self, record: dict) -> bool:
        try:
            await self._backend.save_config(record)
        except Exception as exc:
            logger.error("Failed to save config: %s", exc)
            return False
        logger.debug("Config saved")
        return True
