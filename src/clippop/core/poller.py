"""Cooperative clipboard event polling."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .config_model import NotificationKind
from .ports import ClipboardBackend, Scheduler, TaskHandle

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.9

_KINDS = {kind.value: kind for kind in NotificationKind}


class EventPoller:
    """Polls the backend once immediately, then every interval.

    Restarting cancels the previous interval, so only one loop ever runs.
    """

    def __init__(
        self,
        backend: ClipboardBackend,
        controller,
        scheduler: Scheduler,
        interval: float = POLL_INTERVAL_SECONDS,
    ):
        self._backend = backend
        self._controller = controller
        self._scheduler = scheduler
        self._interval = interval
        self._handle: TaskHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self.stop()
        self._tick()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = self._scheduler.call_later(self._interval, self._tick)
        self._scheduler.spawn(self.poll_once())

    async def poll_once(self) -> NotificationKind | None:
        """Ask for one event and forward it; failures are logged and skipped."""
        try:
            payload = await self._backend.poll_clipboard()
        except Exception as exc:
            logger.warning("Clipboard poll failed: %s", exc)
            return None

        if not isinstance(payload, Mapping):
            return None
        raw_kind = payload.get("kind")
        kind = _KINDS.get(raw_kind) if isinstance(raw_kind, str) else None
        if kind is None:
            return None

        logger.debug("Clipboard event: %s", kind.value)
        self._controller.notify(kind)
        return kind
