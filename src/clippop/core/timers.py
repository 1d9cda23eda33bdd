"""Single-occupancy timer slot for session-scoped callbacks."""

from __future__ import annotations

from typing import Callable

from .ports import Scheduler, TaskHandle


class TimerSlot:
    """Holds at most one armed timer.

    Arming always cancels the previous timer first. The callback receives the
    session id it was armed for.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._handle: TaskHandle | None = None
        self._session_id: int | None = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    @property
    def session_id(self) -> int | None:
        return self._session_id

    def arm(self, delay: float, session_id: int, callback: Callable[[int], None]) -> None:
        self.cancel()

        def _fire():
            if self._session_id != session_id:
                return
            self._handle = None
            self._session_id = None
            callback(session_id)

        self._session_id = session_id
        self._handle = self._scheduler.call_later(delay, _fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._session_id = None
