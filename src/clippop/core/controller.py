"""Notification lifecycle for ClipPop.

Drives one notification at a time through show, auto-hide, hover suspension
and fade-out. Last event wins: a new notify supersedes the live session and
cancels its timers before anything is rescheduled.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .binder import PresentationBinder
from .config_model import NotificationKind
from .config_sync import ConfigSync
from .ports import Scheduler, VisualTarget
from .state_machine import NotificationEvent, NotificationState, NotificationStateMachine
from .timers import TimerSlot

logger = logging.getLogger(__name__)

FADE_SECONDS = 0.42


@dataclass
class NotificationSession:
    """Transient per-display state."""

    session_id: int = 0
    kind: NotificationKind | None = None
    visible: bool = False
    hover_locked: bool = False
    pending_hide_at: float | None = None

    def reset(self) -> None:
        self.kind = None
        self.visible = False
        self.hover_locked = False
        self.pending_hide_at = None


class NotificationController:
    """Owns the live notification session."""

    def __init__(
        self,
        target: VisualTarget,
        binder: PresentationBinder,
        config_sync: ConfigSync,
        scheduler: Scheduler,
        session: NotificationSession | None = None,
    ):
        self._target = target
        self._binder = binder
        self._config_sync = config_sync
        self._scheduler = scheduler
        self._session = session or NotificationSession()
        self._state = NotificationStateMachine()
        self._hide_timer = TimerSlot(scheduler)
        self._fade_timer = TimerSlot(scheduler)

    @property
    def state(self) -> NotificationState:
        return self._state.state

    @property
    def session(self) -> NotificationSession:
        return self._session

    def notify(self, kind: NotificationKind | str) -> bool:
        """Show a notification for ``kind``; returns whether it was shown."""
        kind = NotificationKind.parse(kind)
        config = self._config_sync.active
        if config is None:
            logger.debug("Dropping %s event: config not loaded", kind.value)
            return False

        self._hide_timer.cancel()
        self._fade_timer.cancel()

        if not self._binder.render(self._target, config, kind):
            logger.debug("Suppressed %s notification: no custom image", kind.value)
            if self._session.visible:
                self._target.set_visible(False)
            self._session.reset()
            self._state.transition(NotificationEvent.SUPPRESS)
            return False

        self._session.session_id += 1
        self._session.kind = kind
        self._session.visible = True
        self._session.hover_locked = False
        self._state.transition(NotificationEvent.NOTIFY)
        self._target.set_visible(True)
        self._schedule_hide()
        return True

    def pointer_entered(self) -> None:
        if not self._state.accepts(NotificationEvent.POINTER_ENTER):
            return
        self._hide_timer.cancel()
        self._session.hover_locked = True
        self._session.pending_hide_at = None
        self._state.transition(NotificationEvent.POINTER_ENTER)

    def pointer_left(self) -> None:
        if not self._state.accepts(NotificationEvent.POINTER_LEAVE):
            return
        self._session.hover_locked = False
        self._state.transition(NotificationEvent.POINTER_LEAVE)
        self._schedule_hide()

    def _schedule_hide(self) -> None:
        # Re-read display time on every arm so a settings change applies
        # from the next reschedule on.
        if self._session.hover_locked or self._config_sync.active is None:
            return
        delay = float(self._config_sync.active.display_time)
        self._session.pending_hide_at = self._scheduler.now() + delay
        self._hide_timer.arm(delay, self._session.session_id, self._on_hide_timeout)

    def _on_hide_timeout(self, session_id: int) -> None:
        if session_id != self._session.session_id:
            return
        self._session.pending_hide_at = None
        self._state.transition(NotificationEvent.HIDE_TIMEOUT)
        self._target.set_visible(False)
        self._fade_timer.arm(FADE_SECONDS, session_id, self._on_fade_done)

    def _on_fade_done(self, session_id: int) -> None:
        if session_id != self._session.session_id:
            return
        self._state.transition(NotificationEvent.FADE_DONE)
        self._session.reset()
