"""Notification lifecycle state machine."""

from __future__ import annotations

from enum import Enum, auto
import logging


class NotificationState(Enum):
    IDLE = auto()
    SHOWING = auto()
    HOVER_LOCKED = auto()
    HIDING_OUT = auto()


class NotificationEvent(Enum):
    NOTIFY = auto()
    SUPPRESS = auto()
    POINTER_ENTER = auto()
    POINTER_LEAVE = auto()
    HIDE_TIMEOUT = auto()
    FADE_DONE = auto()


_TRANSITIONS = {
    NotificationState.IDLE: {
        NotificationEvent.NOTIFY: NotificationState.SHOWING,
        NotificationEvent.SUPPRESS: NotificationState.IDLE,
    },
    NotificationState.SHOWING: {
        NotificationEvent.NOTIFY: NotificationState.SHOWING,
        NotificationEvent.SUPPRESS: NotificationState.IDLE,
        NotificationEvent.POINTER_ENTER: NotificationState.HOVER_LOCKED,
        NotificationEvent.HIDE_TIMEOUT: NotificationState.HIDING_OUT,
    },
    NotificationState.HOVER_LOCKED: {
        NotificationEvent.NOTIFY: NotificationState.SHOWING,
        NotificationEvent.SUPPRESS: NotificationState.IDLE,
        NotificationEvent.POINTER_LEAVE: NotificationState.SHOWING,
    },
    NotificationState.HIDING_OUT: {
        NotificationEvent.NOTIFY: NotificationState.SHOWING,
        NotificationEvent.SUPPRESS: NotificationState.IDLE,
        NotificationEvent.FADE_DONE: NotificationState.IDLE,
    },
}


class NotificationStateMachine:
    def __init__(self):
        self.state = NotificationState.IDLE

    def accepts(self, event: NotificationEvent) -> bool:
        return event in _TRANSITIONS.get(self.state, {})

    def transition(self, event: NotificationEvent) -> NotificationState:
        next_state = _TRANSITIONS.get(self.state, {}).get(event, self.state)
        if next_state == self.state and event not in _TRANSITIONS.get(self.state, {}):
            logging.getLogger(__name__).warning(
                "Invalid state transition: %s --%s--> %s", self.state, event, next_state
            )
        self.state = next_state
        return self.state
