"""Backend failure taxonomy.

None of these are fatal: the core logs them and falls back to a safe default.
"""

from __future__ import annotations


class BackendError(Exception):
    """A backend request failed or could not be delivered."""

    def __init__(self, command: str, message: str = ""):
        super().__init__(f"{command}: {message}" if message else command)
        self.command = command
        self.message = message


class LoadFailure(BackendError):
    """Config or locale fetch failed."""


class PersistFailure(BackendError):
    """Saving the configuration failed."""


class PollFailure(BackendError):
    """Transient failure reading the clipboard event queue."""


_FAILURES: dict[str, type[BackendError]] = {
    "load_config": LoadFailure,
    "load_locale": LoadFailure,
    "save_config": PersistFailure,
    "poll_clipboard": PollFailure,
}


def failure_for(command: str, message: str = "") -> BackendError:
    """Build the failure matching a backend command."""
    return _FAILURES.get(command, BackendError)(command, message)
