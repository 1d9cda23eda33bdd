"""Core ports (interfaces) for ClipPop.

These protocols define the boundaries between the notification core and
the backend process, the rendering toolkit and the host event loop. They are
intentionally small and capability-oriented to keep the core decoupled.
"""

from __future__ import annotations

from typing import Any, Callable, Coroutine, Mapping, Protocol, runtime_checkable


@runtime_checkable
class TaskHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None:
        """Cancel the callback; no-op if it already ran."""


@runtime_checkable
class Scheduler(Protocol):
    """Host event loop timers and task spawning."""

    def now(self) -> float:
        """Monotonic time in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TaskHandle:
        """Run callback after delay seconds on the loop thread."""

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        """Run a coroutine in the background (fire-and-forget)."""


@runtime_checkable
class ClipboardBackend(Protocol):
    """External clipboard watcher and config store."""

    async def load_config(self) -> Mapping:
        """Return the stored configuration record."""

    async def save_config(self, config: Mapping) -> None:
        """Persist the configuration record."""

    async def poll_clipboard(self) -> Mapping | None:
        """Return at most one pending event, e.g. {"kind": "copy"}."""

    async def load_locale(self, locale: str) -> Mapping[str, str]:
        """Return the string table for a locale code."""

    async def exit_app(self) -> None:
        """Ask the backend to terminate."""


@runtime_checkable
class VisualTarget(Protocol):
    """Something a notification can be painted on."""

    def apply_theme(self, theme: str) -> None:
        """Switch the theme class (dark, light, custom)."""

    def apply_corner(self, corner: str) -> None:
        """Move to a screen corner."""

    def set_visible(self, visible: bool) -> None:
        """Show, or start hiding."""

    def set_image(self, resource: str | None) -> None:
        """Show a custom image, or hide it with None."""

    def set_message(self, text: str | None) -> None:
        """Show message text, or hide it with None."""

    def set_icon(self, icon: str | None) -> None:
        """Show a built-in icon, or hide it with None."""


@runtime_checkable
class FilePicker(Protocol):
    """Image file chooser."""

    async def pick_image(self, kind: str) -> str | list[str] | None:
        """Return the selected path(s), or None if cancelled."""
