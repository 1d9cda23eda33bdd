"""Console and desktop-notification visual targets."""

from __future__ import annotations

import asyncio
import shutil

# notify-send has no "copy"/"clear" glyphs; map to freedesktop icon names
_FREEDESKTOP_ICONS = {
    "copy": "edit-copy",
    "clear": "edit-clear",
    "settings": "preferences-system",
    "power": "system-shutdown",
}


class ConsoleTarget:
    """Prints the notification to stdout (headless sessions)."""

    def __init__(self, label: str = "notification", echo=print):
        self.label = label
        self._echo = echo
        self._theme = ""
        self._corner = ""
        self._icon: str | None = None
        self._message: str | None = None
        self._image: str | None = None

    def apply_theme(self, theme: str) -> None:
        self._theme = theme

    def apply_corner(self, corner: str) -> None:
        self._corner = corner

    def set_icon(self, icon: str | None) -> None:
        self._icon = icon

    def set_message(self, text: str | None) -> None:
        self._message = text

    def set_image(self, resource: str | None) -> None:
        self._image = resource

    def set_visible(self, visible: bool) -> None:
        if not visible:
            self._echo(f"[{self.label}] hidden")
            return
        body = self._message if self._message is not None else self._image
        self._echo(f"[{self.label}] {self._theme}/{self._corner} {self._icon or '-'}: {body}")

    def describe(self) -> str:
        return (
            f"theme={self._theme} corner={self._corner} icon={self._icon} "
            f"message={self._message!r} image={self._image!r}"
        )


class NotifySendTarget:
    """Shows the notification through notify-send.

    The notification server owns placement and hover; only content and
    timeout are controlled here. notify-send runs as a background task
    handed to ``spawn`` so the event loop never waits on it.
    """

    def __init__(self, spawn, app_name: str = "ClipPop", timeout_seconds=lambda: 3):
        self._spawn = spawn
        self.app_name = app_name
        self._timeout_seconds = timeout_seconds
        self._icon: str | None = None
        self._message: str | None = None
        self._image: str | None = None
        self._theme = ""

    def apply_theme(self, theme: str) -> None:
        self._theme = theme

    def apply_corner(self, corner: str) -> None:
        pass  # placement belongs to the notification server

    def set_icon(self, icon: str | None) -> None:
        self._icon = icon

    def set_message(self, text: str | None) -> None:
        self._message = text

    def set_image(self, resource: str | None) -> None:
        self._image = resource

    def set_visible(self, visible: bool) -> None:
        if visible:
            self._spawn(
                notify(
                    self.app_name,
                    self._message or "",
                    icon=self._image or _FREEDESKTOP_ICONS.get(self._icon or "", ""),
                    timeout=self._timeout_seconds(),
                )
            )


async def notify(title: str, message: str, icon: str = "", timeout: int = 3) -> bool:
    """Show desktop notification"""
    if not _has_cmd("notify-send"):
        return False
    args = ["notify-send", "-a", title, "-t", str(int(timeout) * 1000)]
    if icon:
        args += ["-i", icon]
    args += [title, message]
    return await _run(args) is not None


def _has_cmd(name: str) -> bool:
    return shutil.which(name) is not None


async def _run(args: list[str], timeout: float = 2.0) -> int | None:
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError:
        return None
    try:
        return await asyncio.wait_for(process.wait(), timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return None
