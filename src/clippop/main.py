#!/usr/bin/env python3
"""ClipPop: a short-lived overlay for every clipboard copy or clear"""

import argparse
import asyncio
import logging
import signal

from . import __version__
from .adapters.backend_memory import MemoryBackend
from .adapters.backend_stdio import StdioBackend
from .adapters.config_env import load_app_settings
from .adapters.file_picker import ZenityFilePicker
from .adapters.scheduler import AsyncioScheduler
from .adapters.ui_feedback import ConsoleTarget, NotifySendTarget
from .core.binder import PresentationBinder
from .core.config_model import DEFAULT_DISPLAY_TIME, AppSettings, Corner, NotificationKind, Theme
from .core.config_sync import ConfigSync
from .core.controller import NotificationController
from .core.locale import load_messages
from .core.poller import EventPoller
from .core.settings import SettingsController
from .platform_utils import IS_WINDOWS, get_platform_info

logger = logging.getLogger("clippop.main")


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def build_backend(settings: AppSettings):
    if settings.backend_cmd:
        return StdioBackend(settings.backend_cmd, timeout=settings.backend_timeout)
    logger.warning("CLIPPOP_BACKEND_CMD not set; using in-memory backend (no clipboard events)")
    return MemoryBackend()


def build_file_picker(settings: AppSettings):
    if settings.image_picker == "zenity":
        return ZenityFilePicker()
    return None


class ClipPop:
    """Main application - wires the backend, the core and a visual target"""

    def __init__(self, settings: AppSettings, backend=None, target=None, preview_target=None, file_picker=None):
        self.settings = settings
        self.scheduler = AsyncioScheduler(asyncio.get_running_loop())
        self.backend = backend or build_backend(settings)
        self.config_sync = ConfigSync(self.backend, self.scheduler)
        self.binder = PresentationBinder()
        self.target = target or self._build_target()
        self.controller = NotificationController(
            self.target, self.binder, self.config_sync, self.scheduler
        )
        self.poller = EventPoller(
            self.backend, self.controller, self.scheduler, interval=settings.poll_interval
        )
        self.settings_ui = SettingsController(
            self.config_sync,
            self.binder,
            preview_target or ConsoleTarget(label="preview", echo=logger.debug),
            file_picker if file_picker is not None else build_file_picker(settings),
        )
        self._shutdown_event = asyncio.Event()

    def _build_target(self):
        if self.settings.target == "overlay":
            from .adapters.overlay import PygameOverlayTarget

            return PygameOverlayTarget(
                on_pointer_enter=self._from_ui_thread(lambda: self.controller.pointer_entered()),
                on_pointer_leave=self._from_ui_thread(lambda: self.controller.pointer_left()),
            )
        if self.settings.target == "notify":
            return NotifySendTarget(self.scheduler.spawn, timeout_seconds=self._display_time)
        return ConsoleTarget()

    def _from_ui_thread(self, callback):
        loop = self.scheduler.loop
        return lambda: loop.call_soon_threadsafe(callback)

    def _display_time(self) -> int:
        active = self.config_sync.active
        return active.display_time if active is not None else DEFAULT_DISPLAY_TIME

    async def hydrate(self):
        """Load strings and config, prime the settings preview. Never fails."""
        self.binder.messages = await load_messages(self.backend, self.settings.locale)
        await self.config_sync.load()
        self.config_sync.begin_edit()
        self.settings_ui.refresh_preview()

    async def run(self):
        """Run the application until quit() or a signal"""
        print("\n" + "=" * 50)
        print(f"🚀 ClipPop {__version__}")
        print("=" * 50)
        print(f"Target: {self.settings.target}")
        print(f"Locale: {self.settings.locale}")
        print("Press Ctrl+C to quit")
        print("=" * 50 + "\n")
        if self.settings.debug:
            logger.debug("Platform: %s", get_platform_info())

        start = getattr(self.target, "start", None)
        if start is not None:
            start()

        await self.hydrate()
        self.poller.start()
        await self._shutdown_event.wait()
        await self.shutdown()

    def quit(self):
        """Stop polling, tell the backend to exit and leave run()"""
        self.poller.stop()
        self.scheduler.spawn(self._request_exit())
        self._shutdown_event.set()

    async def _request_exit(self):
        try:
            await self.backend.exit_app()
        except Exception as e:
            logger.warning("exit_app failed: %s", e)

    async def close_backend(self):
        """Release a backend process, if this backend owns one"""
        aclose = getattr(self.backend, "aclose", None)
        if aclose is not None:
            try:
                await aclose()
            except Exception as e:
                logger.warning("Backend close failed: %s", e)

    def request_shutdown(self):
        """Request application shutdown (without asking the backend to exit)"""
        self._shutdown_event.set()

    async def shutdown(self):
        """Clean shutdown"""
        print("\nShutting down...")
        self.poller.stop()
        stop = getattr(self.target, "stop", None)
        if stop is not None:
            stop()
        await self.scheduler.drain(timeout=self.settings.backend_timeout)
        await self.close_backend()
        print("✓ Done")


async def edit_settings(settings: AppSettings, args, backend=None, file_picker=None) -> dict:
    """One-shot settings session; each change commits and persists."""
    app = ClipPop(
        settings,
        backend=backend,
        target=ConsoleTarget(),
        preview_target=ConsoleTarget(label="preview"),
        file_picker=file_picker,
    )
    await app.hydrate()
    ui = app.settings_ui
    ui.open()
    if args.theme:
        ui.set_theme(args.theme)
    if args.display_time is not None:
        ui.set_display_time(args.display_time)
    if args.corner:
        ui.set_corner(args.corner)
    for kind in args.pick_image or []:
        await ui.pick_image(kind)
    ui.close()
    await app.scheduler.drain(timeout=settings.backend_timeout)
    await app.close_backend()
    result = app.config_sync.active.to_dict()
    print(result)
    return result


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="clippop", description=__doc__)
    parser.add_argument("--theme", choices=[theme.value for theme in Theme])
    parser.add_argument("--display-time", type=int, metavar="SECONDS")
    parser.add_argument("--corner", choices=[corner.value for corner in Corner])
    parser.add_argument(
        "--pick-image",
        action="append",
        choices=[kind.value for kind in NotificationKind],
        help="choose a custom image for a notification kind (repeatable)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _wants_settings(args) -> bool:
    return bool(args.theme or args.display_time is not None or args.corner or args.pick_image)


async def _run_app(settings: AppSettings):
    app = ClipPop(settings)
    loop = asyncio.get_running_loop()

    # Register signal handlers
    if IS_WINDOWS:
        signal.signal(signal.SIGINT, lambda sig, frame: loop.call_soon_threadsafe(app.quit))
    else:
        loop.add_signal_handler(signal.SIGINT, app.quit)
        loop.add_signal_handler(signal.SIGTERM, app.quit)

    await app.run()


def main(argv=None):
    args = parse_args(argv)
    settings = load_app_settings()
    setup_logging(settings.debug)

    try:
        if _wants_settings(args):
            asyncio.run(edit_settings(settings, args))
        else:
            asyncio.run(_run_app(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
