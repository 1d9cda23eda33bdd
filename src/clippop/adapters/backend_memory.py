"""In-process backend: stored config, an event queue and locale tables."""

from __future__ import annotations

import copy
from collections import deque

from ..errors import failure_for


class MemoryBackend:
    """Backend that keeps everything in memory.

    ``fail`` names the commands that should raise their failure type,
    which is how the tests exercise the degradation paths.
    """

    def __init__(self, config: dict | None = None, locales: dict | None = None):
        self.stored_config = copy.deepcopy(config) if config is not None else None
        self.locales = dict(locales or {})
        self.events: deque = deque()
        self.saved: list[dict] = []
        self.calls: list[str] = []
        self.fail: set[str] = set()
        self.exit_requested = False

    def push_event(self, kind: str) -> None:
        self.events.append({"kind": kind})

    def _enter(self, command: str) -> None:
        self.calls.append(command)
        if command in self.fail:
            raise failure_for(command, "simulated failure")

    async def load_config(self) -> dict:
        self._enter("load_config")
        if self.stored_config is None:
            raise failure_for("load_config", "no stored config")
        return copy.deepcopy(self.stored_config)

    async def save_config(self, config: dict) -> None:
        self._enter("save_config")
        self.stored_config = copy.deepcopy(dict(config))
        self.saved.append(copy.deepcopy(self.stored_config))

    async def poll_clipboard(self) -> dict | None:
        self._enter("poll_clipboard")
        if not self.events:
            return None
        return self.events.popleft()

    async def load_locale(self, locale: str) -> dict:
        self._enter("load_locale")
        for candidate in locale_candidates(locale):
            if candidate in self.locales:
                return dict(self.locales[candidate])
        raise failure_for("load_locale", f"no locale resources found for {locale}")

    async def exit_app(self) -> None:
        self.calls.append("exit_app")
        self.exit_requested = True


def locale_candidates(raw: str) -> list[str]:
    """Lookup order for a locale code: "ja-JP" gives ja_jp, ja, en."""
    parts = [part for part in raw.lower().replace("-", "_").split("_") if part]
    result = []
    while parts:
        result.append("_".join(parts))
        parts.pop()
    if "en" not in result:
        result.append("en")
    return result
