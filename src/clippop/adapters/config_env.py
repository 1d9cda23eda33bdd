"""Env configuration adapter producing a structured AppSettings."""

from __future__ import annotations

from ..config import config as env_config
from ..core.config_model import AppSettings
from ..platform_utils import has_display


def resolve_target(name: str) -> str:
    if name in ("overlay", "notify", "console"):
        return name
    return "overlay" if has_display() else "console"


def load_app_settings() -> AppSettings:
    return AppSettings(
        debug=env_config.DEBUG,
        backend_cmd=tuple(env_config.backend_args()),
        backend_timeout=env_config.BACKEND_TIMEOUT,
        target=resolve_target(env_config.TARGET),
        locale=env_config.LOCALE,
        poll_interval=max(0.05, env_config.POLL_INTERVAL_MS / 1000.0),
        image_picker=env_config.IMAGE_PICKER,
    )
