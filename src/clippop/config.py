"""Configuration for ClipPop"""
import os
import shlex

from dotenv import load_dotenv

from .platform_utils import get_locale_code

load_dotenv()


class Config:
    """Process configuration read from the environment"""

    # Backend process (line-delimited JSON on stdio); empty = in-memory backend
    BACKEND_CMD = os.getenv("CLIPPOP_BACKEND_CMD", "")
    BACKEND_TIMEOUT = float(os.getenv("CLIPPOP_BACKEND_TIMEOUT", "5"))

    # Visual target: "auto", "overlay", "notify", or "console"
    TARGET = os.getenv("CLIPPOP_TARGET", "auto").lower()

    # Locale code for the string table, e.g. "ja-JP"
    LOCALE = os.getenv("CLIPPOP_LOCALE", "") or get_locale_code()

    # Clipboard poll cadence
    POLL_INTERVAL_MS = int(os.getenv("CLIPPOP_POLL_INTERVAL_MS", "900"))

    # Image picker for custom themes: "zenity" or "none"
    IMAGE_PICKER = os.getenv("CLIPPOP_IMAGE_PICKER", "zenity").lower()

    DEBUG = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def backend_args(cls) -> list[str]:
        return shlex.split(cls.BACKEND_CMD) if cls.BACKEND_CMD else []


config = Config()
