"""Platform detection and cross-platform utilities for ClipPop"""

import locale
import os
import platform
import sys

# Platform detection
IS_WINDOWS = sys.platform == "win32"
IS_LINUX = sys.platform.startswith("linux")
IS_MACOS = sys.platform == "darwin"

# Display system detection (Linux-specific)
IS_X11 = False
IS_WAYLAND = False

if IS_LINUX:
    session_type = os.environ.get("XDG_SESSION_TYPE", "").lower()
    IS_X11 = session_type == "x11" or os.environ.get("DISPLAY") is not None
    IS_WAYLAND = session_type == "wayland" or os.environ.get("WAYLAND_DISPLAY") is not None


def has_display() -> bool:
    """Whether a window can be opened at all."""
    if IS_LINUX:
        return IS_X11 or IS_WAYLAND
    return IS_WINDOWS or IS_MACOS


def get_locale_code() -> str:
    """Best-effort UI locale code, "en" when unknown."""
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var, "")
        if value and value not in ("C", "POSIX"):
            return value.split(".")[0]
    try:
        code = locale.getlocale()[0]
    except ValueError:
        code = None
    return code or "en"


def get_platform_info() -> dict:
    """Get detailed platform information."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "python_version": platform.python_version(),
        "is_windows": IS_WINDOWS,
        "is_linux": IS_LINUX,
        "is_macos": IS_MACOS,
        "is_x11": IS_X11,
        "is_wayland": IS_WAYLAND,
        "has_display": has_display(),
    }
