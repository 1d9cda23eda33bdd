"""ClipPop - transient clipboard-activity overlay"""

__version__ = "0.3.0"
__description__ = "Transient overlay notification for clipboard copy/clear events"

__all__ = ["main", "ClipPop", "__version__"]


def __getattr__(name: str):
    """Lazy import to avoid pulling in the adapters on package import.

    This allows importing clippop.core without pygame or a display,
    which is needed for CI/headless environments.
    """
    if name == "ClipPop":
        from .main import ClipPop

        return ClipPop
    if name == "main":
        from .main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
