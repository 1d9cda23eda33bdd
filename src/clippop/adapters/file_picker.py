"""Image picker adapter using zenity."""

from __future__ import annotations

import asyncio
import logging
import shutil

logger = logging.getLogger(__name__)

IMAGE_PATTERNS = ("*.png", "*.webp", "*.gif")


class ZenityFilePicker:
    async def pick_image(self, kind: str) -> str | None:
        if shutil.which("zenity") is None:
            logger.warning("zenity not found; cannot pick a %s image", kind)
            return None
        process = await asyncio.create_subprocess_exec(
            "zenity",
            "--file-selection",
            f"--title=Choose {kind} image",
            f"--file-filter=Images | {' '.join(IMAGE_PATTERNS)}",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        stdout, _ = await process.communicate()
        if process.returncode != 0:
            return None
        return stdout.decode("utf-8").strip() or None
