"""Backend adapter speaking line-delimited JSON to an external process.

Request:  {"cmd": "poll_clipboard", "args": {}}
Response: {"ok": true, "result": ...} or {"ok": false, "error": "..."}
"""

from __future__ import annotations

import asyncio
import json
import logging

from ..errors import BackendError, failure_for

logger = logging.getLogger(__name__)


def encode_request(command: str, args: dict | None = None) -> bytes:
    return (json.dumps({"cmd": command, "args": args or {}}) + "\n").encode("utf-8")


def decode_response(command: str, line: bytes):
    """Return the result of a response line or raise the command's failure."""
    if not line:
        raise failure_for(command, "backend closed the connection")
    try:
        message = json.loads(line.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise failure_for(command, f"malformed response: {exc}") from exc
    if not isinstance(message, dict):
        raise failure_for(command, "malformed response")
    if not message.get("ok", False):
        raise failure_for(command, str(message.get("error", "unknown error")))
    return message.get("result")


class StdioBackend:
    """Runs the backend command and exchanges one request/response at a time."""

    def __init__(self, args: list[str] | tuple[str, ...], timeout: float = 5.0):
        self._args = list(args)
        self._timeout = timeout
        self._process: asyncio.subprocess.Process | None = None
        self._lock = asyncio.Lock()

    async def _ensure_process(self, command: str) -> asyncio.subprocess.Process:
        if self._process is not None and self._process.returncode is None:
            return self._process
        try:
            self._process = await asyncio.create_subprocess_exec(
                *self._args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise failure_for(command, f"cannot start backend: {exc}") from exc
        logger.info("Backend started (pid %s)", self._process.pid)
        return self._process

    async def _request(self, command: str, args: dict | None = None):
        async with self._lock:
            process = await self._ensure_process(command)
            try:
                process.stdin.write(encode_request(command, args))
                await process.stdin.drain()
                line = await asyncio.wait_for(process.stdout.readline(), self._timeout)
            except asyncio.TimeoutError as exc:
                # The reply may still arrive; restart to keep replies in step.
                await self._kill()
                raise failure_for(command, "timed out") from exc
            except (asyncio.LimitOverrunError, ValueError) as exc:
                # Oversized line: the rest of it is still buffered.
                await self._kill()
                raise failure_for(command, f"response too long: {exc}") from exc
            except (ConnectionError, OSError) as exc:
                await self._kill()
                raise failure_for(command, str(exc)) from exc
        return decode_response(command, line)

    async def _kill(self) -> None:
        if self._process is not None and self._process.returncode is None:
            self._process.kill()
            await self._process.wait()
        self._process = None

    async def load_config(self) -> dict:
        result = await self._request("load_config")
        if not isinstance(result, dict):
            raise failure_for("load_config", "config is not a mapping")
        return result

    async def save_config(self, config: dict) -> None:
        await self._request("save_config", {"config": config})

    async def poll_clipboard(self) -> dict | None:
        return await self._request("poll_clipboard")

    async def load_locale(self, locale: str) -> dict:
        result = await self._request("load_locale", {"locale": locale})
        if not isinstance(result, dict):
            raise failure_for("load_locale", "locale is not a mapping")
        return result

    async def exit_app(self) -> None:
        """Ask the backend to exit and wait for it; kill it if it lingers."""
        async with self._lock:
            process = self._process
            if process is None or process.returncode is not None:
                self._process = None
                return
            try:
                process.stdin.write(encode_request("exit_app"))
                await process.stdin.drain()
                process.stdin.close()
            except (ConnectionError, OSError) as exc:
                await self._kill()
                raise BackendError("exit_app", str(exc)) from exc
            try:
                await asyncio.wait_for(process.wait(), self._timeout)
            except asyncio.TimeoutError:
                logger.warning("Backend did not exit within %.1fs; killing it", self._timeout)
                await self._kill()
            self._process = None
            logger.info("Backend exited (code %s)", process.returncode)

    async def aclose(self) -> None:
        await self.exit_app()
