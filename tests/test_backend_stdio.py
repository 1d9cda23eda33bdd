import asyncio
import sys

import pytest

from clippop.adapters.backend_stdio import StdioBackend, decode_response, encode_request
from clippop.errors import LoadFailure, PersistFailure, PollFailure
from clippop.main import edit_settings, parse_args

from fakes import make_settings

_BACKEND_SCRIPT = r"""
import json, sys
for line in sys.stdin:
    request = json.loads(line)
    cmd = request["cmd"]
    if cmd == "exit_app":
        break
    if cmd == "load_config":
        reply = {"ok": True, "result": {"theme": "light", "display_time": 5}}
    elif cmd == "poll_clipboard":
        reply = {"ok": True, "result": {"kind": "copy"}}
    elif cmd == "load_locale":
        reply = {"ok": True, "result": {"copied": request["args"]["locale"]}}
    else:
        reply = {"ok": False, "error": "read-only store"}
    sys.stdout.write(json.dumps(reply) + "\n")
    sys.stdout.flush()
"""


def test_encode_request_is_one_json_line():
    line = encode_request("save_config", {"config": {"theme": "dark"}})
    assert line.endswith(b"\n")
    assert line.count(b"\n") == 1
    assert b'"cmd": "save_config"' in line


def test_decode_response_ok_and_errors():
    assert decode_response("poll_clipboard", b'{"ok": true, "result": {"kind": "clear"}}\n') == {"kind": "clear"}
    assert decode_response("poll_clipboard", b'{"ok": true}\n') is None

    with pytest.raises(PersistFailure) as excinfo:
        decode_response("save_config", b'{"ok": false, "error": "disk full"}\n')
    assert excinfo.value.command == "save_config"
    assert "disk full" in str(excinfo.value)

    with pytest.raises(PollFailure):
        decode_response("poll_clipboard", b"not json\n")
    with pytest.raises(LoadFailure):
        decode_response("load_config", b"")
    with pytest.raises(LoadFailure):
        decode_response("load_locale", b"[1, 2]\n")


def test_round_trip_with_backend_process():
    async def scenario():
        backend = StdioBackend([sys.executable, "-c", _BACKEND_SCRIPT], timeout=10)
        config = await backend.load_config()
        event = await backend.poll_clipboard()
        table = await backend.load_locale("ja-JP")
        with pytest.raises(PersistFailure):
            await backend.save_config({"theme": "dark"})
        process = backend._process
        await backend.exit_app()
        assert process.returncode == 0
        assert backend._process is None
        return config, event, table

    config, event, table = asyncio.run(scenario())
    assert config == {"theme": "light", "display_time": 5}
    assert event == {"kind": "copy"}
    assert table == {"copied": "ja-JP"}


def test_missing_backend_command_is_a_load_failure(tmp_path):
    backend = StdioBackend([str(tmp_path / "no-such-backend")])
    with pytest.raises(LoadFailure):
        asyncio.run(backend.load_config())


_STUBBORN_SCRIPT = r"""
import json, sys, time
sys.stdin.readline()
sys.stdout.write(json.dumps({"ok": True, "result": {}}) + "\n")
sys.stdout.flush()
time.sleep(30)
"""


def test_exit_app_kills_a_backend_that_does_not_exit():
    async def scenario():
        backend = StdioBackend([sys.executable, "-c", _STUBBORN_SCRIPT], timeout=0.5)
        await backend.load_config()
        process = backend._process
        await backend.exit_app()
        return backend, process

    backend, process = asyncio.run(scenario())
    assert process.returncode is not None
    assert process.returncode != 0
    assert backend._process is None


def test_exit_app_without_a_process_is_a_no_op():
    backend = StdioBackend([sys.executable, "-c", _BACKEND_SCRIPT])
    asyncio.run(backend.exit_app())
    assert backend._process is None


_OVERSIZED_SCRIPT = r"""
import json, sys
for line in sys.stdin:
    cmd = json.loads(line)["cmd"]
    if cmd == "poll_clipboard":
        reply = {"ok": True, "result": {"kind": "copy", "pad": "x" * 200000}}
    else:
        reply = {"ok": True, "result": {"theme": "light"}}
    sys.stdout.write(json.dumps(reply) + "\n")
    sys.stdout.flush()
"""


def test_oversized_reply_fails_the_command_and_restarts_the_backend():
    async def scenario():
        backend = StdioBackend([sys.executable, "-c", _OVERSIZED_SCRIPT], timeout=10)
        await backend.load_config()
        first = backend._process
        with pytest.raises(PollFailure) as excinfo:
            await backend.poll_clipboard()
        assert backend._process is None
        config = await backend.load_config()
        second = backend._process
        await backend.exit_app()
        return first, second, config, excinfo.value

    first, second, config, error = asyncio.run(scenario())
    assert error.command == "poll_clipboard"
    assert first.returncode is not None
    assert second is not first
    assert config == {"theme": "light"}


_SETTINGS_SCRIPT = r"""
import json, sys
stored = {"theme": "dark"}
for line in sys.stdin:
    request = json.loads(line)
    cmd = request["cmd"]
    if cmd == "exit_app":
        break
    if cmd == "load_config":
        reply = {"ok": True, "result": stored}
    elif cmd == "save_config":
        stored = request["args"]["config"]
        reply = {"ok": True, "result": None}
    else:
        reply = {"ok": False, "error": "unsupported"}
    sys.stdout.write(json.dumps(reply) + "\n")
    sys.stdout.flush()
"""


def test_edit_settings_shuts_down_the_backend_process():
    async def scenario():
        backend = StdioBackend([sys.executable, "-c", _SETTINGS_SCRIPT], timeout=10)
        started = []
        ensure = backend._ensure_process

        async def tracking_ensure(command):
            process = await ensure(command)
            if process not in started:
                started.append(process)
            return process

        backend._ensure_process = tracking_ensure
        result = await edit_settings(make_settings(), parse_args(["--corner", "top_left"]), backend=backend)
        return backend, started, result

    backend, started, result = asyncio.run(scenario())
    assert result["corner"] == "top_left"
    assert backend._process is None
    assert started
    assert all(process.returncode == 0 for process in started)
