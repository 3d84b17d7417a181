from __future__ import annotations

import asyncio
import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from kbbot.client.transport import KeybaseTransport
from kbbot.core.result import TransportError

SUBPROCESS = "kbbot.client.transport.asyncio.create_subprocess_exec"


def _process(stdout: bytes, stderr: bytes = b"", returncode: int = 0) -> AsyncMock:
    mock_process = AsyncMock()
    mock_process.communicate = AsyncMock(return_value=(stdout, stderr))
    mock_process.returncode = returncode
    mock_process.kill = MagicMock()
    return mock_process


@pytest.mark.asyncio
async def test_run_api_command_sends_request_and_returns_result() -> None:
    mock_process = _process(b'{"result": {"teamID": "abc123", "chatSent": true}}')
    transport = KeybaseTransport(binary="keybase", home_dir=Path("/tmp/kbhome"))

    with patch(SUBPROCESS, return_value=mock_process) as mock_subproc:
        result = await transport.run_api_command("team", "create-team", {"team": "phoenix"})

    assert result == {"teamID": "abc123", "chatSent": True}
    mock_subproc.assert_awaited_once()
    assert list(mock_subproc.call_args.args) == ["keybase", "--home", "/tmp/kbhome", "team", "api"]
    sent = json.loads(mock_process.communicate.call_args.kwargs["input"])
    assert sent == {"method": "create-team", "params": {"version": 1, "options": {"team": "phoenix"}}}


@pytest.mark.asyncio
async def test_run_api_command_without_home_dir() -> None:
    mock_process = _process(b'{"result": null}')

    with patch(SUBPROCESS, return_value=mock_process) as mock_subproc:
        result = await KeybaseTransport().run_api_command(
            "team", "remove-member", {"team": "phoenix", "username": "frank"}
        )

    assert result is None
    assert list(mock_subproc.call_args.args) == ["keybase", "team", "api"]


@pytest.mark.asyncio
async def test_error_envelope_raises_transport_error() -> None:
    body = {"error": {"code": 2614, "message": "team phoenix does not exist"}}
    mock_process = _process(json.dumps(body).encode())

    with patch(SUBPROCESS, return_value=mock_process):
        with pytest.raises(TransportError) as exc_info:
            await KeybaseTransport().run_api_command(
                "team", "list-team-memberships", {"team": "phoenix"}
            )

    err = exc_info.value
    assert err.message == "team phoenix does not exist"
    assert err.context["code"] == 2614
    assert err.context["method"] == "list-team-memberships"
    assert err.kind == "transport_failure"


@pytest.mark.asyncio
async def test_nonzero_exit_raises_with_stderr() -> None:
    mock_process = _process(b"", b"ERROR not logged in", returncode=1)

    with patch(SUBPROCESS, return_value=mock_process):
        with pytest.raises(TransportError) as exc_info:
            await KeybaseTransport().run_api_command("team", "create-team", {"team": "phoenix"})

    assert exc_info.value.message == "ERROR not logged in"
    assert exc_info.value.context["returncode"] == 1
    assert exc_info.value.context["method"] == "create-team"


@pytest.mark.asyncio
async def test_invalid_json_raises_transport_error() -> None:
    mock_process = _process(b"not json at all")

    with patch(SUBPROCESS, return_value=mock_process):
        with pytest.raises(TransportError, match="invalid JSON"):
            await KeybaseTransport().run_api_command("team", "create-team", {"team": "phoenix"})


@pytest.mark.asyncio
async def test_non_object_response_raises_transport_error() -> None:
    mock_process = _process(b"[1, 2, 3]")

    with patch(SUBPROCESS, return_value=mock_process):
        with pytest.raises(TransportError, match="non-object"):
            await KeybaseTransport().run_api_command("team", "create-team", {"team": "phoenix"})


@pytest.mark.asyncio
async def test_missing_binary_raises_transport_error() -> None:
    with patch(SUBPROCESS, side_effect=FileNotFoundError("keybase")):
        with pytest.raises(TransportError) as exc_info:
            await KeybaseTransport(binary="kb-missing").run_api_command(
                "team", "create-team", {"team": "phoenix"}
            )

    assert exc_info.value.message == "keybase executable not found"
    assert exc_info.value.context["binary"] == "kb-missing"


@pytest.mark.asyncio
async def test_timeout_kills_process() -> None:
    async def _hang(input: bytes | None = None) -> tuple[bytes, bytes]:
        await asyncio.sleep(5)
        return b"", b""

    mock_process = _process(b"")
    mock_process.communicate = _hang
    mock_process.wait = AsyncMock(return_value=-9)

    with patch(SUBPROCESS, return_value=mock_process):
        with pytest.raises(TransportError, match="timed out"):
            await KeybaseTransport(timeout=0.01).run_api_command(
                "team", "create-team", {"team": "phoenix"}
            )

    mock_process.kill.assert_called_once()
    mock_process.wait.assert_awaited_once()


@pytest.mark.asyncio
async def test_status_parses_json() -> None:
    mock_process = _process(b'{"Username": "kbbot", "LoggedIn": true}')

    with patch(SUBPROCESS, return_value=mock_process) as mock_subproc:
        status = await KeybaseTransport(home_dir=Path("/tmp/kbhome")).status()

    assert status == {"Username": "kbbot", "LoggedIn": True}
    assert list(mock_subproc.call_args.args) == [
        "keybase",
        "--home",
        "/tmp/kbhome",
        "status",
        "--json",
    ]


@pytest.mark.asyncio
async def test_timeout_tolerates_already_exited_process() -> None:
    async def _hang(input: bytes | None = None) -> tuple[bytes, bytes]:
        await asyncio.sleep(5)
        return b"", b""

    mock_process = _process(b"")
    mock_process.communicate = _hang
    mock_process.kill = MagicMock(side_effect=ProcessLookupError)
    mock_process.wait = AsyncMock(return_value=0)

    with patch(SUBPROCESS, return_value=mock_process):
        with pytest.raises(TransportError, match="timed out"):
            await KeybaseTransport(timeout=0.01).status()

    mock_process.wait.assert_awaited_once()


@pytest.mark.asyncio
async def test_status_nonzero_exit_raises() -> None:
    mock_process = _process(b"", b"ERROR not logged in", returncode=1)

    with patch(SUBPROCESS, return_value=mock_process):
        with pytest.raises(TransportError) as exc_info:
            await KeybaseTransport().status()

    assert exc_info.value.message == "ERROR not logged in"
    assert exc_info.value.context["returncode"] == 1
    assert exc_info.value.context["args"] == ["status", "--json"]


@pytest.mark.asyncio
async def test_status_non_object_raises() -> None:
    with patch(SUBPROCESS, return_value=_process(b"[1, 2]")):
        with pytest.raises(TransportError, match="non-object") as exc_info:
            await KeybaseTransport().status()

    assert exc_info.value.context == {"command": "status"}
