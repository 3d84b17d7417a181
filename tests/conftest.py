from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


LOGGED_IN_STATUS: dict[str, Any] = {
    "Username": "kbbot",
    "LoggedIn": True,
    "Device": {"name": "ci-runner", "type": "desktop"},
}


class FakeTransport:
    """In-memory stand-in for the keybase transport.

    Records every API call and answers with ``result`` or raises ``error``.
    """

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.status_payload: dict[str, Any] = dict(LOGGED_IN_STATUS)
        self.calls: list[tuple[str, str, Any]] = []
        self.status_calls = 0

    async def run_api_command(self, api_name: str, method: str, options: Any) -> Any:
        self.calls.append((api_name, method, options))
        if self.error is not None:
            raise self.error
        return self.result

    async def status(self) -> dict[str, Any]:
        self.status_calls += 1
        return self.status_payload


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: Any) -> None:
    """Drop KBBOT_* variables from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("KBBOT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: Any, clean_env: None) -> Path:
    """Point config to a temp path so tests don't touch user state."""
    cfg_path = tmp_path / "config.toml"
    monkeypatch.setenv("KBBOT_CONFIG", str(cfg_path))
    return cfg_path


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use an in-memory Rich console during tests."""
    test_console = Console(record=True, width=200)
    import kbbot.commands.team as team_cmd
    import kbbot.core.console as core_console
    import kbbot.core.decorators as decorators
    import kbbot.main as kb_main

    monkeypatch.setattr(core_console, "console", test_console)
    monkeypatch.setattr(kb_main, "console", test_console)
    monkeypatch.setattr(team_cmd, "console", test_console)
    monkeypatch.setattr(decorators, "console", test_console)
    return test_console
