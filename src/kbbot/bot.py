"""Top-level bot object.

Usage:
    async with Bot.from_config(config) as bot:
        await bot.team.create({"team": "phoenix"})
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from kbbot.client.base import TransportClient
from kbbot.client.session import KeybaseSession, SessionInfo
from kbbot.client.transport import CommandTransport, KeybaseTransport
from kbbot.core.config import AppConfig
from kbbot.team.client import TeamClient


class Bot:
    """A keybase bot bound to one keybase home directory."""

    def __init__(
        self, transport: CommandTransport | None = None, *, home_dir: Path | None = None
    ) -> None:
        self.transport: CommandTransport = transport or KeybaseTransport(home_dir=home_dir)
        self.session = KeybaseSession(self.transport, home_dir=home_dir)
        client = TransportClient(self.session, self.transport)
        self.team = TeamClient(client)

    @classmethod
    def from_config(cls, config: AppConfig) -> Bot:
        keybase = config.keybase
        transport = KeybaseTransport(
            binary=keybase.binary, home_dir=keybase.home_dir, timeout=keybase.timeout
        )
        return cls(transport, home_dir=keybase.home_dir)

    async def init_from_running_service(self) -> SessionInfo:
        return await self.session.init_from_running_service()

    async def deinit(self) -> None:
        await self.session.deinit()

    def my_info(self) -> SessionInfo | None:
        return self.session.info

    async def __aenter__(self) -> Bot:
        await self.init_from_running_service()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.deinit()


__all__ = ["Bot"]
