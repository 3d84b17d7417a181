"""Bot session state and the initialization guard.

The guard is checked before every API call. A session becomes ready by
attaching to a keybase service that is already running and logged in.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from kbbot.client.transport import CommandTransport
from kbbot.core.console import get_logger
from kbbot.core.result import KbBotError, UninitializedSessionError

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionInfo:
    """Identity of the logged-in keybase user the bot acts as."""

    username: str
    device_name: str | None = None
    home_dir: Path | None = None


class KeybaseSession:
    def __init__(self, transport: CommandTransport, home_dir: Path | None = None) -> None:
        self._transport = transport
        self._home_dir = home_dir
        self._info: SessionInfo | None = None

    @property
    def initialized(self) -> bool:
        return self._info is not None

    @property
    def info(self) -> SessionInfo | None:
        return self._info

    async def ensure_initialized(self) -> None:
        """Raise unless the session has been initialized."""
        if self._info is None:
            raise UninitializedSessionError("bot is not initialized")

    async def init_from_running_service(self) -> SessionInfo:
        """Attach to the keybase service already running for this home directory."""
        if self._info is not None:
            raise KbBotError(
                "session already initialized", context={"username": self._info.username}
            )

        status = await self._transport.status()
        username = status.get("Username")
        if not status.get("LoggedIn") or not username:
            raise UninitializedSessionError(
                "keybase service is not logged in",
                context={"home_dir": self._home_dir} if self._home_dir else None,
            )

        device = status.get("Device") or {}
        self._info = SessionInfo(
            username=str(username),
            device_name=device.get("name") if isinstance(device, dict) else None,
            home_dir=self._home_dir,
        )
        logger.info("Initialized bot session as %s", self._info.username)
        return self._info

    async def deinit(self) -> None:
        if self._info is not None:
            logger.info("Closing bot session for %s", self._info.username)
        self._info = None


__all__ = ["KeybaseSession", "SessionInfo"]
