from __future__ import annotations

from typing import Any, Protocol

from kbbot.client.transport import CommandTransport


class SessionGuard(Protocol):
    async def ensure_initialized(self) -> None: ...


class TransportClient:
    """Shared collaborator held by every operation group.

    Combines the session guard with the command transport so operation
    groups do not need to know about either directly.
    """

    def __init__(self, guard: SessionGuard, transport: CommandTransport) -> None:
        self._guard = guard
        self._transport = transport

    async def guard_initialized(self) -> None:
        await self._guard.ensure_initialized()

    async def run_command(self, namespace: str, method: str, options: Any) -> Any:
        return await self._transport.run_api_command(namespace, method, options)


__all__ = ["SessionGuard", "TransportClient"]
