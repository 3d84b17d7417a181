"""Plumbing shared by all bot modules: the keybase transport and session guard."""

from __future__ import annotations

from .base import SessionGuard, TransportClient
from .session import KeybaseSession, SessionInfo
from .transport import CommandTransport, KeybaseTransport

__all__ = [
    "CommandTransport",
    "KeybaseSession",
    "KeybaseTransport",
    "SessionGuard",
    "SessionInfo",
    "TransportClient",
]
