"""kbbot - typed Python bindings for the keybase command-line JSON API.

This package drives ``keybase <namespace> api`` as a subprocess and exposes
its team-management methods as async Python calls, plus the `kbbot` CLI.

Exports:
    __version__: Package version string.
    Bot: Entry point wiring the transport, session and operation groups.
"""

from __future__ import annotations

from .bot import Bot

__all__ = ["Bot", "__version__"]

__version__ = "0.1.0"
