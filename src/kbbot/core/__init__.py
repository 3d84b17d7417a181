"""Core shared infrastructure for kbbot.

This package contains foundational utilities:
    - config: Application configuration management
    - console: Rich console output and logging
    - result: Result types and the error hierarchy
    - decorators: CLI error presentation
"""

from __future__ import annotations

from . import config, console

__all__ = ["config", "console"]
