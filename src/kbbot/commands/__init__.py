"""CLI command modules for kbbot.

This package contains the user-facing command groups:
    - team: Team creation and membership management
"""

from __future__ import annotations

from . import team

__all__ = ["team"]
