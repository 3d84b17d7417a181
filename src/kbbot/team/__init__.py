"""Keybase team management: create teams, manage and list members."""

from __future__ import annotations

from .client import TeamClient
from .types import (
    AddMembersParam,
    CreateTeamParam,
    ListTeamMembershipsParam,
    MemberEmail,
    MemberUsername,
    RemoveMemberParam,
    TeamAddMemberResult,
    TeamCreateResult,
    TeamDetails,
    TeamRole,
)

__all__ = [
    "AddMembersParam",
    "CreateTeamParam",
    "ListTeamMembershipsParam",
    "MemberEmail",
    "MemberUsername",
    "RemoveMemberParam",
    "TeamAddMemberResult",
    "TeamClient",
    "TeamCreateResult",
    "TeamDetails",
    "TeamRole",
]
