"""Request and response shapes for the keybase team API.

Requests are plain dicts typed structurally; they are sent to keybase
exactly as given. Responses are whatever JSON keybase returns, the keys
listed here are the ones it commonly includes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, NotRequired, TypedDict


class TeamRole(str, Enum):
    NONE = "none"
    READER = "reader"
    WRITER = "writer"
    ADMIN = "admin"
    OWNER = "owner"
    BOT = "bot"
    RESTRICTED_BOT = "restrictedbot"

    def __str__(self) -> str:
        return self.value


class MemberEmail(TypedDict):
    email: str
    role: TeamRole | str


class MemberUsername(TypedDict):
    username: str
    role: TeamRole | str


class CreateTeamParam(TypedDict):
    team: str


class AddMembersParam(TypedDict):
    team: str
    emails: NotRequired[list[MemberEmail]]
    usernames: NotRequired[list[MemberUsername]]


class RemoveMemberParam(TypedDict):
    team: str
    username: str


class ListTeamMembershipsParam(TypedDict):
    team: str


class TeamCreateResult(TypedDict, total=False):
    teamID: str
    chatSent: bool
    creatorAdded: bool


class TeamAddMemberResult(TypedDict, total=False):
    invited: bool
    user: dict[str, Any] | None
    chatSending: bool


class TeamMemberDetails(TypedDict, total=False):
    uv: dict[str, Any]
    username: str
    fullName: str
    needsPUK: bool
    status: int


class TeamMembersDetails(TypedDict, total=False):
    owners: list[TeamMemberDetails] | None
    admins: list[TeamMemberDetails] | None
    writers: list[TeamMemberDetails] | None
    readers: list[TeamMemberDetails] | None
    bots: list[TeamMemberDetails] | None
    restrictedBots: list[TeamMemberDetails] | None


class TeamDetails(TypedDict, total=False):
    name: str
    members: TeamMembersDetails
    keyGeneration: int
    annotatedActiveInvites: dict[str, Any] | None
    settings: dict[str, Any]
    showcase: dict[str, Any]


__all__ = [
    "AddMembersParam",
    "CreateTeamParam",
    "ListTeamMembershipsParam",
    "MemberEmail",
    "MemberUsername",
    "RemoveMemberParam",
    "TeamAddMemberResult",
    "TeamCreateResult",
    "TeamDetails",
    "TeamMemberDetails",
    "TeamMembersDetails",
    "TeamRole",
]
