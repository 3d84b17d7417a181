from __future__ import annotations

from typing import Any

from kbbot.client.base import TransportClient
from kbbot.core.result import OperationFailedError
from kbbot.team.types import (
    AddMembersParam,
    CreateTeamParam,
    ListTeamMembershipsParam,
    RemoveMemberParam,
    TeamAddMemberResult,
    TeamCreateResult,
    TeamDetails,
)

API_NAME = "team"


class TeamClient:
    """The team module of the bot, backed by ``keybase team api``."""

    def __init__(self, client: TransportClient) -> None:
        self._client = client

    async def _call(self, method: str, options: Any) -> Any:
        await self._client.guard_initialized()
        return await self._client.run_command(API_NAME, method, options)

    async def create(self, creation: CreateTeamParam) -> TeamCreateResult:
        """Create a new keybase team or subteam.

        Example:
            await bot.team.create({"team": "phoenix"})
        """
        res = await self._call("create-team", creation)
        if not res:
            raise OperationFailedError("create")
        return res

    async def add_members(self, additions: AddMembersParam) -> TeamAddMemberResult:
        """Add people to a team by email and/or username, each with a role.

        Example:
            await bot.team.add_members({
                "team": "phoenix",
                "emails": [{"email": "alice@keybase.io", "role": "writer"}],
                "usernames": [{"username": "frank", "role": "reader"}],
            })
        """
        res = await self._call("add-members", additions)
        if not res:
            raise OperationFailedError("addMembers")
        return res

    async def remove_member(self, removal: RemoveMemberParam) -> None:
        """Remove someone from a team."""
        # keybase answers remove-member with an empty result, so nothing to check.
        await self._call("remove-member", removal)

    async def list_team_memberships(self, team: ListTeamMembershipsParam) -> TeamDetails:
        """List a team's members, grouped by role."""
        res = await self._call("list-team-memberships", team)
        if not res:
            raise OperationFailedError("listTeamMemberships")
        return res


__all__ = ["API_NAME", "TeamClient"]
