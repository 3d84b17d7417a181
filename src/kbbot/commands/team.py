"""Team management commands.

Provides CLI commands for:
    - Creating teams and subteams
    - Adding members by email or username with a role
    - Removing a member
    - Listing a team's members by role
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

import typer
from rich import box
from rich.table import Table

from kbbot.bot import Bot
from kbbot.core.console import console
from kbbot.core.decorators import handle_exceptions
from kbbot.team.types import (
    AddMembersParam,
    MemberEmail,
    MemberUsername,
    TeamDetails,
    TeamRole,
)

if TYPE_CHECKING:
    from kbbot.main import AppState

app = typer.Typer(help="Create keybase teams and manage their members.")

T = TypeVar("T")

ROLE_GROUPS: tuple[tuple[str, str], ...] = (
    ("owners", "owner"),
    ("admins", "admin"),
    ("writers", "writer"),
    ("readers", "reader"),
    ("bots", "bot"),
    ("restrictedBots", "restrictedbot"),
)


def _run_with_bot(state: AppState, action: Callable[[Bot], Awaitable[T]]) -> T:
    async def _run() -> T:
        async with Bot.from_config(state.config) as bot:
            return await action(bot)

    return asyncio.run(_run())


def _split_member(entry: str, default_role: str) -> tuple[str, str]:
    """Split ``name[:role]`` into its parts."""
    name, sep, role = entry.rpartition(":")
    if not sep:
        return entry, default_role
    if not name or not role:
        raise typer.BadParameter(f"Expected NAME[:ROLE], got {entry!r}")
    return name, role


def _build_additions(
    team: str, emails: list[str], usernames: list[str], default_role: str
) -> AddMembersParam:
    additions: AddMembersParam = {"team": team}
    if emails:
        email_entries: list[MemberEmail] = []
        for entry in emails:
            email, role = _split_member(entry, default_role)
            email_entries.append({"email": email, "role": role})
        additions["emails"] = email_entries
    if usernames:
        username_entries: list[MemberUsername] = []
        for entry in usernames:
            username, role = _split_member(entry, default_role)
            username_entries.append({"username": username, "role": role})
        additions["usernames"] = username_entries
    return additions


def _render_members(team: str, details: TeamDetails) -> Table:
    table = Table(title=f"Members of {team}", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Username", style="white", no_wrap=True)
    table.add_column("Full name", style="white")

    members: dict[str, Any] = dict(details.get("members") or {})
    for key, label in ROLE_GROUPS:
        for member in members.get(key) or []:
            table.add_row(label, member.get("username", "?"), member.get("fullName", ""))
    return table


@app.command("create")
@handle_exceptions
def create(
    ctx: typer.Context,
    team: str = typer.Argument(..., help="Name of the team or subteam (parent.child)."),
) -> None:
    """Create a new team or subteam."""
    state: AppState = ctx.obj
    result = _run_with_bot(state, lambda bot: bot.team.create({"team": team}))
    team_id = result.get("teamID") if isinstance(result, dict) else None
    suffix = f" ({team_id})" if team_id else ""
    console.print(f"[green]Created team[/green] {team}{suffix}")


@app.command("add-members")
@handle_exceptions
def add_members(
    ctx: typer.Context,
    team: str = typer.Argument(..., help="Team to add members to."),
    email: list[str] | None = typer.Option(
        None, "--email", "-e", help="Invite by email as ADDRESS[:ROLE]. Repeatable."
    ),
    user: list[str] | None = typer.Option(
        None, "--user", "-u", help="Add by username as NAME[:ROLE]. Repeatable."
    ),
    role: str = typer.Option(
        TeamRole.WRITER.value, "--role", "-r", help="Role for entries without an explicit one."
    ),
) -> None:
    """Add people to a team with per-person roles."""
    state: AppState = ctx.obj
    if not email and not user:
        raise typer.BadParameter("Pass at least one --email or --user.")

    additions = _build_additions(team, email or [], user or [], role)
    _run_with_bot(state, lambda bot: bot.team.add_members(additions))
    count = len(additions.get("emails", [])) + len(additions.get("usernames", []))
    console.print(f"[green]Added {count} member(s) to[/green] {team}")


@app.command("remove-member")
@handle_exceptions
def remove_member(
    ctx: typer.Context,
    team: str = typer.Argument(..., help="Team to remove the member from."),
    username: str = typer.Argument(..., help="Keybase username to remove."),
) -> None:
    """Remove someone from a team."""
    state: AppState = ctx.obj
    _run_with_bot(
        state, lambda bot: bot.team.remove_member({"team": team, "username": username})
    )
    console.print(f"[green]Removed[/green] {username} [green]from[/green] {team}")


@app.command("members")
@handle_exceptions
def members(
    ctx: typer.Context,
    team: str = typer.Argument(..., help="Team whose members to list."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw API response."),
) -> None:
    """List a team's members grouped by role."""
    state: AppState = ctx.obj
    details = _run_with_bot(state, lambda bot: bot.team.list_team_memberships({"team": team}))
    if as_json:
        console.print_json(data=details)
        return
    console.print(_render_members(team, details))
