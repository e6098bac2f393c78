"""Guild member, prune and ban endpoints and their payloads."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .transport import ENDPOINT_GUILDS, NULL, snowflake

MAX_MEMBER_FETCH_LIMIT = 1000
"""Largest number of members the server returns per request."""

DEFAULT_PRUNE_DAYS = 7
"""Number of days used for a prune when none is given."""


def _ids(values: Iterable[int]) -> list[str]:
    return [snowflake(value) for value in values]


def _fetch_sizes(limit: int) -> Iterator[int]:
    """Yield page sizes for a paginated fetch; a limit of 0 is unlimited."""
    if limit == 0:
        while True:
            yield MAX_MEMBER_FETCH_LIMIT
    while limit > 0:
        fetch = min(MAX_MEMBER_FETCH_LIMIT, limit)
        limit -= fetch
        yield fetch


def _member_fields(
    data: dict[str, Any],
    nick: str | None,
    roles: list[int] | None,
    mute: bool | None,
    deaf: bool | None,
) -> None:
    if nick is not None:
        data["nick"] = nick
    if roles is not None:
        data["roles"] = _ids(roles)
    if mute is not None:
        data["mute"] = mute
    if deaf is not None:
        data["deaf"] = deaf


@dataclass
class AddMemberData:
    """An OAuth2 access token for the user to add, and their initial settings."""

    token: str
    nick: str | None = None
    roles: list[int] | None = None
    mute: bool | None = None
    deaf: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"access_token": self.token}
        _member_fields(data, self.nick, self.roles, self.mute, self.deaf)
        return data


@dataclass
class ModifyMemberData:
    """Member attributes to change; None leaves a field alone.

    ``voice_channel`` of 0 is left alone; NULL disconnects the member from voice.
    """

    nick: str | None = None
    roles: list[int] | None = None
    mute: bool | None = None
    deaf: bool | None = None
    voice_channel: Any = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        _member_fields(data, self.nick, self.roles, self.mute, self.deaf)
        if self.voice_channel is NULL:
            data["channel_id"] = None
        elif self.voice_channel:
            data["channel_id"] = snowflake(self.voice_channel)
        return data


@dataclass
class PruneCountData:
    """Query for counting prunable members; 0 days means the default of 7."""

    days: int = 0
    included_roles: list[int] = field(default_factory=list)

    def to_params(self) -> dict[str, Any]:
        return {
            "days": self.days or DEFAULT_PRUNE_DAYS,
            "include_roles": _ids(self.included_roles) or None,
        }


@dataclass
class PruneData:
    """Query for beginning a prune; 0 days means the default of 7."""

    days: int = 0
    return_count: bool = False
    included_roles: list[int] = field(default_factory=list)

    def to_params(self) -> dict[str, Any]:
        return {
            "days": self.days or DEFAULT_PRUNE_DAYS,
            "compute_prune_count": self.return_count,
            "include_roles": _ids(self.included_roles) or None,
        }


@dataclass
class BanData:
    """Options of a ban: days of messages to delete (0-7) and a reason."""

    delete_days: int | None = None
    reason: str | None = None

    def to_params(self) -> dict[str, Any]:
        return {"delete_message_days": self.delete_days, "reason": self.reason}


class MembersMixin:
    """Member endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def member(self, guild_id: int, user_id: int) -> Any:
        """Return the guild member for the user."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/members/{user_id}")

    def members(self, guild_id: int, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` members of the guild (0 for all), smallest IDs first."""
        return self.members_after(guild_id, 0, limit)

    def members_after(self, guild_id: int, after: int, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` members with user IDs above ``after`` (0 for all)."""
        members: list[Any] = []
        for fetch in _fetch_sizes(limit):
            page = self._members_after(guild_id, after, fetch) or []
            members.extend(page)
            if len(page) < MAX_MEMBER_FETCH_LIMIT:
                break
            after = members[-1]["user"]["id"]
        return members

    def _members_after(self, guild_id: int, after: Any, limit: int) -> Any:
        limit = min(limit, MAX_MEMBER_FETCH_LIMIT)
        return self.request_json(
            "GET",
            f"{ENDPOINT_GUILDS}{guild_id}/members",
            params={"after": after or None, "limit": limit},
        )

    def add_member(self, guild_id: int, user_id: int, data: AddMemberData) -> Any:
        """Add a user to the guild with their OAuth2 token; returns the member if created."""
        return self.request_json(
            "PUT",
            f"{ENDPOINT_GUILDS}{guild_id}/members/{user_id}",
            json=data.to_dict(),
        )

    def modify_member(self, guild_id: int, user_id: int, data: ModifyMemberData) -> None:
        """Change attributes of a guild member."""
        self.fast_request(
            "PATCH",
            f"{ENDPOINT_GUILDS}{guild_id}/members/{user_id}",
            json=data.to_dict(),
        )

    def prune_count(self, guild_id: int, data: PruneCountData | None = None) -> int:
        """Return how many members a prune would remove."""
        data = data if data is not None else PruneCountData()
        result = self.request_json(
            "GET", f"{ENDPOINT_GUILDS}{guild_id}/prune", params=data.to_params()
        )
        return _pruned(result)

    def prune(self, guild_id: int, data: PruneData | None = None) -> int:
        """Begin a prune and return the number pruned (0 unless requested)."""
        data = data if data is not None else PruneData()
        result = self.request_json(
            "POST", f"{ENDPOINT_GUILDS}{guild_id}/prune", params=data.to_params()
        )
        return _pruned(result)

    def kick(self, guild_id: int, user_id: int) -> None:
        """Remove a member from the guild."""
        self.kick_with_reason(guild_id, user_id, "")

    def kick_with_reason(self, guild_id: int, user_id: int, reason: str) -> None:
        """Remove a member from the guild, recording a non-empty reason in the audit log."""
        self.fast_request(
            "DELETE",
            f"{ENDPOINT_GUILDS}{guild_id}/members/{user_id}",
            params={"reason": reason or None},
        )

    def bans(self, guild_id: int) -> Any:
        """Return the guild's bans."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/bans")

    def get_ban(self, guild_id: int, user_id: int) -> Any:
        """Return the ban of the user."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/bans/{user_id}")

    def ban(self, guild_id: int, user_id: int, data: BanData | None = None) -> None:
        """Ban the user, optionally deleting their recent messages."""
        data = data if data is not None else BanData()
        self.fast_request(
            "PUT",
            f"{ENDPOINT_GUILDS}{guild_id}/bans/{user_id}",
            params=data.to_params(),
        )

    def unban(self, guild_id: int, user_id: int) -> None:
        """Lift the user's ban."""
        self.fast_request("DELETE", f"{ENDPOINT_GUILDS}{guild_id}/bans/{user_id}")


def _pruned(result: Any) -> int:
    if isinstance(result, dict):
        return int(result.get("pruned") or 0)
    return 0