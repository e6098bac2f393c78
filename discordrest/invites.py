"""Invite endpoints and their payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .transport import ENDPOINT, ENDPOINT_CHANNELS, ENDPOINT_GUILDS

ENDPOINT_INVITES = ENDPOINT + "invites/"


@dataclass
class CreateInviteData:
    """Options of a new invite; None or zero fields take the server's defaults."""

    max_age: int | None = None
    max_uses: int = 0
    temporary: bool = False
    unique: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.max_age is not None:
            data["max_age"] = self.max_age
        if self.max_uses:
            data["max_uses"] = self.max_uses
        if self.temporary:
            data["temporary"] = True
        if self.unique:
            data["unique"] = True
        return data


class InvitesMixin:
    """Invite endpoints for a client that provides ``request_json``."""

    def invite(self, code: str) -> Any:
        """Return the invite for the code, without approximate member counts."""
        return self.request_json("GET", ENDPOINT_INVITES + code)

    def invite_with_counts(self, code: str) -> Any:
        """Return the invite for the code with approximate member counts."""
        return self.request_json(
            "GET", ENDPOINT_INVITES + code, params={"with_counts": True}
        )

    def channel_invites(self, channel_id: int) -> Any:
        """Return the channel's invites."""
        return self.request_json("GET", f"{ENDPOINT_CHANNELS}{channel_id}/invites")

    def guild_invites(self, guild_id: int) -> Any:
        """Return the guild's invites."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/invites")

    def create_invite(self, channel_id: int, data: CreateInviteData | None = None) -> Any:
        """Create an invite to the channel and return it."""
        data = data if data is not None else CreateInviteData()
        return self.request_json(
            "POST", f"{ENDPOINT_CHANNELS}{channel_id}/invites", json=data.to_dict()
        )

    def join_invite(self, code: str) -> Any:
        """Join a guild with the invite code."""
        return self.request_json("POST", ENDPOINT_INVITES + code)

    def delete_invite(self, code: str) -> Any:
        """Delete the invite and return it."""
        return self.request_json("DELETE", ENDPOINT_INVITES + code)