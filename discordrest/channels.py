"""Channel endpoints and their payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .transport import (
    ENDPOINT_CHANNELS,
    ENDPOINT_GUILDS,
    set_optional,
    snowflake,
    to_json_value,
)


@dataclass
class CreateChannelData:
    """Parameters for creating a guild channel."""

    name: str
    type: int = 0
    topic: str = ""
    voice_bitrate: int = 0
    voice_user_limit: int = 0
    user_rate_limit: int = 0
    position: int | None = None
    permissions: list[Any] = field(default_factory=list)
    category_id: int = 0
    nsfw: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.type:
            data["type"] = int(self.type)
        if self.topic:
            data["topic"] = self.topic
        if self.voice_bitrate:
            data["bitrate"] = self.voice_bitrate
        if self.voice_user_limit:
            data["user_limit"] = self.voice_user_limit
        if self.user_rate_limit:
            data["rate_limit_per_user"] = self.user_rate_limit
        if self.position is not None:
            data["position"] = self.position
        if self.permissions:
            data["permission_overwrites"] = to_json_value(self.permissions)
        if self.category_id:
            data["parent_id"] = snowflake(self.category_id)
        if self.nsfw:
            data["nsfw"] = True
        return data


@dataclass
class MoveChannelData:
    """A new sorting position for one channel; None sends null."""

    id: int
    position: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": snowflake(self.id), "position": self.position}


@dataclass
class ModifyChannelData:
    """Channel settings to change; None leaves a field alone, NULL clears it."""

    name: str = ""
    type: int | None = None
    position: Any = None
    topic: Any = None
    nsfw: Any = None
    user_rate_limit: Any = None
    voice_bitrate: Any = None
    voice_user_limit: Any = None
    permissions: list[Any] | None = None
    category_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        set_optional(data, "type", self.type, int)
        set_optional(data, "position", self.position)
        set_optional(data, "topic", self.topic)
        set_optional(data, "nsfw", self.nsfw)
        set_optional(data, "rate_limit_per_user", self.user_rate_limit)
        set_optional(data, "bitrate", self.voice_bitrate)
        set_optional(data, "user_limit", self.voice_user_limit)
        set_optional(data, "permission_overwrites", self.permissions)
        if self.category_id:
            data["parent_id"] = snowflake(self.category_id)
        return data


@dataclass
class EditChannelPermissionData:
    """A permission overwrite for a role or member."""

    type: Any
    allow: int = 0
    deny: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": to_json_value(self.type),
            "allow": str(int(self.allow)),
            "deny": str(int(self.deny)),
        }


@dataclass
class Ack:
    """Read-state token of a channel, carried from one acknowledgement to the next."""

    token: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token}


class ChannelsMixin:
    """Channel endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def channels(self, guild_id: int) -> Any:
        """Return the guild's channels."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/channels")

    def create_channel(self, guild_id: int, data: CreateChannelData) -> Any:
        """Create a channel in the guild and return it."""
        return self.request_json(
            "POST", f"{ENDPOINT_GUILDS}{guild_id}/channels", json=data.to_dict()
        )

    def move_channel(self, guild_id: int, data: Sequence[MoveChannelData]) -> None:
        """Change the positions of channels in the guild."""
        self.fast_request(
            "PATCH",
            f"{ENDPOINT_GUILDS}{guild_id}/channels",
            json=[item.to_dict() for item in data],
        )

    def channel(self, channel_id: int) -> Any:
        """Return the channel."""
        return self.request_json("GET", f"{ENDPOINT_CHANNELS}{channel_id}")

    def modify_channel(self, channel_id: int, data: ModifyChannelData) -> None:
        """Update the channel's settings."""
        self.fast_request(
            "PATCH", f"{ENDPOINT_CHANNELS}{channel_id}", json=data.to_dict()
        )

    def delete_channel(self, channel_id: int) -> None:
        """Delete a channel or close a private message."""
        self.fast_request("DELETE", f"{ENDPOINT_CHANNELS}{channel_id}")

    def edit_channel_permission(
        self, channel_id: int, overwrite_id: int, data: EditChannelPermissionData
    ) -> None:
        """Set a permission overwrite for a user or role in the channel."""
        self.fast_request(
            "PUT",
            f"{ENDPOINT_CHANNELS}{channel_id}/permissions/{overwrite_id}",
            json=data.to_dict(),
        )

    def delete_channel_permission(self, channel_id: int, overwrite_id: int) -> None:
        """Remove a permission overwrite from the channel."""
        self.fast_request(
            "DELETE", f"{ENDPOINT_CHANNELS}{channel_id}/permissions/{overwrite_id}"
        )

    def typing(self, channel_id: int) -> None:
        """Show the typing indicator in the channel."""
        self.fast_request("POST", f"{ENDPOINT_CHANNELS}{channel_id}/typing")

    def pinned_messages(self, channel_id: int) -> Any:
        """Return the channel's pinned messages."""
        return self.request_json("GET", f"{ENDPOINT_CHANNELS}{channel_id}/pins")

    def pin_message(self, channel_id: int, message_id: int) -> None:
        """Pin a message in the channel."""
        self.fast_request("PUT", f"{ENDPOINT_CHANNELS}{channel_id}/pins/{message_id}")

    def unpin_message(self, channel_id: int, message_id: int) -> None:
        """Unpin a message in the channel."""
        self.fast_request(
            "DELETE", f"{ENDPOINT_CHANNELS}{channel_id}/pins/{message_id}"
        )

    def add_recipient(
        self, channel_id: int, user_id: int, access_token: str, nickname: str
    ) -> None:
        """Add a user to a group direct message."""
        self.fast_request(
            "PUT",
            f"{ENDPOINT_CHANNELS}{channel_id}/recipients/{user_id}",
            json={"access_token": access_token, "nickname": nickname},
        )

    def remove_recipient(self, channel_id: int, user_id: int) -> None:
        """Remove a user from a group direct message."""
        self.fast_request(
            "DELETE", f"{ENDPOINT_CHANNELS}{channel_id}/recipients/{user_id}"
        )

    def ack(self, channel_id: int, message_id: int, ack: Ack) -> Ack:
        """Mark the channel as read up to the message, updating and returning ``ack``."""
        result = self.request_json(
            "POST",
            f"{ENDPOINT_CHANNELS}{channel_id}/messages/{message_id}/ack",
            json=ack.to_dict(),
        )
        if isinstance(result, Mapping) and "token" in result:
            ack.token = result["token"]
        return ack