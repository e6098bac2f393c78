"""Guild emoji endpoints and their payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .image import Image
from .transport import ENDPOINT_GUILDS, snowflake

MAX_EMOJI_SIZE = 256 * 1000


@dataclass
class CreateEmojiData:
    """A new emoji: its name, image and the roles allowed to use it."""

    name: str
    image: Image
    roles: list[int] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "image": self.image.to_json()}
        if self.roles is not None:
            data["roles"] = [snowflake(role) for role in self.roles]
        return data


@dataclass
class ModifyEmojiData:
    """Emoji fields to change; empty name and None roles are left alone."""

    name: str = ""
    roles: list[int] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        if self.roles is not None:
            data["roles"] = [snowflake(role) for role in self.roles]
        return data


class EmojisMixin:
    """Emoji endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def emojis(self, guild_id: int) -> Any:
        """Return the guild's emojis."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/emojis")

    def emoji(self, guild_id: int, emoji_id: int) -> Any:
        """Return one emoji of the guild."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/emojis/{emoji_id}")

    def create_emoji(self, guild_id: int, data: CreateEmojiData) -> Any:
        """Create an emoji; the image must be PNG, JPEG or GIF and at most 256kB."""
        data.image.validate(MAX_EMOJI_SIZE)
        return self.request_json(
            "POST", f"{ENDPOINT_GUILDS}{guild_id}/emojis", json=data.to_dict()
        )

    def modify_emoji(self, guild_id: int, emoji_id: int, data: ModifyEmojiData) -> None:
        """Change an emoji's name or roles."""
        self.fast_request(
            "PATCH",
            f"{ENDPOINT_GUILDS}{guild_id}/emojis/{emoji_id}",
            json=data.to_dict(),
        )

    def delete_emoji(self, guild_id: int, emoji_id: int) -> None:
        """Delete an emoji from the guild."""
        self.fast_request("DELETE", f"{ENDPOINT_GUILDS}{guild_id}/emojis/{emoji_id}")