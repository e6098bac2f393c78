"""Application command and interaction endpoints and their payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .send import AllowedMentions
from .transport import ENDPOINT, to_json_value

ENDPOINT_APPLICATIONS = ENDPOINT + "applications/"
ENDPOINT_INTERACTIONS = ENDPOINT + "interactions/"


@dataclass
class CreateCommandData:
    """A slash command: its name, description and options."""

    name: str
    description: str
    options: list[Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        options = to_json_value(self.options) if self.options is not None else None
        return {"name": self.name, "description": self.description, "options": options}


class InteractionResponseType(IntEnum):
    """Kinds of response to an interaction."""

    PONG = 1
    ACKNOWLEDGE = 2
    MESSAGE = 3
    MESSAGE_WITH_SOURCE = 4
    ACKNOWLEDGE_WITH_SOURCE = 5


@dataclass
class InteractionResponseData:
    """The message sent back in answer to an interaction."""

    content: str = ""
    tts: bool = False
    embeds: list[Any] = field(default_factory=list)
    allowed_mentions: AllowedMentions | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"tts": self.tts, "content": self.content}
        if self.embeds:
            data["embeds"] = to_json_value(self.embeds)
        if self.allowed_mentions is not None:
            data["allowed_mentions"] = to_json_value(self.allowed_mentions)
        return data


@dataclass
class InteractionResponse:
    """A response to an interaction, with optional message data."""

    type: InteractionResponseType
    data: InteractionResponseData | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": int(self.type)}
        if self.data is not None:
            payload["data"] = self.data.to_dict()
        return payload


class ApplicationsMixin:
    """Command endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def _commands_url(self, app_id: int, guild_id: int | None = None) -> str:
        if guild_id is None:
            return f"{ENDPOINT_APPLICATIONS}{app_id}/commands"
        return f"{ENDPOINT_APPLICATIONS}{app_id}/guilds/{guild_id}/commands"

    def commands(self, app_id: int) -> Any:
        """Return the application's global commands."""
        return self.request_json("GET", self._commands_url(app_id))

    def command(self, app_id: int, command_id: int) -> Any:
        """Return one global command."""
        return self.request_json("GET", f"{self._commands_url(app_id)}/{command_id}")

    def create_command(self, app_id: int, data: CreateCommandData) -> Any:
        """Create a global command and return it."""
        return self.request_json("POST", self._commands_url(app_id), json=data.to_dict())

    def edit_command(self, app_id: int, command_id: int, data: CreateCommandData) -> Any:
        """Change a global command and return it."""
        return self.request_json(
            "PATCH", f"{self._commands_url(app_id)}/{command_id}", json=data.to_dict()
        )

    def delete_command(self, app_id: int, command_id: int) -> None:
        """Delete a global command."""
        self.fast_request("DELETE", f"{self._commands_url(app_id)}/{command_id}")

    def guild_commands(self, app_id: int, guild_id: int) -> Any:
        """Return the application's commands in the guild."""
        return self.request_json("GET", self._commands_url(app_id, guild_id))

    def guild_command(self, app_id: int, guild_id: int, command_id: int) -> Any:
        """Return one guild command."""
        return self.request_json(
            "GET", f"{self._commands_url(app_id, guild_id)}/{command_id}"
        )

    def create_guild_command(
        self, app_id: int, guild_id: int, data: CreateCommandData
    ) -> Any:
        """Create a guild command and return it."""
        return self.request_json(
            "POST", self._commands_url(app_id, guild_id), json=data.to_dict()
        )

    def edit_guild_command(
        self, app_id: int, guild_id: int, command_id: int, data: CreateCommandData
    ) -> Any:
        """Change a guild command and return it."""
        return self.request_json(
            "PATCH",
            f"{self._commands_url(app_id, guild_id)}/{command_id}",
            json=data.to_dict(),
        )

    def delete_guild_command(self, app_id: int, guild_id: int, command_id: int) -> None:
        """Delete a guild command."""
        self.fast_request(
            "DELETE", f"{self._commands_url(app_id, guild_id)}/{command_id}"
        )

    def respond_interaction(
        self, interaction_id: int, token: str, data: InteractionResponse
    ) -> None:
        """Answer an incoming interaction."""
        self.fast_request(
            "POST",
            f"{ENDPOINT_INTERACTIONS}{interaction_id}/{token}/callback",
            json=data.to_dict(),
        )