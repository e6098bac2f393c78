"""Guild role endpoints and their payloads."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .transport import ENDPOINT_GUILDS, set_optional, snowflake


@dataclass
class CreateRoleData:
    """A new role; zero and empty fields take the server's defaults."""

    name: str = ""
    permissions: int = 0
    color: int = 0
    hoist: bool = False
    mentionable: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        if self.permissions:
            data["permissions"] = str(int(self.permissions))
        if self.color:
            data["color"] = int(self.color)
        if self.hoist:
            data["hoist"] = True
        if self.mentionable:
            data["mentionable"] = True
        return data


@dataclass
class MoveRoleData:
    """A new position for one role; None omits it, NULL sends null."""

    id: int
    position: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": snowflake(self.id)}
        set_optional(data, "position", self.position)
        return data


@dataclass
class ModifyRoleData:
    """Role fields to change; None leaves a field alone, NULL clears it."""

    name: Any = None
    permissions: int | None = None
    color: Any = None
    hoist: Any = None
    mentionable: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        set_optional(data, "name", self.name)
        set_optional(data, "permissions", self.permissions, lambda bits: str(int(bits)))
        set_optional(data, "color", self.color)
        set_optional(data, "hoist", self.hoist)
        set_optional(data, "mentionable", self.mentionable)
        return data


class RolesMixin:
    """Role endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def add_role(self, guild_id: int, user_id: int, role_id: int) -> None:
        """Give a role to a guild member."""
        self.fast_request(
            "PUT", f"{ENDPOINT_GUILDS}{guild_id}/members/{user_id}/roles/{role_id}"
        )

    def remove_role(self, guild_id: int, user_id: int, role_id: int) -> None:
        """Take a role from a guild member."""
        self.fast_request(
            "DELETE", f"{ENDPOINT_GUILDS}{guild_id}/members/{user_id}/roles/{role_id}"
        )

    def roles(self, guild_id: int) -> Any:
        """Return the guild's roles."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/roles")

    def create_role(self, guild_id: int, data: CreateRoleData) -> Any:
        """Create a role in the guild and return it."""
        return self.request_json(
            "POST", f"{ENDPOINT_GUILDS}{guild_id}/roles", json=data.to_dict()
        )

    def move_role(self, guild_id: int, data: Sequence[MoveRoleData]) -> Any:
        """Change the positions of roles and return the guild's roles."""
        return self.request_json(
            "PATCH",
            f"{ENDPOINT_GUILDS}{guild_id}/roles",
            json=[item.to_dict() for item in data],
        )

    def modify_role(self, guild_id: int, role_id: int, data: ModifyRoleData) -> Any:
        """Change a role and return it."""
        return self.request_json(
            "PATCH", f"{ENDPOINT_GUILDS}{guild_id}/roles/{role_id}", json=data.to_dict()
        )

    def delete_role(self, guild_id: int, role_id: int) -> None:
        """Delete a role from the guild."""
        self.fast_request("DELETE", f"{ENDPOINT_GUILDS}{guild_id}/roles/{role_id}")