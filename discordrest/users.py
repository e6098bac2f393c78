"""User and login endpoints and their payloads."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .image import Image
from .transport import (
    ENDPOINT,
    ENDPOINT_GUILDS,
    ENDPOINT_ME,
    ENDPOINT_USERS,
    snowflake,
    to_json_value,
)

ENDPOINT_AUTH = ENDPOINT + "auth/"
ENDPOINT_LOGIN = ENDPOINT_AUTH + "login"
ENDPOINT_TOTP = ENDPOINT_AUTH + "mfa/totp"


@dataclass
class ModifySelfData:
    """Account settings to change; None fields are left alone."""

    username: str | None = None
    avatar: Image | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.username is not None:
            data["username"] = self.username
        if self.avatar is not None:
            data["image"] = self.avatar.to_json()
        return data


@dataclass
class LoginResponse:
    """Result of a login: a token, or an MFA ticket to complete."""

    mfa: bool = False
    sms: bool = False
    ticket: str = ""
    token: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LoginResponse:
        """Build the response from its decoded JSON body."""
        data = data or {}
        return cls(
            mfa=bool(data.get("mfa", False)),
            sms=bool(data.get("sms", False)),
            ticket=data.get("ticket") or "",
            token=data.get("token") or "",
        )


class UsersMixin:
    """User endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def user(self, user_id: int) -> Any:
        """Return the user."""
        return self.request_json("GET", f"{ENDPOINT_USERS}{user_id}")

    def me(self) -> Any:
        """Return the current user."""
        return self.request_json("GET", ENDPOINT_ME)

    def modify_me(self, data: ModifySelfData) -> Any:
        """Change the current user's settings and return the user."""
        return self.request_json("PATCH", ENDPOINT_ME, json=data.to_dict())

    def change_own_nickname(self, guild_id: int, nick: str) -> None:
        """Change the current user's nickname in the guild."""
        self.fast_request(
            "PATCH",
            f"{ENDPOINT_GUILDS}{guild_id}/members/@me/nick",
            json={"nick": nick},
        )

    def private_channels(self) -> Any:
        """Return the current user's direct message channels."""
        return self.request_json("GET", ENDPOINT_ME + "/channels")

    def create_private_channel(self, recipient_id: int) -> Any:
        """Open a direct message channel with the user."""
        return self.request_json(
            "POST",
            ENDPOINT_ME + "/channels",
            json={"recipient_id": snowflake(recipient_id)},
        )

    def user_connections(self) -> Any:
        """Return the current user's connections."""
        return self.request_json("GET", ENDPOINT_ME + "/connections")

    def note(self, user_id: int) -> str:
        """Return the note kept on the user."""
        body = self.request_json("GET", f"{ENDPOINT_ME}/notes/{user_id}")
        if isinstance(body, Mapping):
            return body.get("note") or ""
        return ""

    def set_note(self, user_id: int, note: str) -> None:
        """Set the note kept on the user."""
        self.fast_request("PUT", f"{ENDPOINT_ME}/notes/{user_id}", json={"note": note})

    def set_relationship(self, user_id: int, relationship_type: Any) -> None:
        """Set the relationship between the current user and the user."""
        self.fast_request(
            "PUT",
            f"{ENDPOINT_ME}/relationships/{user_id}",
            json={"type": to_json_value(relationship_type)},
        )

    def delete_relationship(self, user_id: int) -> None:
        """Remove the relationship between the current user and the user."""
        self.fast_request("DELETE", f"{ENDPOINT_ME}/relationships/{user_id}")

    def login(self, email: str, password: str) -> LoginResponse:
        """Log in with e-mail and password."""
        body = self.request_json(
            "POST", ENDPOINT_LOGIN, json={"email": email, "password": password}
        )
        return LoginResponse.from_dict(body)

    def totp(self, code: str, ticket: str) -> LoginResponse:
        """Complete a multi-factor login with a TOTP code and its ticket."""
        body = self.request_json(
            "POST", ENDPOINT_TOTP, json={"code": code, "ticket": ticket}
        )
        return LoginResponse.from_dict(body)