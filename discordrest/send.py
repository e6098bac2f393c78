"""Payloads for sending messages: allowed mentions, files and message data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, BinaryIO

ATTACHMENT_SPOILER_PREFIX = "SPOILER_"


class AllowedMentionType(str, Enum):
    """Kinds of mention the server may parse from message content."""

    ROLES = "roles"
    USERS = "users"
    EVERYONE = "everyone"


class EmptyMessageError(ValueError):
    """A message has no content, no embed and no files."""

    def __init__(self, message: str = "message is empty") -> None:
        super().__init__(message)


def _jsonable(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    return to_dict() if callable(to_dict) else value


@dataclass
class AllowedMentions:
    """Allowlist of mentions for a message.

    ``parse`` of None is sent as null; an empty list with no roles or users
    disables all mentions.
    """

    parse: list[AllowedMentionType | str] | None = None
    roles: list[int] = field(default_factory=list)
    users: list[int] = field(default_factory=list)
    replied_user: bool | None = None

    def verify(self) -> None:
        """Raise ValueError if the allowlist breaks the server's constraints."""
        if len(self.roles) > 100:
            raise ValueError(f"roles slice length {len(self.roles)} is over 100")
        if len(self.users) > 100:
            raise ValueError(f"users slice length {len(self.users)} is over 100")

        for allowed in self.parse or ():
            kind = AllowedMentionType(allowed)
            if kind is AllowedMentionType.ROLES and self.roles:
                raise ValueError(
                    "parse has AllowRoleMention and Roles slice is not empty"
                )
            if kind is AllowedMentionType.USERS and self.users:
                raise ValueError(
                    "parse has AllowUserMention and Users slice is not empty"
                )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object for this allowlist."""
        data: dict[str, Any] = {
            "parse": None
            if self.parse is None
            else [AllowedMentionType(kind).value for kind in self.parse]
        }
        if self.roles:
            data["roles"] = [str(role) for role in self.roles]
        if self.users:
            data["users"] = [str(user) for user in self.users]
        if self.replied_user is not None:
            data["replied_user"] = self.replied_user
        return data


@dataclass
class File:
    """A file attachment to upload with a message."""

    name: str
    reader: BinaryIO | bytes = b""

    def attachment_uri(self) -> str:
        """Return the URI an embed uses to refer to this attachment."""
        return "attachment://" + self.name


@dataclass
class SendMessageData:
    """Everything needed to send a new message."""

    content: str = ""
    nonce: str = ""
    tts: bool = False
    embed: Any = None
    files: list[File] = field(default_factory=list)
    allowed_mentions: AllowedMentions | None = None
    reference: Any = None

    def needs_multipart(self) -> bool:
        """Report whether the message has files and so must be sent as multipart."""
        return bool(self.files)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body, omitting empty fields and the files."""
        data: dict[str, Any] = {}
        if self.content:
            data["content"] = self.content
        if self.nonce:
            data["nonce"] = self.nonce
        if self.tts:
            data["tts"] = True
        if self.embed is not None:
            data["embed"] = _jsonable(self.embed)
        if self.allowed_mentions is not None:
            data["allowed_mentions"] = self.allowed_mentions.to_dict()
        if self.reference is not None:
            data["message_reference"] = _jsonable(self.reference)
        return data