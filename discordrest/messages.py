"""Message endpoints and their payloads."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from .send import AllowedMentions, EmptyMessageError, SendMessageData
from .transport import ENDPOINT_CHANNELS, set_optional, snowflake

MAX_MESSAGE_FETCH_LIMIT = 100
"""Largest number of messages the server returns per request."""

MAX_MESSAGE_DELETE_LIMIT = 100
"""Largest number of messages one bulk delete may remove."""

SUPPRESS_EMBEDS = 1 << 2
"""Message flag that hides the embeds of a message."""

_DEFAULT_FETCH_LIMIT = 50


def _fetch_sizes(limit: int) -> Iterator[int]:
    """Yield page sizes for a paginated fetch; a limit of 0 is unlimited."""
    if limit == 0:
        while True:
            yield MAX_MESSAGE_FETCH_LIMIT
    while limit > 0:
        fetch = min(MAX_MESSAGE_FETCH_LIMIT, limit)
        limit -= fetch
        yield fetch


def _reference(message_id: int) -> dict[str, Any]:
    return {"message_id": snowflake(message_id)}


def _verify_mentions(mentions: AllowedMentions | None) -> None:
    if mentions is None:
        return
    try:
        mentions.verify()
    except Exception as err:
        raise ValueError(f"allowedMentions error: {err}") from err


def _validate_embed(embed: Any) -> None:
    if embed is None:
        return
    validate = getattr(embed, "validate", None)
    if not callable(validate):
        return
    try:
        validate()
    except Exception as err:
        raise ValueError(f"embed error: {err}") from err


@dataclass
class EditMessageData:
    """Message fields to change; None leaves a field alone, NULL clears it."""

    content: Any = None
    embed: Any = None
    allowed_mentions: AllowedMentions | None = None
    flags: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        set_optional(data, "content", self.content)
        set_optional(data, "embed", self.embed)
        set_optional(data, "allowed_mentions", self.allowed_mentions)
        set_optional(data, "flags", self.flags)
        return data


class MessagesMixin:
    """Message endpoints for a client providing ``request``, ``request_json`` and ``fast_request``."""

    def messages(self, channel_id: int, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` of the latest messages (0 for all), latest first."""
        return self.messages_before(channel_id, 0, limit)

    def messages_around(self, channel_id: int, around: int, limit: int = 0) -> Any:
        """Return up to 100 messages around the given message."""
        return self._messages_range(channel_id, 0, 0, around, limit)

    def messages_before(self, channel_id: int, before: int, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` messages older than ``before`` (0 for all), latest first."""
        messages: list[Any] = []
        for fetch in _fetch_sizes(limit):
            page = self._messages_range(channel_id, before, 0, 0, fetch) or []
            messages.extend(page)
            if len(page) < MAX_MESSAGE_FETCH_LIMIT:
                break
            before = page[-1]["id"]
        return messages

    def messages_after(self, channel_id: int, after: int, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` messages newer than ``after`` (0 for all), latest first."""
        # An ID of 0 would be omitted and fetch the latest messages instead.
        after = after or 1
        messages: list[Any] = []
        for fetch in _fetch_sizes(limit):
            page = self._messages_range(channel_id, 0, after, 0, fetch) or []
            messages = list(page) + messages
            if len(page) < MAX_MESSAGE_FETCH_LIMIT:
                break
            after = page[0]["id"]
        return messages

    def _messages_range(
        self, channel_id: int, before: Any, after: Any, around: Any, limit: int
    ) -> Any:
        if limit == 0:
            limit = _DEFAULT_FETCH_LIMIT
        elif limit > MAX_MESSAGE_FETCH_LIMIT:
            limit = MAX_MESSAGE_FETCH_LIMIT
        return self.request_json(
            "GET",
            f"{ENDPOINT_CHANNELS}{channel_id}/messages",
            params={
                "before": before or None,
                "after": after or None,
                "around": around or None,
                "limit": limit,
            },
        )

    def message(self, channel_id: int, message_id: int) -> Any:
        """Return one message of the channel."""
        return self.request_json(
            "GET", f"{ENDPOINT_CHANNELS}{channel_id}/messages/{message_id}"
        )

    def send_text(self, channel_id: int, content: str) -> Any:
        """Send a text-only message."""
        return self.send_message_complex(channel_id, SendMessageData(content=content))

    def send_text_reply(self, channel_id: int, content: str, reference_id: int) -> Any:
        """Send a text-only reply to a message."""
        return self.send_message_complex(
            channel_id,
            SendMessageData(content=content, reference=_reference(reference_id)),
        )

    def send_embed(self, channel_id: int, embed: Any) -> Any:
        """Send a message holding only an embed."""
        return self.send_message_complex(channel_id, SendMessageData(embed=embed))

    def send_embed_reply(self, channel_id: int, embed: Any, reference_id: int) -> Any:
        """Send an embed as a reply to a message."""
        return self.send_message_complex(
            channel_id,
            SendMessageData(embed=embed, reference=_reference(reference_id)),
        )

    def send_message(self, channel_id: int, content: str, embed: Any = None) -> Any:
        """Send a message with text and an optional embed."""
        return self.send_message_complex(
            channel_id, SendMessageData(content=content, embed=embed)
        )

    def send_message_reply(
        self, channel_id: int, content: str, embed: Any, reference_id: int
    ) -> Any:
        """Send a message with text and an optional embed as a reply."""
        return self.send_message_complex(
            channel_id,
            SendMessageData(
                content=content, embed=embed, reference=_reference(reference_id)
            ),
        )

    def send_message_complex(self, channel_id: int, data: SendMessageData) -> Any:
        """Send a message; files make it a multipart upload.

        Raises EmptyMessageError when there is no content, embed or file.
        """
        if not data.content and data.embed is None and not data.files:
            raise EmptyMessageError("message is empty")
        _verify_mentions(data.allowed_mentions)
        _validate_embed(data.embed)

        url = f"{ENDPOINT_CHANNELS}{channel_id}/messages"
        if data.needs_multipart():
            response = self.request("POST", url, json=data.to_dict(), files=data.files)
            return response.json() if response.content else None
        return self.request_json("POST", url, json=data.to_dict())

    def edit_text(self, channel_id: int, message_id: int, content: str) -> Any:
        """Replace the text of a message."""
        return self.edit_message_complex(
            channel_id, message_id, EditMessageData(content=content)
        )

    def edit_embed(self, channel_id: int, message_id: int, embed: Any) -> Any:
        """Replace the embed of a message."""
        return self.edit_message_complex(
            channel_id, message_id, EditMessageData(embed=embed)
        )

    def edit_message(
        self,
        channel_id: int,
        message_id: int,
        content: str,
        embed: Any = None,
        suppress_embeds: bool = False,
    ) -> Any:
        """Replace the text and embed of a message, optionally hiding its embeds."""
        data = EditMessageData(content=content, embed=embed)
        if suppress_embeds:
            data.flags = SUPPRESS_EMBEDS
        return self.edit_message_complex(channel_id, message_id, data)

    def edit_message_complex(
        self, channel_id: int, message_id: int, data: EditMessageData
    ) -> Any:
        """Edit a message and return it."""
        _verify_mentions(data.allowed_mentions)
        _validate_embed(data.embed)
        return self.request_json(
            "PATCH",
            f"{ENDPOINT_CHANNELS}{channel_id}/messages/{message_id}",
            json=data.to_dict(),
        )

    def crosspost_message(self, channel_id: int, message_id: int) -> Any:
        """Publish a news channel message to the channels following it."""
        return self.request_json(
            "POST", f"{ENDPOINT_CHANNELS}{channel_id}/messages/{message_id}/crosspost"
        )

    def delete_message(self, channel_id: int, message_id: int) -> None:
        """Delete a message."""
        self.fast_request(
            "DELETE", f"{ENDPOINT_CHANNELS}{channel_id}/messages/{message_id}"
        )

    def delete_messages(self, channel_id: int, message_ids: Sequence[int]) -> None:
        """Delete messages, in bulk requests of at most 100."""
        ids = list(message_ids)
        if not ids:
            return
        if len(ids) == 1:
            self.delete_message(channel_id, ids[0])
            return
        for start in range(0, len(ids), MAX_MESSAGE_DELETE_LIMIT):
            self._delete_messages(channel_id, ids[start:start + MAX_MESSAGE_DELETE_LIMIT])

    def _delete_messages(self, channel_id: int, message_ids: Sequence[int]) -> None:
        self.fast_request(
            "POST",
            f"{ENDPOINT_CHANNELS}{channel_id}/messages/bulk-delete",
            json={"messages": [snowflake(message_id) for message_id in message_ids]},
        )