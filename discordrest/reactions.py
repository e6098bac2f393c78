"""Message reaction endpoints."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from urllib.parse import quote

from .transport import ENDPOINT_CHANNELS

MAX_MESSAGE_REACTION_FETCH_LIMIT = 100
"""Largest number of reacting users the server returns per request."""

_DEFAULT_REACTION_FETCH_LIMIT = 25


def _emoji_path(emoji: str) -> str:
    """Escape an emoji (unicode or ``name:id``) for use as a path segment."""
    return quote(str(emoji), safe=":@&=+$")


def _fetch_sizes(limit: int) -> Iterator[int]:
    """Yield page sizes for a paginated fetch; a limit of 0 is unlimited."""
    if limit == 0:
        while True:
            yield MAX_MESSAGE_REACTION_FETCH_LIMIT
    while limit > 0:
        fetch = min(MAX_MESSAGE_REACTION_FETCH_LIMIT, limit)
        limit -= fetch
        yield fetch


class ReactionsMixin:
    """Reaction endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def _reactions_url(self, channel_id: int, message_id: int, emoji: str) -> str:
        return (
            f"{ENDPOINT_CHANNELS}{channel_id}/messages/{message_id}"
            f"/reactions/{_emoji_path(emoji)}"
        )

    def react(self, channel_id: int, message_id: int, emoji: str) -> None:
        """Add the current user's reaction to the message."""
        self.fast_request(
            "PUT", self._reactions_url(channel_id, message_id, emoji) + "/@me"
        )

    def unreact(self, channel_id: int, message_id: int, emoji: str) -> None:
        """Remove the current user's reaction from the message."""
        self.delete_user_reaction(channel_id, message_id, 0, emoji)

    def reactions(
        self, channel_id: int, message_id: int, emoji: str, limit: int = 0
    ) -> list[Any]:
        """Return up to ``limit`` users who reacted with the emoji (0 for all)."""
        return self.reactions_after(channel_id, message_id, 0, emoji, limit)

    def reactions_before(
        self, channel_id: int, message_id: int, before: int, emoji: str, limit: int = 0
    ) -> list[Any]:
        """Return up to ``limit`` reacting users with IDs below ``before`` (0 for all)."""
        users: list[Any] = []
        for fetch in _fetch_sizes(limit):
            page = self._reactions_range(channel_id, message_id, before, 0, emoji, fetch) or []
            users = list(page) + users
            if len(page) < MAX_MESSAGE_REACTION_FETCH_LIMIT:
                break
            before = page[0]["id"]
        return users

    def reactions_after(
        self, channel_id: int, message_id: int, after: int, emoji: str, limit: int = 0
    ) -> list[Any]:
        """Return up to ``limit`` reacting users with IDs above ``after`` (0 for all)."""
        users: list[Any] = []
        for fetch in _fetch_sizes(limit):
            page = self._reactions_range(channel_id, message_id, 0, after, emoji, fetch) or []
            users.extend(page)
            if len(page) < MAX_MESSAGE_REACTION_FETCH_LIMIT:
                break
            after = page[-1]["id"]
        return users

    def _reactions_range(
        self,
        channel_id: int,
        message_id: int,
        before: Any,
        after: Any,
        emoji: str,
        limit: int,
    ) -> Any:
        if limit == 0:
            limit = _DEFAULT_REACTION_FETCH_LIMIT
        elif limit > MAX_MESSAGE_REACTION_FETCH_LIMIT:
            limit = MAX_MESSAGE_REACTION_FETCH_LIMIT
        return self.request_json(
            "GET",
            self._reactions_url(channel_id, message_id, emoji),
            params={"before": before or None, "after": after or None, "limit": limit},
        )

    def delete_user_reaction(
        self, channel_id: int, message_id: int, user_id: int, emoji: str
    ) -> None:
        """Remove a user's reaction; a user ID of 0 means the current user."""
        user = str(user_id) if user_id > 0 else "@me"
        self.fast_request(
            "DELETE", f"{self._reactions_url(channel_id, message_id, emoji)}/{user}"
        )

    def delete_reactions(self, channel_id: int, message_id: int, emoji: str) -> None:
        """Remove every reaction with the emoji from the message."""
        self.fast_request("DELETE", self._reactions_url(channel_id, message_id, emoji))

    def delete_all_reactions(self, channel_id: int, message_id: int) -> None:
        """Remove all reactions from the message."""
        self.fast_request(
            "DELETE",
            f"{ENDPOINT_CHANNELS}{channel_id}/messages/{message_id}/reactions",
        )