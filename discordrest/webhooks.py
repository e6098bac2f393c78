"""Webhook management endpoints and their payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .image import Image
from .transport import ENDPOINT, ENDPOINT_CHANNELS, ENDPOINT_GUILDS, snowflake

ENDPOINT_WEBHOOKS = ENDPOINT + "webhooks/"


@dataclass
class CreateWebhookData:
    """A new webhook: its name (1-80 characters) and default avatar."""

    name: str
    avatar: Image | None = None

    def to_dict(self) -> dict[str, Any]:
        avatar = self.avatar.to_json() if self.avatar is not None else None
        return {"name": self.name, "avatar": avatar}


@dataclass
class ModifyWebhookData:
    """Webhook fields to change; None and 0 fields are left alone."""

    name: str | None = None
    avatar: Image | None = None
    channel_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        if self.avatar is not None:
            data["avatar"] = self.avatar.to_json()
        if self.channel_id:
            data["channel_id"] = snowflake(self.channel_id)
        return data


class WebhooksMixin:
    """Webhook endpoints for a client that provides ``request_json`` and ``fast_request``."""

    def create_webhook(self, channel_id: int, data: CreateWebhookData) -> Any:
        """Create a webhook in the channel and return it."""
        return self.request_json(
            "POST", f"{ENDPOINT_CHANNELS}{channel_id}/webhooks", json=data.to_dict()
        )

    def channel_webhooks(self, channel_id: int) -> Any:
        """Return the channel's webhooks."""
        return self.request_json("GET", f"{ENDPOINT_CHANNELS}{channel_id}/webhooks")

    def guild_webhooks(self, guild_id: int) -> Any:
        """Return the guild's webhooks."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/webhooks")

    def webhook(self, webhook_id: int) -> Any:
        """Return the webhook."""
        return self.request_json("GET", f"{ENDPOINT_WEBHOOKS}{webhook_id}")

    def modify_webhook(self, webhook_id: int, data: ModifyWebhookData) -> Any:
        """Change the webhook and return it."""
        return self.request_json(
            "PATCH", f"{ENDPOINT_WEBHOOKS}{webhook_id}", json=data.to_dict()
        )

    def delete_webhook(self, webhook_id: int) -> None:
        """Delete the webhook permanently."""
        self.fast_request("DELETE", f"{ENDPOINT_WEBHOOKS}{webhook_id}")