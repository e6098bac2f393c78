"""Guild endpoints and their payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .image import Image
from .transport import (
    ENDPOINT,
    ENDPOINT_GUILDS,
    ENDPOINT_ME,
    NULL,
    set_optional,
    snowflake,
    to_json_value,
)

MAX_GUILD_FETCH_LIMIT = 100
"""Largest number of guilds the server returns per request."""

_DEFAULT_AUDIT_LOG_LIMIT = 50
_MAX_AUDIT_LOG_LIMIT = 100


def _set_id(payload: dict[str, Any], key: str, value: Any) -> None:
    """Store an ID as a string; 0 or None is omitted, NULL is sent as null."""
    if value is NULL:
        payload[key] = None
    elif value:
        payload[key] = snowflake(value)


def _set_image(payload: dict[str, Any], key: str, image: Image | None) -> None:
    if image is not None:
        payload[key] = image.to_json()


@dataclass
class CreateGuildData:
    """Parameters for creating a guild."""

    name: str
    voice_region: str = ""
    icon: Image | None = None
    verification: Any = None
    notification: Any = None
    explicit_filter: Any = None
    roles: list[Any] = field(default_factory=list)
    channels: list[Any] = field(default_factory=list)
    afk_channel_id: int = 0
    afk_timeout: int | None = None
    system_channel_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.voice_region:
            data["region"] = self.voice_region
        _set_image(data, "image", self.icon)
        set_optional(data, "verification_level", self.verification)
        set_optional(data, "default_message_notifications", self.notification)
        set_optional(data, "explicit_content_filter", self.explicit_filter)
        if self.roles:
            data["roles"] = to_json_value(self.roles)
        if self.channels:
            data["channels"] = to_json_value(self.channels)
        _set_id(data, "afk_channel_id", self.afk_channel_id)
        set_optional(data, "afk_timeout", self.afk_timeout)
        _set_id(data, "system_channel_id", self.system_channel_id)
        return data


@dataclass
class ModifyGuildData:
    """Guild settings to change; None leaves a field alone, NULL clears it."""

    name: str = ""
    region: Any = None
    verification: Any = None
    notification: Any = None
    explicit_filter: Any = None
    afk_channel_id: Any = 0
    afk_timeout: int | None = None
    icon: Image | None = None
    splash: Image | None = None
    banner: Image | None = None
    owner_id: int = 0
    system_channel_id: Any = 0
    rules_channel_id: Any = 0
    public_updates_channel_id: Any = 0
    preferred_locale: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        set_optional(data, "region", self.region)
        set_optional(data, "verification_level", self.verification)
        set_optional(data, "default_message_notifications", self.notification)
        set_optional(data, "explicit_content_filter", self.explicit_filter)
        _set_id(data, "afk_channel_id", self.afk_channel_id)
        set_optional(data, "afk_timeout", self.afk_timeout)
        _set_image(data, "icon", self.icon)
        _set_image(data, "splash", self.splash)
        _set_image(data, "banner", self.banner)
        _set_id(data, "owner_id", self.owner_id)
        _set_id(data, "system_channel_id", self.system_channel_id)
        _set_id(data, "rules_channel_id", self.rules_channel_id)
        _set_id(data, "public_updates_channel_id", self.public_updates_channel_id)
        set_optional(data, "preferred_locale", self.preferred_locale)
        return data


@dataclass
class AuditLogData:
    """Filters for an audit log query; a limit of 0 means the default of 50."""

    user_id: int = 0
    action_type: Any = 0
    before: int = 0
    limit: int = 0

    def to_params(self) -> dict[str, Any]:
        limit = self.limit
        if limit == 0:
            limit = _DEFAULT_AUDIT_LOG_LIMIT
        elif limit > _MAX_AUDIT_LOG_LIMIT:
            limit = _MAX_AUDIT_LOG_LIMIT
        action = to_json_value(self.action_type)
        return {
            "user_id": self.user_id or None,
            "action_type": action or None,
            "before": self.before or None,
            "limit": limit,
        }


@dataclass
class ModifyIntegrationData:
    """Integration settings to change; None leaves a field alone, NULL clears it."""

    expire_behavior: Any = None
    expire_grace_period: Any = None
    enable_emoticons: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        set_optional(data, "expire_behavior", self.expire_behavior)
        set_optional(data, "expire_grace_period", self.expire_grace_period)
        set_optional(data, "enable_emoticons", self.enable_emoticons)
        return data


@dataclass
class ModifyGuildWidgetData:
    """Guild widget settings to change."""

    enabled: bool | None = None
    channel_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.enabled is not None:
            data["enabled"] = self.enabled
        _set_id(data, "channel_id", self.channel_id)
        return data


class GuildWidgetImageStyle(str, Enum):
    """Styles of the PNG guild widget."""

    SHIELD = "shield"
    BANNER1 = "banner1"
    BANNER2 = "banner2"
    BANNER3 = "banner3"
    BANNER4 = "banner4"


def _fetch_sizes(limit: int):
    """Yield page sizes for a paginated fetch; a limit of 0 is unlimited."""
    if limit == 0:
        while True:
            yield MAX_GUILD_FETCH_LIMIT
    while limit > 0:
        fetch = min(MAX_GUILD_FETCH_LIMIT, limit)
        limit -= fetch
        yield fetch


class GuildsMixin:
    """Guild endpoints for a client providing ``request``, ``request_json`` and ``fast_request``."""

    def create_guild(self, data: CreateGuildData) -> Any:
        """Create a guild and return it."""
        return self.request_json("POST", ENDPOINT + "guilds", json=data.to_dict())

    def guild(self, guild_id: int) -> Any:
        """Return the guild, without approximate counts."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}")

    def guild_preview(self, guild_id: int) -> Any:
        """Return the preview of a public guild."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/preview")

    def guild_with_count(self, guild_id: int) -> Any:
        """Return the guild with its approximate member and presence counts."""
        return self.request_json(
            "GET", f"{ENDPOINT_GUILDS}{guild_id}", params={"with_counts": True}
        )

    def guilds(self, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` guilds of the current user (0 for all), smallest IDs first."""
        return self.guilds_after(0, limit)

    def guilds_before(self, before: int, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` guilds with IDs below ``before`` (0 for all)."""
        guilds: list[Any] = []
        for fetch in _fetch_sizes(limit):
            page = self._guilds_range(before, 0, fetch) or []
            guilds = list(page) + guilds
            if len(page) < MAX_GUILD_FETCH_LIMIT:
                break
            before = page[0]["id"]
        return guilds

    def guilds_after(self, after: int, limit: int = 0) -> list[Any]:
        """Return up to ``limit`` guilds with IDs above ``after`` (0 for all)."""
        guilds: list[Any] = []
        for fetch in _fetch_sizes(limit):
            page = self._guilds_range(0, after, fetch) or []
            guilds.extend(page)
            if len(page) < MAX_GUILD_FETCH_LIMIT:
                break
            after = page[-1]["id"]
        return guilds

    def _guilds_range(self, before: Any, after: Any, limit: int) -> Any:
        return self.request_json(
            "GET",
            ENDPOINT_ME + "/guilds",
            params={"before": before or None, "after": after or None, "limit": limit},
        )

    def leave_guild(self, guild_id: int) -> None:
        """Leave the guild."""
        self.fast_request("DELETE", f"{ENDPOINT_ME}/guilds/{guild_id}")

    def modify_guild(self, guild_id: int, data: ModifyGuildData) -> Any:
        """Change the guild's settings and return the guild."""
        return self.request_json(
            "PATCH", f"{ENDPOINT_GUILDS}{guild_id}", json=data.to_dict()
        )

    def delete_guild(self, guild_id: int) -> None:
        """Delete the guild permanently."""
        self.fast_request("DELETE", f"{ENDPOINT_GUILDS}{guild_id}")

    def voice_regions_guild(self, guild_id: int) -> Any:
        """Return the voice regions available to the guild, VIP ones included."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/regions")

    def audit_log(self, guild_id: int, data: AuditLogData | None = None) -> Any:
        """Return the guild's audit log; the limit is clamped to 1-100, default 50."""
        data = data if data is not None else AuditLogData()
        return self.request_json(
            "GET", f"{ENDPOINT_GUILDS}{guild_id}/audit-logs", params=data.to_params()
        )

    def integrations(self, guild_id: int) -> Any:
        """Return the guild's integrations."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/integrations")

    def attach_integration(
        self, guild_id: int, integration_id: int, integration_type: Any
    ) -> None:
        """Attach one of the current user's integrations to the guild."""
        self.fast_request(
            "POST",
            f"{ENDPOINT_GUILDS}{guild_id}/integrations",
            json={
                "type": to_json_value(integration_type),
                "id": snowflake(integration_id),
            },
        )

    def modify_integration(
        self, guild_id: int, integration_id: int, data: ModifyIntegrationData
    ) -> None:
        """Change an integration's settings."""
        self.fast_request(
            "PATCH",
            f"{ENDPOINT_GUILDS}{guild_id}/integrations/{integration_id}",
            json=data.to_dict(),
        )

    def sync_integration(self, guild_id: int, integration_id: int) -> None:
        """Synchronise an integration."""
        self.fast_request(
            "POST", f"{ENDPOINT_GUILDS}{guild_id}/integrations/{integration_id}/sync"
        )

    def guild_widget_settings(self, guild_id: int) -> Any:
        """Return the guild's widget settings."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/widget")

    def modify_guild_widget(self, guild_id: int, data: ModifyGuildWidgetData) -> Any:
        """Change the guild's widget settings and return them."""
        return self.request_json(
            "PATCH", f"{ENDPOINT_GUILDS}{guild_id}/widget", json=data.to_dict()
        )

    def guild_widget(self, guild_id: int) -> Any:
        """Return the guild's widget."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/widget.json")

    def guild_vanity_invite(self, guild_id: int) -> Any:
        """Return the guild's vanity invite (only code and uses are set)."""
        return self.request_json("GET", f"{ENDPOINT_GUILDS}{guild_id}/vanity-url")

    def guild_widget_image_url(
        self, guild_id: int, style: GuildWidgetImageStyle | str
    ) -> str:
        """Return the URL of the guild's PNG widget in the given style."""
        return f"{ENDPOINT_GUILDS}{guild_id}/widget.png?style={GuildWidgetImageStyle(style).value}"

    def guild_widget_image(
        self, guild_id: int, style: GuildWidgetImageStyle | str
    ) -> bytes:
        """Download the guild's PNG widget in the given style."""
        response = self.request("GET", self.guild_widget_image_url(guild_id, style))
        return response.content