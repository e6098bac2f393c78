"""Direct use of a webhook through its ID and token."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from .rate.limiter import Limiter
from .send import AllowedMentions, EmptyMessageError
from .transport import PATH, BaseClient, set_optional, to_json_value
from .webhooks import ENDPOINT_WEBHOOKS, ModifyWebhookData


@dataclass
class _WebhookSession:
    """Rate limiter and credentials of a webhook; requests carry no Authorization."""

    webhook_id: int
    token: str
    limiter: Limiter = field(default_factory=lambda: Limiter(PATH))

    def inject_request(self, request: httpx.Request) -> None:
        self.limiter.acquire(request.url.path, request.extensions.get("deadline"))

    def on_response(
        self, request: httpx.Request, response: httpx.Response | None
    ) -> None:
        headers = response.headers if response is not None else None
        self.limiter.release(request.url.path, headers)


@dataclass
class ExecuteData:
    """A message to post through a webhook; needs content, an embed or a file."""

    content: str = ""
    username: str = ""
    avatar_url: str = ""
    tts: bool = False
    embeds: list[Any] = field(default_factory=list)
    files: list[Any] = field(default_factory=list)
    allowed_mentions: AllowedMentions | None = None

    def needs_multipart(self) -> bool:
        """Report whether the message has files to upload."""
        return len(self.files) > 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.content:
            data["content"] = self.content
        if self.username:
            data["username"] = self.username
        if self.avatar_url:
            data["avatar_url"] = self.avatar_url
        if self.tts:
            data["tts"] = True
        if self.embeds:
            data["embeds"] = to_json_value(self.embeds)
        if self.allowed_mentions is not None:
            data["allowed_mentions"] = to_json_value(self.allowed_mentions)
        return data


@dataclass
class EditWebhookMessageData:
    """Webhook message fields to change; None leaves a field alone, NULL clears it."""

    content: Any = None
    embeds: list[Any] | None = None
    allowed_mentions: AllowedMentions | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        set_optional(data, "content", self.content)
        set_optional(data, "embeds", self.embeds)
        set_optional(data, "allowed_mentions", self.allowed_mentions)
        return data


def _validate_embeds(embeds: list[Any]) -> None:
    for index, embed in enumerate(embeds):
        validate = getattr(embed, "validate", None)
        if not callable(validate):
            continue
        try:
            validate()
        except Exception as err:
            raise ValueError(f"embed error at {index}: {err}") from err


class WebhookClient(BaseClient):
    """Client for one webhook, with its own rate limiter unless shared."""

    def __init__(
        self, webhook_id: int, token: str, http: httpx.Client | None = None
    ) -> None:
        super().__init__(_WebhookSession(webhook_id, token), http)

    @property
    def id(self) -> int:
        return self.session.webhook_id

    @property
    def token(self) -> str:
        return self.session.token

    @property
    def _url(self) -> str:
        return f"{ENDPOINT_WEBHOOKS}{self.id}/{self.token}"

    def get(self) -> Any:
        """Return the webhook."""
        return self.request_json("GET", self._url)

    def modify(self, data: ModifyWebhookData) -> Any:
        """Change the webhook and return it."""
        return self.request_json("PATCH", self._url, json=data.to_dict())

    def delete(self) -> None:
        """Delete the webhook permanently."""
        self.fast_request("DELETE", self._url)

    def execute(self, data: ExecuteData) -> None:
        """Post a message without waiting for it to be created."""
        self._execute(data, wait=False)

    def execute_and_wait(self, data: ExecuteData) -> Any:
        """Post a message and return the created message."""
        return self._execute(data, wait=True)

    def _execute(self, data: ExecuteData, wait: bool) -> Any:
        if not data.content and not data.embeds and not data.files:
            raise EmptyMessageError("message is empty")
        if data.allowed_mentions is not None:
            try:
                data.allowed_mentions.verify()
            except Exception as err:
                raise ValueError(f"allowedMentions error: {err}") from err
        _validate_embeds(data.embeds)

        params = {"wait": True} if wait else None
        response = self.request(
            "POST",
            self._url,
            json=data.to_dict(),
            params=params,
            files=data.files or None,
        )
        if not wait or not response.content:
            return None
        return response.json()

    def edit_message(self, message_id: int, data: EditWebhookMessageData) -> None:
        """Edit a message this webhook sent."""
        self.fast_request(
            "PATCH", f"{self._url}/messages/{message_id}", json=data.to_dict()
        )

    def delete_message(self, message_id: int) -> None:
        """Delete a message this webhook sent."""
        self.fast_request("DELETE", f"{self._url}/messages/{message_id}")


def from_client(client: BaseClient, webhook_id: int, token: str) -> WebhookClient:
    """Return a webhook client sharing the API client's HTTP client and rate limiter."""
    hook = WebhookClient(webhook_id, token, client._http)
    hook.session.limiter = client.session.limiter
    return hook