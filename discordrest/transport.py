"""Authorised, rate-limited HTTP requests to the REST API."""

from __future__ import annotations

import copy
import json as jsonlib
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

from .rate.limiter import Limiter

BASE_ENDPOINT = "https://discord.com"
VERSION = "8"
PATH = "/api/v" + VERSION

ENDPOINT = BASE_ENDPOINT + PATH + "/"
ENDPOINT_GATEWAY = ENDPOINT + "gateway"
ENDPOINT_GATEWAY_BOT = ENDPOINT_GATEWAY + "/bot"
ENDPOINT_GUILDS = ENDPOINT + "guilds/"
ENDPOINT_CHANNELS = ENDPOINT + "channels/"
ENDPOINT_USERS = ENDPOINT + "users/"
ENDPOINT_ME = ENDPOINT_USERS + "@me"

USER_AGENT = "DiscordBot (discordrest)"


class _NullType(Enum):
    NULL = "null"

    def __repr__(self) -> str:
        return "NULL"


NULL = _NullType.NULL
"""Marker for a field that must be sent as an explicit JSON null."""


def to_json_value(value: Any) -> Any:
    """Convert payload objects, enums and the NULL marker into plain JSON values."""
    if value is NULL:
        return None
    if isinstance(value, Enum):
        return value.value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_json_value(to_dict())
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()
    if isinstance(value, Mapping):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    return value


def set_optional(
    payload: dict[str, Any],
    key: str,
    value: Any,
    convert: Callable[[Any], Any] | None = None,
) -> None:
    """Store ``value`` under ``key`` unless it is None; NULL is stored as null."""
    if value is None:
        return
    if value is NULL:
        payload[key] = None
    elif convert is not None:
        payload[key] = convert(value)
    else:
        payload[key] = to_json_value(value)


def snowflake(value: int) -> str:
    """Return the JSON string form of an ID."""
    return str(int(value))


class HTTPError(Exception):
    """The server answered with an error status."""

    def __init__(
        self, status: int, body: bytes = b"", code: int = 0, message: str = ""
    ) -> None:
        self.status = status
        self.body = body
        self.code = code
        self.message = message
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.message:
            return f"Discord {self.status} error: {self.message}"
        if self.code:
            return f"Discord returned status {self.status} error code {self.code}"
        if self.body:
            body = self.body.decode("utf-8", "replace")
            return f"Discord returned status {self.status} body {body}"
        return f"Discord got bad status {self.status}"

    @classmethod
    def from_response(cls, response: httpx.Response) -> HTTPError:
        """Build the error from an error response, reading its JSON code and message."""
        code, message = 0, ""
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            raw_code = payload.get("code", 0)
            code = raw_code if isinstance(raw_code, int) else 0
            message = str(payload.get("message", "") or "")
        return cls(response.status_code, response.content, code, message)


@dataclass
class Session:
    """Credentials and rate limiter shared by every request of a client."""

    token: str
    user_agent: str = USER_AGENT
    limiter: Limiter = field(default_factory=lambda: Limiter(PATH))

    def inject_request(self, request: httpx.Request) -> None:
        """Authorise the request and wait for its rate-limit bucket."""
        request.headers["Authorization"] = self.token
        request.headers["User-Agent"] = self.user_agent
        self.limiter.acquire(request.url.path, request.extensions.get("deadline"))

    def on_response(
        self, request: httpx.Request, response: httpx.Response | None
    ) -> None:
        """Feed the response's rate-limit headers back to the limiter."""
        headers = response.headers if response is not None else None
        self.limiter.release(request.url.path, headers)


def _query(params: Mapping[str, Any]) -> dict[str, Any]:
    query: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            query[key] = [str(to_json_value(item)) for item in value]
        else:
            query[key] = str(to_json_value(value))
    return query


class BaseClient:
    """HTTP client that passes each request through a session's hooks."""

    def __init__(self, session: Any, http: httpx.Client | None = None) -> None:
        self.session = session
        self._http = http if http is not None else httpx.Client()
        self._deadline: float | None = None

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Sequence[Any] | None = None,
    ) -> httpx.Response:
        """Send a request and return the response, raising HTTPError on error status."""
        deadline = self._deadline
        options: dict[str, Any] = {}
        if deadline is not None:
            remaining = deadline - time.time()
            if remaining <= 0:
                raise TimeoutError("request deadline exceeded")
            options["timeout"] = remaining
        if params:
            options["params"] = _query(params)

        body = None if json is None else to_json_value(json)
        if files:
            options["files"] = [
                (f"file{index}", (attachment.name, attachment.reader))
                for index, attachment in enumerate(files)
            ]
            if body is not None:
                options["data"] = {"payload_json": jsonlib.dumps(body)}
        elif json is not None:
            options["json"] = body

        request = self._http.build_request(method, url, **options)
        if deadline is not None:
            request.extensions["deadline"] = deadline

        self.session.inject_request(request)
        try:
            response = self._http.send(request)
        except BaseException:
            self.session.on_response(request, None)
            raise
        self.session.on_response(request, response)

        if response.is_error:
            raise HTTPError.from_response(response)
        return response

    def request_json(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send a request and return its decoded JSON body, or None if it is empty."""
        response = self.request(method, url, json=json, params=params)
        if not response.content:
            return None
        return response.json()

    def fast_request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        """Send a request and discard its body."""
        self.request(method, url, json=json, params=params)

    def with_timeout(self, timeout: float) -> BaseClient:
        """Return a shallow copy whose requests must finish within ``timeout`` seconds."""
        clone = copy.copy(self)
        clone._deadline = time.time() + timeout
        return clone

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def __enter__(self) -> BaseClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()