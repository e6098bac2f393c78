import json as jsonlib
import time

import httpx
import pytest

from discordrest.rate.limiter import RateLimitTimeout
from discordrest.send import File
from discordrest.transport import (
    ENDPOINT_CHANNELS,
    ENDPOINT_GATEWAY_BOT,
    ENDPOINT_ME,
    NULL,
    USER_AGENT,
    BaseClient,
    HTTPError,
    Session,
    set_optional,
    to_json_value,
)


def make_client(handler, token="token"):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return BaseClient(Session(token), http)


def test_endpoints_follow_version():
    client = make_client(lambda request: httpx.Response(200, json={"url": str(request.url)}))
    assert client.request_json("GET", ENDPOINT_GATEWAY_BOT) == {
        "url": "https://discord.com/api/v8/gateway/bot"
    }


def test_headers_are_injected():
    def handler(request):
        return httpx.Response(
            200,
            json={
                "authorization": request.headers["authorization"],
                "user-agent": request.headers["user-agent"],
            },
        )

    client = make_client(handler, token="Bot token")
    result = client.request_json("GET", ENDPOINT_ME)
    assert result == {"authorization": "Bot token", "user-agent": USER_AGENT}


def test_expired_deadline_fails_before_sending():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    client = make_client(handler).with_timeout(0)
    with pytest.raises(TimeoutError):
        client.request_json("GET", ENDPOINT_ME)
    assert calls == []


def test_with_timeout_shares_session():
    client = make_client(lambda request: httpx.Response(204))
    clone = client.with_timeout(5)
    assert clone.session is client.session
    assert clone is not client


def test_request_json_parses_body():
    payload = {"id": "1", "username": "hime"}
    client = make_client(lambda request: httpx.Response(200, json=payload))
    assert client.request_json("GET", ENDPOINT_ME) == payload


def test_empty_body_gives_none():
    client = make_client(lambda request: httpx.Response(204))
    assert client.request_json("DELETE", ENDPOINT_ME) is None


def test_http_error_carries_code_and_message():
    def handler(request):
        return httpx.Response(403, json={"code": 50013, "message": "Missing Permissions"})

    client = make_client(handler)
    with pytest.raises(HTTPError) as info:
        client.fast_request("GET", ENDPOINT_ME)
    assert info.value.status == 403
    assert info.value.code == 50013
    assert info.value.message == "Missing Permissions"
    assert "Missing Permissions" in str(info.value)


def test_params_drop_none_and_encode_bools():
    client = make_client(lambda request: httpx.Response(200, json=dict(request.url.params)))
    result = client.request_json(
        "GET", ENDPOINT_ME, params={"before": None, "limit": 5, "with_counts": True}
    )
    assert result == {"limit": "5", "with_counts": "true"}


def test_files_send_payload_json_as_multipart():
    def handler(request):
        content = request.read()
        found = []
        if request.headers["content-type"].startswith("multipart/form-data"):
            found.append("multipart")
        if b'name="payload_json"' in content:
            found.append("payload")
        if jsonlib.dumps({"content": "hi"}).encode() in content:
            found.append("json")
        if b'filename="a.txt"' in content:
            found.append("filename")
        return httpx.Response(400, json={"code": 0, "message": " ".join(found)})

    client = make_client(handler)
    with pytest.raises(HTTPError) as info:
        client.request(
            "POST",
            ENDPOINT_CHANNELS + "1/messages",
            json={"content": "hi"},
            files=[File("a.txt", b"abc")],
        )
    assert info.value.message == "multipart payload json filename"


def test_exhausted_bucket_times_out():
    reset = str(time.time() + 60)

    def handler(request):
        return httpx.Response(
            200,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": reset},
            json={},
        )

    client = make_client(handler)
    url = ENDPOINT_CHANNELS + "1/messages"
    client.fast_request("GET", url)
    with pytest.raises(RateLimitTimeout):
        client.with_timeout(1).fast_request("GET", url)


def test_failed_send_releases_bucket():
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={"ok": True})

    client = make_client(handler)
    url = ENDPOINT_CHANNELS + "1/messages"
    with pytest.raises(httpx.ConnectError):
        client.fast_request("GET", url)
    assert client.with_timeout(2).request_json("GET", url) == {"ok": True}
    assert len(attempts) == 2


def test_to_json_value_maps_null_marker():
    assert to_json_value({"a": [NULL, 1], "b": NULL}) == {"a": [None, 1], "b": None}


def test_set_optional():
    payload = {}
    set_optional(payload, "skip", None)
    set_optional(payload, "null", NULL)
    set_optional(payload, "id", 7, str)
    assert payload == {"null": None, "id": "7"}