import json

import httpx
import pytest

from discordrest.invites import ENDPOINT_INVITES, CreateInviteData, InvitesMixin
from discordrest.transport import (
    ENDPOINT_CHANNELS,
    ENDPOINT_GUILDS,
    BaseClient,
    HTTPError,
    Session,
)


class _Client(BaseClient, InvitesMixin):
    pass


def _make(responder):
    calls = []

    def handler(request):
        calls.append(request)
        return responder(request)

    http = httpx.Client(transport=httpx.MockTransport(handler))
    return _Client(Session("Bot token"), http), calls


def test_invite_url():
    client, _ = _make(lambda r: httpx.Response(200, json={"url": str(r.url)}))
    assert client.invite("abc") == {"url": "https://discord.com/api/v8/invites/abc"}


def test_invite_without_counts():
    client, calls = _make(lambda r: httpx.Response(200, json={"code": "abc"}))
    assert client.invite("abc") == {"code": "abc"}
    assert str(calls[0].url) == ENDPOINT_INVITES + "abc"
    assert "with_counts" not in calls[0].url.params


def test_invite_with_counts():
    client, _ = _make(lambda r: httpx.Response(200, json=dict(r.url.params)))
    assert client.invite_with_counts("abc") == {"with_counts": "true"}


def test_channel_and_guild_invites():
    client, calls = _make(lambda r: httpx.Response(200, json=[]))
    assert client.channel_invites(4) == []
    assert client.guild_invites(5) == []
    assert str(calls[0].url) == f"{ENDPOINT_CHANNELS}4/invites"
    assert str(calls[1].url) == f"{ENDPOINT_GUILDS}5/invites"


def test_create_invite_data_omits_defaults():
    assert CreateInviteData().to_dict() == {}


def test_create_invite_body():
    client, calls = _make(lambda r: httpx.Response(200, json={"code": "xyz"}))
    data = CreateInviteData(max_age=0, max_uses=5, temporary=True, unique=True)
    assert client.create_invite(4, data) == {"code": "xyz"}
    assert calls[0].method == "POST"
    assert json.loads(calls[0].content) == {
        "max_age": 0,
        "max_uses": 5,
        "temporary": True,
        "unique": True,
    }


def test_join_and_delete_invite():
    client, calls = _make(lambda r: httpx.Response(200, json={"code": "abc"}))
    assert client.join_invite("abc") == {"code": "abc"}
    assert client.delete_invite("abc") == {"code": "abc"}
    assert [c.method for c in calls] == ["POST", "DELETE"]


def test_unknown_invite_raises():
    client, _ = _make(lambda r: httpx.Response(404, json={"code": 10006, "message": "Unknown Invite"}))
    with pytest.raises(HTTPError) as info:
        client.invite("gone")
    assert info.value.message == "Unknown Invite"