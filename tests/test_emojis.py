import json as jsonlib

import httpx
import pytest

from discordrest.emojis import CreateEmojiData, EmojisMixin, ModifyEmojiData
from discordrest.image import Image, ImageTooLargeError, InvalidImageError, decode_image
from discordrest.transport import ENDPOINT_GUILDS, BaseClient, Session

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 16


class _Client(EmojisMixin, BaseClient):
    pass


def make_client(payload=None):
    seen = []

    def handler(request):
        request.read()
        seen.append(request)
        if payload is None:
            return httpx.Response(204)
        return httpx.Response(200, json=payload)

    http = httpx.Client(transport=httpx.MockTransport(handler))
    return _Client(Session("token"), http), seen


def test_emojis_lists():
    client, seen = make_client([{"id": "1", "name": "wave"}])
    assert client.emojis(5) == [{"id": "1", "name": "wave"}]
    assert str(seen[0].url) == f"{ENDPOINT_GUILDS}5/emojis"


def test_emoji_single():
    client, seen = make_client({"id": "1"})
    assert client.emoji(5, 1) == {"id": "1"}
    assert str(seen[0].url) == f"{ENDPOINT_GUILDS}5/emojis/1"


def test_create_emoji_sends_data_uri():
    client, seen = make_client({"id": "2"})
    data = CreateEmojiData(name="wave", image=Image("image/png", PNG), roles=[1, 2])
    assert client.create_emoji(5, data) == {"id": "2"}
    sent = jsonlib.loads(seen[0].content)
    assert sent["name"] == "wave"
    assert sent["roles"] == ["1", "2"]
    assert decode_image(sent["image"]) == Image("image/png", PNG)


def test_create_emoji_too_large_sends_nothing():
    client, seen = make_client({"id": "2"})
    image = Image("image/png", PNG + b"0" * 256_000)
    with pytest.raises(ImageTooLargeError):
        client.create_emoji(5, CreateEmojiData(name="big", image=image))
    assert seen == []


def test_create_emoji_rejects_content_type():
    client, seen = make_client({"id": "2"})
    image = Image("image/webp", PNG)
    with pytest.raises(InvalidImageError):
        client.create_emoji(5, CreateEmojiData(name="bad", image=image))
    assert seen == []


def test_modify_emoji_body():
    client, seen = make_client()
    client.modify_emoji(5, 1, ModifyEmojiData(roles=[3]))
    assert seen[0].method == "PATCH"
    assert jsonlib.loads(seen[0].content) == {"roles": ["3"]}


def test_modify_emoji_empty_roles_are_sent():
    assert ModifyEmojiData(name="x", roles=[]).to_dict() == {"name": "x", "roles": []}


def test_delete_emoji():
    client, seen = make_client()
    assert client.delete_emoji(5, 1) is None
    assert (seen[0].method, str(seen[0].url)) == ("DELETE", f"{ENDPOINT_GUILDS}5/emojis/1")