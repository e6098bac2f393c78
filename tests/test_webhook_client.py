import json

import httpx
import pytest

from discordrest.client import Client
from discordrest.send import AllowedMentions, EmptyMessageError
from discordrest.transport import NULL
from discordrest.webhook_client import (
    EditWebhookMessageData,
    ExecuteData,
    WebhookClient,
    from_client,
)
from discordrest.webhooks import ENDPOINT_WEBHOOKS, ModifyWebhookData


def make_hook(handler=None):
    seen = []

    def record(request):
        seen.append(request)
        if handler is None:
            return httpx.Response(200, json={"id": "42"})
        return handler(request)

    http = httpx.Client(transport=httpx.MockTransport(record))
    return WebhookClient(5, "token", http), seen


def test_get_uses_id_and_token_without_authorization():
    hook, seen = make_hook()
    assert hook.get() == {"id": "42"}
    assert str(seen[0].url) == ENDPOINT_WEBHOOKS + "5/token"
    assert "Authorization" not in seen[0].headers


def test_modify_and_delete():
    hook, seen = make_hook()
    hook.modify(ModifyWebhookData(name="hook"))
    hook.delete()
    assert seen[0].method == "PATCH"
    assert json.loads(seen[0].content) == {"name": "hook"}
    assert seen[1].method == "DELETE"


def test_execute_empty_raises():
    hook, seen = make_hook()
    with pytest.raises(EmptyMessageError):
        hook.execute(ExecuteData())
    assert seen == []


def test_execute_does_not_wait():
    hook, seen = make_hook()
    assert hook.execute(ExecuteData(content="hi")) is None
    assert "wait" not in seen[0].url.params
    assert json.loads(seen[0].content) == {"content": "hi"}


def test_execute_and_wait_returns_message():
    hook, seen = make_hook(lambda r: httpx.Response(200, json={"content": "hi"}))
    assert hook.execute_and_wait(ExecuteData(content="hi")) == {"content": "hi"}
    assert seen[0].url.params["wait"] == "true"


def test_execute_rejects_bad_allowed_mentions():
    hook, seen = make_hook()
    data = ExecuteData(content="a", allowed_mentions=AllowedMentions(users=list(range(101))))
    with pytest.raises(ValueError, match="allowedMentions error"):
        hook.execute(data)
    assert seen == []


def test_execute_data_needs_multipart():
    assert ExecuteData(files=[object()]).needs_multipart() is True
    assert ExecuteData(content="a").needs_multipart() is False


def test_execute_data_to_dict_omits_empty_fields():
    data = ExecuteData(content="a", username="bot", tts=True)
    assert data.to_dict() == {"content": "a", "username": "bot", "tts": True}


def test_edit_and_delete_message():
    hook, seen = make_hook()
    hook.edit_message(9, EditWebhookMessageData(content=NULL))
    hook.delete_message(9)
    assert seen[0].url.path.endswith("/5/token/messages/9")
    assert json.loads(seen[0].content) == {"content": None}
    assert seen[1].method == "DELETE"


def test_from_client_shares_limiter():
    http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
    client = Client("Bot token", http)
    hook = from_client(client, 5, "token")
    assert hook.session.limiter is client.session.limiter
    assert hook.id == 5
    assert hook.token == "token"