import httpx
import pytest

from discordrest.reactions import MAX_MESSAGE_REACTION_FETCH_LIMIT, ReactionsMixin
from discordrest.transport import ENDPOINT_CHANNELS, BaseClient, HTTPError, Session


class _Client(BaseClient, ReactionsMixin):
    pass


def _client(handler):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return _Client(Session("Bot token"), http)


def _reject(request):
    return httpx.Response(400, json={"code": 0, "message": f"{request.method} {request.url}"})


def _paged(pages):
    seen = []
    pages = list(pages)

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=pages.pop(0) if pages else [])

    return _client(handler), seen


def users(start, stop):
    return [{"id": i} for i in range(start, stop)]


BASE = ENDPOINT_CHANNELS + "1/messages/2/reactions/"


def test_react_custom_emoji_url():
    client = _client(_reject)
    with pytest.raises(HTTPError) as info:
        client.react(1, 2, "thonk:123123")
    assert info.value.message == "PUT " + BASE + "thonk:123123/@me"


def test_react_unicode_emoji_is_escaped():
    client = _client(_reject)
    with pytest.raises(HTTPError) as info:
        client.react(1, 2, "🔥")
    assert info.value.message == "PUT " + BASE + "%F0%9F%94%A5/@me"


def test_unreact_targets_current_user():
    client = _client(_reject)
    with pytest.raises(HTTPError) as info:
        client.unreact(1, 2, "a:1")
    assert info.value.message == "DELETE " + BASE + "a:1/@me"


def test_delete_user_reaction_uses_user_id():
    client = _client(_reject)
    with pytest.raises(HTTPError) as info:
        client.delete_user_reaction(1, 2, 5, "a:1")
    assert info.value.message == "DELETE " + BASE + "a:1/5"


def test_delete_reactions_and_all():
    client = _client(_reject)
    with pytest.raises(HTTPError) as first:
        client.delete_reactions(1, 2, "a:1")
    with pytest.raises(HTTPError) as second:
        client.delete_all_reactions(1, 2)
    assert first.value.message == "DELETE " + BASE + "a:1"
    assert second.value.message == "DELETE " + ENDPOINT_CHANNELS + "1/messages/2/reactions"


def test_reactions_after_paginates_until_short_page():
    client, seen = _paged([users(1, 101), users(101, 151)])
    result = client.reactions(1, 2, "a:1", 0)
    assert [u["id"] for u in result] == list(range(1, 151))
    assert len(seen) == 2
    assert "after" not in seen[0].url.params
    assert seen[1].url.params["after"] == "100"
    assert all(
        int(r.url.params["limit"]) == MAX_MESSAGE_REACTION_FETCH_LIMIT for r in seen
    )


def test_reactions_limit_is_split_into_pages():
    client, seen = _paged([users(1, 101), users(101, 201), users(201, 301)])
    result = client.reactions_after(1, 2, 0, "a:1", 250)
    limits = [int(r.url.params["limit"]) for r in seen]
    assert len(seen) == 3
    assert sum(limits) == 250
    assert max(limits) <= MAX_MESSAGE_REACTION_FETCH_LIMIT
    assert len(result) == 300


def test_reactions_before_prepends_older_pages():
    client, seen = _paged([users(101, 201), users(1, 51)])
    result = client.reactions_before(1, 2, 500, "a:1", 0)
    assert [u["id"] for u in result] == list(range(1, 51)) + list(range(101, 201))
    assert seen[0].url.params["before"] == "500"
    assert seen[1].url.params["before"] == "101"


def test_reactions_empty_returns_empty_list():
    client, seen = _paged([[]])
    assert client.reactions(1, 2, "a:1", 10) == []
    assert seen[0].url.params["limit"] == "10"