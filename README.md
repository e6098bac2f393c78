# discordrest

A synchronous client for the Discord REST API, built on `httpx`. It sets
the authorization and user-agent headers, keeps per-route rate limit
buckets, pages through large listings, checks message payloads before
sending them and encodes images as data URIs. A separate client talks to
webhooks directly through their ID and token.

## Installation

```
pip install discordrest
```

For running the test suite:

```
pip install "discordrest[test]"
pytest
```

## Quick start

```python
from discordrest.client import Client

client = Client("Bot token")

me = client.me()
print(me["username"])

message = client.send_text(123456789012345678, "Hello there")
recent = client.messages(123456789012345678, 250)  # pages as needed

client.close()
```

`Client` can also be used as a context manager, which closes the
underlying HTTP client on exit. An existing `httpx.Client` may be passed
as the second argument.

`Client` combines every resource group: channels, emojis, roles, guilds,
members, invites, webhooks, messages, reactions, users, login and
application commands and interactions. Responses are returned as decoded
JSON (dicts and lists); endpoints without a body return `None`.

Listing methods (`messages`, `messages_before`, `messages_after`,
`guilds`, `guilds_before`, `guilds_after`, `members`, `members_after`,
`reactions`, `reactions_before`, `reactions_after`) page through the API
on their own; a limit of `0` means "fetch everything".

Request payloads are dataclasses such as `CreateChannelData`,
`ModifyGuildData`, `CreateRoleData` or `EditMessageData`. In the
`Modify…` payloads a field left as `None` is not sent, while the marker
`discordrest.transport.NULL` sends an explicit JSON `null` to clear it.

`with_timeout` returns a copy of the client that shares its session and
rate limiter, but whose requests must finish within the given number of
seconds:

```python
quick = client.with_timeout(5.0)
quick.typing(123456789012345678)
```

## Sending richer messages

```python
from discordrest.send import AllowedMentions, AllowedMentionType, File, SendMessageData

data = SendMessageData(
    content="Report attached",
    files=[File(name="report.txt", reader=open("report.txt", "rb"))],
    allowed_mentions=AllowedMentions(parse=[AllowedMentionType.EVERYONE]),
)
client.send_message_complex(123456789012345678, data)
```

Messages with files are sent as multipart uploads, with the rest of the
message in a `payload_json` field. Messages are checked before they are
sent: a message with no content, embed or file raises
`EmptyMessageError`, and allowed-mention lists that break the server's
constraints raise `ValueError` (`AllowedMentions.verify` reports the
problem directly).

## Images

Emoji, guild icon, avatar and webhook payloads take an `Image`, which is
encoded as a `data:` URI. If the content type is left empty it is detected
from the bytes (PNG, JPEG or GIF); anything else is rejected with
`InvalidImageError`. `Image.validate(max_size)` raises
`ImageTooLargeError` for content over the limit.

```python
from discordrest.image import Image, decode_image

with open("icon.png", "rb") as fh:
    image = Image(content=fh.read())

uri = image.encode()          # b"data:image/png;base64,..."
same = decode_image(uri)
```

## Webhooks

```python
from discordrest.webhook_client import ExecuteData, WebhookClient

hook = WebhookClient(123456789012345678, "token")
hook.execute(ExecuteData(content="Deployed!"))
sent = hook.execute_and_wait(ExecuteData(content="And this one comes back"))
```

`WebhookClient` also has `get`, `modify`, `delete`, `edit_message` and
`delete_message`. `from_client(client, webhook_id, token)` builds a
webhook client that shares an existing `Client`'s HTTP connection and rate
limiter.

## Rate limiting

Every request passes through a `Limiter` from `discordrest.rate.limiter`.
Routes are grouped into buckets with `parse_bucket_key`, which blanks out
IDs and emoji in paths while keeping the major channel and guild IDs:

```python
from discordrest.rate.majors import parse_bucket_key

parse_bucket_key("/channels/1/messages/2/reactions/thonk:123123/@me")
# '/channels/1/messages//reactions//@me'
```

The limiter honours `X-RateLimit-Remaining`, `X-RateLimit-Reset` (plus a
small extra delay), `Retry-After` and `X-RateLimit-Global`. Fixed
intervals for particular routes can be set by adding `CustomRateLimit`
entries to `Limiter.custom_limits`. If a wait would run past the caller's
deadline, `RateLimitTimeout` is raised instead of sleeping.

## Errors

Responses with an error status raise `discordrest.transport.HTTPError`,
which carries the status code, the raw body, and the error `code` and
`message` from a JSON body when there is one.

## What this package does not do

It covers the REST API only. It does not connect to the real-time
gateway, so it receives no events; it keeps no cache of guilds, channels
or messages; it has no command router for bots; and it has no voice
support. It is synchronous, and it does not model responses as typed
objects.