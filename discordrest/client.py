"""The REST API client with every endpoint."""

from __future__ import annotations

import httpx

from .applications import ApplicationsMixin
from .channels import ChannelsMixin
from .emojis import EmojisMixin
from .guilds import GuildsMixin
from .invites import InvitesMixin
from .members import MembersMixin
from .messages import MessagesMixin
from .reactions import ReactionsMixin
from .roles import RolesMixin
from .transport import BaseClient, Session
from .users import UsersMixin
from .webhooks import WebhooksMixin


class Client(
    BaseClient,
    ChannelsMixin,
    EmojisMixin,
    RolesMixin,
    GuildsMixin,
    MembersMixin,
    InvitesMixin,
    WebhooksMixin,
    MessagesMixin,
    UsersMixin,
    ReactionsMixin,
    ApplicationsMixin,
):
    """Authorised, rate-limited client for the REST API."""

    def __init__(self, token: str, http: httpx.Client | None = None) -> None:
        super().__init__(Session(token=token), http)