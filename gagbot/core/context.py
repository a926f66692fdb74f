from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import hikari

from config.settings import BotSettings

from ..commands import CommandTable
from ..database import DatabaseManager, GuildRepository
from ..permissions import PermissionManager


@dataclass(slots=True)
class AppContext:
    """Services shared by the dispatcher and every command callback."""

    settings: BotSettings
    commands: CommandTable
    db: DatabaseManager
    permissions: PermissionManager
    guilds: GuildRepository
    rest: hikari.api.RESTClient | None = None
    cache: hikari.api.Cache | None = None


class MessageContext:
    """Per-message view passed to command callbacks."""

    def __init__(self, event: hikari.GuildMessageCreateEvent, app: AppContext) -> None:
        self.event = event
        self.app = app

        self.author = event.author
        self.member = event.member
        self.guild_id = event.guild_id
        self.channel_id = event.channel_id
        self.content = event.content or ""

    def get_guild(self) -> hikari.Guild | None:
        if self.guild_id and self.app.cache:
            return self.app.cache.get_guild(self.guild_id)
        return None

    def get_channel(self) -> hikari.GuildChannel | None:
        return self.event.get_channel()

    async def respond(self, content: str | None = None, *, embed: hikari.Embed | None = None, **kwargs: Any) -> None:
        if self.app.rest is None:
            raise RuntimeError("No REST client available to respond with")

        await self.app.rest.create_message(
            self.channel_id,
            content=content if content is not None else hikari.UNDEFINED,
            embed=embed if embed is not None else hikari.UNDEFINED,
            **kwargs,
        )
