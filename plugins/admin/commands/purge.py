from __future__ import annotations

import logging
from typing import Any

import hikari

from gagbot.commands import ABSENT, ArgumentList, Command, CommandError, ErrorKind, arguments, command
from gagbot.core.responses import info_embed

from ..config import PURGE_LIMIT, PURGE_NODE

logger = logging.getLogger(__name__)

PURGE_ARGUMENTS = {
    "channel": arguments.optional(arguments.unless(arguments.channel, arguments.number)),
    "since": arguments.choice(
        arguments.number,
        arguments.sequence(arguments.ident("since"), arguments.snowflake),
    ),
    "from": arguments.optional(arguments.sequence(arguments.ident("from"), arguments.user)),
}


def setup_purge_commands(app: Any) -> list[Command]:
    def resolve_channel(ctx, channel_arg: Any) -> hikari.GuildChannel | None:
        if channel_arg is ABSENT:
            return ctx.get_channel()

        channel = app.cache.get_guild_channel(hikari.Snowflake(channel_arg)) if app.cache else None
        if channel is None or channel.guild_id != ctx.guild_id:
            return None
        return channel

    @command(
        name="purge",
        description="Bulk delete recent messages",
        permission_node=PURGE_NODE,
        arguments=PURGE_ARGUMENTS,
    )
    async def purge(ctx, args: ArgumentList) -> Any:
        channel = resolve_channel(ctx, args["channel"])
        if not isinstance(channel, hikari.GuildTextChannel):
            return CommandError(
                kind=ErrorKind.EXECUTION,
                command_name="purge",
                message="I can only delete messages in text channels!",
                usage=purge.usage,
                description=purge.description,
            )

        since = args["since"]
        if isinstance(since, list):
            # since <message id>
            messages = app.rest.fetch_messages(channel.id, after=hikari.Snowflake(since[1])).limit(PURGE_LIMIT)
        else:
            if not isinstance(since, int) or since < 1:
                return False
            # Include the invoking message when purging the current channel
            count = since + 1 if channel.id == ctx.channel_id else since
            messages = app.rest.fetch_messages(channel.id).limit(min(count, PURGE_LIMIT))

        try:
            fetched = await messages
        except hikari.HTTPError as e:
            logger.error(f"Failed to fetch messages in {channel.id}: {e}")
            await ctx.respond("Failed to fetch messages :/")
            return True

        if args["from"] is not ABSENT:
            user_id = hikari.Snowflake(args["from"][1])
            fetched = [message for message in fetched if message.author.id == user_id]

        embed = info_embed("Purging Messages...")
        embed.add_field("Messages", str(len(fetched)), inline=True)
        embed.add_field("Channel", f"<#{channel.id}>", inline=True)
        await ctx.respond(embed=embed)

        if fetched:
            await app.rest.delete_messages(channel.id, fetched)
            logger.info(f"Purged {len(fetched)} messages from {channel.id} in guild {ctx.guild_id}")
        return True

    return [purge]
