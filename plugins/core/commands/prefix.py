from __future__ import annotations

from typing import Any

from gagbot.commands import ABSENT, ArgumentList, Command, arguments, command
from gagbot.core.responses import info_embed

from ..config import PREFIX_NODE


def setup_prefix_commands(app: Any) -> list[Command]:
    async def send_summons(ctx) -> None:
        guild_prefix = await app.guilds.get_prefix(ctx.guild_id)
        prefixes = [*app.settings.bot_prefixes, *([guild_prefix] if guild_prefix else [])]

        embed = info_embed("Command Prefix", "You can summon me using either:")
        embed.add_field("Prefix", " ".join(f"`{prefix}`" for prefix in prefixes), inline=True)

        me = app.cache.get_me() if app.cache else None
        if me is not None:
            embed.add_field("Mention", f"`@{me.username}`", inline=True)

        await ctx.respond(embed=embed)

    @command(
        name="prefix",
        description="Set the prefix used to summon GaGBOT.",
        permission_node=PREFIX_NODE,
        arguments=[arguments.optional(arguments.string)],
    )
    async def prefix(ctx, args: ArgumentList) -> bool:
        new_prefix = args[0]
        if new_prefix is not ABSENT:
            if not await app.guilds.set_prefix(ctx.guild_id, new_prefix):
                return False

        await send_summons(ctx)
        return True

    return [prefix]
