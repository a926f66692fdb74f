from __future__ import annotations

import json
import logging
import math
from typing import Any

from gagbot.commands import ArgumentList, Command, arguments, command

from ..config import LASTLOG_NODE, PING_NODE, REPEAT_LIMIT, REPEAT_NODE, SQRT_NODE

logger = logging.getLogger(__name__)


def setup_basic_commands(app: Any) -> list[Command]:
    """Diagnostic commands that need nothing but the channel."""

    @command(name="ping", description="Ping!", permission_node=PING_NODE, permission_default=True)
    async def ping(ctx, args: ArgumentList) -> bool:
        await ctx.respond("Pong.")
        return True

    @command(
        name="repeat",
        description="Take a `str` and repeat it `num` times",
        permission_node=REPEAT_NODE,
        permission_default=True,
        arguments={"str": arguments.string, "num": arguments.number},
    )
    async def repeat(ctx, args: ArgumentList) -> bool:
        count = args["num"]
        if not isinstance(count, int) or not 1 <= count <= REPEAT_LIMIT:
            return False

        await ctx.respond("\n".join(f"{i}: {args['str']}" for i in range(count)))
        return True

    @command(
        name="sqrt",
        description="Take a number and return its square root.",
        permission_node=SQRT_NODE,
        permission_default=True,
        arguments=[arguments.number],
    )
    async def sqrt(ctx, args: ArgumentList) -> bool:
        value = args[0]
        if value < 0:
            return False

        await ctx.respond(str(math.sqrt(value)))
        return True

    @command(
        name="lastlog",
        description="Dump the last log item for the current guild.",
        permission_node=LASTLOG_NODE,
    )
    async def lastlog(ctx, args: ArgumentList) -> bool:
        entry = await app.guilds.last_error(ctx.guild_id)
        if entry is None:
            await ctx.respond("Nothing has been logged yet.")
            return True

        await ctx.respond("```\n" + json.dumps(entry.to_dict(), indent=4) + "```")
        return True

    return [ping, repeat, sqrt, lastlog]
