from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import hikari

from gagbot.commands import ArgumentList, Command, arguments, command
from gagbot.permissions import is_valid_node

from ..config import NO_PERMISSIONS_MESSAGE, PERMISSION_LIST_NODE, PERMISSION_SET_NODE

logger = logging.getLogger(__name__)


def format_permissions(permissions: Mapping[str, bool]) -> str:
    """Render nodes as a ``diff`` block: ``+`` for allowed, ``-`` for denied."""
    if not permissions:
        return NO_PERMISSIONS_MESSAGE

    nodes = sorted(permissions)
    width = max(len(node) for node in nodes)
    lines = []
    for node in nodes:
        allowed = permissions[node]
        symbol = "+" if allowed else "-"
        lines.append(f"{symbol} {node.ljust(width)} : {str(allowed).lower()}")
    return "```diff\n" + "\n".join(lines) + "\n```"


def setup_permission_commands(app: Any) -> list[Command]:
    """Commands that edit and inspect the guild's role permission table."""

    async def check_role(ctx, role_id: str) -> bool:
        role = app.cache.get_role(hikari.Snowflake(role_id)) if app.cache else None
        if role is None or role.guild_id != ctx.guild_id:
            logger.debug(f"Rejected role {role_id} for guild {ctx.guild_id}")
            await ctx.respond(f"Invalid role ID `{role_id}`.")
            return False
        return True

    async def check_node(ctx, node: str) -> bool:
        if not is_valid_node(node):
            await ctx.respond(f"Invalid permission node `{node}`.")
            return False
        return True

    @command(
        name="permset",
        description="Set a permission node for a role",
        permission_node=PERMISSION_SET_NODE,
        arguments={"roleID": arguments.role, "node": arguments.string, "allow": arguments.boolean},
    )
    async def permset(ctx, args: ArgumentList) -> bool:
        role_id, node = args["roleID"], args["node"]
        if not await check_role(ctx, role_id) or not await check_node(ctx, node):
            return False

        if not await app.permissions.set_permission(ctx.guild_id, role_id, node, args["allow"]):
            await ctx.respond("A database error occurred :/")
            return True

        await ctx.respond("Permission set.")
        return True

    @command(
        name="permunset",
        description="Unset a permission node for a role",
        permission_node=PERMISSION_SET_NODE,
        arguments={"roleID": arguments.role, "node": arguments.string},
    )
    async def permunset(ctx, args: ArgumentList) -> bool:
        role_id, node = args["roleID"], args["node"]
        if not await check_role(ctx, role_id) or not await check_node(ctx, node):
            return False

        if await app.permissions.unset_permission(ctx.guild_id, role_id, node):
            await ctx.respond("Permission unset.")
        else:
            await ctx.respond(f"`{node}` was not set for that role.")
        return True

    @command(
        name="permclear",
        description="Clear all permission nodes for a role",
        permission_node=PERMISSION_SET_NODE,
        arguments={"roleID": arguments.role},
    )
    async def permclear(ctx, args: ArgumentList) -> bool:
        role_id = args["roleID"]
        if not await check_role(ctx, role_id):
            return False

        removed = await app.permissions.clear_permissions(ctx.guild_id, role_id)
        await ctx.respond(f"Permissions cleared ({removed} removed).")
        return True

    @command(
        name="permlist",
        description="List all permissions for a given role.",
        permission_node=PERMISSION_LIST_NODE,
        arguments={"roleID": arguments.role},
    )
    async def permlist(ctx, args: ArgumentList) -> bool:
        role_id = args["roleID"]
        if not await check_role(ctx, role_id):
            return False

        permissions = await app.permissions.get_role_permissions(ctx.guild_id, role_id)
        await ctx.respond(format_permissions(permissions))
        return True

    @command(
        name="permcheck",
        description="List all permissions for a role, under a certain node.",
        permission_node=PERMISSION_LIST_NODE,
        arguments={"roleID": arguments.role, "node": arguments.string},
    )
    async def permcheck(ctx, args: ArgumentList) -> bool:
        role_id, node = args["roleID"], args["node"]
        if not await check_role(ctx, role_id) or not await check_node(ctx, node):
            return False

        permissions = await app.permissions.get_role_permissions(ctx.guild_id, role_id)
        matching = {key: allowed for key, allowed in permissions.items() if key.startswith(node)}
        await ctx.respond(format_permissions(matching))
        return True

    return [permset, permunset, permclear, permlist, permcheck]
