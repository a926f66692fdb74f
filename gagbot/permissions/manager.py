import logging
from typing import Any

import hikari

from ..commands import Command
from ..database.manager import DatabaseManager
from ..database.models import Guild
from .resolver import PermissionState, is_valid_node, resolve

logger = logging.getLogger(__name__)


class PermissionManager:
    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def get_guild_permissions(self, guild_id: int) -> dict[str, dict[str, bool]]:
        """Snapshot of ``{role_id: {node: allowed}}`` for a guild."""
        try:
            async with self.db.session() as session:
                guild = await session.get(Guild, guild_id)
                if guild is None or not guild.permissions:
                    return {}
                return {role_id: dict(nodes) for role_id, nodes in guild.permissions.items()}

        except Exception as e:
            logger.error(f"Error fetching permissions for guild {guild_id}: {e}")
            return {}

    async def get_role_permissions(self, guild_id: int, role_id: int | str) -> dict[str, bool]:
        permissions = await self.get_guild_permissions(guild_id)
        return permissions.get(str(role_id), {})

    async def set_permission(self, guild_id: int, role_id: int | str, node: str, allow: bool) -> bool:
        if not is_valid_node(node):
            logger.warning(f"Refusing to set invalid permission node {node!r}")
            return False

        try:
            async with self.db.session() as session:
                guild = await self._get_or_create_guild(session, guild_id)
                permissions = self._copy_table(guild)
                permissions.setdefault(str(role_id), {})[node] = allow
                guild.permissions = permissions

            logger.info(f"Set {node}={allow} for role {role_id} in guild {guild_id}")
            return True

        except Exception as e:
            logger.error(f"Error in set_permission: {e}")
            return False

    async def unset_permission(self, guild_id: int, role_id: int | str, node: str) -> bool:
        """Remove one node from a role. Returns whether it was set."""
        try:
            async with self.db.session() as session:
                guild = await session.get(Guild, guild_id)
                if guild is None:
                    return False

                permissions = self._copy_table(guild)
                removed = permissions.get(str(role_id), {}).pop(node, None) is not None
                if removed:
                    guild.permissions = permissions

            if removed:
                logger.info(f"Unset {node} for role {role_id} in guild {guild_id}")
            return removed

        except Exception as e:
            logger.error(f"Error in unset_permission: {e}")
            return False

    async def clear_permissions(self, guild_id: int, role_id: int | str) -> int:
        """Remove every node from a role. Returns how many were removed."""
        try:
            async with self.db.session() as session:
                guild = await session.get(Guild, guild_id)
                if guild is None:
                    return 0

                permissions = self._copy_table(guild)
                removed = permissions.pop(str(role_id), {})
                guild.permissions = permissions

            logger.info(f"Cleared {len(removed)} permissions for role {role_id} in guild {guild_id}")
            return len(removed)

        except Exception as e:
            logger.error(f"Error in clear_permissions: {e}")
            return 0

    async def check_user_can_execute(
        self, guild: hikari.Guild | None, member: hikari.Member | None, command: Command
    ) -> bool:
        if command.permission_node is None:
            return True

        if guild is None or member is None:
            return command.permission_default

        # Server owner always has all permissions
        if member.id == guild.owner_id:
            logger.debug(f"User {member.id} is server owner - allowing {command.name}")
            return True

        table = await self.get_guild_permissions(guild.id)
        roles = sorted(member.get_roles(), key=lambda role: role.position, reverse=True)

        for role in roles:
            state = resolve(table, role.id, command.permission_node)
            if state is PermissionState.UNSET:
                continue

            logger.debug(f"Role {role.id} resolved {command.permission_node} to {state.value}")
            return state is PermissionState.ALLOW

        return command.permission_default

    @staticmethod
    async def _get_or_create_guild(session: Any, guild_id: int) -> Guild:
        guild = await session.get(Guild, guild_id)
        if guild is None:
            guild = Guild(id=guild_id, permissions={})
            session.add(guild)
        return guild

    @staticmethod
    def _copy_table(guild: Guild) -> dict[str, dict[str, bool]]:
        # JSON columns only persist reassignment, so edit a copy.
        return {role_id: dict(nodes) for role_id, nodes in (guild.permissions or {}).items()}
