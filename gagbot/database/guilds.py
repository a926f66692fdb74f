"""Per-guild settings and the command error log."""

import logging

from sqlalchemy import select

from .manager import DatabaseManager
from .models import CommandLog, Guild

logger = logging.getLogger(__name__)

MAX_PREFIX_LENGTH = 10


class GuildRepository:
    def __init__(self, db: DatabaseManager) -> None:
        self.db = db
        # guild id -> prefix, None when the guild has none; filled on first lookup
        self._prefixes: dict[int, str | None] = {}

    async def get_prefix(self, guild_id: int) -> str | None:
        """Get the extra prefix configured for a guild, if any."""
        if guild_id in self._prefixes:
            return self._prefixes[guild_id]

        try:
            async with self.db.session() as session:
                guild = await session.get(Guild, guild_id)
                prefix = guild.prefix if guild and guild.prefix else None
        except Exception as e:
            logger.error(f"Error getting guild prefix for {guild_id}: {e}")
            return None

        self._prefixes[guild_id] = prefix
        return prefix

    async def set_prefix(self, guild_id: int, prefix: str) -> bool:
        if not prefix or len(prefix) > MAX_PREFIX_LENGTH or any(char.isspace() for char in prefix):
            logger.warning(f"Rejected prefix {prefix!r} for guild {guild_id}")
            return False

        try:
            async with self.db.session() as session:
                guild = await session.get(Guild, guild_id)
                if guild is None:
                    guild = Guild(id=guild_id, permissions={})
                    session.add(guild)
                guild.prefix = prefix

            self._prefixes[guild_id] = prefix
            logger.info(f"Set prefix for guild {guild_id} to {prefix!r}")
            return True

        except Exception as e:
            logger.error(f"Error setting guild prefix for {guild_id}: {e}")
            return False

    async def record_error(
        self,
        guild_id: int,
        user_id: int,
        command_name: str,
        message: str,
        detail: str | None = None,
        cause: str = "command",
    ) -> None:
        try:
            async with self.db.session() as session:
                session.add(
                    CommandLog(
                        guild_id=guild_id,
                        user_id=user_id,
                        command_name=command_name,
                        cause=cause,
                        message=message,
                        detail=detail,
                    )
                )
        except Exception as e:
            logger.error(f"Error recording command error for guild {guild_id}: {e}")

    async def last_error(self, guild_id: int) -> CommandLog | None:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(CommandLog)
                    .where(CommandLog.guild_id == guild_id)
                    .order_by(CommandLog.timestamp.desc(), CommandLog.id.desc())
                    .limit(1)
                )
                return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Error fetching last log for guild {guild_id}: {e}")
            return None
