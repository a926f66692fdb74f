from .guilds import GuildRepository
from .manager import DatabaseManager, db_manager
from .models import Base, CommandLog, Guild

__all__ = [
    "DatabaseManager",
    "db_manager",
    "GuildRepository",
    "Base",
    "Guild",
    "CommandLog",
]
