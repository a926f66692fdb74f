"""Pytest configuration and shared fixtures."""

import logging
from unittest.mock import AsyncMock, MagicMock

import hikari
import pytest
import pytest_asyncio

from config.settings import BotSettings
from gagbot.commands import CommandTable
from gagbot.core import AppContext
from gagbot.database import DatabaseManager, GuildRepository
from gagbot.permissions import PermissionManager

# Disable logging during tests
logging.disable(logging.CRITICAL)

GUILD_ID = 123456789
OWNER_ID = 987654321
USER_ID = 111111111
CHANNEL_ID = 444444444


def make_role(role_id, position, guild_id=GUILD_ID):
    """Build a mock role at the given hierarchy position."""
    role = MagicMock(spec=hikari.Role)
    role.id = hikari.Snowflake(role_id)
    role.position = position
    role.guild_id = hikari.Snowflake(guild_id)
    return role


@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return BotSettings(
        _env_file=None,
        discord_token="test-token",
        database_url="sqlite:///:memory:",
        bot_prefixes=["gb!"],
        enabled_modules=["core", "admin"],
        module_directories=["plugins"],
    )


@pytest.fixture
def mock_guild():
    """Mock Discord guild."""
    guild = MagicMock(spec=hikari.GatewayGuild)
    guild.id = hikari.Snowflake(GUILD_ID)
    guild.name = "Test Guild"
    guild.owner_id = hikari.Snowflake(OWNER_ID)
    return guild


@pytest.fixture
def mock_user():
    """Mock Discord user."""
    user = MagicMock(spec=hikari.User)
    user.id = hikari.Snowflake(USER_ID)
    user.username = "testuser"
    user.is_bot = False
    return user


@pytest.fixture
def mock_member(mock_user):
    """Mock Discord member holding a moderator and an everyone role."""
    member = MagicMock(spec=hikari.Member)
    member.id = mock_user.id
    member.username = mock_user.username
    member.is_bot = False
    member.user = mock_user
    member.get_roles = MagicMock(return_value=[make_role(222222222, 5), make_role(GUILD_ID, 0)])
    return member


@pytest.fixture
def mock_channel():
    """Mock Discord text channel."""
    channel = MagicMock(spec=hikari.GuildTextChannel)
    channel.id = hikari.Snowflake(CHANNEL_ID)
    channel.guild_id = hikari.Snowflake(GUILD_ID)
    channel.name = "test-channel"
    channel.type = hikari.ChannelType.GUILD_TEXT
    return channel


@pytest.fixture
def mock_message_event(mock_user, mock_guild, mock_channel, mock_member):
    """Mock message create event."""
    event = MagicMock(spec=hikari.GuildMessageCreateEvent)
    event.author = mock_user
    event.member = mock_member
    event.guild_id = mock_guild.id
    event.channel_id = mock_channel.id
    event.content = "gb!ping"
    event.is_bot = False
    event.get_channel = MagicMock(return_value=mock_channel)
    return event


@pytest.fixture
def mock_permission_manager():
    """Mock permission manager that allows everything."""
    perm_manager = AsyncMock(spec=PermissionManager)
    perm_manager.check_user_can_execute = AsyncMock(return_value=True)
    perm_manager.get_guild_permissions = AsyncMock(return_value={})
    perm_manager.get_role_permissions = AsyncMock(return_value={})
    perm_manager.set_permission = AsyncMock(return_value=True)
    perm_manager.unset_permission = AsyncMock(return_value=True)
    perm_manager.clear_permissions = AsyncMock(return_value=0)
    return perm_manager


@pytest.fixture
def mock_guild_repository():
    """Mock guild repository."""
    guilds = AsyncMock(spec=GuildRepository)
    guilds.get_prefix = AsyncMock(return_value=None)
    guilds.set_prefix = AsyncMock(return_value=True)
    guilds.record_error = AsyncMock()
    guilds.last_error = AsyncMock(return_value=None)
    return guilds


@pytest.fixture
def mock_app(test_settings, mock_permission_manager, mock_guild_repository, mock_guild):
    """Application context wired to mocks."""
    cache = MagicMock()
    cache.get_guild = MagicMock(return_value=mock_guild)
    cache.get_role = MagicMock(return_value=None)
    cache.get_guild_channel = MagicMock(return_value=None)
    cache.get_me = MagicMock(return_value=None)

    rest = MagicMock()
    rest.create_message = AsyncMock()
    rest.delete_messages = AsyncMock()

    return AppContext(
        settings=test_settings,
        commands=CommandTable(),
        db=MagicMock(spec=DatabaseManager),
        permissions=mock_permission_manager,
        guilds=mock_guild_repository,
        rest=rest,
        cache=cache,
    )


@pytest.fixture
def mock_context(mock_user, mock_guild, mock_channel, mock_member, mock_app):
    """Mock command context."""
    ctx = MagicMock()
    ctx.app = mock_app
    ctx.author = mock_user
    ctx.member = mock_member
    ctx.guild_id = mock_guild.id
    ctx.channel_id = mock_channel.id
    ctx.get_guild = MagicMock(return_value=mock_guild)
    ctx.get_channel = MagicMock(return_value=mock_channel)
    ctx.respond = AsyncMock()
    return ctx


@pytest_asyncio.fixture
async def db_manager(tmp_path):
    """A real SQLite database in a temporary directory."""
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'test.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()
