"""Tests for the GagBot runtime glue."""

from unittest.mock import AsyncMock, MagicMock, patch

import hikari
import pytest

from gagbot.commands import Command, ErrorKind
from gagbot.core.bot import GagBot
from gagbot.core.context import MessageContext


@pytest.fixture
def gagbot(test_settings):
    with patch("gagbot.core.bot.hikari.GatewayBot") as mock_gateway:
        gateway = mock_gateway.return_value
        gateway.get_me.return_value = None
        gateway.rest.create_message = AsyncMock()
        bot = GagBot(config=test_settings, db=MagicMock())

    bot.guilds.get_prefix = AsyncMock(return_value=None)
    bot.guilds.record_error = AsyncMock()
    bot.permission_manager.check_user_can_execute = AsyncMock(return_value=True)
    return bot


async def succeed(ctx, args):
    return True


async def fail(ctx, args):
    return False


class TestGagBot:
    def test_requires_token(self, test_settings):
        test_settings.discord_token = ""

        with pytest.raises(RuntimeError):
            GagBot(config=test_settings, db=MagicMock())

    def test_wires_shared_context(self, gagbot, test_settings):
        assert gagbot.app.settings is test_settings
        assert gagbot.app.commands is gagbot.commands
        assert gagbot.app.permissions is gagbot.permission_manager
        assert gagbot.dispatcher.prefixes == ["gb!"]

    @pytest.mark.asyncio
    async def test_prefixes_include_guild_prefix_and_mentions(self, gagbot):
        gagbot.guilds.get_prefix.return_value = "??"
        gagbot.hikari_bot.get_me.return_value = MagicMock(id=42)

        assert await gagbot.get_guild_prefixes(1) == ["gb!", "??", "<@42>", "<@!42>"]

    @pytest.mark.asyncio
    async def test_initialize_loads_modules(self, gagbot):
        gagbot.db.create_tables = AsyncMock()
        gagbot.module_loader.load_all_modules = MagicMock(return_value=[])

        await gagbot._initialize_systems()

        gagbot.db.create_tables.assert_awaited_once()
        gagbot.module_loader.load_all_modules.assert_called_once_with(["core", "admin"])

    @pytest.mark.asyncio
    async def test_ignores_bots(self, gagbot, mock_message_event):
        mock_message_event.is_bot = True
        gagbot.commands.add(Command(name="ping", callback=fail))

        assert await gagbot.handle_message(mock_message_event) is None
        gagbot.guilds.record_error.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_successful_command_sends_no_error(self, gagbot, mock_message_event):
        gagbot.commands.add(Command(name="ping", callback=succeed))

        assert await gagbot.handle_message(mock_message_event) is None
        gagbot.hikari_bot.rest.create_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_error_is_logged_and_reported(self, gagbot, mock_message_event):
        gagbot.commands.add(Command(name="ping", callback=fail, description="Ping!"))

        error = await gagbot.handle_message(mock_message_event)

        assert error.kind is ErrorKind.USAGE
        gagbot.guilds.record_error.assert_awaited_once_with(
            mock_message_event.guild_id,
            mock_message_event.author.id,
            "ping",
            "Usage Error",
            detail="gb!ping",
            cause="usage",
        )
        gagbot.hikari_bot.rest.create_message.assert_awaited_once()
        embed = gagbot.hikari_bot.rest.create_message.call_args.kwargs["embed"]
        assert embed.title == "Oops! Something went wrong."
        assert embed.description == "Usage Error"


class TestMessageContext:
    def test_exposes_event_fields(self, mock_message_event, mock_app, mock_guild):
        ctx = MessageContext(mock_message_event, mock_app)

        assert ctx.author is mock_message_event.author
        assert ctx.member is mock_message_event.member
        assert ctx.guild_id == mock_message_event.guild_id
        assert ctx.content == "gb!ping"
        assert ctx.get_guild() is mock_guild

    @pytest.mark.asyncio
    async def test_respond_uses_rest(self, mock_message_event, mock_app):
        ctx = MessageContext(mock_message_event, mock_app)

        await ctx.respond("Pong.")

        mock_app.rest.create_message.assert_awaited_once_with(
            mock_message_event.channel_id, content="Pong.", embed=hikari.UNDEFINED
        )

    @pytest.mark.asyncio
    async def test_respond_without_rest(self, mock_message_event, mock_app):
        mock_app.rest = None
        ctx = MessageContext(mock_message_event, mock_app)

        with pytest.raises(RuntimeError):
            await ctx.respond("Pong.")
