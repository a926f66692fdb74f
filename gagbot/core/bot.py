import logging

import hikari

from config.settings import BotSettings, settings

from ..commands import CommandError, CommandTable
from ..database import DatabaseManager, GuildRepository, db_manager
from ..permissions import PermissionManager
from .context import AppContext, MessageContext
from .dispatcher import CommandDispatcher
from .module_loader import ModuleLoader
from .responses import error_embed

logger = logging.getLogger(__name__)


class GagBot:
    def __init__(self, config: BotSettings | None = None, db: DatabaseManager | None = None) -> None:
        self.settings = config or settings
        if not self.settings.discord_token:
            raise RuntimeError("DISCORD_TOKEN is not set")

        intents = (
            hikari.Intents.GUILD_MESSAGES
            | hikari.Intents.MESSAGE_CONTENT
            | hikari.Intents.GUILDS
            | hikari.Intents.GUILD_MEMBERS
        )
        self.hikari_bot = hikari.GatewayBot(token=self.settings.discord_token, intents=intents)

        self.db = db or db_manager
        self.commands = CommandTable()
        self.permission_manager = PermissionManager(self.db)
        self.guilds = GuildRepository(self.db)

        self.app = AppContext(
            settings=self.settings,
            commands=self.commands,
            db=self.db,
            permissions=self.permission_manager,
            guilds=self.guilds,
            rest=self.hikari_bot.rest,
            cache=self.hikari_bot.cache,
        )

        self.module_loader = ModuleLoader(self.app)
        for directory in self.settings.module_directories:
            self.module_loader.add_module_directory(directory)

        self.dispatcher = CommandDispatcher(
            self.commands,
            self.permission_manager,
            self.settings.bot_prefixes,
            allow_leading_whitespace=self.settings.allow_leading_whitespace,
        )

        self._setup_event_listeners()

    def _setup_event_listeners(self) -> None:
        @self.hikari_bot.listen(hikari.StartingEvent)
        async def on_starting(event: hikari.StartingEvent) -> None:
            logger.info("Bot is starting...")
            await self._initialize_systems()

        @self.hikari_bot.listen(hikari.StoppingEvent)
        async def on_stopping(event: hikari.StoppingEvent) -> None:
            logger.info("Bot is stopping...")
            await self.db.close()

        @self.hikari_bot.listen(hikari.GuildMessageCreateEvent)
        async def on_message_create(event: hikari.GuildMessageCreateEvent) -> None:
            await self.handle_message(event)

    async def _initialize_systems(self) -> None:
        await self.db.create_tables()
        logger.info("Database initialized")

        failed = self.module_loader.load_all_modules(self.settings.enabled_modules)
        if failed:
            logger.warning(f"Modules failed to load: {failed}")
        logger.info(f"Loaded {len(self.commands)} commands")

    async def get_guild_prefixes(self, guild_id: int) -> list[str]:
        """The global prefixes, the guild's own prefix and mentions of the bot."""
        prefixes = list(self.settings.bot_prefixes)
        guild_prefix = await self.guilds.get_prefix(guild_id)
        if guild_prefix and guild_prefix not in prefixes:
            prefixes.append(guild_prefix)

        me = self.hikari_bot.get_me()
        if me is not None:
            prefixes.extend([f"<@{me.id}>", f"<@!{me.id}>"])
        return prefixes

    async def handle_message(self, event: hikari.GuildMessageCreateEvent) -> CommandError | None:
        if event.is_bot or not event.content:
            return None

        ctx = MessageContext(event, self.app)
        prefixes = await self.get_guild_prefixes(event.guild_id)
        error = await self.dispatcher.dispatch(ctx, event.content, prefixes)
        if error is None:
            return None

        await self.guilds.record_error(
            event.guild_id,
            event.author.id,
            error.command_name,
            error.message,
            detail=event.content,
            cause=error.kind.value,
        )

        try:
            await ctx.respond(embed=error_embed(self.settings.error_title, error))
        except hikari.HTTPError as e:
            logger.error(f"Failed to send error reply for {error.command_name}: {e}")

        return error

    def run(self) -> None:
        try:
            logger.info("Starting GaGBOT...")
            self.hikari_bot.run()
        except KeyboardInterrupt:
            logger.info("Bot stopped by user")
        except Exception as e:
            logger.error(f"Bot crashed: {e}")
            raise
