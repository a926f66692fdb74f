import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from config.settings import settings
from gagbot.commands import CommandTable
from gagbot.core import AppContext, GagBot, ModuleLoader
from gagbot.database import GuildRepository, db_manager
from gagbot.permissions import PermissionManager

app = typer.Typer(
    name="gagbot",
    help="GaGBOT Discord bot",
    add_completion=False,
)


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def _build_offline_loader() -> ModuleLoader:
    """A module loader with every enabled module loaded but no gateway connection."""
    context = AppContext(
        settings=settings,
        commands=CommandTable(),
        db=db_manager,
        permissions=PermissionManager(db_manager),
        guilds=GuildRepository(db_manager),
    )
    loader = ModuleLoader(context)
    for directory in settings.module_directories:
        loader.add_module_directory(directory)
    loader.load_all_modules(settings.enabled_modules)
    return loader


@app.command()
def run(
    dev: bool = typer.Option(False, "--dev", help="Run in development mode"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
) -> None:
    """Run the bot."""
    if dev:
        settings.environment = "development"
        settings.debug = True

    setup_logging(log_level or ("DEBUG" if dev else settings.log_level))

    bot = GagBot()
    bot.run()


@app.command()
def init(
    directory: Optional[str] = typer.Option(None, help="Directory to initialize")
) -> None:
    """Initialize a new bot deployment."""
    target_dir = Path(directory) if directory else Path.cwd()

    if not target_dir.exists():
        target_dir.mkdir(parents=True)

    (target_dir / "plugins").mkdir(exist_ok=True)
    (target_dir / "data").mkdir(exist_ok=True)

    env_file = target_dir / ".env"
    if not env_file.exists():
        env_content = """# GaGBOT Configuration
DISCORD_TOKEN=your_discord_bot_token_here
BOT_PREFIXES=["gb!"]
DATABASE_URL=sqlite:///data/gagbot.db
ENVIRONMENT=development
LOG_LEVEL=INFO
"""
        env_file.write_text(env_content)

    typer.echo(f"✅ Bot project initialized in {target_dir}")


@app.command()
def modules() -> None:
    """List the command modules found in the module directories."""
    loader = _build_offline_loader()

    typer.echo("📦 Available Modules:")
    for module_name in loader.discover_modules():
        info = loader.get_module_info(module_name)
        if info is None:
            typer.echo(f"  ❌ {module_name}")
            continue

        typer.echo(f"  ✅ {module_name} v{info.version}: {info.description}")
        commands = loader.module_commands.get(module_name, [])
        if commands:
            typer.echo(f"     commands: {', '.join(commands)}")
        if info.permissions:
            typer.echo(f"     permissions: {', '.join(info.permissions)}")


@app.command()
def usage(name: str = typer.Argument(help="Command name")) -> None:
    """Print a command's usage string and description."""
    context = _build_offline_loader().app
    command = context.commands.get(name)
    if command is None:
        typer.echo(f"Unknown command: {name}", err=True)
        raise typer.Exit(code=1)

    typer.echo(command.usage)
    if command.description:
        typer.echo(command.description)


@app.command()
def db(
    action: str = typer.Argument(help="Action: create, reset, check"),
) -> None:
    """Database management commands."""
    async def run_db_command() -> bool:
        try:
            if action == "check":
                if await db_manager.health_check():
                    typer.echo(f"✅ Database reachable at {db_manager.database_url}")
                    return True
                typer.echo(f"❌ Database unreachable at {db_manager.database_url}", err=True)
                return False
            if action == "create":
                await db_manager.create_tables()
                typer.echo("✅ Database tables created")
            elif action == "reset":
                confirm = typer.confirm("⚠️  This will delete all data. Continue?")
                if confirm:
                    await db_manager.drop_tables()
                    await db_manager.create_tables()
                    typer.echo("✅ Database reset completed")
            else:
                typer.echo(f"Unknown action: {action}")
                return False
            return True
        finally:
            await db_manager.close()

    if not asyncio.run(run_db_command()):
        raise typer.Exit(code=1)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
