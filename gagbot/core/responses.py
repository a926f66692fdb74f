import hikari

from ..commands import CommandError

ERROR_COLOR = hikari.Color(0xFF0000)
INFO_COLOR = hikari.Color(0xEBC634)


def error_embed(title: str, error: CommandError) -> hikari.Embed:
    """Render a command error with the command's usage and description."""
    embed = hikari.Embed(title=title, description=error.message, color=ERROR_COLOR)
    if error.usage:
        embed.add_field("Usage", f"`{error.usage}`")
    if error.description:
        embed.add_field("Description", error.description)
    return embed


def info_embed(title: str, description: str | None = None) -> hikari.Embed:
    return hikari.Embed(title=title, description=description, color=INFO_COLOR)
