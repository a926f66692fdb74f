"""Turns message text into a command invocation.

The stages run in order and stop at the first that does not pass: prefix
match, command lookup, permission check, argument parsing, execution. Only
argument and execution failures produce a :class:`CommandError`; every other
stop is silent so ordinary chat traffic never triggers a reply.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Any

from ..commands import (
    Command,
    CommandError,
    CommandTable,
    ErrorKind,
    ParseError,
    TooManyArgumentsError,
)
from ..permissions import PermissionManager

logger = logging.getLogger(__name__)

USAGE_ERROR_MESSAGE = "Usage Error"

_COMMAND_NAME = re.compile(r"\S*")


def match_prefix(content: str, prefixes: Iterable[str]) -> str | None:
    """Return the longest prefix ``content`` starts with, or ``None``.

    Between prefixes of equal length the first one listed wins.
    """
    best = None
    for prefix in prefixes:
        if prefix and content.startswith(prefix) and (best is None or len(prefix) > len(best)):
            best = prefix
    return best


def split_command(text: str) -> tuple[str, str]:
    """Split ``text`` into the command name and the argument tail."""
    name = _COMMAND_NAME.match(text).group()
    return name, text[len(name):].lstrip()


class CommandDispatcher:
    def __init__(
        self,
        commands: CommandTable,
        permissions: PermissionManager,
        prefixes: Sequence[str],
        allow_leading_whitespace: bool = True,
    ) -> None:
        self.commands = commands
        self.permissions = permissions
        self.prefixes = list(prefixes)
        self.allow_leading_whitespace = allow_leading_whitespace

    async def dispatch(self, ctx: Any, content: str, prefixes: Sequence[str] | None = None) -> CommandError | None:
        prefix = match_prefix(content, self.prefixes if prefixes is None else prefixes)
        if prefix is None:
            return None

        text = content[len(prefix):]
        if self.allow_leading_whitespace:
            text = text.lstrip()
        if not text:
            return None

        name, tail = split_command(text)
        command = self.commands.get(name)
        if command is None:
            logger.debug(f"Ignoring unknown command {name!r}")
            return None

        guild = ctx.get_guild()
        if not await self.permissions.check_user_can_execute(guild, ctx.member, command):
            logger.debug(f"User {ctx.author.id} may not run {command.name}")
            return None

        args = command.parse_arguments(tail)
        if isinstance(args, ParseError):
            return self._error(command, ErrorKind.ARGUMENT, args.message)
        if isinstance(args, TooManyArgumentsError):
            return self._error(command, ErrorKind.TOO_MANY_ARGUMENTS, args.message)

        logger.info(f"Command called: {prefix}{command.name} by {ctx.author.username}")

        try:
            result = await command.execute(ctx, args)
        except Exception as e:
            logger.exception(f"Error executing command {command.name}")
            return self._error(command, ErrorKind.EXECUTION, f"Command failed: {e}")

        if isinstance(result, CommandError):
            return result
        if not result:
            return self._error(command, ErrorKind.USAGE, USAGE_ERROR_MESSAGE)

        return None

    @staticmethod
    def _error(command: Command, kind: ErrorKind, message: str) -> CommandError:
        return CommandError(
            kind=kind,
            command_name=command.name,
            message=message,
            usage=command.usage,
            description=command.description,
        )
