"""Command definitions and the grammar engine that parses their arguments."""

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .argument_list import ArgumentList
from .arguments import Parser, string
from .errors import ParseError, TooManyArgumentsError, next_token

logger = logging.getLogger(__name__)

Grammar = Mapping[str | int, Parser]
CommandCallback = Callable[[Any, ArgumentList], Awaitable[Any]]


@dataclass(frozen=True, eq=False)
class Command:
    """An immutable command definition.

    ``arguments`` is the command's grammar: an ordered mapping of argument
    names to parsers. A sequence of parsers declares positional arguments keyed
    ``0..n-1``. ``None`` means the tail is split on whitespace instead.
    """

    name: str
    callback: CommandCallback
    description: str = ""
    permission_node: str | None = None
    permission_default: bool = False
    arguments: Grammar | Sequence[Parser] | None = None
    module_name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or any(char.isspace() for char in self.name):
            raise ValueError(f"Command name must be a single token: {self.name!r}")

        if self.arguments is not None:
            if isinstance(self.arguments, Mapping):
                grammar = dict(self.arguments)
            else:
                grammar = dict(enumerate(self.arguments))
            object.__setattr__(self, "arguments", MappingProxyType(grammar))

    @property
    def usage(self) -> str:
        return build_usage_string(self)

    def parse_arguments(self, tail: str) -> ArgumentList | ParseError | TooManyArgumentsError:
        return parse_arguments(self, tail)

    async def execute(self, ctx: Any, args: ArgumentList) -> Any:
        return await self.callback(ctx, args)


def command(
    name: str,
    description: str = "",
    permission_node: str | None = None,
    permission_default: bool = False,
    arguments: Grammar | Sequence[Parser] | None = None,
) -> Callable[[CommandCallback], Command]:
    """Build a :class:`Command` from the decorated coroutine function."""

    def decorator(func: CommandCallback) -> Command:
        return Command(
            name=name,
            callback=func,
            description=description or (func.__doc__ or "").strip(),
            permission_node=permission_node,
            permission_default=permission_default,
            arguments=arguments,
        )

    return decorator


def parse_arguments(command: Command, tail: str) -> ArgumentList | ParseError | TooManyArgumentsError:
    """Parse ``tail`` against the command's grammar."""
    args = ArgumentList()

    if command.arguments is None:
        for index, token in enumerate(tail.split()):
            args.add(index, token, string)
        return args

    for name, parser in command.arguments.items():
        value, rest = parser(tail)
        if value is None:
            logger.debug(f"Argument {name!r} of {command.name} did not match {parser.name}")
            return ParseError(name, parser.name, next_token(tail))

        args.add(name, value, parser)
        tail = rest

    if tail.strip():
        return TooManyArgumentsError(next_token(tail))

    return args


def build_usage_string(command: Command) -> str:
    parts = [command.name]
    for name, parser in (command.arguments or {}).items():
        if isinstance(name, int):
            parts.append(parser.name)
        else:
            parts.append(f"{name}:{parser.name}")
    return " ".join(parts)


class CommandTable:
    """Name to command lookup shared by the loader and the dispatcher."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def add(self, command: Command) -> None:
        if command.name in self._commands:
            raise ValueError(f"A command named {command.name!r} is already registered")

        self._commands[command.name] = command
        logger.debug(f"Added command: {command.name}")

    def remove(self, name: str) -> Command | None:
        command = self._commands.pop(name, None)
        if command:
            logger.debug(f"Removed command: {name}")
        return command

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return list(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)
