"""Command system: argument parsers, grammars and command definitions."""

from . import arguments
from .argument_list import ArgumentList
from .arguments import ABSENT, Parser
from .command import Command, CommandTable, build_usage_string, command, parse_arguments
from .errors import CommandError, ErrorKind, ParseError, TooManyArgumentsError

__all__ = [
    "ABSENT",
    "ArgumentList",
    "Command",
    "CommandError",
    "CommandTable",
    "ErrorKind",
    "ParseError",
    "Parser",
    "TooManyArgumentsError",
    "arguments",
    "build_usage_string",
    "command",
    "parse_arguments",
]
