"""Error values produced while parsing and dispatching commands.

These are returned, not raised, so the caller can render every failure the
same way.
"""

from dataclasses import dataclass
from enum import Enum

END_OF_INPUT = "END"


def next_token(text: str) -> str:
    """The next whitespace-delimited token of ``text``, or ``END``."""
    tokens = text.split(maxsplit=1)
    return tokens[0] if tokens else END_OF_INPUT


@dataclass(frozen=True, slots=True)
class ParseError:
    argument: str | int
    expected: str
    found: str

    @property
    def message(self) -> str:
        return f"Expected `{self.argument}`:`{self.expected}`, found '{self.found}'"


@dataclass(frozen=True, slots=True)
class TooManyArgumentsError:
    found: str

    @property
    def message(self) -> str:
        return f"Too many arguments, found '{self.found}'"


class ErrorKind(Enum):
    ARGUMENT = "argument"
    TOO_MANY_ARGUMENTS = "too_many_arguments"
    USAGE = "usage"
    EXECUTION = "execution"


@dataclass(frozen=True, slots=True)
class CommandError:
    """A user-facing failure of one command invocation."""

    kind: ErrorKind
    command_name: str
    message: str
    usage: str
    description: str = ""
