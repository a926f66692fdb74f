"""Ordered container of parsed argument values handed to command callbacks."""

import json
from collections.abc import Iterator, Mapping
from typing import Any

from .arguments import Parser

ArgumentName = str | int


class ArgumentList(Mapping):
    """Maps argument names (or positional indices) to their parsed values.

    The parser that produced each value is kept alongside it and can be
    retrieved with :meth:`parser`. Keys keep the order they were added in,
    which is the order the command's grammar declares them.
    """

    def __init__(self) -> None:
        self._values: dict[ArgumentName, Any] = {}
        self._parsers: dict[ArgumentName, Parser] = {}

    def add(self, name: ArgumentName, value: Any, parser: Parser) -> None:
        if name in self._values:
            raise ValueError(f"Argument {name!r} has already been parsed")

        self._values[name] = value
        self._parsers[name] = parser

    def parser(self, name: ArgumentName) -> Parser:
        return self._parsers[name]

    def __getitem__(self, name: ArgumentName) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[ArgumentName]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ArgumentList({self._values!r})"

    def __str__(self) -> str:
        return json.dumps(self._values, default=str, ensure_ascii=False)
