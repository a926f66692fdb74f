"""Argument parsers and the combinators used to build command grammars.

A parser is a :class:`Parser` record: a callable taking the remaining message
text and returning ``(value, rest)``. On failure the value is ``None`` and
``rest`` is the untouched input, so a combinator can retry an alternative from
the same cursor. On success the matched token and the whitespace separating it
from the next token are consumed.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

ParseResult = tuple[Any, str]

# A token must be followed by whitespace or the end of the input.
_SEPARATOR = r"(?:\s+|\Z)"
_SEPARATOR_PATTERN = re.compile(_SEPARATOR)


class _Absent:
    """Value yielded by :func:`optional` when its parser does not match."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class Parser:
    """A parse function paired with the name shown in usage strings."""

    name: str
    func: Callable[[str], ParseResult]

    def __call__(self, text: str) -> ParseResult:
        return self.func(text)

    def __str__(self) -> str:
        return self.name


def parser(name: str) -> Callable[[Callable[[str], ParseResult]], Parser]:
    """Decorator turning a parse function into a named :class:`Parser`."""

    def decorator(func: Callable[[str], ParseResult]) -> Parser:
        return Parser(name, func)

    return decorator


def _token(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(f"(?:{pattern}){_SEPARATOR}", flags)


def _rest_after(text: str, end: int) -> str | None:
    """Return the text after ``end`` if a separator follows it there."""
    match = _SEPARATOR_PATTERN.match(text, end)
    if match is None:
        return None
    return text[match.end():]


# Primitive parsers

_QUOTED_STRING = _token(r'"((?:\\.|[^"\\])*)"')
_BARE_STRING = _token(r"(\S+)")


@parser("String")
def string(text: str) -> ParseResult:
    """A double-quoted span (``\\"`` escapes allowed) or a run of non-whitespace."""
    match = _QUOTED_STRING.match(text)
    if match:
        return match.group(1).replace('\\"', '"'), text[match.end():]

    match = _BARE_STRING.match(text)
    if match:
        return match.group(1), text[match.end():]

    return None, text


_BASED_NUMBER = _token(r"([A-Za-z0-9]+)_(\d+)")
_DECIMAL_NUMBER = _token(r"([-+]?\d*\.?\d+(?:[Ee][-+]?\d+)?)")
_INTEGER = re.compile(r"[-+]?\d+")


@parser("Number")
def number(text: str) -> ParseResult:
    """Parse a number in any of the following formats.

    * ``-123`` an integer, with optional sign
    * ``1.23`` a decimal, with optional sign
    * ``.23`` a decimal without the leading zero
    * ``1.2e-3`` scientific notation
    * ``1101_2`` digits and the base (2 to 36) to interpret them in
    """
    match = _BASED_NUMBER.match(text)
    if match:
        digits, base = match.group(1), int(match.group(2))
        if not 2 <= base <= 36:
            return None, text
        try:
            return int(digits, base), text[match.end():]
        except ValueError:
            return None, text

    match = _DECIMAL_NUMBER.match(text)
    if match:
        token = match.group(1)
        try:
            value = int(token) if _INTEGER.fullmatch(token) else float(token)
        except ValueError:
            # int() refuses digit strings past sys.get_int_max_str_digits()
            return None, text
        return value, text[match.end():]

    return None, text


_BOOLEAN = _token(r"(true|t|false|f)", re.IGNORECASE)


@parser("Boolean")
def boolean(text: str) -> ParseResult:
    match = _BOOLEAN.match(text)
    if match is None:
        return None, text
    return match.group(1).lower() in ("true", "t"), text[match.end():]


_SNOWFLAKE = _token(r"(\d+)")


@parser("ID")
def snowflake(text: str) -> ParseResult:
    """A run of digits, kept as a string so large ids survive intact."""
    match = _SNOWFLAKE.match(text)
    if match is None:
        return None, text
    return match.group(1), text[match.end():]


def _mention(name: str, pattern: str) -> Parser:
    compiled = _token(pattern)

    def parse(text: str) -> ParseResult:
        value, rest = snowflake(text)
        if value is not None:
            return value, rest

        match = compiled.match(text)
        if match is None:
            return None, text
        return match.group(1), text[match.end():]

    return Parser(name, parse)


user = _mention("User", r"<@!?(\d+)>")
role = _mention("Role", r"<@&?(\d+)>")
channel = _mention("Channel", r"<#(\d+)>")


# Keycaps and single regional indicators are split apart by the generic ranges.
_KEYCAPS = tuple(f"{key}\ufe0f\u20e3" for key in "0123456789#*") + tuple(
    f"{key}\u20e3" for key in "0123456789#*"
)
_REGIONAL_INDICATORS = tuple(chr(codepoint) for codepoint in range(0x1F1E6, 0x1F200))
SPECIAL_EMOJI = _KEYCAPS + _REGIONAL_INDICATORS

_CUSTOM_EMOJI = _token(r"(<a?:\w+:\d+>)")
_PICTOGRAPH = (
    r"[\u00a9\u00ae\u203c\u2049\u2122\u2139\u2194-\u2199\u21a9\u21aa\u231a-\u23ff"
    r"\u24c2\u25aa-\u27bf\u2934\u2935\u2b05-\u2b55\u3030\u303d\u3297\u3299"
    r"\U0001F000-\U0001FAFF]"
)
_EMOJI_MODIFIERS = r"[\ufe0f\U0001F3FB-\U0001F3FF\U000E0020-\U000E007F]*"
_UNICODE_EMOJI = _token(
    rf"((?:[\U0001F1E6-\U0001F1FF]{{2}})"
    rf"|(?:{_PICTOGRAPH}{_EMOJI_MODIFIERS}(?:\u200d{_PICTOGRAPH}{_EMOJI_MODIFIERS})*))"
)


@parser("Emoji")
def emoji(text: str) -> ParseResult:
    for glyph in SPECIAL_EMOJI:
        if text.startswith(glyph):
            rest = _rest_after(text, len(glyph))
            if rest is not None:
                return glyph, rest

    match = _CUSTOM_EMOJI.match(text)
    if match:
        return match.group(1), text[match.end():]

    match = _UNICODE_EMOJI.match(text)
    if match:
        return match.group(1), text[match.end():]

    return None, text


# Combinators


def optional(inner: Parser) -> Parser:
    """Always succeed, yielding ``ABSENT`` without consuming input on a miss."""

    def parse(text: str) -> ParseResult:
        value, rest = inner(text)
        if value is None:
            return ABSENT, text
        return value, rest

    return Parser(f"[{inner.name}]", parse)


def choice(*options: Parser) -> Parser:
    """Return the result of the first option that matches."""

    def parse(text: str) -> ParseResult:
        for option in options:
            value, rest = option(text)
            if value is not None:
                return value, rest
        return None, text

    return Parser("|".join(option.name for option in options), parse)


def sequence(*parts: Parser) -> Parser:
    """Match every part in order, yielding the list of their values."""

    def parse(text: str) -> ParseResult:
        values = []
        rest = text
        for part in parts:
            value, rest = part(rest)
            if value is None:
                return None, text
            values.append(value)
        return values, rest

    return Parser(" ".join(part.name for part in parts), parse)


def ident(literal: str) -> Parser:
    """Match an exact, case-sensitive keyword token."""
    if not literal or any(char.isspace() for char in literal):
        raise ValueError(f"Keyword must be a single non-empty token: {literal!r}")

    pattern = _token(re.escape(literal))

    def parse(text: str) -> ParseResult:
        match = pattern.match(text)
        if match is None:
            return None, text
        return literal, text[match.end():]

    return Parser(literal, parse)


def some(inner: Parser) -> Parser:
    """Match ``inner`` one or more times, yielding the list of values."""

    def parse(text: str) -> ParseResult:
        values = []
        rest = text
        while rest:
            value, remainder = inner(rest)
            if value is None or remainder == rest:
                break
            values.append(value)
            rest = remainder

        if not values:
            return None, text
        return values, rest

    return Parser(f"{inner.name}...", parse)


def unless(inner: Parser, excluded: Parser) -> Parser:
    """Match ``inner`` only where ``excluded`` does not match."""

    def parse(text: str) -> ParseResult:
        value, _ = excluded(text)
        if value is not None:
            return None, text
        return inner(text)

    return Parser(inner.name, parse)
