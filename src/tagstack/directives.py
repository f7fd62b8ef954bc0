"""
Delimiter directive matching.

A directive is a call-like keyword in the template text, e.g.
`changecontenttags('<%', '%>')` or `changecontenttags("[[", "]]", true)`.
Only the first directive in a source is consumed; anything that does not
match the grammar is left in the text as ordinary content.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .types import InvalidTagsError

PLAIN_DIRECTIVE = "changecontenttags"
ESCAPED_DIRECTIVE = "changeescapedtags"

_QUOTED = r"""(?:'[^']*'|"[^"]*")"""
_FLAG = rf"(?:{_QUOTED}|\w+)"

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


@dataclass(frozen=True, slots=True)
class DirectiveMatch:
    """The first directive found in a source, and the source without it."""

    text: str
    source: str
    arguments: tuple[str, ...]


def create_matcher(keyword: str) -> re.Pattern[str]:
    if not keyword:
        raise ValueError("directive keyword must not be empty")
    return re.compile(
        rf"(?<!\w){re.escape(keyword)}"
        rf"(?P<args>\(\s*{_QUOTED}\s*,\s*{_QUOTED}(?:\s*,\s*{_FLAG})?\s*\))"
    )


def match_directive(pattern: re.Pattern[str], source: str) -> DirectiveMatch | None:
    match = pattern.search(source)
    if match is None:
        return None

    args = match.group("args")[1:-1]
    arguments = tuple(_strip_argument(arg) for arg in _split_unquoted(args, ","))
    stripped = source[: match.start()] + source[match.end() :]
    return DirectiveMatch(text=match.group(0), source=stripped, arguments=arguments)


def parse_flag(token: str) -> bool:
    """
    Interpret the optional third directive argument.

    Accepts the usual boolean spellings, case-insensitively.
    """
    value = token.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidTagsError(f"expected a boolean escaped flag, got {token!r}")


def _strip_argument(arg: str) -> str:
    arg = arg.strip()
    if len(arg) >= 2 and arg[0] == arg[-1] and arg[0] in ("'", '"'):
        arg = arg[1:-1]
    return arg.strip()


def _split_unquoted(s: str, sep: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    quote_char = ""

    for ch in s:
        if ch in ("'", '"'):
            if not in_quotes:
                in_quotes = True
                quote_char = ch
            elif quote_char == ch:
                in_quotes = False
                quote_char = ""
        if ch == sep and not in_quotes:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts
