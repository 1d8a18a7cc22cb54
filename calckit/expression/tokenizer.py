from __future__ import annotations

import re
from typing import List, NamedTuple

from ..exceptions import ExpressionSyntaxError

NUMBER = "number"
NAME = "name"
OPERATOR = "operator"
LPAREN = "lparen"
RPAREN = "rparen"
COMMA = "comma"
END = "end"

TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<number>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)
    |(?P<name>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<operator>[-+*/^])
    |(?P<lparen>\()
    |(?P<rparen>\))
    |(?P<comma>,)
    """,
    re.VERBOSE,
)


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(text: str) -> List[Token]:
    """
    Split ``text`` into tokens, ending with an ``END`` token.

    Any character outside the arithmetic grammar (quotes, dots after a name,
    brackets, ``=``, ``;`` ...) is a syntax error.
    """
    tokens: List[Token] = []
    position = 0
    while position < len(text):
        match = TOKEN_PATTERN.match(text, position)
        if match is None:
            raise ExpressionSyntaxError(f"Unexpected character {text[position]!r}", position)
        kind = match.lastgroup
        if kind != "space":
            tokens.append(Token(kind, match.group(), position))
        position = match.end()
    tokens.append(Token(END, "", len(text)))
    return tokens
