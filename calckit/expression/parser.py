"""
Recursive-descent parser for calculator formulas.

Grammar (``^`` binds tighter than unary minus, so ``-2^2 == -4``)::

    expr    := term (("+" | "-") term)*
    term    := unary (("*" | "/") unary)*
    unary   := ("+" | "-") unary | power
    power   := primary ("^" unary)?
    primary := NUMBER | NAME | NAME "(" expr ("," expr)* ")" | "(" expr ")"

The result is a tree of the node classes below. Function calls are checked
against ``FUNCTIONS`` here, so an expression that parses can only ever call
whitelisted math functions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..exceptions import ExpressionSyntaxError
from .functions import FUNCTIONS
from .tokenizer import (
    COMMA,
    END,
    LPAREN,
    NAME,
    NUMBER,
    OPERATOR,
    RPAREN,
    Token,
    tokenize,
)

MAX_NESTING_DEPTH = 64


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    function: str
    args: Tuple["Node", ...]


Node = Union[Number, Name, UnaryOp, BinaryOp, Call]


class Parser:
    def __init__(self, text: str) -> None:
        self._tokens: List[Token] = tokenize(text)
        self._index = 0
        self._depth = 0

    def parse(self) -> Node:
        if self._peek().kind == END:
            raise ExpressionSyntaxError("Empty expression", 0)
        node = self._expression()
        token = self._peek()
        if token.kind != END:
            raise ExpressionSyntaxError(f"Unexpected {token.text!r}", token.position)
        return node

    # -- token helpers -----------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _at_operator(self, *ops: str) -> bool:
        token = self._peek()
        return token.kind == OPERATOR and token.text in ops

    def _expect(self, kind: str, description: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            found = token.text or "end of expression"
            raise ExpressionSyntaxError(f"Expected {description}, found {found!r}", token.position)
        return self._advance()

    # -- grammar rules -----------------------------------------------------

    def _expression(self) -> Node:
        node = self._term()
        while self._at_operator("+", "-"):
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._at_operator("*", "/"):
            op = self._advance().text
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise ExpressionSyntaxError("Expression is nested too deeply", self._peek().position)
        try:
            if self._at_operator("+", "-"):
                op = self._advance().text
                return UnaryOp(op, self._unary())
            return self._power()
        finally:
            self._depth -= 1

    def _power(self) -> Node:
        base = self._primary()
        if self._at_operator("^"):
            self._advance()
            return BinaryOp("^", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self._peek()

        if token.kind == NUMBER:
            self._advance()
            value = float(token.text)
            if not math.isfinite(value):
                raise ExpressionSyntaxError(f"Number {token.text!r} is out of range", token.position)
            return Number(value)

        if token.kind == NAME:
            self._advance()
            if self._peek().kind == LPAREN:
                return self._call(token)
            if token.text in FUNCTIONS:
                raise ExpressionSyntaxError(
                    f"Function '{token.text}' must be called with parentheses", token.position
                )
            return Name(token.text)

        if token.kind == LPAREN:
            self._advance()
            node = self._expression()
            self._expect(RPAREN, "')'")
            return node

        found = token.text or "end of expression"
        raise ExpressionSyntaxError(f"Expected a number, name or '(', found {found!r}", token.position)

    def _call(self, name_token: Token) -> Call:
        function = FUNCTIONS.get(name_token.text)
        if function is None:
            raise ExpressionSyntaxError(f"Unknown function '{name_token.text}'", name_token.position)

        self._expect(LPAREN, "'('")
        args = [self._expression()]
        while self._peek().kind == COMMA:
            self._advance()
            args.append(self._expression())
        self._expect(RPAREN, "')'")

        if len(args) != function.arity:
            raise ExpressionSyntaxError(
                f"Function '{name_token.text}' takes {function.arity} argument(s), got {len(args)}",
                name_token.position,
            )
        return Call(name_token.text, tuple(args))


def parse(text: str) -> Node:
    return Parser(text).parse()
