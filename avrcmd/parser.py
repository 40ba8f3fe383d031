"""Recursive-descent evaluator for the integer expressions used by commands.

Grammar::

    E -> T { (+|-) T }
    T -> F { (*|/) F }
    F -> NAME | INTEGER | ( E ) | -F

Arithmetic is done on signed 16-bit integers and wraps around on overflow.
Division truncates toward zero.
"""

from __future__ import annotations

from typing import Callable, Optional

MAX_NAME_LENGTH = 8

Lookup = Callable[[str], Optional[int]]

_TOKEN_STARTS = "+-*/()"
_FACTOR_FOLLOWERS = " )+-*/"


class CommandError(Exception):
    """A command could not be carried out; the message is what gets reported."""


class ExpressionError(CommandError):
    """An arithmetic expression could not be evaluated."""


def _wrap16(value: int) -> int:
    return (value + 0x8000) % 0x10000 - 0x8000


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_alnum(char: str) -> bool:
    return _is_digit(char) or _is_alpha(char)


def _divide(left: int, right: int) -> int:
    if right == 0:
        raise ExpressionError("division by zero")
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return _wrap16(quotient)


class _Parser:
    def __init__(self, text: str, lookup: Optional[Lookup]) -> None:
        self.text = text
        self.lookup = lookup

    def next_token(self, pos: int) -> Optional[int]:
        """Skip spaces; return the index of the next token, or None at the end."""
        text = self.text
        while pos < len(text) and text[pos] == " ":
            pos += 1
        if pos >= len(text):
            return None
        char = text[pos]
        if char in _TOKEN_STARTS or _is_alnum(char):
            return pos
        raise ExpressionError(f"invalid character {char!r}")

    def expression(self, pos: int) -> tuple[int, int]:
        value, pos = self.term(pos)
        while True:
            token = self.next_token(pos)
            if token is None:
                return value, len(self.text)
            char = self.text[token]
            if char == "+":
                right, pos = self.term(token + 1)
                value = _wrap16(value + right)
            elif char == "-":
                right, pos = self.term(token + 1)
                value = _wrap16(value - right)
            elif char == ")":
                return value, token
            else:
                raise ExpressionError(f"unexpected token {char!r}")

    def term(self, pos: int) -> tuple[int, int]:
        value, pos = self.factor(pos)
        while True:
            token = self.next_token(pos)
            if token is None:
                return value, len(self.text)
            char = self.text[token]
            if char == "*":
                right, pos = self.factor(token + 1)
                value = _wrap16(value * right)
            elif char == "/":
                right, pos = self.factor(token + 1)
                value = _divide(value, right)
            elif char in ")+-":
                return value, token
            else:
                raise ExpressionError(f"unexpected token {char!r}")

    def factor(self, pos: int) -> tuple[int, int]:
        text = self.text
        token = self.next_token(pos)
        if token is None:
            raise ExpressionError("unexpected end of expression")
        char = text[token]

        if char == "(":
            value, pos = self.expression(token + 1)
            close = self.next_token(pos)
            if close is None or text[close] != ")":
                raise ExpressionError("missing closing parenthesis")
            return value, close + 1

        if _is_digit(char):
            value = 0
            end = token
            while end < len(text) and _is_digit(text[end]):
                value = _wrap16(value * 10 + int(text[end]))
                end += 1
            self._check_follower(end)
            return value, end

        if _is_alpha(char):
            end = token
            while end < len(text) and _is_alnum(text[end]):
                end += 1
            name = text[token:end]
            if len(name) > MAX_NAME_LENGTH:
                raise ExpressionError(f"variable name {name!r} is too long")
            self._check_follower(end)
            value = self.lookup(name) if self.lookup is not None else None
            if value is None:
                raise ExpressionError(f"unknown variable {name!r}")
            return value, end

        if char == "-":
            value, pos = self.factor(token + 1)
            return _wrap16(-value), pos

        raise ExpressionError(f"unexpected token {char!r}")

    def _check_follower(self, pos: int) -> None:
        if pos < len(self.text) and self.text[pos] not in _FACTOR_FOLLOWERS:
            raise ExpressionError(f"invalid character {self.text[pos]!r} in factor")


def parse_expression(
    text: str, lookup: Optional[Lookup] = None, start: int = 0
) -> tuple[int, int]:
    """Evaluate the expression in ``text`` beginning at ``start``.

    ``lookup`` maps a variable name to its value, or to None if it is unknown.
    Returns the value and the index where parsing stopped: the end of the
    text, or the position of an unmatched closing parenthesis.
    """
    return _Parser(text, lookup).expression(start)


def evaluate(text: str, lookup: Optional[Lookup] = None) -> int:
    """Return the value of the expression at the start of ``text``.

    Anything from an unmatched closing parenthesis onward is ignored.
    """
    value, _ = parse_expression(text, lookup, 0)
    return value