"""A small fixed-capacity table of named integer variables and the ASSIGN command."""

from __future__ import annotations

from typing import Iterator, Optional

from avrcmd.parser import MAX_NAME_LENGTH, CommandError, ExpressionError, parse_expression

MAX_VARIABLES = 12


def _is_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


class VariableTable:
    """Holds at most ``capacity`` variables, each with a name of up to 8 characters."""

    def __init__(self, capacity: int = MAX_VARIABLES) -> None:
        self.capacity = capacity
        self._values: dict[str, int] = {}

    def get(self, name: str) -> Optional[int]:
        """Return the value of ``name``, or None if it is not set."""
        return self._values.get(name)

    def set(self, name: str, value: int) -> None:
        """Set ``name`` to ``value``, creating the variable if there is room."""
        if len(name) > MAX_NAME_LENGTH:
            raise ValueError(f"variable name {name!r} is longer than {MAX_NAME_LENGTH}")
        if name not in self._values and len(self._values) >= self.capacity:
            raise CommandError("FAILED TO SET VARIABLE")
        self._values[name] = value

    def reset(self) -> None:
        """Forget every variable."""
        self._values.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)


def _read_target(line: str) -> tuple[str, int]:
    """Read ``NAME =`` from the start of ``line``; return the name and the index after '='."""
    stripped = line.lstrip(" ")
    start = len(line) - len(stripped)
    if not stripped:
        raise CommandError("INVALID ASSIGNMENT")
    first = stripped[0]
    if _is_digit(first):
        raise CommandError("INVALID VARIABLE NAME")
    if not _is_alpha(first):
        raise CommandError("UNKNOWN ASSIGNMENT TOKEN")

    end = start
    while end < len(line) and line[end] not in " =":
        char = line[end]
        if not (_is_alpha(char) or _is_digit(char)):
            raise CommandError("INVALID CHARACTER IN VARIABLE NAME")
        if end - start >= MAX_NAME_LENGTH:
            raise CommandError("VARIABLE NAME TOO LONG")
        end += 1
    name = line[start:end]

    rest = line[end:].lstrip(" ")
    if not rest:
        raise CommandError("INVALID ASSIGNMENT")
    if rest[0] != "=":
        raise CommandError("EXPECTED EQUAL SIGN")
    expression_start = len(line) - len(rest) + 1
    if expression_start >= len(line):
        raise CommandError("INVALID ASSIGNMENT")
    return name, expression_start


def handle_assign(line: str, variables: VariableTable) -> None:
    """Carry out ``NAME = EXPRESSION``, storing the result in ``variables``."""
    name, start = _read_target(line)
    try:
        value, end = parse_expression(line, variables.get, start)
    except ExpressionError as exc:
        raise CommandError("INVALID EXPRESSION") from exc
    if line[end:].strip(" "):
        raise CommandError("UNEXPECTED TOKEN AFTER EXPRESSION")
    variables.set(name, value)