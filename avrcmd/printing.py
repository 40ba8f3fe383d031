"""The PRINT command: quoted strings and expression values joined into one line."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from avrcmd.parser import CommandError, ExpressionError, evaluate
from avrcmd.variables import VariableTable

COMMAND_BUFFER_SIZE = 160
MAX_OUTPUT_LENGTH = COMMAND_BUFFER_SIZE - 1
MAX_EXPRESSION_LENGTH = 31


class _State(Enum):
    FIRST_ITEM = auto()
    NEXT_ITEM = auto()
    STRING = auto()
    EXPRESSION = auto()
    SEPARATOR = auto()


def _resolve(expression: str, variables: VariableTable, room: int) -> str:
    """Evaluate ``expression`` and return its decimal text, cut to ``room`` characters."""
    try:
        value = evaluate(expression, variables.get)
    except ExpressionError as exc:
        raise CommandError("INVALID EXPRESSION") from exc
    return str(value)[:room]


def handle_print(values: Optional[str], variables: VariableTable) -> str:
    """Return the text that ``PRINT values`` produces.

    ``values`` is a comma-separated list of double-quoted strings and
    expressions. The output is limited to 159 characters; input beyond that
    point is not read.
    """
    output = ""
    expression = ""
    state = _State.FIRST_ITEM

    for char in values or "":
        if len(output) >= MAX_OUTPUT_LENGTH:
            break

        if state is _State.STRING:
            if char == '"':
                state = _State.SEPARATOR
            else:
                output += char

        elif state is _State.EXPRESSION:
            if char == ",":
                output += _resolve(expression, variables, MAX_OUTPUT_LENGTH - len(output))
                expression = ""
                state = _State.NEXT_ITEM
            elif len(expression) < MAX_EXPRESSION_LENGTH:
                expression += char
            else:
                raise CommandError("EXPRESSION TOO LONG")

        elif state is _State.SEPARATOR:
            if char == ",":
                state = _State.NEXT_ITEM
            elif char != " ":
                raise CommandError("UNEXPECTED CHARACTER, EXPECTED SEPARATOR")

        elif char == '"':
            state = _State.STRING
        elif char not in " ,":
            expression = char
            state = _State.EXPRESSION
        elif state is _State.FIRST_ITEM:
            raise CommandError("EXPECTED VALUE OR STRING")
        elif char == ",":
            raise CommandError("EXPECTED VALUE OR STRING, INAPPROPRIATE SEPARATOR")

    if state is _State.EXPRESSION:
        digits = _resolve(expression, variables, MAX_OUTPUT_LENGTH - len(output))
        if not digits:
            # No room was left for the value: nothing is printed.
            return ""
        output += digits
    elif state is _State.STRING:
        raise CommandError("UNTERMINATED STRING")
    elif state is _State.NEXT_ITEM:
        raise CommandError("TRAILING SEPARATOR")

    return output