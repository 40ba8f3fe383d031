"""Simulated I/O ports and the MODE, WRITE and READ commands."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Union

from avrcmd.parser import CommandError, ExpressionError, evaluate
from avrcmd.variables import VariableTable

PORTS = ("B", "C", "D")
PIN_COUNT = 8

_EXPRESSION_LIMIT = 31
_MODE_LIMIT = 15
_NAME_LIMIT = 8

_BAD_PORT = "EXPECTED STRING B, C OR D FOR PORT"
_BAD_SEPARATOR = "UNEXPECTED CHARACTER, EXPECTED SEPARATOR"
_EMPTY_PARAMETER = "EMPTY PARAMETER SPECIFICATION"
_TRAILING = "UNEXPECTED CHARACTERS AT END OF EXPRESSION"
_PIN_TOO_LONG = "EXPRESSION FOR PIN IS TOO LONG"
_PIN_EXPRESSION = "ERROR EVALUATING PIN EXPRESSION"
_PIN_RANGE = "PIN VALUE MUST BE BETWEEN 0 AND 7 INCLUSIVE"
_TOO_MANY = "TOO MANY PARAMETERS"


class PinMode(Enum):
    """How a pin is configured."""

    INPUT = "INPUT"
    OUTPUT = "OUTPUT"
    INPUT_PULLUP = "INPUT_PULLUP"


class GpioPorts:
    """Data-direction and output registers of ports B, C and D.

    ``inputs`` holds the level applied from outside to a pin, keyed by
    ``(port, pin)``. An input pin with no applied level reads back its
    pull-up setting.
    """

    def __init__(self) -> None:
        self.ddr: dict[str, int] = dict.fromkeys(PORTS, 0)
        self.latch: dict[str, int] = dict.fromkeys(PORTS, 0)
        self.inputs: dict[tuple[str, int], int] = {}

    @staticmethod
    def _mask(port: str, pin: int) -> int:
        if port not in PORTS:
            raise ValueError(f"unknown port {port!r}")
        if not 0 <= pin < PIN_COUNT:
            raise ValueError(f"pin {pin} is out of range")
        return 1 << pin

    def set_mode(self, port: str, pin: int, mode: Union[PinMode, str]) -> None:
        """Configure ``pin`` of ``port`` as input, output or input with pull-up."""
        mask = self._mask(port, pin)
        mode = PinMode(mode)
        if mode is PinMode.OUTPUT:
            self.ddr[port] |= mask
        elif mode is PinMode.INPUT:
            self.ddr[port] &= ~mask
            self.latch[port] &= ~mask
        else:
            self.ddr[port] &= ~mask
            self.latch[port] |= mask

    def write(self, port: str, pin: int, value: int) -> None:
        """Drive the output latch of ``pin`` low (0) or high (anything else)."""
        mask = self._mask(port, pin)
        if value:
            self.latch[port] |= mask
        else:
            self.latch[port] &= ~mask

    def read(self, port: str, pin: int) -> int:
        """Return the level (0 or 1) seen on ``pin``."""
        mask = self._mask(port, pin)
        if not self.ddr[port] & mask:
            level = self.inputs.get((port, pin))
            if level is not None:
                return 1 if level else 0
        return 1 if self.latch[port] & mask else 0


class _Step(Enum):
    START = auto()
    VARIABLE = auto()
    PORT = auto()
    PIN = auto()
    SETTING = auto()
    SEPARATOR = auto()
    NEXT_ITEM = auto()
    DONE = auto()


def _evaluate(expression: str, variables: VariableTable, message: str) -> int:
    try:
        return evaluate(expression, variables.get)
    except ExpressionError as exc:
        raise CommandError(message) from exc


def _check_pin(pin: int) -> int:
    if not 0 <= pin < PIN_COUNT:
        raise CommandError(_PIN_RANGE)
    return pin


def _take_port(char: str) -> str:
    if char not in PORTS:
        raise CommandError(_BAD_PORT)
    return char


def _split_port_pin_setting(
    line: Optional[str], setting_limit: int, setting_too_long: str, stop_at_space: bool
) -> tuple[str, str, str]:
    """Split ``PORT, PIN, SETTING`` into its three parts, checking the layout."""
    port = ""
    pin = ""
    setting = ""
    state = _Step.PORT
    following = _Step.PIN

    for char in line or "":
        if state is _Step.PORT:
            if char != " ":
                port = _take_port(char)
                state = _Step.SEPARATOR
                following = _Step.PIN
        elif state is _Step.SEPARATOR:
            if char == ",":
                state = _Step.NEXT_ITEM
            elif char != " ":
                raise CommandError(_BAD_SEPARATOR)
        elif state is _Step.NEXT_ITEM:
            if char == " ":
                continue
            if char == ",":
                raise CommandError(_EMPTY_PARAMETER)
            if following is _Step.PIN:
                pin = char
                state = _Step.PIN
                following = _Step.SETTING
            else:
                setting = char
                state = _Step.SETTING
                following = _Step.DONE
        elif state is _Step.PIN:
            if char == ",":
                state = _Step.NEXT_ITEM
                following = _Step.SETTING
            else:
                pin += char
                if len(pin) == _EXPRESSION_LIMIT:
                    raise CommandError(_PIN_TOO_LONG)
        elif state is _Step.SETTING:
            if stop_at_space and char == " ":
                state = _Step.DONE
            elif not stop_at_space and char == ",":
                raise CommandError(_TOO_MANY)
            else:
                setting += char
                if len(setting) == setting_limit:
                    raise CommandError(setting_too_long)
        elif char != " ":
            raise CommandError(_TRAILING)

    return port, pin, setting


def handle_mode(line: Optional[str], ports: GpioPorts, variables: VariableTable) -> None:
    """Carry out ``MODE PORT, PIN, INPUT|OUTPUT|INPUT_PULLUP``."""
    port, pin_text, mode_text = _split_port_pin_setting(
        line, _MODE_LIMIT, "INVALID PIN MODE", stop_at_space=True
    )
    if not mode_text:
        raise CommandError("MISSING MODE PARAMETER")
    pin = _check_pin(_evaluate(pin_text, variables, _PIN_EXPRESSION))
    try:
        mode = PinMode(mode_text)
    except ValueError:
        raise CommandError("MODE MUST BE INPUT, OUTPUT OR INPUT_PULLUP") from None
    ports.set_mode(port, pin, mode)


def handle_write(line: Optional[str], ports: GpioPorts, variables: VariableTable) -> None:
    """Carry out ``WRITE PORT, PIN, VALUE`` where VALUE evaluates to 0 or 1."""
    port, pin_text, value_text = _split_port_pin_setting(
        line, _EXPRESSION_LIMIT, "EXPRESSION FOR VALUE IS TOO LONG", stop_at_space=False
    )
    if not value_text:
        raise CommandError("MISSING VALUE PARAMETER")
    if not pin_text:
        raise CommandError("MISSING PIN PARAMETER")
    pin = _evaluate(pin_text, variables, _PIN_EXPRESSION)
    value = _evaluate(value_text, variables, "ERROR EVALUATING VALUE EXPRESSION")
    _check_pin(pin)
    if value not in (0, 1):
        raise CommandError("VALUE MUST EVALUATE TO 0 OR 1")
    ports.write(port, pin, value)


def handle_read(line: Optional[str], ports: GpioPorts, variables: VariableTable) -> None:
    """Carry out ``READ VARIABLE, PORT, PIN``, storing the pin level in the variable."""
    name = ""
    port = ""
    pin_text = ""
    state = _Step.START
    following = _Step.PORT

    for char in line or "":
        if state is _Step.START:
            if char != " ":
                name = char
                state = _Step.VARIABLE
        elif state is _Step.VARIABLE:
            if char == ",":
                state = _Step.PORT
                following = _Step.PIN
            elif char == " ":
                state = _Step.SEPARATOR
                following = _Step.PORT
            else:
                name += char
                if len(name) == _NAME_LIMIT:
                    raise CommandError("VARIABLE NAME IS TOO LONG")
        elif state is _Step.PORT:
            if char != " ":
                port = _take_port(char)
                state = _Step.SEPARATOR
                following = _Step.PIN
        elif state is _Step.SEPARATOR:
            if char == ",":
                state = _Step.NEXT_ITEM
            elif char != " ":
                raise CommandError(_BAD_SEPARATOR)
        elif state is _Step.NEXT_ITEM:
            if char == " ":
                continue
            if char == ",":
                raise CommandError(_EMPTY_PARAMETER)
            if following is _Step.PIN:
                pin_text = char
                state = _Step.PIN
                following = _Step.DONE
            else:
                port = _take_port(char)
                state = _Step.SEPARATOR
                following = _Step.PIN
        elif state is _Step.PIN:
            if char == ",":
                raise CommandError(_TOO_MANY)
            pin_text += char
            if len(pin_text) == _EXPRESSION_LIMIT:
                raise CommandError(_PIN_TOO_LONG)

    if not name:
        raise CommandError("MISSING VARIABLE PARAMETER")
    if not pin_text:
        raise CommandError("MISSING PIN OR PIN EXPRESSION")
    pin = _check_pin(_evaluate(pin_text, variables, _PIN_EXPRESSION))
    variables.set(name, ports.read(port, pin))