# avrcmd

A small, line-oriented command interpreter. It reads one command per line.
It can work out integer expressions, keep a few named variables, print text
and values, and drive three simulated 8-bit GPIO ports (B, C and D).

## Installing

```
pip install .
```

## Running

```
avrcmd
avrcmd commands.txt
```

With no argument the interpreter reads commands from standard input. With
a file name it reads commands from that file. Replies go to standard output.
When it starts it writes `Command interpreter online` followed by `\r\n`.

Carriage returns in the input are ignored. A line longer than 159
characters is thrown away whole.

## Commands

| Command | Meaning |
|---------|---------|
| `STATUS` | Replies `OK`. |
| `ASSIGN name = expr` | Sets a variable. A name starts with a letter and is at most 8 letters or digits long. At most 12 variables can exist. |
| `PRINT item, item, ...` | Writes quoted strings and expression values one after another, with nothing between them and no line ending. The output is cut off at 159 characters. |
| `MODE port, pin, mode` | Sets a pin's mode: `INPUT`, `OUTPUT` or `INPUT_PULLUP` (upper case). |
| `WRITE port, pin, value` | Sets a pin's output latch. The value must work out to 0 or 1. |
| `READ var, port, pin` | Reads a pin's level (0 or 1) into a variable, creating it if needed. |

`port` is one of `B`, `C` or `D`. `pin` and `value` may be any expression,
but a pin must work out to a number from 0 to 7.

Expressions use signed 16-bit integer arithmetic that wraps on overflow.
They support `+`, `-`, `*`, `/` (truncating toward zero), unary minus,
parentheses, decimal literals and variable names. Dividing by zero is an
error.

A failed command replies with a line of the form `ERR: <MESSAGE>\r\n`, for
example `ERR: UNKNOWN COMMAND` or `ERR: INVALID EXPRESSION`. Commands that
succeed, other than `STATUS` and `PRINT`, reply with nothing.

## Using it from Python

```python
from avrcmd.interpreter import Interpreter

interp = Interpreter()
interp.execute("ASSIGN x = 3 * (2 + 1)")
interp.execute('PRINT "x is ", x, " and half is ", x / 2')  # 'x is 9 and half is 4'
interp.execute("MODE B, 5, OUTPUT")
interp.execute("WRITE B, x - 4, 1")
interp.execute("READ level, B, 5")
interp.execute("PRINT level")                               # '1'
interp.execute("STATUS")                                    # 'OK\r\n'
interp.execute("JUMP")                                      # 'ERR: UNKNOWN COMMAND\r\n'
```

`Interpreter.run(source, sink)` writes the start-up line, then runs every
line read from the `source` text stream and writes each reply to `sink`.

The building blocks can also be used on their own:

- `avrcmd.parser.evaluate` and `avrcmd.parser.parse_expression` work out
  expressions; they raise `avrcmd.parser.ExpressionError`, a kind of
  `avrcmd.parser.CommandError`.
- `avrcmd.variables.VariableTable` holds variables; `avrcmd.variables.handle_assign`
  carries out an assignment.
- `avrcmd.printing.handle_print` returns the text of a `PRINT` command.
- `avrcmd.gpio.GpioPorts` and `avrcmd.gpio.PinMode` model the ports;
  `handle_mode`, `handle_write` and `handle_read` carry out the pin commands.
  To simulate a level applied to an input pin from outside, set
  `ports.inputs[("B", 3)] = 1`. An input pin with no applied level reads
  back its pull-up setting.
- `avrcmd.uart.RingBuffer` is a bounded character queue and
  `avrcmd.uart.LineReader` assembles characters into lines.

## What it does not do

The ports exist only in memory: nothing here talks to real hardware or to a
serial device. The interpreter works on text streams such as standard input
and standard output.

## Running the tests

```
pip install .[test]
pytest
```