"""The command dispatcher and its line-oriented front end."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from avrcmd.gpio import GpioPorts, handle_mode, handle_read, handle_write
from avrcmd.parser import CommandError
from avrcmd.printing import handle_print
from avrcmd.uart import COMMAND_BUFFER_SIZE, LineReader
from avrcmd.variables import VariableTable, handle_assign

BANNER = "Command interpreter online\r\n"
EOL = "\r\n"


class Interpreter:
    """Runs commands against one set of variables and ports."""

    def __init__(
        self,
        variables: Optional[VariableTable] = None,
        ports: Optional[GpioPorts] = None,
    ) -> None:
        self.variables = variables if variables is not None else VariableTable()
        self.ports = ports if ports is not None else GpioPorts()

    def execute(self, line: str) -> str:
        """Run one command line and return the text it sends back."""
        command, _, arguments = line.partition(" ")
        args: Optional[str] = arguments if _ else None
        try:
            if command == "STATUS":
                return "OK" + EOL
            if command == "PRINT":
                return handle_print(args, self.variables)
            if command == "ASSIGN":
                handle_assign(args or "", self.variables)
            elif command == "MODE":
                handle_mode(args, self.ports, self.variables)
            elif command == "WRITE":
                handle_write(args, self.ports, self.variables)
            elif command == "READ":
                handle_read(args, self.ports, self.variables)
            else:
                raise CommandError("UNKNOWN COMMAND")
        except CommandError as exc:
            return f"ERR: {exc}{EOL}"
        return ""

    def run(self, source: TextIO, sink: TextIO) -> None:
        """Announce readiness, then run every line read from ``source``."""
        sink.write(BANNER)
        reader = LineReader(COMMAND_BUFFER_SIZE)
        for chunk in iter(source.readline, ""):
            for line in reader.feed(chunk):
                sink.write(self.execute(line))
                if hasattr(sink, "flush"):
                    sink.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run commands from a script file, or from standard input."""
    parser = argparse.ArgumentParser(prog="avrcmd", description="Run interpreter commands.")
    parser.add_argument("script", nargs="?", help="file of commands; standard input if omitted")
    options = parser.parse_args(argv)

    interpreter = Interpreter()
    if options.script is None:
        interpreter.run(sys.stdin, sys.stdout)
    else:
        with open(options.script, encoding="utf-8") as source:
            interpreter.run(source, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())