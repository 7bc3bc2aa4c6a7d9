"""Export builtin implementation.

Usage: export [name=value ...]

Set shell variables so later commands can refer to them as $name. If no
arguments are given, list all variables.
"""

from typing import TYPE_CHECKING

from ... import ansi
from ...parser import IDENTIFIER_CHARS
from ..types import EXIT_FAILURE, EXIT_SUCCESS, SwitchArgument

if TYPE_CHECKING:
    from ...terminal import OutputSink
    from ..types import Arguments, Programs, VariableStore


def _warn(terminal: "OutputSink", message: str) -> None:
    terminal.write(f"{ansi.paint(message, ansi.YELLOW)}\r\n")


class ExportBuiltin:
    name = "export"

    def run(
        self,
        terminal: "OutputSink",
        programs: "Programs",
        variables: "VariableStore",
        arguments: "Arguments",
    ) -> int:
        if not arguments:
            for key in sorted(variables):
                # Skip the last-status variable
                if key == "?":
                    continue
                terminal.write(f"{key}={variables[key]}\r\n")
            return EXIT_SUCCESS

        exit_code = EXIT_SUCCESS
        for argument in arguments:
            if isinstance(argument, SwitchArgument):
                _warn(terminal, f"Invalid argument: {argument.name}")
                exit_code = EXIT_FAILURE
                continue

            name, sep, value = argument.text.partition("=")
            if not name:
                _warn(terminal, "Variable name isn't provided.")
                exit_code = EXIT_FAILURE
            elif not sep or not value:
                _warn(terminal, "Missing variable value.")
                exit_code = EXIT_FAILURE
            elif not all(ch in IDENTIFIER_CHARS for ch in name):
                _warn(terminal, f"'{name}': not a valid identifier")
                exit_code = EXIT_FAILURE
            else:
                variables[name] = value

        return exit_code
