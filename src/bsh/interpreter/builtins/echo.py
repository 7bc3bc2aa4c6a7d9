"""Echo builtin implementation.

Usage: echo [arg ...]

Writes the arguments separated by single spaces and ends the line.
Switches are written back in their `-name` / `--name=value` form.
"""

from typing import TYPE_CHECKING

from ..types import EXIT_SUCCESS

if TYPE_CHECKING:
    from ...terminal import OutputSink
    from ..types import Arguments, Programs, VariableStore


class EchoBuiltin:
    name = "echo"

    def run(
        self,
        terminal: "OutputSink",
        programs: "Programs",
        variables: "VariableStore",
        arguments: "Arguments",
    ) -> int:
        terminal.write(" ".join(argument.to_text() for argument in arguments))
        terminal.write("\r\n")
        return EXIT_SUCCESS
