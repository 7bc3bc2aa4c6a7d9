"""Miscellaneous builtins: clear, true, false.

These are simple builtins that don't need their own files.
"""

from typing import TYPE_CHECKING

from ..types import EXIT_FAILURE, EXIT_SUCCESS

if TYPE_CHECKING:
    from ...terminal import OutputSink
    from ..types import Arguments, Programs, VariableStore


class ClearBuiltin:
    """The clear builtin - wipe the terminal."""

    name = "clear"

    def run(
        self,
        terminal: "OutputSink",
        programs: "Programs",
        variables: "VariableStore",
        arguments: "Arguments",
    ) -> int:
        terminal.clear()
        return EXIT_SUCCESS


class TrueBuiltin:
    """The true builtin - always succeeds."""

    name = "true"

    def run(
        self,
        terminal: "OutputSink",
        programs: "Programs",
        variables: "VariableStore",
        arguments: "Arguments",
    ) -> int:
        return EXIT_SUCCESS


class FalseBuiltin:
    """The false builtin - always fails."""

    name = "false"

    def run(
        self,
        terminal: "OutputSink",
        programs: "Programs",
        variables: "VariableStore",
        arguments: "Arguments",
    ) -> int:
        return EXIT_FAILURE
