"""bsh - an embeddable interactive shell with live syntax highlighting."""

from .interpreter import (
    Argument,
    Completion,
    CompletionError,
    ProgramError,
    ProgramTimeoutError,
    SwitchArgument,
    TextArgument,
    VariableStore,
)
from .parser import Command, ParseException, parse, parse_strict
from .shell import Shell
from .stdio import Stdio
from .terminal import MemoryTerminal, OutputSink
from .types import ShellOptions, ShellState

__version__ = "0.1.0"

__all__ = [
    "Argument",
    "Command",
    "Completion",
    "CompletionError",
    "MemoryTerminal",
    "OutputSink",
    "ParseException",
    "ProgramError",
    "ProgramTimeoutError",
    "Shell",
    "ShellOptions",
    "ShellState",
    "Stdio",
    "SwitchArgument",
    "TextArgument",
    "VariableStore",
    "parse",
    "parse_strict",
]
