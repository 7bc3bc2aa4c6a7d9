"""Interpreter module for bsh: argument transformation and program dispatch."""

from .errors import CompletionError, ProgramError, ProgramTimeoutError
from .runner import Runner
from .transform import Transformer
from .types import (
    EXIT_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    EXIT_SYNTAX_ERROR,
    EXIT_TIMEOUT,
    Argument,
    Arguments,
    Builtin,
    Completion,
    External,
    Internal,
    Program,
    Programs,
    SwitchArgument,
    TextArgument,
    VariableStore,
)

__all__ = [
    "Argument",
    "Arguments",
    "Builtin",
    "Completion",
    "CompletionError",
    "EXIT_FAILURE",
    "EXIT_NOT_FOUND",
    "EXIT_SUCCESS",
    "EXIT_SYNTAX_ERROR",
    "EXIT_TIMEOUT",
    "External",
    "Internal",
    "Program",
    "ProgramError",
    "ProgramTimeoutError",
    "Programs",
    "Runner",
    "SwitchArgument",
    "TextArgument",
    "Transformer",
    "VariableStore",
]
