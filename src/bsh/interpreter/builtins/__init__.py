"""Builtin programs: synchronous, with access to the shell's state."""

from .echo import EchoBuiltin
from .export import ExportBuiltin
from .misc import ClearBuiltin, FalseBuiltin, TrueBuiltin

BUILTINS = {
    "clear": ClearBuiltin,
    "echo": EchoBuiltin,
    "export": ExportBuiltin,
    "true": TrueBuiltin,
    "false": FalseBuiltin,
}

__all__ = [
    "BUILTINS",
    "ClearBuiltin",
    "EchoBuiltin",
    "ExportBuiltin",
    "FalseBuiltin",
    "TrueBuiltin",
]
