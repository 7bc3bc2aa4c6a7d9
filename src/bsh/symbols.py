"""Status symbols for diagnostic messages."""

from . import ansi


def info(message: str) -> str:
    return f"{ansi.paint('ℹ', ansi.BLUE)} {message}"


def warning(message: str) -> str:
    return f"{ansi.paint('⚠', ansi.YELLOW)} {message}"


def error(message: str) -> str:
    return f"{ansi.paint('✖', ansi.RED)} {message}"
