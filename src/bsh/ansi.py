"""ANSI escape sequences used by the shell and its programs.

Everything here produces plain text; the output sink is never asked
whether it understands colors.
"""

ESC = "\033"
RESET = f"{ESC}[0m"

# Cursor and line control
CURSOR_LEFT_EDGE = f"{ESC}[1000D"
CLEAR_LINE = f"{ESC}[0K"
SHOW_CURSOR = f"{ESC}[?25h"
CLEAR_SCREEN = f"{ESC}[2J{ESC}[H"

# Basic colors
RED = f"{ESC}[31m"
GREEN = f"{ESC}[32m"
YELLOW = f"{ESC}[33m"
BLUE = f"{ESC}[34m"
PURPLE = f"{ESC}[35m"


def fixed(code: int) -> str:
    """Foreground color from the 256-color palette."""
    return f"{ESC}[38;5;{code}m"


GREY = fixed(8)
SWITCH = fixed(39)
VARIABLE = fixed(93)
GREETING = fixed(127)


def paint(text: str, color: str) -> str:
    """Wrap text in a color sequence followed by a reset."""
    return f"{color}{text}{RESET}"


def cursor_right(columns: int) -> str:
    """Move the cursor right; empty for zero since ESC[0C moves one column."""
    if columns <= 0:
        return ""
    return f"{ESC}[{columns}C"


def visible_width(text: str) -> int:
    """Count printable characters, skipping CSI escape sequences."""
    width = 0
    i = 0
    while i < len(text):
        if text[i] == ESC and i + 1 < len(text) and text[i + 1] == "[":
            i += 2
            while i < len(text) and not ("@" <= text[i] <= "~"):
                i += 1
            i += 1
            continue
        width += 1
        i += 1
    return width
