"""Type definitions for bsh."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ShellState(Enum):
    """Whether a dispatched program is still in flight."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass
class ShellOptions:
    """Shell configuration."""

    prompt: str = "❯ "
    """Prompt printed before the edit buffer."""

    greeting: Optional[str] = "Welcome to bsh!"
    """Line printed when the shell starts. None disables it."""

    suggestions: bool = True
    """Suggest the rest of a matching history entry while typing."""

    timeout: Optional[float] = None
    """Seconds an internal or external program may run before it is
    cancelled. None means programs always run to completion."""
