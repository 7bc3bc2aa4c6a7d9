"""Line editing: buffer, history and highlighting."""

from .buffer import Buffer
from .history import History
from .renderer import render_command, rendered_end

__all__ = ["Buffer", "History", "render_command", "rendered_end"]
