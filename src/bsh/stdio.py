"""Line-oriented helpers over an output sink."""

from . import ansi
from .terminal import OutputSink


class Stdio:
    """Wraps the host terminal with printing, prompt and line reset helpers.

    Stdio satisfies the OutputSink protocol itself, so programs can be handed
    either one. It remembers whether the last character written ended a
    line, which the shell uses to tidy up after asynchronous programs.
    """

    def __init__(self, terminal: OutputSink, prompt: str = "❯ "):
        self._terminal = terminal
        self._prompt = prompt
        self.at_line_start = True

    @property
    def terminal(self) -> OutputSink:
        return self._terminal

    @property
    def prompt_width(self) -> int:
        return ansi.visible_width(self._prompt)

    def write(self, data: str) -> None:
        if not data:
            return
        self._terminal.write(data)
        visible = ansi.visible_width(data)
        if visible:
            self.at_line_start = data.endswith("\n")

    def print(self, data: str) -> None:
        self.write(data)

    def println(self, data: str = "") -> None:
        self.write(data)
        self.write("\r\n")

    def clear(self) -> None:
        self._terminal.clear()
        self.at_line_start = True

    def reset(self) -> None:
        """Move to the left edge and erase the current line."""
        self._terminal.write(ansi.CURSOR_LEFT_EDGE)
        self._terminal.write(ansi.CLEAR_LINE)
        self.at_line_start = True

    def prompt(self) -> None:
        self.write(ansi.paint(self._prompt, ansi.PURPLE))

    def complete(self) -> None:
        """Terminate a dangling output line."""
        if not self.at_line_start:
            self.println()
