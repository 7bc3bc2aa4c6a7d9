"""Command history with browsing cursor and prefix search."""

from typing import Optional


class History:
    """Append-only log of submitted lines.

    The cursor ranges over [0, len]; len means "not browsing", i.e. the
    blank line after the newest entry.
    """

    def __init__(self) -> None:
        self._commands: list[str] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> list[str]:
        return list(self._commands)

    def commit(self, command: str) -> None:
        self._commands.append(command)
        self._cursor = len(self._commands)

    def up(self) -> Optional[str]:
        if self._cursor > 0:
            self._cursor -= 1
        return self._current()

    def down(self) -> Optional[str]:
        if self._cursor < len(self._commands):
            self._cursor += 1
        return self._current()

    def find(self, prefix: str) -> Optional[str]:
        """Newest entry starting with prefix."""
        for command in reversed(self._commands):
            if command.startswith(prefix):
                return command
        return None

    def _current(self) -> Optional[str]:
        if self._cursor < len(self._commands):
            return self._commands[self._cursor]
        return None
