"""Output sink contract and the in-memory terminal."""

from typing import Protocol


class OutputSink(Protocol):
    """What the shell needs from a display: raw append and wipe."""

    def write(self, data: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTerminal:
    """Terminal that records everything written to it.

    Used as the default sink when a host supplies none, and by tests.
    """

    def __init__(self) -> None:
        self._buffer: list[str] = []
        self.clear_count = 0

    def write(self, data: str) -> None:
        self._buffer.append(data)

    def clear(self) -> None:
        self._buffer.clear()
        self.clear_count += 1

    def get(self) -> str:
        return "".join(self._buffer)
