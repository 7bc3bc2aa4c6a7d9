"""Interpreter types for bsh.

Programs come in three kinds, modelled as a closed set of variants that
the runner dispatches on:

- Builtin: synchronous, gets mutable access to the program registry and
  the variable store, returns an exit status.
- Internal: asynchronous, gets only an output sink and its arguments and
  reports its exit status through a Completion.
- External: an opaque callable supplied by the host, taking an output sink
  and flat string arguments. Its result may be awaitable.
"""

from __future__ import annotations

import asyncio
import weakref
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Protocol, Union

from ..terminal import OutputSink
from .errors import CompletionError

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_SYNTAX_ERROR = 2
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class TextArgument:
    """A plain text argument."""

    text: str

    def to_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class SwitchArgument:
    """A `-name[=value]` or `--name[=value]` argument."""

    name: str
    value: Optional[str] = None
    long: bool = True

    def to_text(self) -> str:
        prefix = "--" if self.long else "-"
        if self.value is None:
            return f"{prefix}{self.name}"
        return f"{prefix}{self.name}={self.value}"


Argument = Union[TextArgument, SwitchArgument]
Arguments = list[Argument]


class VariableStore(dict):
    """Mapping of variable name to string value.

    Unknown names expand to the empty string.
    """

    def lookup(self, name: str) -> str:
        return self.get(name, "")


class Completion:
    """One-shot completion signal for an asynchronous program.

    The program calls send() exactly once with its exit status. The runner
    awaits the signal through `future` and does not keep the Completion
    itself alive: if the program lets go of it without sending, the future
    fails with CompletionError instead of leaving the shell busy forever.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        program: str = "program",
    ):
        loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[int] = loop.create_future()
        finalizer = weakref.finalize(self, _abandon, self._future, program)
        finalizer.atexit = False

    @property
    def future(self) -> asyncio.Future[int]:
        return self._future

    def send(self, status: int = EXIT_SUCCESS) -> bool:
        """Deliver the exit status. Returns False if already delivered."""
        if self._future.done():
            return False
        self._future.set_result(status)
        return True

    def is_sent(self) -> bool:
        return self._future.done()


def _abandon(future: asyncio.Future[int], program: str) -> None:
    if not future.done() and not future.get_loop().is_closed():
        future.set_exception(CompletionError(program))


class BuiltinProgram(Protocol):
    def run(
        self,
        terminal: OutputSink,
        programs: Programs,
        variables: VariableStore,
        arguments: Arguments,
    ) -> int: ...


class InternalProgram(Protocol):
    def run(
        self,
        stdio: OutputSink,
        arguments: Arguments,
        completion: Completion,
    ) -> Optional[Awaitable[Any]]: ...


ExternalFunction = Callable[[OutputSink, list[str]], Any]


@dataclass
class Builtin:
    factory: Callable[[], BuiltinProgram]


@dataclass
class Internal:
    factory: Callable[[], InternalProgram]


@dataclass
class External:
    function: ExternalFunction


Program = Union[Builtin, Internal, External]
Programs = dict[str, Program]
