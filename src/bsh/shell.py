"""Main Shell class - the primary API for bsh.

The shell turns keystrokes into an edit buffer that is re-parsed and
re-highlighted after every input event, and runs the command when the line
is submitted.

Example usage:
    from bsh import Shell, MemoryTerminal

    terminal = MemoryTerminal()
    shell = Shell(terminal=terminal)

    # Feed raw input events, as a terminal emulator would
    for key in "echo hello":
        shell.input(key)
    shell.input("\\r")
    print(terminal.get())

    # Or submit whole lines
    status = shell.run("export name=world")
    status = await shell.exec('echo "hello $name"')

    # Host-supplied programs
    async def greet(stdio, args):
        stdio.write("hi " + " ".join(args) + "\\r\\n")

    shell.add_external("greet", greet)

Builtin programs run synchronously inside input(). Internal and external
programs run as tasks on the running asyncio loop; until they complete the
shell is RUNNING and ignores further input.
"""

import asyncio
import logging
from typing import Callable, Optional, Union

import nest_asyncio  # type: ignore[import-untyped]

from . import ansi
from .commands import Fetch, create_program_registry
from .editor import Buffer, History, render_command, rendered_end
from .interpreter import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    EXIT_SYNTAX_ERROR,
    Builtin,
    External,
    Internal,
    Programs,
    Runner,
    VariableStore,
)
from .interpreter.types import BuiltinProgram, ExternalFunction, InternalProgram
from .parser import Command, ParseException, parse, parse_strict
from .stdio import Stdio
from .terminal import MemoryTerminal, OutputSink
from .types import ShellOptions, ShellState

logger = logging.getLogger(__name__)

# Input events
KEY_CR = "\r"
KEY_LF = "\n"
KEY_ESC = "\x1b"
KEY_BACKSPACE = "\x7f"
KEY_LEFT = "\x1b[D"
KEY_RIGHT = "\x1b[C"
KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"
KEY_DELETE = "\x1b[3~"
KEY_HOME = "\x1b[H"
KEY_END = "\x1b[F"
KEY_DOUBLE_QUOTE = '"'
KEY_SINGLE_QUOTE = "'"


class Shell:
    """Interactive shell bound to an output sink.

    Owns the edit buffer, history, variable store and program registry, and
    drives the runner. Exactly one command is in flight at a time.
    """

    def __init__(
        self,
        *,
        terminal: Optional[OutputSink] = None,
        variables: Optional[dict[str, str]] = None,
        programs: Optional[Programs] = None,
        fetch: Optional[Fetch] = None,
        options: Optional[ShellOptions] = None,
    ):
        """Initialize the shell and print the greeting and prompt.

        Args:
            terminal: Output sink. If not provided, creates a MemoryTerminal.
            variables: Initial shell variables.
            programs: Extra programs, added to (or replacing) the defaults.
            fetch: Coroutine function used by the curl program. curl is
                unavailable without it.
            options: Shell configuration.
        """
        self._terminal = terminal if terminal is not None else MemoryTerminal()
        self._options = options or ShellOptions()
        self._stdio = Stdio(self._terminal, self._options.prompt)

        self._buffer = Buffer()
        self._history = History()
        self._suggestion: Optional[str] = None

        self._programs = create_program_registry(fetch)
        if programs:
            self._programs.update(programs)

        self._variables = VariableStore(variables or {})
        self._last_status = EXIT_SUCCESS
        self._variables.setdefault("?", str(EXIT_SUCCESS))

        self._runner = Runner(self._stdio, timeout=self._options.timeout)
        self._state = ShellState.IDLE
        self._task: Optional[asyncio.Task] = None

        self._actions: dict[str, Callable[[], None]] = {
            KEY_CR: self._submit,
            KEY_LF: self._submit,
            KEY_ESC: self._ignore,
            KEY_BACKSPACE: self._buffer.delete_left,
            KEY_LEFT: self._buffer.move_left,
            KEY_RIGHT: self._move_right_or_accept,
            KEY_UP: self._history_up,
            KEY_DOWN: self._history_down,
            KEY_DELETE: self._buffer.delete_right,
            KEY_HOME: self._buffer.move_to_start,
            KEY_END: self._buffer.move_to_end,
            KEY_DOUBLE_QUOTE: lambda: self._insert_pair('""'),
            KEY_SINGLE_QUOTE: lambda: self._insert_pair("''"),
        }

        if self._options.greeting is not None:
            self._stdio.println(ansi.paint(self._options.greeting, ansi.GREETING))
        self._stdio.prompt()

    @property
    def terminal(self) -> OutputSink:
        return self._terminal

    @property
    def state(self) -> ShellState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is ShellState.RUNNING

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def history(self) -> History:
        return self._history

    @property
    def variables(self) -> VariableStore:
        return self._variables

    @property
    def programs(self) -> Programs:
        return self._programs

    @property
    def last_status(self) -> int:
        """Exit status of the last command, also available as $?."""
        return self._last_status

    def input(self, data: Union[str, bytes]) -> None:
        """Process one input event.

        data is either a recognised key sequence (arrows, backspace, ...)
        or text to insert at the cursor. Submitting a line that names an
        internal or external program requires a running event loop.
        """
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")

        if self._state is ShellState.RUNNING:
            logger.debug("ignoring input while a program is running: %r", data)
            return

        action = self._actions.get(data)
        if action is not None:
            action()
        elif data:
            self._buffer.insert(data)

        if self._state is ShellState.IDLE:
            self._output()

    async def wait(self) -> None:
        """Wait until no program is in flight."""
        while self._task is not None:
            await asyncio.wait({self._task})

    async def exec(self, line: str) -> int:
        """Submit a whole line and wait for it to finish.

        Returns the exit status of the command.
        """
        await self.wait()
        self._buffer.set(line)
        self.input(KEY_CR)
        await self.wait()
        return self._last_status

    def run(self, line: str) -> int:
        """Submit a line synchronously.

        This is a convenience wrapper around exec() that works in any
        context, including Jupyter notebooks and async frameworks.
        """
        try:
            asyncio.get_running_loop()
            # We're in an existing event loop (Jupyter, async framework, etc.)
            # Apply nest_asyncio to allow nested event loops
            nest_asyncio.apply()
        except RuntimeError:
            # No running event loop, asyncio.run() will work fine
            pass
        return asyncio.run(self.exec(line))

    def add_builtin(self, name: str, factory: Callable[[], BuiltinProgram]) -> None:
        self._programs[name] = Builtin(factory)

    def add_internal(self, name: str, factory: Callable[[], InternalProgram]) -> None:
        self._programs[name] = Internal(factory)

    def add_external(self, name: str, function: ExternalFunction) -> None:
        """Register a host function as an external program."""
        self._programs[name] = External(function)

    # Editing actions

    def _ignore(self) -> None:
        pass

    def _insert_pair(self, pair: str) -> None:
        self._buffer.insert_without_moving(pair)
        self._buffer.move_right()

    def _move_right_or_accept(self) -> None:
        if not self._buffer.is_empty() and self._buffer.get_cursor() < self._buffer.len():
            self._buffer.move_right()
        elif self._suggestion:
            self._buffer.insert(self._suggestion)
            self._suggestion = None

    def _history_up(self) -> None:
        entry = self._history.up()
        if entry is not None:
            self._buffer.set(entry)

    def _history_down(self) -> None:
        entry = self._history.down()
        if entry is not None:
            self._buffer.set(entry)
        else:
            self._buffer.clear()

    # Submission and dispatch

    def _submit(self) -> None:
        # Repaint the final line without a suggestion, then end it.
        self._stdio.reset()
        self._stdio.prompt()
        self._write_line()
        self._stdio.println()

        line = self._buffer.get()
        self._buffer.clear()
        self._suggestion = None
        if not line.strip():
            return

        self._history.commit(line)
        try:
            command = parse_strict(line)
        except ParseException as e:
            logger.debug("rejected %r: %s", line, e)
            self._stdio.println(f"bsh: {e}")
            self._set_status(EXIT_SYNTAX_ERROR)
            return

        self._execute(command)

    def _execute(self, command: Command) -> None:
        result = self._runner.dispatch(command, self._programs, self._variables)
        if isinstance(result, int):
            self._set_status(result)
            return

        logger.debug("shell is running %s", command.program.id.name)
        self._state = ShellState.RUNNING
        self._task = asyncio.get_running_loop().create_task(self._finish(result))

    async def _finish(self, program: "asyncio.Task[int]") -> None:
        status = EXIT_FAILURE
        try:
            status = await program
        finally:
            self._task = None
            self._state = ShellState.IDLE
            logger.debug("program finished with status %s", status)
            self._set_status(status)
            self._stdio.complete()
            self._output()

    def _set_status(self, status: int) -> None:
        self._last_status = status
        self._variables["?"] = str(status)

    # Rendering

    def _write_line(self) -> None:
        """Write the buffer, highlighted as far as it parses."""
        text = self._buffer.get()
        try:
            command, _ = parse(text)
        except ParseException:
            self._stdio.print(text)
            return
        self._stdio.print(render_command(command, self._programs))
        self._stdio.print(text[rendered_end(command):])

    def _output(self) -> None:
        """Repaint the prompt line and place the cursor."""
        self._stdio.reset()
        self._stdio.prompt()
        self._write_line()

        text = self._buffer.get()
        self._suggestion = None
        if text and self._options.suggestions:
            entry = self._history.find(text)
            if entry is not None and len(entry) > len(text):
                self._suggestion = entry[len(text):]
                self._stdio.print(ansi.paint(self._suggestion, ansi.GREY))

        self._stdio.print(ansi.CURSOR_LEFT_EDGE)
        self._stdio.print(ansi.cursor_right(self._stdio.prompt_width + self._buffer.get_cursor()))
