"""Runner - program dispatch.

Looks a command up in the program registry, turns its parameters into
arguments suited to the program kind and runs it:

- Builtins run to completion inside dispatch() and their status is returned
  directly.
- Internal and External programs are started as an asyncio task on the
  running loop; dispatch() returns the task, whose result is the exit status.
  The caller owns the task and decides what "busy" means while it runs.

No failure of a program escapes the runner: exceptions, missing completion
signals and timeouts are reported to the output and mapped to an exit status.
"""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from functools import partial
from typing import Any, Awaitable, Optional, Union

from .. import ansi
from ..parser.ast import Command, Parameters
from ..stdio import Stdio
from .errors import CompletionError, ProgramError, ProgramTimeoutError
from .transform import Transformer
from .types import (
    EXIT_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    EXIT_TIMEOUT,
    Arguments,
    Builtin,
    BuiltinProgram,
    Completion,
    External,
    ExternalFunction,
    Internal,
    InternalProgram,
    Programs,
    VariableStore,
)

logger = logging.getLogger(__name__)

DispatchResult = Union[int, "asyncio.Task[int]"]


class Runner:
    """Dispatches one command at a time to builtin, internal or external programs."""

    def __init__(self, stdio: Stdio, timeout: Optional[float] = None):
        """Initialize the runner.

        Args:
            stdio: Output used for diagnostics and handed to programs.
            timeout: Seconds an asynchronous program may run before it is
                cancelled. None lets programs run until they complete.
        """
        self._stdio = stdio
        self._timeout = timeout
        # Tasks of programs that signalled completion but kept running.
        self._background: set[asyncio.Task] = set()

    def dispatch(
        self,
        command: Command,
        programs: Programs,
        variables: VariableStore,
    ) -> DispatchResult:
        """Run a parsed command.

        Returns the exit status for synchronous outcomes, or the task running
        an asynchronous program.
        """
        name = command.program.id.name
        program = programs.get(name)

        if program is None:
            logger.debug("command not found: %s", name)
            self._stdio.println(f"bsh: command not found: {name}")
            return EXIT_NOT_FOUND

        if isinstance(program, (Internal, External)) and not _loop_running():
            logger.warning("cannot start %s without a running event loop", name)
            self._report(ProgramError(name, "no running event loop"))
            return EXIT_FAILURE

        if isinstance(program, Builtin):
            return self.run_builtin(name, program.factory(), command.parameters, programs, variables)
        if isinstance(program, Internal):
            return self.run_internal(name, program.factory(), command.parameters, variables)
        if isinstance(program, External):
            return self.run_external(name, program.function, command.parameters, variables)
        raise TypeError(f"unknown program kind for {name}: {type(program).__name__}")

    def run_builtin(
        self,
        name: str,
        program: BuiltinProgram,
        parameters: Optional[Parameters],
        programs: Programs,
        variables: VariableStore,
    ) -> int:
        logger.debug("running builtin %s", name)
        arguments = _arguments(parameters, variables, text_only=False)
        try:
            return program.run(self._stdio, programs, variables, arguments)
        except Exception as e:
            logger.warning("builtin %s failed", name, exc_info=True)
            self._report(ProgramError(name, str(e) or type(e).__name__))
            return EXIT_FAILURE

    def run_internal(
        self,
        name: str,
        program: InternalProgram,
        parameters: Optional[Parameters],
        variables: Mapping[str, str],
    ) -> "asyncio.Task[int]":
        loop = asyncio.get_running_loop()
        logger.debug("starting internal program %s", name)
        arguments = _arguments(parameters, variables, text_only=False)
        return loop.create_task(self._complete_internal(name, program, arguments))

    def run_external(
        self,
        name: str,
        function: ExternalFunction,
        parameters: Optional[Parameters],
        variables: Mapping[str, str],
    ) -> "asyncio.Task[int]":
        loop = asyncio.get_running_loop()
        logger.debug("starting external program %s", name)
        transformer = Transformer(variables, text_only=True)
        texts = transformer.to_texts(transformer.transform(parameters)) if parameters else []
        return loop.create_task(self._complete_external(name, function, texts))

    async def _complete_internal(
        self, name: str, program: InternalProgram, arguments: Arguments
    ) -> int:
        completion = Completion(program=name)
        future = completion.future
        try:
            result = program.run(self._stdio, arguments, completion)
            # Only the program may keep the completion alive from here on.
            del program, completion
            task = asyncio.ensure_future(result) if inspect.isawaitable(result) else None
            del result
            return await self._wait_for_completion(name, future, task)
        except ProgramTimeoutError as error:
            self._report(error)
            return EXIT_TIMEOUT
        except ProgramError as error:
            self._report(error)
            return EXIT_FAILURE
        except Exception as e:
            logger.warning("internal program %s failed", name, exc_info=True)
            self._report(ProgramError(name, str(e) or type(e).__name__))
            return EXIT_FAILURE
        finally:
            if not future.done():
                future.cancel()

    async def _wait_for_completion(
        self,
        name: str,
        future: "asyncio.Future[int]",
        task: Optional["asyncio.Future[Any]"],
    ) -> int:
        waiters: set[asyncio.Future] = {future}
        if task is not None:
            waiters.add(task)

        done, _ = await asyncio.wait(
            waiters, timeout=self._timeout, return_when=asyncio.FIRST_COMPLETED
        )

        if future.done() and not future.cancelled() and future.exception() is None:
            if task is not None:
                self._background.add(task)
                task.add_done_callback(partial(self._reap, name))
            return future.result()

        if not done:
            logger.warning("%s timed out after %ss", name, self._timeout)
            if task is not None:
                task.cancel()
            raise ProgramTimeoutError(name, self._timeout or 0)

        if task is not None and task.done() and not task.cancelled():
            error = task.exception()
            if error is not None:
                logger.warning("internal program %s raised %r", name, error)
                raise ProgramError(name, str(error) or type(error).__name__) from error
        # Either the task ended or the completion was dropped without a send.
        logger.warning("%s finished without signalling completion", name)
        raise CompletionError(name)

    def _reap(self, name: str, task: "asyncio.Future[Any]") -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(
                "%s failed after signalling completion", name, exc_info=error
            )

    async def _complete_external(
        self, name: str, function: ExternalFunction, arguments: list[str]
    ) -> int:
        try:
            result = function(self._stdio, arguments)
            if inspect.isawaitable(result):
                result = await self._await_external(name, result)
        except ProgramTimeoutError as error:
            self._report(error)
            return EXIT_TIMEOUT
        except Exception as e:
            logger.warning("external program %s failed", name, exc_info=True)
            self._stdio.complete()
            self._stdio.println(str(e) or "unknown error")
            return EXIT_FAILURE
        finally:
            self._stdio.write(ansi.SHOW_CURSOR)

        if isinstance(result, int) and not isinstance(result, bool):
            return result
        return EXIT_SUCCESS

    async def _await_external(self, name: str, awaitable: Awaitable[Any]) -> Any:
        if self._timeout is None:
            return await awaitable
        task = asyncio.ensure_future(awaitable)
        done, _ = await asyncio.wait({task}, timeout=self._timeout)
        if not done:
            logger.warning("%s timed out after %ss", name, self._timeout)
            task.cancel()
            raise ProgramTimeoutError(name, self._timeout)
        return task.result()

    def _report(self, error: ProgramError) -> None:
        self._stdio.complete()
        self._stdio.println(f"bsh: {error}")


def _arguments(
    parameters: Optional[Parameters], variables: Mapping[str, str], text_only: bool
) -> Arguments:
    if parameters is None:
        return []
    return Transformer(variables, text_only).transform(parameters)


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True
