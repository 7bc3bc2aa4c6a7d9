"""Tests for program dispatch."""

import asyncio
import gc
import logging

import pytest

from bsh import ansi
from bsh.interpreter import (
    EXIT_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    EXIT_TIMEOUT,
    Builtin,
    Completion,
    External,
    Internal,
    Runner,
    SwitchArgument,
    TextArgument,
    VariableStore,
)
from bsh.interpreter.builtins import BUILTINS
from bsh.parser import parse_strict
from bsh.stdio import Stdio
from bsh.terminal import MemoryTerminal


def _setup(timeout=None):
    terminal = MemoryTerminal()
    return terminal, Runner(Stdio(terminal), timeout=timeout)


def _registry(**extra):
    programs = {name: Builtin(cls) for name, cls in BUILTINS.items()}
    programs.update(extra)
    return programs


async def _dispatch(runner, line, programs, variables=None):
    result = runner.dispatch(parse_strict(line), programs, variables or VariableStore())
    if isinstance(result, int):
        return result
    return await result


class Recorder:
    """Internal program that records its arguments and completes."""

    seen: list = []

    def run(self, stdio, arguments, completion):
        Recorder.seen = arguments
        stdio.write("recorded\r\n")
        completion.send(7)


class Quiet:
    async def run(self, stdio, arguments, completion):
        await asyncio.sleep(0)


class Exploding:
    async def run(self, stdio, arguments, completion):
        raise ValueError("kaboom")


class Sleepy:
    async def run(self, stdio, arguments, completion):
        await asyncio.sleep(10)
        completion.send(0)


class Lingering:
    """Sends completion, then keeps working."""

    finished = False

    async def run(self, stdio, arguments, completion):
        completion.send(0)
        await asyncio.sleep(0.01)
        Lingering.finished = True


class Ignoring:
    def run(self, stdio, arguments, completion):
        stdio.write("ignored")


class Spawner:
    """Starts background work that never sends."""

    def run(self, stdio, arguments, completion):
        async def work():
            await asyncio.sleep(0)
            stdio.write(f"working {completion.is_sent()}\r\n")

        asyncio.get_running_loop().create_task(work())


class FailsLate:
    async def run(self, stdio, arguments, completion):
        completion.send(0)
        await asyncio.sleep(0)
        raise RuntimeError("late failure")


class TestBuiltins:
    """Test synchronous dispatch."""

    @pytest.mark.asyncio
    async def test_builtin_returns_status_directly(self):
        terminal, runner = _setup()
        result = runner.dispatch(parse_strict("echo hi"), _registry(), VariableStore())
        assert result == EXIT_SUCCESS
        assert terminal.get() == "hi\r\n"

    def test_builtin_without_event_loop(self):
        terminal, runner = _setup()
        assert runner.dispatch(parse_strict("false"), _registry(), VariableStore()) == EXIT_FAILURE

    def test_builtin_exception_is_reported(self):
        class Broken:
            def run(self, terminal, programs, variables, arguments):
                raise RuntimeError("no luck")

        terminal, runner = _setup()
        result = runner.dispatch(
            parse_strict("broken"), _registry(broken=Builtin(Broken)), VariableStore()
        )
        assert result == EXIT_FAILURE
        assert "bsh: broken: no luck" in terminal.get()

    def test_builtin_receives_registry_and_variables(self):
        class Define:
            def run(self, terminal, programs, variables, arguments):
                variables["seen"] = str(len(arguments))
                programs["alias"] = programs["echo"]
                return EXIT_SUCCESS

        programs = _registry(define=Builtin(Define))
        variables = VariableStore()
        _, runner = _setup()
        runner.dispatch(parse_strict("define a -b"), programs, variables)
        assert variables["seen"] == "2"
        assert "alias" in programs

    def test_async_program_without_event_loop(self):
        terminal, runner = _setup()
        programs = _registry(greet=External(lambda stdio, args: None))
        result = runner.dispatch(parse_strict("greet"), programs, VariableStore())
        assert result == EXIT_FAILURE
        assert "bsh: greet: no running event loop" in terminal.get()

    def test_command_not_found(self):
        terminal, runner = _setup()
        result = runner.dispatch(parse_strict("zzz"), _registry(), VariableStore())
        assert result == EXIT_NOT_FOUND
        assert "command not found: zzz" in terminal.get()


class TestInternal:
    """Test internal programs and completion signalling."""

    @pytest.mark.asyncio
    async def test_status_from_completion(self):
        terminal, runner = _setup()
        programs = _registry(rec=Internal(Recorder))
        status = await _dispatch(runner, "rec a -b --c=$v", programs, VariableStore(v="d"))
        assert status == 7
        assert Recorder.seen == [
            TextArgument("a"),
            SwitchArgument("b", None, long=False),
            SwitchArgument("c", "d", long=True),
        ]
        assert terminal.get() == "recorded\r\n"

    @pytest.mark.asyncio
    async def test_missing_completion_is_failure(self):
        terminal, runner = _setup()
        status = await _dispatch(runner, "quiet", _registry(quiet=Internal(Quiet)))
        assert status == EXIT_FAILURE
        assert "bsh: quiet: program exited without signalling completion" in terminal.get()

    @pytest.mark.asyncio
    async def test_exception_is_failure(self):
        terminal, runner = _setup()
        status = await _dispatch(runner, "boom", _registry(boom=Internal(Exploding)))
        assert status == EXIT_FAILURE
        assert "bsh: boom: kaboom" in terminal.get()

    @pytest.mark.asyncio
    async def test_timeout(self):
        terminal, runner = _setup(timeout=0.05)
        status = await _dispatch(runner, "sleepy", _registry(sleepy=Internal(Sleepy)))
        assert status == EXIT_TIMEOUT
        assert "bsh: sleepy: timed out after 0.05s" in terminal.get()

    @pytest.mark.asyncio
    async def test_work_after_completion_keeps_running(self):
        Lingering.finished = False
        _, runner = _setup()
        status = await _dispatch(runner, "linger", _registry(linger=Internal(Lingering)))
        assert status == EXIT_SUCCESS
        await asyncio.sleep(0.05)
        assert Lingering.finished

    @pytest.mark.asyncio
    async def test_dropped_completion_is_failure(self):
        terminal, runner = _setup()
        status = await _dispatch(runner, "ignore", _registry(ignore=Internal(Ignoring)))
        assert status == EXIT_FAILURE
        assert "ignored\r\nbsh: ignore: program exited without signalling completion" in terminal.get()

    @pytest.mark.asyncio
    async def test_spawned_work_without_completion(self):
        terminal, runner = _setup()
        task = runner.dispatch(
            parse_strict("spawn"), _registry(spawn=Internal(Spawner)), VariableStore()
        )
        for _ in range(50):
            if task.done():
                break
            gc.collect()
            await asyncio.sleep(0.01)

        assert task.done()
        assert task.result() == EXIT_FAILURE
        output = terminal.get()
        assert "working False" in output
        assert "bsh: spawn: program exited without signalling completion" in output

    @pytest.mark.asyncio
    async def test_failure_after_completion_is_logged(self, caplog):
        caplog.set_level(logging.WARNING, logger="bsh.interpreter.runner")
        _, runner = _setup()
        status = await _dispatch(runner, "late", _registry(late=Internal(FailsLate)))
        assert status == EXIT_SUCCESS
        await asyncio.sleep(0.01)
        assert any(
            "late failed after signalling completion" in record.getMessage()
            for record in caplog.records
        )

    @pytest.mark.asyncio
    async def test_completion_sends_once(self):
        completion = Completion()
        assert completion.send(3)
        assert not completion.send(4)
        assert completion.is_sent()
        assert await completion.future == 3


class TestExternal:
    """Test host-supplied functions."""

    @pytest.mark.asyncio
    async def test_sync_function(self):
        seen = []

        def greet(stdio, args):
            seen.append(args)
            stdio.write("hello\r\n")

        terminal, runner = _setup()
        programs = _registry(greet=External(greet))
        status = await _dispatch(runner, "greet -x --name=$n w", programs, VariableStore(n="y"))
        assert status == EXIT_SUCCESS
        assert seen == [["-x", "--name=y", "w"]]
        assert terminal.get().startswith("hello\r\n")

    @pytest.mark.asyncio
    async def test_async_function_status(self):
        async def check(stdio, args):
            await asyncio.sleep(0)
            return 3

        _, runner = _setup()
        assert await _dispatch(runner, "check", _registry(check=External(check))) == 3

    @pytest.mark.asyncio
    async def test_bool_result_is_success(self):
        _, runner = _setup()
        programs = _registry(yes=External(lambda stdio, args: False))
        assert await _dispatch(runner, "yes", programs) == EXIT_SUCCESS

    @pytest.mark.asyncio
    async def test_failure(self):
        async def fail(stdio, args):
            stdio.write("partial")
            raise ValueError("it broke")

        terminal, runner = _setup()
        status = await _dispatch(runner, "fail", _registry(fail=External(fail)))
        assert status == EXIT_FAILURE
        assert "partial\r\nit broke\r\n" in terminal.get()

    @pytest.mark.asyncio
    async def test_failure_without_message(self):
        async def fail(stdio, args):
            raise RuntimeError()

        terminal, runner = _setup()
        await _dispatch(runner, "fail", _registry(fail=External(fail)))
        assert "unknown error" in terminal.get()

    @pytest.mark.asyncio
    async def test_cursor_shown_afterwards(self):
        terminal, runner = _setup()
        await _dispatch(runner, "noop", _registry(noop=External(lambda stdio, args: None)))
        assert terminal.get().endswith(ansi.SHOW_CURSOR)

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def slow(stdio, args):
            await asyncio.sleep(10)

        terminal, runner = _setup(timeout=0.05)
        status = await _dispatch(runner, "slow", _registry(slow=External(slow)))
        assert status == EXIT_TIMEOUT
        assert "timed out" in terminal.get()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout", [None, 5])
    async def test_own_timeout_error_is_ordinary_failure(self, timeout):
        async def net(stdio, args):
            raise TimeoutError("connect timed out")

        terminal, runner = _setup(timeout=timeout)
        status = await _dispatch(runner, "net", _registry(net=External(net)))
        assert status == EXIT_FAILURE
        assert "connect timed out\r\n" in terminal.get()
        assert "bsh: net: timed out" not in terminal.get()
