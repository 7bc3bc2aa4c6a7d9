"""Run bsh on the controlling terminal.

The terminal is switched to raw mode so every keystroke reaches the shell
as an input event; the shell does all echoing and cursor movement itself.
"""

import argparse
import asyncio
import logging
import os
import sys
import termios
import tty
from typing import Optional

from . import ansi, symbols
from .shell import Shell
from .types import ShellOptions

logger = logging.getLogger(__name__)

KEY_INTERRUPT = "\x03"
KEY_EOF = "\x04"


class StdoutTerminal:
    """Output sink writing straight to stdout."""

    def write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()

    def clear(self) -> None:
        self.write(ansi.CLEAR_SCREEN)


def split_keys(data: str) -> list[str]:
    """Split a chunk read from the terminal into single input events.

    CSI sequences (ESC [ ... final) stay together; everything else is one
    event per character, so pasted text containing a newline submits.
    """
    keys = []
    i = 0
    while i < len(data):
        if data[i] == ansi.ESC and data[i + 1:i + 2] == "[":
            j = i + 2
            while j < len(data) and not ("@" <= data[j] <= "~"):
                j += 1
            keys.append(data[i:j + 1])
            i = j + 1
        else:
            keys.append(data[i])
            i += 1
    return keys


async def serve(shell: Shell, fd: int) -> None:
    loop = asyncio.get_running_loop()
    done = loop.create_future()

    def on_readable() -> None:
        data = os.read(fd, 1024).decode("utf-8", errors="replace")
        for key in split_keys(data) or [KEY_EOF]:
            if key in (KEY_INTERRUPT, KEY_EOF):
                if not done.done():
                    done.set_result(None)
                return
            shell.input(key)

    loop.add_reader(fd, on_readable)
    try:
        await done
    finally:
        loop.remove_reader(fd)


def build_options(args: argparse.Namespace) -> ShellOptions:
    timeout = args.timeout
    if timeout is not None and timeout <= 0:
        print(symbols.warning(f"bsh: ignoring --timeout {timeout:g}, programs run to completion"),
              file=sys.stderr)
        timeout = None
    return ShellOptions(
        prompt=args.prompt,
        greeting=None if args.no_greeting else ShellOptions.greeting,
        suggestions=not args.no_suggestions,
        timeout=timeout,
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="bsh", description="Interactive shell")
    parser.add_argument("--prompt", default=ShellOptions.prompt, help="prompt text")
    parser.add_argument("--timeout", type=float, default=None,
                        help="seconds before an asynchronous program is cancelled")
    parser.add_argument("--no-greeting", action="store_true", help="skip the welcome line")
    parser.add_argument("--no-suggestions", action="store_true",
                        help="disable history suggestions")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="write logs to this file")
    args = parser.parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=args.log_level,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
        print(symbols.info(f"bsh: logging to {args.log_file}"), file=sys.stderr)
    else:
        # stderr shares the raw terminal, keep it clean
        logging.basicConfig(level=args.log_level, handlers=[logging.NullHandler()])

    options = build_options(args)

    if not sys.stdin.isatty():
        print(symbols.error("bsh: stdin is not a terminal"), file=sys.stderr)
        return 1

    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        asyncio.run(_start(options, fd))
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
        sys.stdout.write("\r\n")
    return 0


async def _start(options: ShellOptions, fd: int) -> None:
    shell = Shell(terminal=StdoutTerminal(), options=options)
    logger.info("bsh started")
    await serve(shell, fd)


if __name__ == "__main__":
    sys.exit(main())
