"""Errors raised while running programs."""


class ProgramError(Exception):
    """Base class for failures of a dispatched program."""

    def __init__(self, program: str, message: str):
        self.program = program
        super().__init__(f"{program}: {message}")


class CompletionError(ProgramError):
    """An asynchronous program finished without signalling completion."""

    def __init__(self, program: str):
        super().__init__(program, "program exited without signalling completion")


class ProgramTimeoutError(ProgramError):
    """An asynchronous program did not complete within the timeout."""

    def __init__(self, program: str, timeout: float):
        self.timeout = timeout
        super().__init__(program, f"timed out after {timeout:g}s")
