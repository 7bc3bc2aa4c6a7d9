"""Program registry for bsh."""

from functools import partial
from typing import Optional

from ..interpreter.builtins import BUILTINS
from ..interpreter.types import Builtin, Internal, Programs
from .curl import CurlCommand, Fetch


def create_program_registry(fetch: Optional[Fetch] = None) -> Programs:
    """Create the default program registry.

    Args:
        fetch: Coroutine function used by curl. curl is only registered
            when one is given.
    """
    programs: Programs = {name: Builtin(cls) for name, cls in BUILTINS.items()}
    if fetch is not None:
        programs["curl"] = Internal(partial(CurlCommand, fetch))
    return programs


__all__ = ["CurlCommand", "Fetch", "create_program_registry"]
