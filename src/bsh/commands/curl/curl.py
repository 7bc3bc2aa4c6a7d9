"""Curl command implementation.

Usage: curl URL

Fetches URL through the fetch function supplied by the host and writes the
response body. The network access itself belongs to the host; this program
only drives it and reports the outcome.
"""

from typing import Awaitable, Callable, Union

from ...interpreter.types import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    Arguments,
    Completion,
    TextArgument,
)
from ...terminal import OutputSink

Fetch = Callable[[str], Awaitable[Union[str, bytes]]]


class CurlCommand:
    """The curl command - print the body of a URL."""

    name = "curl"

    def __init__(self, fetch: Fetch):
        self._fetch = fetch

    async def run(self, stdio: OutputSink, arguments: Arguments, completion: Completion) -> None:
        """Execute the curl command."""
        url = arguments[0] if arguments else None
        if not isinstance(url, TextArgument):
            stdio.write("No URL is provided.\r\n")
            completion.send(EXIT_FAILURE)
            return

        try:
            body = await self._fetch(url.text)
        except Exception as e:
            stdio.write(f"{str(e) or 'connection failed'}\r\n")
            completion.send(EXIT_FAILURE)
            return

        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        text = body.replace("\r\n", "\n").replace("\n", "\r\n")
        stdio.write(text)
        if not text.endswith("\r\n"):
            stdio.write("\r\n")
        completion.send(EXIT_SUCCESS)
