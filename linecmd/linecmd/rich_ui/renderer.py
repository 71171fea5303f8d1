"""
Rich output channel for linecmd.
All interpreter output goes through a Rich console bound to the session's output stream.
"""
from typing import Any, Optional, TextIO

from rich.console import Console


class RichRenderer:
    """
    Writes interpreter output to a stream.

    Plain output goes straight to the console's file, byte for byte; tabs
    and control characters are not touched. Only errors are rendered
    through Rich, so they can be styled on a terminal.
    """

    def __init__(self, stream: TextIO, console: Optional[Console] = None) -> None:
        """
        Initialize the renderer.

        Args:
            stream: File-like object output is written to
            console: Optional preconfigured Rich console (overrides stream)
        """
        self._stream = stream
        self._console = console or Console(
            file=stream,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    @property
    def console(self) -> Console:
        """Get the Rich console."""
        return self._console

    @property
    def stream(self) -> TextIO:
        return self._stream

    def write(self, *lines: Any) -> None:
        """Write each item followed by a newline."""
        for line in lines:
            self._console.file.write(f"{line}\n")

    def print(self, *texts: Any) -> None:
        """Write each item with no newline appended."""
        for text in texts:
            self._console.file.write(str(text))

    def print_error(self, message: str) -> None:
        """Write an error line, styled when the stream is a terminal."""
        self._console.out(message, end="\n", style="bold red", highlight=False)
