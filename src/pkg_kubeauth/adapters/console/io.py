from __future__ import annotations

import sys
from typing import Optional, TextIO

from ...domain.exceptions import InputError
from ...domain.ports import LineReader, OutputSink


class StreamLineReader(LineReader):
    """Reads trimmed lines from a text stream (stdin by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def read_line(self) -> str:
        stream = self._stream or sys.stdin
        try:
            line = stream.readline()
        except (OSError, ValueError) as exc:
            raise InputError(f"Could not read input: {exc}") from exc
        if line == "":
            raise InputError("Unexpected end of input")
        return line.strip()


class ConsoleOutput(OutputSink):
    """Prints to a stream and, when asked, appends the same text to a file."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def emit(self, text: str, to_file: bool = False, file_name: str | None = None) -> None:
        stream = self._stream or sys.stdout
        stream.write(text)
        if not text.endswith("\n"):
            stream.write("\n")
        if to_file and file_name:
            with open(file_name, "a", encoding="utf-8") as fh:
                fh.write(text)
