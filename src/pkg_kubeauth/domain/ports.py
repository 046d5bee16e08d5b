from __future__ import annotations

from typing import Any, Mapping, Protocol, Tuple

from .entities import ConnectionContext


class ClaimsDecoder(Protocol):
    """
    Port for turning a compact signed token into its claims.

    Implementations live in the adapters layer (e.g. the PyJWT decoder).
    """

    def decode(self, token: str) -> Mapping[str, Any]:
        """
        Decode the token payload WITHOUT verifying its signature.

        Raises:
          - MalformedTokenError
        """
        ...


class LineReader(Protocol):
    """Supplies one whitespace-trimmed line of user input."""

    def read_line(self) -> str:
        """
        Raises:
          - InputError when no line can be read
        """
        ...


class OutputSink(Protocol):
    """Renders a block of text to the user and/or an append-only log file."""

    def emit(self, text: str, to_file: bool = False, file_name: str | None = None) -> None:
        ...


class RemoteQueryRunner(Protocol):
    """
    Runs a verb/noun query against the cluster as the bound identity.

    Returns the raw JSON bytes plus whatever metadata the runner produces.
    """

    def run(self, context: ConnectionContext, *args: str) -> Tuple[bytes, Any]:
        ...


class CAFileWriter(Protocol):
    """Persists CA material to a uniquely named file and returns its path."""

    def write(self, ca_certificate_data: str) -> str:
        """
        Raises:
          - ResourceError when the file cannot be created or written
        """
        ...
