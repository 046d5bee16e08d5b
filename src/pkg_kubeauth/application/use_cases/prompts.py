from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ...adapters.jwt.unverified_decoder import format_claims
from ...domain.constants import ABORT_SELECTION, DiscoveryMethod
from ...domain.entities import ConnectionContext, Identity, ServiceAccount
from ...domain.exceptions import InputError
from ...domain.ports import LineReader, OutputSink, RemoteQueryRunner
from .bind import ConnectionBinder
from .claims import decode_claims
from .import_secret import import_token_from_secret_payload
from .registry import IdentityRegistry


logger = logging.getLogger(__name__)


def show_identities(
        registry: IdentityRegistry,
        context: ConnectionContext,
        output: OutputSink,
        *,
        log_to_file: bool = False,
        output_file: Optional[str] = None,
) -> None:
    output.emit("\nAvailable Identities:")
    lines = registry.list_identities(context.token_name)
    output.emit("\n".join(lines) + "\n", log_to_file, output_file)


def _choose(
        registry: IdentityRegistry,
        reader: LineReader,
        output: OutputSink,
) -> Optional[Identity]:
    """
    Read a selector: the abort word or an index into the registry.

    Returns None (after telling the user why) for anything unusable.
    """
    output.emit("\nEnter identity number or exit to abort: ")
    selection = reader.read_line()
    if selection == ABORT_SELECTION:
        return None

    try:
        index = int(selection)
    except ValueError:
        output.emit(f"Error parsing identity selection: {selection!r}")
        return None

    if index < 0 or index >= len(registry):
        output.emit(f"Identity {index} does not exist!")
        return None

    return registry[index]


def select_identity(
        registry: IdentityRegistry,
        context: ConnectionContext,
        binder: ConnectionBinder,
        reader: LineReader,
        output: OutputSink,
        *,
        log_to_file: bool = False,
        output_file: Optional[str] = None,
) -> Optional[Identity]:
    """
    List identities, read a selection and bind it onto the context.

    An abort, an unparsable selector or an out-of-range index leaves the
    context unchanged and returns None.

    Raises:
        InputError (from the reader)
        ResourceError (from binding a certificate identity)
    """
    show_identities(registry, context, output, log_to_file=log_to_file, output_file=output_file)
    identity = _choose(registry, reader, output)
    if identity is None:
        return None

    binder.bind(identity, context)
    output.emit(f"Selected {identity.name}")
    return identity


def display_identity_token(
        registry: IdentityRegistry,
        context: ConnectionContext,
        reader: LineReader,
        output: OutputSink,
) -> Optional[Identity]:
    """Same selection as `select_identity`, but only prints the token."""
    show_identities(registry, context, output)
    identity = _choose(registry, reader, output)
    if identity is None:
        return None

    if isinstance(identity, ServiceAccount):
        output.emit(f"Service account {identity.name} is accessed with token {identity.token}")
    else:
        output.emit(f"Identity {identity.name} authenticates with a client certificate, not a token")
    return identity


def accept_service_account_from_user(reader: LineReader, output: OutputSink) -> ServiceAccount:
    """
    Prompt for a pasted token and a display name.

    Raises:
        InputError if no token is given or it cannot be read.
    """
    output.emit("\nPaste the service account token and hit ENTER:")
    token = reader.read_line()
    if not token:
        raise InputError("No token provided")

    output.emit("\nWhat do you want to name this service account?")
    try:
        name = reader.read_line()
    except InputError as exc:
        logger.debug("could not read service account name: %s", exc)
        name = ""

    return ServiceAccount(
        name=name or "Unnamed",
        token=token,
        discovered_at=datetime.now(timezone.utc),
        discovery_method=DiscoveryMethod.USER_INPUT,
    )


def fetch_secret_token(
        registry: IdentityRegistry,
        context: ConnectionContext,
        runner: RemoteQueryRunner,
        reader: LineReader,
        output: OutputSink,
) -> bool:
    """
    Ask for a secret name, fetch it with the bound identity and import its token.

    Returns:
        True if a new identity was added.

    Raises:
        InputError
        DecodeError
        UnsupportedSecretTypeError
        whatever the runner raises for a failed fetch
    """
    output.emit("\nPlease enter the name of the secret for which you'd like the contents: ")
    name = reader.read_line()
    if not name:
        raise InputError("No secret name provided")

    raw, _ = runner.run(context, "get", "secret", name, "-o", "json")
    added = import_token_from_secret_payload(raw, registry, name=name)
    if added:
        output.emit(f"[+] Saved {name}")
    else:
        output.emit(f"[-] Already have a service account named {name}")
    return added


def print_token_claims(
        token: str,
        output: OutputSink,
        *,
        log_to_file: bool = False,
        output_file: Optional[str] = None,
) -> None:
    """
    Show every claim of a token, unverified.

    Raises:
        MalformedTokenError
    """
    claims = decode_claims(token)
    output.emit(format_claims(claims), log_to_file, output_file)
