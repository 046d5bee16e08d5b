from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ...adapters.files.ca_writer import TempCAFileWriter
from ...application.use_cases.bind import ConnectionBinder
from ...application.use_cases.import_secret import import_token_from_secret_payload
from ...application.use_cases.prompts import (
    accept_service_account_from_user,
    fetch_secret_token,
    select_identity,
)
from ...application.use_cases.registry import IdentityRegistry
from ...domain.entities import (
    ClientCertificateKeyPair,
    ConnectionContext,
    Identity,
    make_certificate_identity,
)
from ...domain.ports import LineReader, OutputSink, RemoteQueryRunner
from ...settings import KubeAuthSettings


@dataclass(slots=True)
class CredentialSession:
    """
    Framework-agnostic facade over the registry, the context and the binder.

    One re-entrant lock guards every call that reads or mutates the
    registry or the context, so concurrent callers can never observe a
    half-applied bind.
    """

    registry: IdentityRegistry
    context: ConnectionContext
    binder: ConnectionBinder
    settings: KubeAuthSettings = field(default_factory=KubeAuthSettings)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    # --- Registry ---------------------------------------------------------

    def add_identity(self, name: str, token: str, discovery_method: str) -> bool:
        with self._lock:
            return self.registry.add_identity(name, token, discovery_method)

    def add_certificate_identity(
            self,
            name: str,
            client_certificate_data: str,
            client_key_data: str,
            api_server: str,
            ca_certificate_data: str,
    ) -> ClientCertificateKeyPair:
        keypair = make_certificate_identity(
            name, client_certificate_data, client_key_data, api_server, ca_certificate_data
        )
        with self._lock:
            self.registry.add_certificate_identity(keypair)
        return keypair

    def list_identities(self) -> list[str]:
        with self._lock:
            return self.registry.list_identities(self.context.token_name)

    def import_secret(
            self,
            secret_json: Union[bytes, str, Mapping[str, Any]],
            name: Optional[str] = None,
    ) -> bool:
        with self._lock:
            return import_token_from_secret_payload(secret_json, self.registry, name=name)

    # --- Binding ----------------------------------------------------------

    def bind(self, identity: Identity) -> None:
        with self._lock:
            self.binder.bind(identity, self.context)

    # --- Interactive flows ------------------------------------------------

    def switch_identity(self, reader: LineReader, output: OutputSink) -> Optional[Identity]:
        with self._lock:
            return select_identity(
                self.registry,
                self.context,
                self.binder,
                reader,
                output,
                log_to_file=self.settings.log_to_file,
                output_file=self.settings.output_file,
            )

    def prompt_for_token(self, reader: LineReader, output: OutputSink) -> bool:
        account = accept_service_account_from_user(reader, output)
        return self.add_identity(account.name, account.token, account.discovery_method)

    def import_secret_from_cluster(
            self,
            runner: RemoteQueryRunner,
            reader: LineReader,
            output: OutputSink,
    ) -> bool:
        with self._lock:
            return fetch_secret_token(self.registry, self.context, runner, reader, output)


def create_session(
        settings: Optional[KubeAuthSettings] = None,
        *,
        context: Optional[ConnectionContext] = None,
        logger: Optional[logging.Logger] = None,
) -> CredentialSession:
    """
    High-level factory: settings -> CredentialSession.

    - builds a TempCAFileWriter rooted at settings.ca_dir
    - wires the registry and binder with the given logger
    - uses the caller's context when the application already owns one
    """
    settings = settings or KubeAuthSettings()
    log = logger or logging.getLogger("pkg_kubeauth")

    registry = IdentityRegistry(logger=log)
    binder = ConnectionBinder(
        ca_writer=TempCAFileWriter(directory=settings.ca_dir, logger=log),
        logger=log,
    )
    if context is None:
        context = ConnectionContext(namespace=settings.default_namespace)

    return CredentialSession(
        registry=registry,
        context=context,
        binder=binder,
        settings=settings,
    )
