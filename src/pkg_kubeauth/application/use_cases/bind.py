from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.constants import DEFAULT_NAMESPACE
from ...domain.entities import (
    CertificateCredential,
    ClientCertificateKeyPair,
    ConnectionContext,
    Identity,
    ServiceAccount,
    TokenCredential,
)
from ...domain.ports import CAFileWriter


@dataclass(slots=True)
class ConnectionBinder:
    """
    Application use case: make one identity the active credential.

    Each bind replaces the whole credential slot of the context, so the
    other credential kind is cleared in the same assignment.
    """

    ca_writer: CAFileWriter
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def bind_token_identity(self, identity: ServiceAccount, context: ConnectionContext) -> None:
        context.credential = TokenCredential(name=identity.name, token=identity.token)
        self.logger.debug("bound service account token %s", identity.name)

    def bind_certificate_identity(
            self,
            keypair: ClientCertificateKeyPair,
            context: ConnectionContext,
    ) -> None:
        """
        Raises:
            ResourceError if the CA material cannot be persisted; the
            context is left untouched in that case.
        """
        ca_path = self.ca_writer.write(keypair.ca_certificate_data)

        context.ca_path = ca_path
        context.api_server = keypair.api_server
        context.namespace = DEFAULT_NAMESPACE
        context.credential = CertificateCredential(
            name=keypair.name,
            client_certificate_data=keypair.client_certificate_data,
            client_key_data=keypair.client_key_data,
        )
        self.logger.debug("switching API server to: %s", keypair.api_server)

    def bind(self, identity: Identity, context: ConnectionContext) -> None:
        """Dispatch to the bind operation for the identity's kind."""
        if isinstance(identity, ClientCertificateKeyPair):
            self.bind_certificate_identity(identity, context)
        else:
            self.bind_token_identity(identity, context)
