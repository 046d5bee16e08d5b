from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union

from .constants import CredentialKind, DEFAULT_NAMESPACE


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ServiceAccount:
    """
    A discovered bearer-token identity.

    `name` is a display label; the registry keeps it unique after trimming.
    """
    name: str
    token: str
    discovered_at: datetime = field(default_factory=_utcnow)
    discovery_method: str = ""

    @property
    def kind(self) -> CredentialKind:
        return CredentialKind.TOKEN


@dataclass(slots=True)
class ClientCertificateKeyPair:
    """
    A client certificate + key identity for one principal.

    Certificate, key and CA material are held as in-memory PEM strings, not
    file paths. No PEM validation happens here; that belongs to whatever
    transport consumes the pair.
    """
    name: str
    client_certificate_data: str
    client_key_data: str
    api_server: str
    ca_certificate_data: str

    @property
    def kind(self) -> CredentialKind:
        return CredentialKind.CLIENT_CERTIFICATE


Identity = Union[ServiceAccount, ClientCertificateKeyPair]


def make_certificate_identity(
        name: str,
        client_certificate_data: str,
        client_key_data: str,
        api_server: str,
        ca_certificate_data: str,
) -> ClientCertificateKeyPair:
    return ClientCertificateKeyPair(
        name=name,
        client_certificate_data=client_certificate_data,
        client_key_data=client_key_data,
        api_server=api_server,
        ca_certificate_data=ca_certificate_data,
    )


# --- Active credential (tagged union) ------------------------------------


@dataclass(frozen=True, slots=True)
class TokenCredential:
    name: str
    token: str


@dataclass(frozen=True, slots=True)
class CertificateCredential:
    name: str
    client_certificate_data: str
    client_key_data: str


ActiveCredential = Union[TokenCredential, CertificateCredential]


@dataclass(slots=True)
class ConnectionContext:
    """
    The shared record describing which credential talks to the cluster.

    Only one credential kind can be active: `credential` holds either a
    TokenCredential or a CertificateCredential (or nothing yet). The flat
    accessors below read as "" for whichever kind is not active.

    `api_server`, `ca_path` and `namespace` describe the connection itself
    and survive a switch to a token credential.
    """
    api_server: str = ""
    ca_path: str = ""
    namespace: str = DEFAULT_NAMESPACE
    credential: Optional[ActiveCredential] = None

    @property
    def kind(self) -> Optional[CredentialKind]:
        if isinstance(self.credential, TokenCredential):
            return CredentialKind.TOKEN
        if isinstance(self.credential, CertificateCredential):
            return CredentialKind.CLIENT_CERTIFICATE
        return None

    # --- token kind ---------------------------------------------------------

    @property
    def token_name(self) -> str:
        if isinstance(self.credential, TokenCredential):
            return self.credential.name
        return ""

    @property
    def token(self) -> str:
        if isinstance(self.credential, TokenCredential):
            return self.credential.token
        return ""

    # --- client certificate kind --------------------------------------------

    @property
    def client_cert_name(self) -> str:
        if isinstance(self.credential, CertificateCredential):
            return self.credential.name
        return ""

    @property
    def client_cert_data(self) -> str:
        if isinstance(self.credential, CertificateCredential):
            return self.credential.client_certificate_data
        return ""

    @property
    def client_key_data(self) -> str:
        if isinstance(self.credential, CertificateCredential):
            return self.credential.client_key_data
        return ""
