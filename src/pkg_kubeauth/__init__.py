"""
pkg_kubeauth

Credential identity and binding core for tools that talk to a Kubernetes
control plane with either a service account token or a client
certificate/key pair. Tokens are decoded without signature verification.
"""

__version__ = "0.1.0"

from .domain.entities import (
    ServiceAccount,
    ClientCertificateKeyPair,
    Identity,
    ConnectionContext,
    TokenCredential,
    CertificateCredential,
    make_certificate_identity,
)
from .domain.constants import CredentialKind, DiscoveryMethod
from .domain.exceptions import (
    KubeAuthError,
    MalformedTokenError,
    DecodeError,
    UnsupportedSecretTypeError,
    InputError,
    ResourceError,
)
from .domain.value_objects import ServiceAccountClaims
from .domain.ports import ClaimsDecoder, LineReader, OutputSink, RemoteQueryRunner, CAFileWriter

from .application.use_cases.claims import (
    decode_claims,
    decode_service_account_claims,
    decode_subject_only,
)
from .application.use_cases.registry import IdentityRegistry
from .application.use_cases.bind import ConnectionBinder
from .application.use_cases.import_secret import import_token_from_secret_payload
from .application.use_cases.prompts import (
    select_identity,
    display_identity_token,
    accept_service_account_from_user,
    fetch_secret_token,
    print_token_claims,
)

from .adapters.jwt.unverified_decoder import UnverifiedJWTDecoder, format_claims
from .adapters.files.ca_writer import TempCAFileWriter
from .adapters.console.io import StreamLineReader, ConsoleOutput

from .integrations.common.session import CredentialSession, create_session
from .settings import KubeAuthSettings, settings_from_env

__all__ = [
    "__version__",
    # domain core
    "ServiceAccount",
    "ClientCertificateKeyPair",
    "Identity",
    "ConnectionContext",
    "TokenCredential",
    "CertificateCredential",
    "make_certificate_identity",
    "CredentialKind",
    "DiscoveryMethod",
    "ServiceAccountClaims",
    "ClaimsDecoder",
    "LineReader",
    "OutputSink",
    "RemoteQueryRunner",
    "CAFileWriter",
    # exceptions
    "KubeAuthError",
    "MalformedTokenError",
    "DecodeError",
    "UnsupportedSecretTypeError",
    "InputError",
    "ResourceError",
    # use cases
    "decode_claims",
    "decode_service_account_claims",
    "decode_subject_only",
    "IdentityRegistry",
    "ConnectionBinder",
    "import_token_from_secret_payload",
    "select_identity",
    "display_identity_token",
    "accept_service_account_from_user",
    "fetch_secret_token",
    "print_token_claims",
    # adapters
    "UnverifiedJWTDecoder",
    "format_claims",
    "TempCAFileWriter",
    "StreamLineReader",
    "ConsoleOutput",
    # facade
    "CredentialSession",
    "create_session",
    "KubeAuthSettings",
    "settings_from_env",
]
