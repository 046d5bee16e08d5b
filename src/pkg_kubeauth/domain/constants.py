from enum import Enum


# Secret type tag for secrets holding a service account token.
SERVICE_ACCOUNT_TOKEN_SECRET_TYPE = "kubernetes.io/service-account-token"  # nosec B105

DEFAULT_NAMESPACE = "default"

# Typed at the selection prompt to leave without binding anything.
ABORT_SELECTION = "exit"

CA_FILE_SUFFIX = "-ca.crt"


class DiscoveryMethod(str, Enum):
    USER_INPUT = "user input"
    CLUSTER_SECRET = "cluster secret"
    FILE_ON_DISK = "file on disk"


class CredentialKind(Enum):
    TOKEN = "token"
    CLIENT_CERTIFICATE = "client_certificate"


# Reasons carried by MalformedTokenError.
WRONG_SEGMENT_COUNT = "wrong segment count"
BAD_ENCODING = "bad encoding"
BAD_PAYLOAD = "bad payload"
MISSING_SUBJECT = "missing subject"
MISSING_CLAIMS = "missing claims"
