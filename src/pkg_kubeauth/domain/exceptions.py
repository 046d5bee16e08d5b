class KubeAuthError(Exception):
    """Base class for credential identity errors."""
    pass


class MalformedTokenError(KubeAuthError):
    """Raised when a token is structurally invalid or lacks required claims."""

    def __init__(self, reason: str, detail: str | None = None) -> None:
        self.reason = reason
        message = f"Malformed token: {reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DecodeError(KubeAuthError):
    """Raised when base64 or JSON content cannot be decoded."""
    pass


class UnsupportedSecretTypeError(KubeAuthError):
    """Raised when a secret is not a service account token."""

    def __init__(self, secret_type: object) -> None:
        self.secret_type = secret_type
        super().__init__(f"Secret type {secret_type!r} is not a service account token")


class InputError(KubeAuthError):
    """Raised when user input cannot be read or is unusable."""
    pass


class ResourceError(KubeAuthError, OSError):
    """Raised when a local resource (e.g. a CA temp file) cannot be created."""
    pass
