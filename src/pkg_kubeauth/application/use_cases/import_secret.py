from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Mapping, Optional, Union

from ...domain.constants import DiscoveryMethod, SERVICE_ACCOUNT_TOKEN_SECRET_TYPE
from ...domain.exceptions import DecodeError, UnsupportedSecretTypeError
from .registry import IdentityRegistry


def parse_secret(secret_json: Union[bytes, str, Mapping[str, Any]]) -> Mapping[str, Any]:
    """Load a secret document; already-parsed mappings pass through."""
    if isinstance(secret_json, Mapping):
        return secret_json
    try:
        secret = json.loads(secret_json)
    except (ValueError, TypeError) as exc:
        raise DecodeError(f"Secret is not valid JSON: {exc}") from exc
    if not isinstance(secret, dict):
        raise DecodeError("Secret JSON is not an object")
    return secret


def extract_service_account_token(secret: Mapping[str, Any]) -> str:
    """
    Validate the secret's type tag and base64-decode its `data.token`.

    The token field uses the standard base64 alphabet, unlike JWT segments.

    Raises:
        UnsupportedSecretTypeError
        DecodeError
    """
    secret_type = secret.get("type")
    if secret_type != SERVICE_ACCOUNT_TOKEN_SECRET_TYPE:
        raise UnsupportedSecretTypeError(secret_type)

    data = secret.get("data")
    encoded = data.get("token") if isinstance(data, Mapping) else None
    if not isinstance(encoded, str):
        raise DecodeError("Secret has no data.token field")

    try:
        raw = base64.b64decode(encoded, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Could not decode secret token: {exc}") from exc


def secret_name(secret: Mapping[str, Any]) -> str:
    metadata = secret.get("metadata")
    name = metadata.get("name") if isinstance(metadata, Mapping) else None
    if not isinstance(name, str) or not name.strip():
        raise DecodeError("Secret has no metadata.name field")
    return name


def import_token_from_secret_payload(
        secret_json: Union[bytes, str, Mapping[str, Any]],
        registry: IdentityRegistry,
        name: Optional[str] = None,
) -> bool:
    """
    Import the service account token held in a secret into the registry.

    `name` defaults to the secret's metadata.name.

    Returns:
        True if a new identity was added, False if the name was a duplicate.

    Raises:
        DecodeError
        UnsupportedSecretTypeError
    """
    secret = parse_secret(secret_json)
    token = extract_service_account_token(secret)
    identity_name = name if name is not None else secret_name(secret)
    return registry.add_identity(identity_name, token, DiscoveryMethod.CLUSTER_SECRET)
