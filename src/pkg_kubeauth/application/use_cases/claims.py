from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ...adapters.jwt.unverified_decoder import UnverifiedJWTDecoder
from ...domain.constants import MISSING_CLAIMS, MISSING_SUBJECT
from ...domain.exceptions import MalformedTokenError
from ...domain.ports import ClaimsDecoder
from ...domain.value_objects import ServiceAccountClaims, qualify


# Claim namespace Kubernetes uses for bound service account tokens.
KUBERNETES_CLAIM = "kubernetes.io"


_default_decoder = UnverifiedJWTDecoder()


def decode_claims(token: str, decoder: Optional[ClaimsDecoder] = None) -> Mapping[str, Any]:
    """All payload claims, unverified."""
    return (decoder or _default_decoder).decode(token)


def decode_service_account_claims(
        token: str,
        decoder: Optional[ClaimsDecoder] = None,
) -> ServiceAccountClaims:
    """
    Read expiration and `namespace:name` from a service account token.

    A bound token payload looks like:

        {
          "exp": 1725391365,
          "kubernetes.io": {
            "namespace": "default",
            "serviceaccount": {"name": "default", "uid": "..."},
            ...
          },
          "sub": "system:serviceaccount:default:default"
        }

    Raises:
        MalformedTokenError
    """
    claims = decode_claims(token, decoder)

    exp = claims.get("exp")
    # bool is an int subclass; neither it nor inf/NaN is a valid expiry
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise MalformedTokenError(MISSING_CLAIMS, "exp")
    if isinstance(exp, float) and not math.isfinite(exp):
        raise MalformedTokenError(MISSING_CLAIMS, "exp")

    kube = claims.get(KUBERNETES_CLAIM)
    if not isinstance(kube, Mapping):
        raise MalformedTokenError(MISSING_CLAIMS, KUBERNETES_CLAIM)

    namespace = kube.get("namespace")
    if not isinstance(namespace, str):
        raise MalformedTokenError(MISSING_CLAIMS, f"{KUBERNETES_CLAIM}.namespace")

    service_account = kube.get("serviceaccount")
    name = service_account.get("name") if isinstance(service_account, Mapping) else None
    if not isinstance(name, str):
        raise MalformedTokenError(MISSING_CLAIMS, f"{KUBERNETES_CLAIM}.serviceaccount.name")

    return ServiceAccountClaims(expiration=int(exp), qualified_name=qualify(namespace, name))


def decode_subject_only(token: str, decoder: Optional[ClaimsDecoder] = None) -> str:
    """
    Return the generic `sub` claim.

    Raises:
        MalformedTokenError
    """
    claims = decode_claims(token, decoder)
    sub = claims.get("sub")
    if not isinstance(sub, str):
        raise MalformedTokenError(MISSING_SUBJECT)
    return sub
