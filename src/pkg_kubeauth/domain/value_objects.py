# src/pkg_kubeauth/domain/value_objects.py

from __future__ import annotations

from typing import NamedTuple


class ServiceAccountClaims(NamedTuple):
    """
    Expiration and namespace-qualified name read from a service account token.

    Derived from unverified claims; never treat it as proof of identity.
    """
    expiration: int
    qualified_name: str

    @property
    def namespace(self) -> str:
        return self.qualified_name.partition(":")[0]

    @property
    def name(self) -> str:
        return self.qualified_name.partition(":")[2]


def qualify(namespace: str, name: str) -> str:
    return f"{namespace}:{name}"
