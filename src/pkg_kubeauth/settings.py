from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .domain.constants import DEFAULT_NAMESPACE


@dataclass(slots=True)
class KubeAuthSettings:
    """
    Runtime settings for the credential core.

    Host code decides how to construct this (env, config file, etc.).
    """
    verbose: bool = False

    # Mirror listings into an append-only file
    log_to_file: bool = False
    output_file: Optional[str] = None

    # Where CA temp files go (None: the platform temp dir)
    ca_dir: Optional[str] = None

    # Namespace of a freshly created context only; a client certificate
    # bind always switches the context to "default".
    default_namespace: str = DEFAULT_NAMESPACE


def settings_from_env() -> KubeAuthSettings:
    def _bool(key: str, default: bool = False) -> bool:
        raw = os.getenv(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _str(key: str) -> Optional[str]:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return None
        return raw.strip()

    return KubeAuthSettings(
        verbose=_bool("KUBEAUTH_VERBOSE"),
        log_to_file=_bool("KUBEAUTH_LOG_TO_FILE"),
        output_file=_str("KUBEAUTH_OUTPUT_FILE"),
        ca_dir=_str("KUBEAUTH_CA_DIR"),
        default_namespace=_str("KUBEAUTH_DEFAULT_NAMESPACE") or DEFAULT_NAMESPACE,
    )
