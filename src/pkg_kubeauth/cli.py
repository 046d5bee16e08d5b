# src/pkg_kubeauth/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .application.use_cases.claims import (
    decode_claims,
    decode_service_account_claims,
    decode_subject_only,
)
from .application.use_cases.import_secret import (
    extract_service_account_token,
    parse_secret,
    secret_name,
)
from .domain.exceptions import KubeAuthError
from .settings import KubeAuthSettings, settings_from_env


def configure_logging(settings: KubeAuthSettings) -> None:
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if settings.verbose else logging.WARNING,
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-kubeauth",
        description="Inspect service account tokens and token secrets (no signature verification)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging to stderr (also enabled by KUBEAUTH_VERBOSE).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    claims = sub.add_parser("claims", help="Print every claim of a token.")
    claims.add_argument("token", help="Compact JWT, or - to read it from stdin.")

    whoami = sub.add_parser("whoami", help="Print expiration and namespace:name of a service account token.")
    whoami.add_argument("token", help="Compact JWT, or - to read it from stdin.")

    subject = sub.add_parser("subject", help="Print the sub claim of a token.")
    subject.add_argument("token", help="Compact JWT, or - to read it from stdin.")

    secret = sub.add_parser("secret-token", help="Decode the token held in a secret JSON document.")
    secret.add_argument("file", help="Secret JSON file, or - for stdin.")

    return parser.parse_args(args=argv)


def _read_token(value: str) -> str:
    if value == "-":
        return sys.stdin.read().strip()
    return value.strip()


def _read_secret(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()


def _run(args: argparse.Namespace) -> dict[str, Any]:
    if args.command == "claims":
        return {"claims": dict(decode_claims(_read_token(args.token)))}

    if args.command == "whoami":
        result = decode_service_account_claims(_read_token(args.token))
        return {"expiration": result.expiration, "service_account": result.qualified_name}

    if args.command == "subject":
        return {"subject": decode_subject_only(_read_token(args.token))}

    if args.command == "secret-token":
        secret = parse_secret(_read_secret(args.file))
        return {"name": secret_name(secret), "token": extract_service_account_token(secret)}

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = settings_from_env()
    if args.verbose:
        settings.verbose = True
    configure_logging(settings)

    try:
        summary = _run(args)
    except (KubeAuthError, OSError) as exc:
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 1

    json.dump({"ok": True, **summary}, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
