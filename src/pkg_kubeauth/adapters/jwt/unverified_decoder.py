import binascii
import json
import logging
from typing import Any, Mapping, Optional

from jwt.utils import base64url_decode

from ...domain.constants import (
    BAD_ENCODING,
    BAD_PAYLOAD,
    WRONG_SEGMENT_COUNT,
)
from ...domain.exceptions import MalformedTokenError
from ...domain.ports import ClaimsDecoder


class UnverifiedJWTDecoder(ClaimsDecoder):
    """
    Adapter implementing ClaimsDecoder port using PyJWT's segment codec.

    Infrastructure layer:
    - Knows the three-segment compact JWS structure.
    - Reads the payload segment only; header and signature are never
      decoded, so signatures are never verified. Callers must not treat
      the claims as trust-asserting.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def decode(self, token: str) -> Mapping[str, Any]:
        """
        Decode the payload segment of a compact JWT into a claims mapping.

        Raises:
            MalformedTokenError with reason one of
            "wrong segment count", "bad encoding", "bad payload".
        """
        parts = token.strip().split(".")
        if len(parts) != 3:
            raise MalformedTokenError(WRONG_SEGMENT_COUNT)

        try:
            raw = base64url_decode(parts[1])
        except (binascii.Error, ValueError) as exc:
            self._logger.debug("token payload segment rejected: %s", exc)
            raise MalformedTokenError(BAD_ENCODING, str(exc)) from exc

        try:
            claims = json.loads(raw)
        except ValueError as exc:
            raise MalformedTokenError(BAD_PAYLOAD, str(exc)) from exc

        if not isinstance(claims, dict):
            raise MalformedTokenError(BAD_PAYLOAD, "payload is not a JSON object")
        return claims


def format_claims(claims: Mapping[str, Any]) -> str:
    """Render claims as indented JSON for display."""
    return json.dumps(dict(claims), indent=2, sort_keys=True, default=str)
