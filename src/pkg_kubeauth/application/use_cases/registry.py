from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional

from ...domain.entities import ClientCertificateKeyPair, Identity, ServiceAccount


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class IdentityRegistry:
    """
    Ordered collection of known identities of both kinds.

    `add_identity` is the only write path for token identities and never
    updates or removes an existing entry.
    """

    identities: List[Identity] = field(default_factory=list)
    clock: Callable[[], datetime] = _utcnow
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def __len__(self) -> int:
        return len(self.identities)

    def __iter__(self) -> Iterator[Identity]:
        return iter(self.identities)

    def __getitem__(self, index: int) -> Identity:
        return self.identities[index]

    # --- writes -----------------------------------------------------------

    def add_identity(self, name: str, token: str, discovery_method: str) -> bool:
        """
        Register a bearer-token identity unless its trimmed name is taken.

        Returns:
            True if added, False if it was a duplicate (registry untouched).
        """
        if self.find(name) is not None:
            self.logger.debug("found a service account token we already had: %s", name.strip())
            return False

        self.identities.append(
            ServiceAccount(
                name=name,
                token=token,
                discovered_at=self.clock(),
                discovery_method=discovery_method,
            )
        )
        self.logger.debug("registered service account %s (%s)", name.strip(), discovery_method)
        return True

    def add_certificate_identity(self, keypair: ClientCertificateKeyPair) -> None:
        # certificate names are advisory; no dedupe
        self.identities.append(keypair)

    # --- reads ------------------------------------------------------------

    def find(self, name: str) -> Optional[Identity]:
        wanted = name.strip()
        return next((i for i in self.identities if i.name.strip() == wanted), None)

    def service_accounts(self) -> List[ServiceAccount]:
        return [i for i in self.identities if isinstance(i, ServiceAccount)]

    def certificates(self) -> List[ClientCertificateKeyPair]:
        return [i for i in self.identities if isinstance(i, ClientCertificateKeyPair)]

    def list_identities(self, active_name: str) -> List[str]:
        """
        One labeled line per identity, "> " marking the active token identity.

        Certificate identities are never marked, even when one is bound.
        """
        lines: List[str] = []
        for index, identity in enumerate(self.identities):
            if isinstance(identity, ClientCertificateKeyPair):
                lines.append(f"  [{index}] {identity.name} (client certificate)")
            elif identity.name == active_name:
                lines.append(f"> [{index}] {identity.name}")
            else:
                lines.append(f"  [{index}] {identity.name}")
        return lines
