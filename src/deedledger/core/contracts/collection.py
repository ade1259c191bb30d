"""
Deed collection: the caller-facing layer over a DeedLedger.

Adds what the ledger deliberately leaves out:
- Collection metadata (name, symbol, deed URIs, fallback display names)
- Interface discovery over the four capability groups
- Admin-gated minting
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..address import normalize_address
from ..config import LedgerConfig
from ..exceptions import NotOwnerError, ValidationError
from .interfaces import (
    CAPABILITY_GROUPS,
    INVALID_INTERFACE_ID,
    keccak256,
    to_interface_bytes,
)
from .ledger import DeedLedger
from .metadata import DeedMetadata

logger = logging.getLogger(__name__)


class DeedCollection:
    """
    A named collection of deeds.

    Reads, approvals and transfers go straight to ``self.ledger``; this class
    owns minting policy and metadata.
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        admin: str,
        base_uri: str = "",
        config: Optional[LedgerConfig] = None,
    ) -> None:
        if not name:
            raise ValidationError("Collection name cannot be empty")
        if not symbol:
            raise ValidationError("Collection symbol cannot be empty")

        self.admin = normalize_address(admin)
        self.metadata = DeedMetadata(name=name, symbol=symbol, base_uri=base_uri)
        self.ledger = DeedLedger(config)

        addr_hash = keccak256(f"{name}:{symbol}:{self.admin}".encode())
        self.address = f"0x{addr_hash[-20:].hex()}"

        logger.info(
            "Deed collection created",
            extra={
                "event": "deed.collection_created",
                "address": self.address,
                "name": name,
                "symbol": symbol,
                "admin": self.admin[:10],
            },
        )

    # ==================== Metadata ====================

    def name(self) -> str:
        return self.metadata.name

    def symbol(self) -> str:
        return self.metadata.symbol

    def token_uri(self, token_id: int) -> str:
        """Metadata URI of an existing deed ("" when none is configured)."""
        self.ledger.owner_of(token_id)
        return self.metadata.deed_uri(token_id)

    def token_name(self, token_id: int) -> str:
        """Display name of an existing deed, e.g. ``"Parcels #7"``."""
        self.ledger.owner_of(token_id)
        return self.metadata.deed_name(token_id)

    def supports_interface(self, interface_id: bytes | str | int) -> bool:
        try:
            interface = to_interface_bytes(interface_id)
        except (TypeError, ValueError):
            return False
        if interface == INVALID_INTERFACE_ID:
            return False
        return interface in CAPABILITY_GROUPS.values()

    # ==================== Minting & Burning ====================

    def mint(
        self,
        minter: str,
        to: str,
        token_id: Optional[int] = None,
        uri: str = "",
    ) -> int:
        """
        Mint a new deed into this collection.

        Args:
            minter: Address calling mint (must be the collection admin)
            to: Recipient address
            token_id: Optional specific deed id
            uri: Optional deed-specific metadata URI

        Returns:
            Minted deed id
        """
        self._require_admin(minter)
        token_id = self.ledger.mint(to, token_id)
        if uri:
            self.metadata.token_uris[token_id] = uri
        return token_id

    def burn(self, caller: str, token_id: int) -> bool:
        """Burn a deed held by ``caller`` and forget its URI."""
        self.ledger.burn(caller, token_id)
        self.metadata.token_uris.pop(token_id, None)
        return True

    # ==================== Admin Functions ====================

    def set_base_uri(self, caller: str, base_uri: str) -> bool:
        self._require_admin(caller)
        self.metadata.base_uri = base_uri
        return True

    def set_token_uri(self, caller: str, token_id: int, uri: str) -> bool:
        self._require_admin(caller)
        self.ledger.owner_of(token_id)
        self.metadata.token_uris[token_id] = uri
        return True

    def _require_admin(self, caller: str) -> None:
        if normalize_address(caller) != self.admin:
            raise NotOwnerError(
                "Caller is not collection admin",
                details={"collection": self.address, "caller": caller},
            )

    # ==================== Serialization ====================

    def to_dict(self) -> dict[str, Any]:
        """Collection summary."""
        return {
            "address": self.address,
            "name": self.metadata.name,
            "symbol": self.metadata.symbol,
            "base_uri": self.metadata.base_uri,
            "admin": self.admin,
            "count_of_tokens": self.ledger.count_of_tokens(),
            "count_of_owners": self.ledger.count_of_owners(),
            "capabilities": {
                group: "0x" + interface.hex() for group, interface in CAPABILITY_GROUPS.items()
            },
        }
