"""
Deed Ledger Contracts.

This module provides:
- DeedLedger: token store, owner index, approval registry and counters
  composed into the mint / burn / approve / take_ownership state machine
- DeedCollection: metadata and interface discovery over a ledger
- Capability group identifiers for interface discovery
"""

from .collection import DeedCollection
from .counters import AggregateCounters
from .events import APPROVAL, TRANSFER, DeedEvent
from .interfaces import (
    CAPABILITY_GROUPS,
    DEED_CORE,
    DEED_ENUMERABLE,
    DEED_METADATA,
    INTROSPECTION,
    interface_id,
    selector,
)
from .ledger import DeedLedger
from .metadata import DeedMetadata, render_token_id

__all__ = [
    # Ledger
    "DeedLedger",
    "AggregateCounters",
    "DeedEvent",
    "TRANSFER",
    "APPROVAL",
    # Collection layer
    "DeedCollection",
    "DeedMetadata",
    "render_token_id",
    # Interface discovery
    "CAPABILITY_GROUPS",
    "INTROSPECTION",
    "DEED_CORE",
    "DEED_METADATA",
    "DEED_ENUMERABLE",
    "selector",
    "interface_id",
]
