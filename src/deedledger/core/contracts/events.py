"""Ledger notifications."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Callable

TRANSFER = "Transfer"
APPROVAL = "Approval"


@dataclass(frozen=True)
class DeedEvent:
    """
    Represents a ledger notification.

    Transfer: from_address -> to_address (zero address on mint/burn).
    Approval: from_address is the owner, to_address the approved address
    (zero address when the approval is cleared).
    """

    event_type: str  # "Transfer", "Approval"
    from_address: str
    to_address: str
    token_id: int

    def to_dict(self) -> dict:
        return asdict(self)


EventListener = Callable[[DeedEvent], None]
