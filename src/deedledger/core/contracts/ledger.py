"""
Deed Ledger: ownership registry for uniquely identified, non-fungible deeds.

This module composes the token store, owner index, approval registry and
aggregate counters into the ledger state machine:
- Minting and burning
- Single-recipient transfer authorization (approve / take_ownership)
- Enumeration of all deeds and all owners without external bookkeeping

Execution model:
- Mutating operations are serialized per ledger instance
- A nested operation on the same instance raises ReentrancyError
- A failed operation leaves no trace: every write is journaled and undone
"""

from __future__ import annotations

import functools
import logging
from threading import RLock
from typing import Any, Optional

from ..address import ZERO_ADDRESS, normalize_address, normalize_optional, to_wire
from ..config import LedgerConfig
from ..exceptions import (
    AlreadyExistsError,
    InsufficientFeeError,
    InvalidAddressError,
    InvalidRecipientError,
    InvariantViolationError,
    NotApprovedError,
    NotFoundError,
    NotOwnerError,
    ReentrancyError,
    SelfTransferError,
    ValidationError,
)
from ..journal import Journal
from .approvals import ApprovalRegistry
from .counters import AggregateCounters
from .events import TRANSFER, DeedEvent, EventListener
from .owner_index import OwnerIndex
from .token_store import TokenStore

logger = logging.getLogger(__name__)


def ledger_operation(func):
    """Run a mutating ledger method as one serialized, all-or-nothing unit."""

    @functools.wraps(func)
    def wrapper(self: "DeedLedger", *args, **kwargs):
        with self._lock:
            if self._in_operation:
                raise ReentrancyError(
                    f"{func.__name__} entered while another ledger operation is running",
                    details={"operation": func.__name__},
                )
            self._in_operation = True
            try:
                result = func(self, *args, **kwargs)
            except BaseException as exc:
                undone = self._journal.rollback()
                logger.debug(
                    "Deed ledger operation rejected",
                    extra={
                        "event": "deed.rejected",
                        "operation": func.__name__,
                        "error_type": type(exc).__name__,
                        "writes_undone": undone,
                    },
                )
                raise
            else:
                self._journal.commit()
                return result
            finally:
                self._in_operation = False

    return wrapper


class DeedLedger:
    """
    Deed ownership ledger.

    State is owned exclusively by the instance. Callers identify themselves
    with the ``caller`` argument of each owner-gated operation.
    """

    def __init__(self, config: Optional[LedgerConfig] = None) -> None:
        self.config = config or LedgerConfig()
        self.counters = AggregateCounters()
        self.events: list[DeedEvent] = []

        self._journal = Journal()
        self._lock = RLock()
        self._in_operation = False
        self._listeners: list[EventListener] = []

        self._tokens = TokenStore(self._journal)
        self._index = OwnerIndex(self._journal, self.counters)
        self._approvals = ApprovalRegistry(self._journal, self._tokens, self._emit)

    # ==================== View Functions ====================

    def owner_of(self, token_id: int) -> str:
        """
        Get the owner of a deed.

        Raises:
            NotFoundError: If the deed has no owner
        """
        return self._tokens.owner_of(token_id)

    def exists(self, token_id: int) -> bool:
        return self._tokens.exists(token_id)

    def count_of_tokens(self) -> int:
        """Number of deeds that currently have an owner."""
        return self.counters.total_tokens

    def count_of_tokens_by_owner(self, owner: str) -> int:
        """
        Number of deeds held by ``owner``.

        Raises:
            NotFoundError: If owner is not a well-formed address
        """
        return self._index.count_of(_owner_key(owner))

    def token_of_owner_by_index(self, owner: str, index: int) -> int:
        """
        Get a deed id by owner and position in the owner's list.

        Raises:
            NotFoundError: If owner is malformed or index is out of bounds
        """
        return self._index.token_at(_owner_key(owner), index)

    def tokens_of(self, owner: str) -> tuple[int, ...]:
        """
        Deeds held by ``owner``. Order changes when the owner loses a deed.

        Raises:
            NotFoundError: If owner is not a well-formed address
        """
        return self._index.list_of(_owner_key(owner))

    def approved_for(self, token_id: int) -> Optional[str]:
        """
        Get the approved recipient of a deed, or None.

        Raises:
            NotFoundError: If the deed has no owner
        """
        self._tokens.owner_of(token_id)
        return self._approvals.approved_for(token_id)

    def count_of_owners(self) -> int:
        """Number of addresses holding at least one deed."""
        return self.counters.total_owners

    def token_by_global_index(self, index: int) -> int:
        """
        Map an enumeration index to a deed id.

        Ids are allocated densely, so the id space is the enumeration order
        and the mapping is the identity on ``[0, next_token_id)``. The
        returned id may have been burned since.

        Raises:
            NotFoundError: If index is outside the allocated id space
        """
        if not 0 <= index < self._tokens.next_token_id:
            raise NotFoundError(
                f"Deed index {index} out of bounds",
                details={"index": index, "next_token_id": self._tokens.next_token_id},
            )
        return index

    def owner_by_global_index(self, index: int) -> str:
        """
        Get the owner at ``index`` in the roster of current owners.

        Roster order is not stable: an owner that drops to zero deeds is
        replaced by the last owner in the roster.

        Raises:
            NotFoundError: If index >= count_of_owners()
        """
        return self._index.owner_at(index)

    @property
    def next_token_id(self) -> int:
        return self._tokens.next_token_id

    # ==================== State-Changing Functions ====================

    @ledger_operation
    def mint(self, to: str, token_id: Optional[int] = None) -> int:
        """
        Mint a new deed.

        A deed id is minted at most once: an id that has been burned
        cannot be minted again, explicitly or by allocation.

        Args:
            to: Recipient address
            token_id: Optional specific deed id; the next id in allocation
                order is used when omitted

        Returns:
            Minted deed id

        Raises:
            InvalidRecipientError: If ``to`` is the null address
            AlreadyExistsError: If the deed already has an owner or was burned
        """
        to_norm = normalize_optional(to)
        if to_norm is None:
            raise InvalidRecipientError("Mint to zero address", details={"token_id": token_id})

        if token_id is None:
            token_id = self._tokens.allocate_id()
        else:
            _require_token_id(token_id)
        if self._tokens.exists(token_id):
            raise AlreadyExistsError(
                f"Deed {token_id} already minted",
                details={"token_id": token_id, "owner": self._tokens.owner_of(token_id)},
            )
        if self._tokens.was_burned(token_id):
            raise AlreadyExistsError(
                f"Deed {token_id} was burned and cannot be minted again",
                details={"token_id": token_id, "burned": True},
            )

        self._index.add(to_norm, token_id)
        self._tokens.set_owner(token_id, to_norm)
        self._emit(DeedEvent(TRANSFER, ZERO_ADDRESS, to_norm, token_id))

        logger.info(
            "Deed mint",
            extra={
                "event": "deed.mint",
                "token_id": token_id,
                "to": to_norm[:10],
            },
        )
        return token_id

    @ledger_operation
    def burn(self, caller: str, token_id: int) -> bool:
        """
        Burn a deed, returning it to the unowned state.

        Args:
            caller: Message sender (must be the owner)
            token_id: Deed id to burn

        Raises:
            NotOwnerError: If caller is not the recorded owner
        """
        caller_norm = normalize_address(caller)
        owner = self._tokens.owner_or_none(token_id)
        if owner != caller_norm:
            raise NotOwnerError(
                "Burn caller is not owner",
                details={"token_id": token_id, "caller": caller_norm},
            )

        if self._approvals.approved_for(token_id) is not None:
            self._approvals.clear(owner, token_id)
        self._index.remove(owner, token_id)
        self._tokens.set_owner(token_id, None)
        self._emit(DeedEvent(TRANSFER, owner, ZERO_ADDRESS, token_id))

        logger.info(
            "Deed burn",
            extra={
                "event": "deed.burn",
                "token_id": token_id,
                "from": owner[:10],
            },
        )
        return True

    @ledger_operation
    def approve(
        self, caller: str, to: Optional[str], token_id: int, value: int = 0
    ) -> bool:
        """
        Approve an address to take ownership of a deed.

        Args:
            caller: Message sender (must be the owner)
            to: Address to approve; None or the zero address withdraws
            token_id: Deed id
            value: Payment attached to the call

        Raises:
            NotFoundError: If the deed has no owner
            NotOwnerError: If caller is not the owner
            InsufficientFeeError: If value is below the approval fee
            SelfApprovalError: If ``to`` is the owner
        """
        owner = self._tokens.owner_of(token_id)
        caller_norm = normalize_address(caller)
        if caller_norm != owner:
            raise NotOwnerError(
                "Approve caller is not owner",
                details={"token_id": token_id, "caller": caller_norm},
            )

        to_norm = normalize_optional(to)
        self._collect_fee(value, self.config.approval_fee, "approve")
        self._approvals.set_approval(owner, token_id, to_norm)

        logger.debug(
            "Deed approve",
            extra={
                "event": "deed.approve",
                "token_id": token_id,
                "approved": to_wire(to_norm)[:10],
            },
        )
        return True

    @ledger_operation
    def take_ownership(self, caller: str, token_id: int, value: int = 0) -> bool:
        """
        Transfer a deed to its approved recipient.

        Args:
            caller: Message sender (must be the approved address)
            token_id: Deed id
            value: Payment attached to the call

        Raises:
            NotFoundError: If the deed has no owner
            NotApprovedError: If caller is not the approved address
            SelfTransferError: If caller already owns the deed
            InsufficientFeeError: If value is below the transfer fee
        """
        owner = self._tokens.owner_of(token_id)
        caller_norm = normalize_address(caller)
        if self._approvals.approved_for(token_id) != caller_norm:
            raise NotApprovedError(
                "Caller is not approved for deed",
                details={"token_id": token_id, "caller": caller_norm},
            )

        self._collect_fee(value, self.config.transfer_fee, "take_ownership")
        self._transfer(owner, caller_norm, token_id)
        return True

    def _transfer(self, from_addr: str, to_addr: Optional[str], token_id: int) -> None:
        """Move a deed between owners. Callers have already checked authorization."""
        if to_addr is None:
            raise InvalidRecipientError("Transfer to zero address", details={"token_id": token_id})
        if to_addr == from_addr:
            raise SelfTransferError(
                "Transfer to current owner",
                details={"token_id": token_id, "owner": from_addr},
            )

        self._approvals.clear(from_addr, token_id)
        self._index.remove(from_addr, token_id)
        self._index.add(to_addr, token_id)
        self._tokens.set_owner(token_id, to_addr)
        self._emit(DeedEvent(TRANSFER, from_addr, to_addr, token_id))

        logger.info(
            "Deed transfer",
            extra={
                "event": "deed.transfer",
                "token_id": token_id,
                "from": from_addr[:10],
                "to": to_addr[:10],
            },
        )

    def _collect_fee(self, value: int, fee: int, operation: str) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError(
                "Payment must be a non-negative integer",
                details={"operation": operation, "value": value},
            )
        if value < fee:
            raise InsufficientFeeError(
                f"{operation} requires a fee of {fee}",
                details={"operation": operation, "required": fee, "supplied": value},
            )
        if value:
            self._journal.set_attr(
                self.counters, "fees_collected", self.counters.fees_collected + value
            )

    # ==================== Notifications ====================

    def subscribe(self, listener: EventListener) -> None:
        """
        Register a callback for every event.

        Listeners run inside the operation that emitted the event; an
        exception from a listener rejects that operation.
        """
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: DeedEvent) -> None:
        self._journal.append(self.events, event)
        for listener in list(self._listeners):
            listener(event)

    # ==================== Diagnostics ====================

    def snapshot(self) -> dict[str, Any]:
        """Deterministic view of the entire ledger state."""
        index = self._index
        return {
            "owners": dict(sorted(self._tokens.owners.items())),
            "burned": sorted(self._tokens.burned),
            "tokens_by_owner": {
                owner: list(tokens) for owner, tokens in sorted(index.tokens_by_owner.items())
            },
            "positions": dict(sorted(index.positions.items())),
            "roster": list(index.roster),
            "approvals": dict(sorted(self._approvals.approvals.items())),
            "counters": self.counters.to_dict(),
            "next_token_id": self._tokens.next_token_id,
            "events": [event.to_dict() for event in self.events],
        }

    def check_invariants(self) -> None:
        """
        Verify that all ledger indices agree. Scans the whole ledger.

        Raises:
            InvariantViolationError: On the first disagreement found
        """
        owners = self._tokens.owners
        index = self._index

        for token_id, owner in owners.items():
            tokens = index.tokens_by_owner.get(owner)
            position = index.positions.get(token_id)
            if tokens is None or position is None or not 0 <= position < len(tokens):
                _violation("owned deed missing from its owner's list", token_id=token_id)
            if tokens[position] != token_id:
                _violation("reverse index points at another deed", token_id=token_id)
            if token_id >= self._tokens.next_token_id:
                _violation("owned deed beyond the allocation counter", token_id=token_id)
            if token_id in self._tokens.burned:
                _violation("burned deed has an owner", token_id=token_id)

        listed = sum(len(tokens) for tokens in index.tokens_by_owner.values())
        if not listed == len(owners) == len(index.positions) == self.counters.total_tokens:
            _violation(
                "deed counts disagree",
                listed=listed,
                owned=len(owners),
                positions=len(index.positions),
                total_tokens=self.counters.total_tokens,
            )

        for owner, tokens in index.tokens_by_owner.items():
            if not tokens:
                _violation("empty owner list retained", owner=owner)
            position = index.roster_positions.get(owner)
            if position is None or not 0 <= position < len(index.roster) or index.roster[position] != owner:
                _violation("owner missing from roster", owner=owner)
        if not len(index.tokens_by_owner) == len(index.roster) == self.counters.total_owners:
            _violation(
                "owner counts disagree",
                lists=len(index.tokens_by_owner),
                roster=len(index.roster),
                total_owners=self.counters.total_owners,
            )

        for token_id, approved in self._approvals.approvals.items():
            if token_id not in owners:
                _violation("approval on unowned deed", token_id=token_id)
            if approved == owners[token_id]:
                _violation("owner approved for own deed", token_id=token_id)


def _owner_key(owner: str) -> str:
    try:
        return normalize_address(owner)
    except InvalidAddressError as exc:
        raise NotFoundError(
            "No owner at a malformed address",
            details={"owner": owner, "reason": exc.message},
        ) from exc


def _require_token_id(token_id: Any) -> None:
    if isinstance(token_id, bool) or not isinstance(token_id, int) or token_id < 0:
        raise ValidationError(
            "Deed id must be a non-negative integer",
            details={"token_id": token_id},
        )


def _violation(message: str, **details: Any) -> None:
    raise InvariantViolationError(message, details=details)
