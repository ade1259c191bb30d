"""
Approval Registry: at most one approved recipient per deed.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..address import to_wire
from ..exceptions import NotOwnerError, SelfApprovalError
from ..journal import Journal
from .events import APPROVAL, DeedEvent
from .token_store import TokenStore


class ApprovalRegistry:
    """Per-deed approvals. Written only by the ledger operations."""

    def __init__(
        self,
        journal: Journal,
        tokens: TokenStore,
        emit: Callable[[DeedEvent], None],
    ) -> None:
        self._journal = journal
        self._tokens = tokens
        self._emit = emit
        self.approvals: dict[int, str] = {}

    def approved_for(self, token_id: int) -> Optional[str]:
        return self.approvals.get(token_id)

    def set_approval(self, owner: str, token_id: int, to: Optional[str]) -> None:
        """
        Approve ``to`` for ``token_id``, replacing any previous approval.

        ``to=None`` withdraws the approval. An Approval event is emitted unless
        the call turns "no approval" into "no approval".
        """
        self._require_owner(owner, token_id)
        if to == owner:
            raise SelfApprovalError(
                "Approval to current owner",
                details={"token_id": token_id, "owner": owner},
            )

        previous = self.approvals.get(token_id)
        if to is None:
            if previous is not None:
                self._journal.del_item(self.approvals, token_id)
        else:
            self._journal.set_item(self.approvals, token_id, to)

        if previous is not None or to is not None:
            self._emit(DeedEvent(APPROVAL, owner, to_wire(to), token_id))

    def clear(self, owner: str, token_id: int) -> None:
        """Drop the approval on ``token_id`` and announce it."""
        self._require_owner(owner, token_id)
        if token_id in self.approvals:
            self._journal.del_item(self.approvals, token_id)
        self._emit(DeedEvent(APPROVAL, owner, to_wire(None), token_id))

    def _require_owner(self, owner: str, token_id: int) -> None:
        if self._tokens.owner_or_none(token_id) != owner:
            raise NotOwnerError(
                "Approval change by non-owner",
                details={"token_id": token_id, "caller": owner},
            )
