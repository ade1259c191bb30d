"""
Owner Index: per-owner deed lists with a reverse index for O(1) removal.

Each owner's deeds live in a dense list; ``positions[token_id]`` is the
slot of that deed in its owner's list. Removing a deed moves the owner's
last deed into the vacated slot and shrinks the list by one, so the order
of an owner's deeds is not stable across removals.

The same layout is used one level up for the roster of current owners,
which gives ``owner_at`` its O(1) lookup.
"""

from __future__ import annotations

from ..exceptions import NotFoundError
from ..journal import Journal
from .counters import AggregateCounters


class OwnerIndex:
    """Per-owner deed collections. Written only by the ledger operations."""

    def __init__(self, journal: Journal, counters: AggregateCounters) -> None:
        self._journal = journal
        self._counters = counters
        self.tokens_by_owner: dict[str, list[int]] = {}
        self.positions: dict[int, int] = {}  # token_id -> slot in owner's list
        self.roster: list[str] = []  # owners with a non-empty list
        self.roster_positions: dict[str, int] = {}  # owner -> slot in roster

    # ==================== Queries ====================

    def list_of(self, owner: str) -> tuple[int, ...]:
        return tuple(self.tokens_by_owner.get(owner, ()))

    def count_of(self, owner: str) -> int:
        return len(self.tokens_by_owner.get(owner, ()))

    def token_at(self, owner: str, index: int) -> int:
        tokens = self.tokens_by_owner.get(owner, [])
        if not 0 <= index < len(tokens):
            raise NotFoundError(
                f"Owner index {index} out of bounds",
                details={"owner": owner, "index": index, "count": len(tokens)},
            )
        return tokens[index]

    def owner_at(self, index: int) -> str:
        if not 0 <= index < len(self.roster):
            raise NotFoundError(
                f"Owner roster index {index} out of bounds",
                details={"index": index, "count": len(self.roster)},
            )
        return self.roster[index]

    # ==================== Mutations ====================

    def add(self, owner: str, token_id: int) -> None:
        """Append ``token_id`` to ``owner``'s list. The deed must be unowned."""
        tokens = self.tokens_by_owner.get(owner)
        if tokens is None:
            tokens = []
            self._journal.set_item(self.tokens_by_owner, owner, tokens)
        if not tokens:
            self._enroll(owner)
            self._journal.set_attr(self._counters, "total_owners", self._counters.total_owners + 1)

        self._journal.append(tokens, token_id)
        self._journal.set_item(self.positions, token_id, len(tokens) - 1)
        self._journal.set_attr(self._counters, "total_tokens", self._counters.total_tokens + 1)

    def remove(self, owner: str, token_id: int) -> None:
        """Swap-and-shrink ``token_id`` out of ``owner``'s list."""
        tokens = self.tokens_by_owner[owner]
        idx = self.positions[token_id]
        last_idx = len(tokens) - 1
        last_id = tokens[last_idx]

        # idx == last_idx is a self-swap followed by the shrink
        self._journal.set_index(tokens, idx, last_id)
        self._journal.pop(tokens)
        self._journal.set_item(self.positions, last_id, idx)
        self._journal.del_item(self.positions, token_id)

        self._journal.set_attr(self._counters, "total_tokens", self._counters.total_tokens - 1)
        if not tokens:
            self._journal.del_item(self.tokens_by_owner, owner)
            self._dismiss(owner)
            self._journal.set_attr(self._counters, "total_owners", self._counters.total_owners - 1)

    # ==================== Roster ====================

    def _enroll(self, owner: str) -> None:
        self._journal.append(self.roster, owner)
        self._journal.set_item(self.roster_positions, owner, len(self.roster) - 1)

    def _dismiss(self, owner: str) -> None:
        idx = self.roster_positions[owner]
        last_owner = self.roster[-1]
        self._journal.set_index(self.roster, idx, last_owner)
        self._journal.pop(self.roster)
        self._journal.set_item(self.roster_positions, last_owner, idx)
        self._journal.del_item(self.roster_positions, owner)
