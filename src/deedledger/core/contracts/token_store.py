"""
Token Store: the authoritative deed -> owner mapping and the id allocation counter.

A deed id with no entry in ``owners`` is unowned, whether it was never
minted or has been burned. Burned ids are kept in ``burned`` with their
last owner so they can never be minted again.
"""

from __future__ import annotations

from typing import Optional

from ..exceptions import NotFoundError
from ..journal import Journal


class TokenStore:
    """Deed ownership records. Written only by the ledger operations."""

    def __init__(self, journal: Journal) -> None:
        self._journal = journal
        self.owners: dict[int, str] = {}
        self.burned: dict[int, str] = {}
        self.next_token_id = 0

    def owner_or_none(self, token_id: int) -> Optional[str]:
        return self.owners.get(token_id)

    def owner_of(self, token_id: int) -> str:
        owner = self.owners.get(token_id)
        if owner is None:
            raise NotFoundError(
                f"Deed {token_id} does not exist",
                details={"token_id": token_id},
            )
        return owner

    def exists(self, token_id: int) -> bool:
        return token_id in self.owners

    def was_burned(self, token_id: int) -> bool:
        return token_id in self.burned

    def allocate_id(self) -> int:
        """Next id in allocation order. Burned ids are never handed out again."""
        return self.next_token_id

    def set_owner(self, token_id: int, owner: Optional[str]) -> None:
        if owner is None:
            previous = self.owners[token_id]
            self._journal.del_item(self.owners, token_id)
            self._journal.set_item(self.burned, token_id, previous)
            return
        self._journal.set_item(self.owners, token_id, owner)
        if token_id >= self.next_token_id:
            self._journal.set_attr(self, "next_token_id", token_id + 1)
