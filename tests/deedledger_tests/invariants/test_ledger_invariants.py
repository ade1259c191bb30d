from __future__ import annotations

"""
Ledger Invariant Tests using Property-Based Testing

Drives random sequences of mint / approve / take_ownership / burn through a
DeedLedger and checks, after every step, that:
- every deed has exactly one owner and appears in exactly one owner list
- the reverse index points every owned deed at its own slot
- total_tokens and total_owners match a plain dict model
- approvals only exist on owned deeds
- rejected calls leave the ledger exactly as it was

Uses Hypothesis for property-based testing.
"""

import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.stateful import RuleBasedStateMachine, initialize, invariant, rule

from deedledger.core.contracts.ledger import DeedLedger
from deedledger.core.exceptions import (
    AlreadyExistsError,
    NotApprovedError,
    NotOwnerError,
    SelfApprovalError,
)

HOLDERS = tuple("0x" + f"{n:02x}" * 20 for n in range(1, 5))

holder = st.sampled_from(HOLDERS)
pick = st.integers(min_value=0, max_value=10_000)


class DeedLedgerMachine(RuleBasedStateMachine):
    """
    Stateful property-based testing for ledger operations.

    ``self.model`` is the reference answer: deed id -> owner.
    ``self.burned`` holds ids that may never be minted again.
    """

    @initialize()
    def setup(self):
        self.ledger = DeedLedger()
        self.model: dict[int, str] = {}
        self.burned: set[int] = set()

    def _pick_owned(self, choice: int) -> int | None:
        if not self.model:
            return None
        owned = sorted(self.model)
        return owned[choice % len(owned)]

    def _expect_rejection(self, error, operation, *args):
        before = self.ledger.snapshot()
        with pytest.raises(error):
            operation(*args)
        assert self.ledger.snapshot() == before

    @rule(owner=holder)
    def mint_next(self, owner: str):
        token_id = self.ledger.mint(owner)
        assert token_id not in self.model
        self.model[token_id] = owner

    @rule(owner=holder, token_id=st.integers(min_value=0, max_value=40))
    def mint_explicit(self, owner: str, token_id: int):
        if token_id in self.model or token_id in self.burned:
            self._expect_rejection(AlreadyExistsError, self.ledger.mint, owner, token_id)
        else:
            self.ledger.mint(owner, token_id)
            self.model[token_id] = owner

    @rule(choice=pick, to=st.one_of(st.none(), holder))
    def approve(self, choice: int, to: str | None):
        token_id = self._pick_owned(choice)
        if token_id is None:
            return
        owner = self.model[token_id]
        if to == owner:
            self._expect_rejection(SelfApprovalError, self.ledger.approve, owner, to, token_id)
        else:
            self.ledger.approve(owner, to, token_id)
            assert self.ledger.approved_for(token_id) == to

    @rule(choice=pick, caller=holder)
    def approve_by_stranger(self, choice: int, caller: str):
        token_id = self._pick_owned(choice)
        if token_id is None or self.model[token_id] == caller:
            return
        self._expect_rejection(NotOwnerError, self.ledger.approve, caller, caller, token_id)

    @rule(choice=pick, caller=holder)
    def take_ownership(self, choice: int, caller: str):
        token_id = self._pick_owned(choice)
        if token_id is None:
            return
        if self.ledger.approved_for(token_id) == caller:
            self.ledger.take_ownership(caller, token_id)
            self.model[token_id] = caller
            assert self.ledger.approved_for(token_id) is None
        else:
            self._expect_rejection(NotApprovedError, self.ledger.take_ownership, caller, token_id)

    @rule(choice=pick, caller=holder)
    def burn(self, choice: int, caller: str):
        token_id = self._pick_owned(choice)
        if token_id is None:
            return
        if self.model[token_id] == caller:
            self.ledger.burn(caller, token_id)
            del self.model[token_id]
            self.burned.add(token_id)
            assert not self.ledger.exists(token_id)
        else:
            self._expect_rejection(NotOwnerError, self.ledger.burn, caller, token_id)

    @invariant()
    def indices_agree(self):
        self.ledger.check_invariants()

    @invariant()
    def counters_match_model(self):
        assert self.ledger.count_of_tokens() == len(self.model)
        assert self.ledger.count_of_owners() == len(set(self.model.values()))

    @invariant()
    def owner_lists_match_model(self):
        for address in HOLDERS:
            expected = {t for t, owner in self.model.items() if owner == address}
            assert set(self.ledger.tokens_of(address)) == expected
            assert self.ledger.count_of_tokens_by_owner(address) == len(expected)

    @invariant()
    def roster_matches_model(self):
        roster = {
            self.ledger.owner_by_global_index(i) for i in range(self.ledger.count_of_owners())
        }
        assert roster == set(self.model.values())


DeedLedgerMachine.TestCase.settings = settings(max_examples=100, stateful_step_count=40)
TestDeedLedgerState = DeedLedgerMachine.TestCase


class TestSwapRemovalProperties:
    """Property-based tests for removal from an owner's list."""

    @given(
        count=st.integers(min_value=1, max_value=30),
        data=st.data(),
    )
    @settings(max_examples=200)
    def test_burn_any_subset(self, count: int, data):
        owner = HOLDERS[0]
        ledger = DeedLedger()
        minted = [ledger.mint(owner) for _ in range(count)]
        burned = data.draw(st.lists(st.sampled_from(minted), unique=True))

        for token_id in burned:
            ledger.burn(owner, token_id)
            ledger.check_invariants()

        remaining = set(minted) - set(burned)
        assert set(ledger.tokens_of(owner)) == remaining
        assert len(ledger.tokens_of(owner)) == len(remaining)
        assert ledger.count_of_owners() == (1 if remaining else 0)
        for position, token_id in enumerate(ledger.tokens_of(owner)):
            assert ledger.token_of_owner_by_index(owner, position) == token_id

    @given(st.lists(st.integers(min_value=0, max_value=2**64), min_size=1, max_size=20, unique=True))
    def test_mint_then_burn_everything_restores_empty_state(self, token_ids: list[int]):
        owner = HOLDERS[1]
        ledger = DeedLedger()
        for token_id in token_ids:
            ledger.mint(owner, token_id)
        for token_id in reversed(token_ids):
            ledger.burn(owner, token_id)

        snapshot = ledger.snapshot()
        assert snapshot["owners"] == {}
        assert snapshot["tokens_by_owner"] == {}
        assert snapshot["positions"] == {}
        assert snapshot["roster"] == []
        assert snapshot["burned"] == sorted(token_ids)
        assert snapshot["counters"]["total_tokens"] == 0
        assert snapshot["counters"]["total_owners"] == 0
        assert ledger.next_token_id == max(token_ids) + 1
