"""Aggregate counters, maintained incrementally by the owner index and fee checks."""

from __future__ import annotations

from dataclasses import dataclass, asdict


@dataclass
class AggregateCounters:
    total_tokens: int = 0  # deeds with an owner
    total_owners: int = 0  # addresses holding at least one deed
    fees_collected: int = 0

    def to_dict(self) -> dict:
        return asdict(self)
