"""
deedledger - Deed Ownership Ledger

A deterministic registry of uniquely identified, non-fungible deeds.

Main Components:
- Ledger: ownership records, per-owner indices, approvals and counters
- Collection: metadata and interface discovery layered over a ledger
- Ambient: configuration, structured logging, typed exceptions

For usage and design notes, see: README.md and DESIGN.md
"""

__version__ = "0.1.0"
__author__ = "deedledger Development Team"

__all__ = []
