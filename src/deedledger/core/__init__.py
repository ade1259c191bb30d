"""
deedledger Core Module

Core functionality for the deed ledger:
- Address normalization and the null sentinel
- Typed exception hierarchy
- Configuration and structured logging
- Write journal backing all-or-nothing operations
"""

__all__ = []
