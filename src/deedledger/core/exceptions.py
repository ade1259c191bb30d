"""
Deed ledger exception hierarchy.

Provides typed exceptions for ledger operations so callers can tell a
missing deed from an authorization failure from a malformed argument.
Every ledger failure is a precondition failure: the operation that raised
it left no trace in ledger state.
"""

from __future__ import annotations
from typing import Optional, Any, Dict


class DeedLedgerError(Exception):
    """Base exception for all deed ledger errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
        recoverable: Whether resubmitting the same call could succeed
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable


# ==================== Lookup Errors ====================


class NotFoundError(DeedLedgerError, LookupError):
    """Raised when a query targets a deed with no owner, or an index out of range."""
    pass


# ==================== Authorization Errors ====================


class AuthorizationError(DeedLedgerError):
    """Raised when the caller is not allowed to perform an operation."""
    pass


class NotOwnerError(AuthorizationError):
    """Raised when the caller does not hold the deed for an owner-gated operation."""
    pass


class NotApprovedError(AuthorizationError):
    """Raised when the caller is not the approved recipient of a deed."""
    pass


# ==================== Validation Errors ====================


class ValidationError(DeedLedgerError):
    """Raised when an argument fails a precondition."""
    pass


class InvalidAddressError(ValidationError, ValueError):
    """Raised when an address string is malformed."""
    pass


class InvalidRecipientError(ValidationError):
    """Raised when the target address is the null sentinel."""
    pass


class AlreadyExistsError(ValidationError):
    """Raised when minting a deed id that already has an owner."""
    pass


class SelfApprovalError(ValidationError):
    """Raised when an owner tries to approve themselves."""
    pass


class SelfTransferError(ValidationError):
    """Raised when a transfer would leave the owner unchanged."""
    pass


class InsufficientFeeError(ValidationError):
    """Raised when the supplied payment is below the configured fee.

    Recoverable: the same call succeeds once resubmitted with enough value.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, recoverable=True)


# ==================== Execution Errors ====================


class ReentrancyError(DeedLedgerError):
    """Raised when a ledger operation is entered while another one is still running."""
    pass


class InvariantViolationError(DeedLedgerError):
    """Raised by invariant checks when ledger indices disagree with each other."""
    pass


class ConfigurationError(DeedLedgerError):
    """Raised when configuration is missing or invalid."""
    pass
