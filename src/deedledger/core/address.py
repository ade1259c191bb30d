from __future__ import annotations

"""
Deed ledger address handling.

Addresses are Ethereum-style: "0x" followed by 40 hex characters. They are
compared in lowercase form. The all-zero address is the wire spelling of
"nobody"; inside the ledger that state is always ``None``.
"""

import string
from typing import Optional

from .exceptions import InvalidAddressError

ADDRESS_PREFIX = "0x"
ADDRESS_HEX_LENGTH = 40
ZERO_ADDRESS = ADDRESS_PREFIX + "0" * ADDRESS_HEX_LENGTH


def is_null_address(address: Optional[str]) -> bool:
    """Return True for None, the empty string and the zero address."""
    if not address:
        return True
    return address.lower() == ZERO_ADDRESS


def validate_address(address: str) -> tuple[bool, str]:
    """
    Validate address format.

    Args:
        address: Address to validate

    Returns:
        Tuple of (is_valid, error_message or normalized address)
    """
    if not isinstance(address, str):
        return False, f"Address must be a string, got {type(address).__name__}"

    if not address[:2].lower() == ADDRESS_PREFIX:
        return False, f"Address must start with {ADDRESS_PREFIX}"

    hex_part = address[2:]
    if len(hex_part) != ADDRESS_HEX_LENGTH:
        return False, f"Address must be {len(ADDRESS_PREFIX) + ADDRESS_HEX_LENGTH} characters"

    if not all(char in string.hexdigits for char in hex_part):
        return False, "Address contains invalid hex characters"

    return True, ADDRESS_PREFIX + hex_part.lower()


def normalize_address(address: str) -> str:
    """
    Normalize an address to lowercase.

    Raises:
        InvalidAddressError: If the address is malformed
    """
    is_valid, result = validate_address(address)
    if not is_valid:
        raise InvalidAddressError(result, details={"address": address})
    return result


def normalize_optional(address: Optional[str]) -> Optional[str]:
    """Normalize an address, mapping every null spelling to None."""
    if is_null_address(address):
        return None
    return normalize_address(address)


def to_wire(address: Optional[str]) -> str:
    """Render an optional address for events and snapshots."""
    return address if address is not None else ZERO_ADDRESS
