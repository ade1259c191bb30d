"""
Capability groups for interface discovery.

A capability group is identified by the XOR of the 4-byte selectors of its
operations, where a selector is the first four bytes of the keccak-256
hash of the operation's canonical signature.
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable

from Crypto.Hash import keccak

INVALID_INTERFACE_ID = bytes.fromhex("ffffffff")


def keccak256(data: bytes) -> bytes:
    """Compute keccak256 hash (same as Ethereum)."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def selector(signature: str) -> bytes:
    """4-byte selector of a canonical signature such as ``ownerOf(uint256)``."""
    return keccak256(signature.encode("ascii"))[:4]


def interface_id(signatures: Iterable[str]) -> bytes:
    """XOR of the selectors of every signature in a group."""
    return reduce(
        lambda acc, sig: bytes(a ^ b for a, b in zip(acc, selector(sig))),
        signatures,
        bytes(4),
    )


INTROSPECTION_SIGNATURES = ("supportsInterface(bytes4)",)

DEED_CORE_SIGNATURES = (
    "ownerOf(uint256)",
    "countOfTokens()",
    "countOfTokensByOwner(address)",
    "approve(address,uint256)",
    "approvedFor(uint256)",
    "takeOwnership(uint256)",
)

DEED_METADATA_SIGNATURES = (
    "name()",
    "symbol()",
    "tokenURI(uint256)",
)

DEED_ENUMERABLE_SIGNATURES = (
    "countOfOwners()",
    "tokenByIndex(uint256)",
    "ownerByIndex(uint256)",
    "tokenOfOwnerByIndex(address,uint256)",
    "tokensOf(address)",
)

INTROSPECTION = interface_id(INTROSPECTION_SIGNATURES)
DEED_CORE = interface_id(DEED_CORE_SIGNATURES)
DEED_METADATA = interface_id(DEED_METADATA_SIGNATURES)
DEED_ENUMERABLE = interface_id(DEED_ENUMERABLE_SIGNATURES)

CAPABILITY_GROUPS = {
    "introspection": INTROSPECTION,
    "deed_core": DEED_CORE,
    "deed_metadata": DEED_METADATA,
    "deed_enumerable": DEED_ENUMERABLE,
}


def to_interface_bytes(value: bytes | str | int) -> bytes:
    """
    Accept an interface id as 4 bytes, hex string (``0x``-prefixed or not) or int.

    Raises:
        ValueError: If the value does not denote exactly 4 bytes
    """
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"Interface id {value} does not fit in 4 bytes")
        return value.to_bytes(4, "big")
    if isinstance(value, str):
        raw = bytes.fromhex(value[2:] if value.lower().startswith("0x") else value)
    else:
        raw = bytes(value)
    if len(raw) != 4:
        raise ValueError(f"Interface id must be 4 bytes, got {len(raw)}")
    return raw
