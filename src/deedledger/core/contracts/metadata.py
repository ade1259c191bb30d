"""
Human-readable deed metadata: collection name, symbol and per-deed URIs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..exceptions import ValidationError


def render_token_id(token_id: int) -> str:
    """Decimal rendering of a deed id, used for URIs and fallback names."""
    if isinstance(token_id, bool) or not isinstance(token_id, int) or token_id < 0:
        raise ValidationError(
            "Deed id must be a non-negative integer",
            details={"token_id": token_id},
        )
    return str(token_id)


@dataclass
class DeedMetadata:
    """Metadata for a deed collection."""

    name: str
    symbol: str
    base_uri: str = ""
    token_uris: dict[int, str] = field(default_factory=dict)

    def deed_uri(self, token_id: int) -> str:
        if token_id in self.token_uris:
            return self.token_uris[token_id]
        if self.base_uri:
            return f"{self.base_uri}{render_token_id(token_id)}"
        return ""

    def deed_name(self, token_id: int) -> str:
        return f"{self.name} #{render_token_id(token_id)}"
