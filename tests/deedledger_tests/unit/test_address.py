"""
Tests for address validation, normalization and the null sentinel.
"""

import pytest

from deedledger.core.address import (
    ZERO_ADDRESS,
    is_null_address,
    normalize_address,
    normalize_optional,
    to_wire,
    validate_address,
)
from deedledger.core.exceptions import InvalidAddressError, ValidationError


class TestValidateAddress:
    def test_valid_lowercase(self):
        address = "0x" + "ab" * 20
        assert validate_address(address) == (True, address)

    def test_mixed_case_is_lowered(self):
        assert validate_address("0X" + "Ab" * 20) == (True, "0x" + "ab" * 20)

    @pytest.mark.parametrize(
        "address, message",
        [
            ("ab" * 21, "must start with 0x"),
            ("0x" + "ab" * 19, "must be 42 characters"),
            ("0x" + "zz" * 20, "invalid hex"),
            ("0x" + " 1" * 20, "invalid hex"),
        ],
    )
    def test_invalid(self, address, message):
        is_valid, error = validate_address(address)
        assert not is_valid
        assert message in error

    def test_non_string(self):
        is_valid, error = validate_address(42)
        assert not is_valid
        assert "int" in error


class TestNormalize:
    def test_normalize_raises_typed_error(self):
        with pytest.raises(InvalidAddressError) as exc_info:
            normalize_address("0x1234")
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.details == {"address": "0x1234"}

    @pytest.mark.parametrize("address", [None, "", ZERO_ADDRESS, "0X" + "0" * 40])
    def test_null_spellings(self, address):
        assert is_null_address(address)
        assert normalize_optional(address) is None

    def test_normalize_optional_passes_real_addresses(self):
        assert normalize_optional("0x" + "CD" * 20) == "0x" + "cd" * 20

    def test_to_wire(self):
        assert to_wire(None) == ZERO_ADDRESS
        assert to_wire("0x" + "cd" * 20) == "0x" + "cd" * 20
