"""
Tests for ledger configuration.
"""

import pytest

from deedledger.core.config import LedgerConfig
from deedledger.core.exceptions import ConfigurationError


def test_defaults_are_fee_free():
    config = LedgerConfig()
    assert config.approval_fee == 0
    assert config.transfer_fee == 0
    assert config.log_level == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setenv("DEED_APPROVAL_FEE", "7")
    monkeypatch.setenv("DEED_TRANSFER_FEE", " 12 ")
    monkeypatch.setenv("DEED_LOG_LEVEL", "debug")
    monkeypatch.setenv("DEED_ENVIRONMENT", "staging")

    config = LedgerConfig.from_env()

    assert config.approval_fee == 7
    assert config.transfer_fee == 12
    assert config.log_level == "debug"
    assert config.environment == "staging"


def test_from_env_unset(monkeypatch):
    for var in ("DEED_APPROVAL_FEE", "DEED_TRANSFER_FEE", "DEED_LOG_LEVEL", "DEED_ENVIRONMENT"):
        monkeypatch.delenv(var, raising=False)

    assert LedgerConfig.from_env() == LedgerConfig()


def test_from_env_rejects_non_integer_fee(monkeypatch):
    monkeypatch.setenv("DEED_APPROVAL_FEE", "five")

    with pytest.raises(ConfigurationError) as exc_info:
        LedgerConfig.from_env()
    assert exc_info.value.details["env_var"] == "DEED_APPROVAL_FEE"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"approval_fee": -1},
        {"transfer_fee": -5},
        {"approval_fee": 1.5},
        {"transfer_fee": True},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        LedgerConfig(**kwargs)


def test_config_is_immutable():
    config = LedgerConfig()
    with pytest.raises(AttributeError):
        config.approval_fee = 3
