"""
Test configuration and fixtures
"""
import sys
from pathlib import Path

import pytest

# Make the src layout importable without an editable install
project_root = Path(__file__).parent.parent
src_path = project_root / "src"

sys.path.insert(0, str(src_path))

ADMIN = "0x" + "ad" * 20


@pytest.fixture
def ledger():
    """Create a clean fee-free ledger"""
    from deedledger.core.contracts.ledger import DeedLedger

    return DeedLedger()


@pytest.fixture
def fee_ledger():
    """Create a ledger that charges for approvals and transfers"""
    from deedledger.core.config import LedgerConfig
    from deedledger.core.contracts.ledger import DeedLedger

    return DeedLedger(LedgerConfig(approval_fee=5, transfer_fee=10))


@pytest.fixture
def collection():
    """Create a collection administered by ADMIN"""
    from deedledger.core.contracts.collection import DeedCollection

    return DeedCollection(
        name="Parcels",
        symbol="PCL",
        admin=ADMIN,
        base_uri="https://deeds.example/parcels/",
    )
