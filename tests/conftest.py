"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from sharedata.contract import SharedDataContract
from sharedata.ledger import JsonlLedger, MemoryLedger
from sharedata.queries import SharedDataQueries

OWNER = "JhonDoe@somewhere.com"


@pytest.fixture
def ledger() -> MemoryLedger:
    """Fresh in-process ledger."""
    return MemoryLedger()


@pytest.fixture
def file_ledger(tmp_path: Path) -> JsonlLedger:
    """Fresh file ledger under a temporary state directory."""
    return JsonlLedger(tmp_path / ".sharedata")


@pytest.fixture
def contract(ledger: MemoryLedger) -> SharedDataContract:
    return SharedDataContract(ledger)


@pytest.fixture
def queries(ledger: MemoryLedger) -> SharedDataQueries:
    return SharedDataQueries(ledger)


@pytest.fixture
def seeded_contract(contract: SharedDataContract) -> SharedDataContract:
    """Contract with records 1001 and 1002 owned by OWNER."""
    contract.create("1001", OWNER, "shared data 1001 value", "bucket-a", "s3://bucket-a/1001", 1623856110467)
    contract.create("1002", OWNER, "shared data 1002 value", "bucket-a", "s3://bucket-a/1002", 1623856110467)
    return contract
