"""
Access-controlled shared data registry on a versioned key-value ledger.

An owner registers a description of an external resource, shares it with
named third parties, and revokes that access; third parties request a
permission decision, and every change is retrievable as history.

Components:
- models: SharedRecord, PermissionType, Mode and the wire format
- sharing: sharing list encoding
- permissions: grant / revoke / request-permission decisions
- contract: SharedDataContract, the record lifecycle
- queries: SharedDataQueries, listings and history
- ledger: the key-value ledger the registry runs against
"""

__version__ = "0.1.0"

from .config import RegistryConfig
from .contract import SharedDataContract
from .errors import (
    AlreadyExists,
    AlreadyGranted,
    LedgerError,
    NotFound,
    NotGranted,
    NotOwner,
    SharedDataError,
    ValidationError,
)
from .ledger import JsonlLedger, Ledger, LedgerCursor, MemoryLedger
from .models import Mode, PermissionType, SharedRecord
from .queries import SharedDataQueries

__all__ = [
    # Records
    "SharedRecord",
    "PermissionType",
    "Mode",
    # Services
    "SharedDataContract",
    "SharedDataQueries",
    "RegistryConfig",
    # Ledger
    "Ledger",
    "LedgerCursor",
    "MemoryLedger",
    "JsonlLedger",
    # Errors
    "SharedDataError",
    "ValidationError",
    "AlreadyExists",
    "NotFound",
    "NotOwner",
    "AlreadyGranted",
    "NotGranted",
    "LedgerError",
]
