"""
Versioned key-value ledger consumed by the registry.

Components:
- base: Ledger with get/put/delete, equality and regex queries, key history
- cursor: LedgerCursor, the scoped result resource
- memory: MemoryLedger (in-process)
- jsonl: JsonlLedger (append-only .jsonl file)
"""

from .base import Ledger, Modification
from .cursor import LedgerCursor
from .jsonl import JsonlLedger
from .memory import MemoryLedger

__all__ = [
    "Ledger",
    "LedgerCursor",
    "Modification",
    "MemoryLedger",
    "JsonlLedger",
]
