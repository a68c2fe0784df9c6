"""
Versioned key-value ledger.

The ledger is a log of key modifications (put or delete), appended and
never rewritten. Current state and per-key history are projections of that
log. Storage backends only decide where modifications live; indexing,
queries and history are shared here.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Literal

from .cursor import LedgerCursor

logger = logging.getLogger(__name__)

PUT = "put"
DELETE = "delete"


@dataclass(frozen=True)
class Modification:
    """One entry in the modification log."""

    seq: int
    key: str
    op: Literal["put", "delete"]
    value: bytes | None = None


def _resolve_field(document: Any, field_path: str) -> Any:
    """Walk a dotted field path through nested JSON objects."""
    current = document
    for part in field_path.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def _decode_document(value: bytes) -> dict[str, Any] | None:
    try:
        document = json.loads(value.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    return document if isinstance(document, dict) else None


class Ledger(ABC):
    """
    Base ledger with lazily built indexes.

    Subclasses provide _load_modifications() and _write_modification().
    """

    def __init__(self) -> None:
        # Query indexes (lazy-loaded)
        self._modifications: list[Modification] = []
        self._state: dict[str, bytes] = {}  # key -> current value
        self._by_key: dict[str, list[int]] = {}  # key -> modification indices
        self._indexed: bool = False
        self._open_cursors = 0

    @abstractmethod
    def _load_modifications(self) -> Iterator[Modification]:
        """Yield every stored modification in append order."""

    @abstractmethod
    def _write_modification(self, modification: Modification) -> None:
        """Durably append one modification."""

    def _ensure_indexed(self) -> None:
        """
        Build indexes on first use (lazy loading).

        This method is idempotent - calling it multiple times is safe.
        """
        if self._indexed:
            return

        # Load everything before touching the indexes, so a malformed entry
        # leaves them empty
        modifications = list(self._load_modifications())
        for modification in modifications:
            self._index(modification)
        self._indexed = True

    def _index(self, modification: Modification) -> None:
        idx = len(self._modifications)
        self._modifications.append(modification)
        self._by_key.setdefault(modification.key, []).append(idx)
        if modification.op == PUT:
            self._state[modification.key] = modification.value or b""
        else:
            self._state.pop(modification.key, None)

    def _append(self, key: str, op: Literal["put", "delete"], value: bytes | None = None) -> None:
        self._ensure_indexed()
        modification = Modification(seq=len(self._modifications), key=key, op=op, value=value)
        self._write_modification(modification)
        self._index(modification)

    def _open(self, items: Iterator[Any]) -> LedgerCursor[Any]:
        self._open_cursors += 1
        return LedgerCursor(items, on_close=self._cursor_closed)

    def _cursor_closed(self) -> None:
        self._open_cursors -= 1

    @property
    def open_cursors(self) -> int:
        """Number of cursors opened and not yet closed."""
        return self._open_cursors

    # --- Key-value surface ---

    def get(self, key: str) -> bytes | None:
        self._ensure_indexed()
        return self._state.get(key)

    def put(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"Ledger values must be bytes, got {type(value).__name__}")
        self._append(key, PUT, bytes(value))
        logger.debug("put %s (%d bytes)", key, len(value))

    def delete(self, key: str) -> None:
        """Delete a key. Deleting an absent key records nothing."""
        self._ensure_indexed()
        if key not in self._state:
            return
        self._append(key, DELETE)
        logger.debug("delete %s", key)

    def keys(self) -> list[str]:
        self._ensure_indexed()
        return sorted(self._state)

    # --- Cursors ---

    def _scan(self, matches: Any) -> Iterator[tuple[str, bytes]]:
        # Point-in-time view: the state is copied when the cursor opens
        snapshot = sorted(self._state.items())
        return (
            (key, value)
            for key, value in snapshot
            if (document := _decode_document(value)) is not None and matches(document)
        )

    def query_by_equality(self, field_path: str, value: Any) -> LedgerCursor[tuple[str, bytes]]:
        """Open a cursor over (key, value) pairs whose field equals value."""
        self._ensure_indexed()
        return self._open(self._scan(lambda doc: _resolve_field(doc, field_path) == value))

    def query_by_regex(self, field_path: str, pattern: str) -> LedgerCursor[tuple[str, bytes]]:
        """Open a cursor over (key, value) pairs whose field matches pattern anywhere."""
        self._ensure_indexed()
        compiled = re.compile(pattern)

        def matches(doc: dict[str, Any]) -> bool:
            field_value = _resolve_field(doc, field_path)
            return field_value is not None and compiled.search(str(field_value)) is not None

        return self._open(self._scan(matches))

    def history_of(self, key: str) -> LedgerCursor[bytes]:
        """
        Open a cursor over every value ever put at key, oldest first.

        Values written before a delete stay in the history; the delete
        itself carries no value and is not yielded.
        """
        self._ensure_indexed()
        indices = list(self._by_key.get(key, []))
        values = (
            self._modifications[idx].value or b""
            for idx in indices
            if self._modifications[idx].op == PUT
        )
        return self._open(values)
