"""
Append-only file ledger.

Stores key modifications in <state_dir>/ledger.jsonl.
Key property: append-only, never rewritten.
"""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Iterator

from ..errors import LedgerError
from .base import DELETE, PUT, Ledger, Modification


class JsonlLedger(Ledger):
    """File-backed ledger.

    Storage format: JSON Lines (.jsonl) - one modification per line
    Location: ledger.jsonl inside the state directory
    """

    def __init__(self, state_dir: Path, *, filename: str = "ledger.jsonl"):
        """Initialize ledger.

        Args:
            state_dir: Directory holding the ledger file (created on first write)
            filename: Ledger file name inside state_dir
        """
        super().__init__()
        self.state_dir = state_dir
        self.ledger_path = state_dir / filename

    def _ensure_dir(self) -> None:
        self.state_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _to_line(modification: Modification) -> str:
        entry: dict[str, object] = {
            "seq": modification.seq,
            "key": modification.key,
            "op": modification.op,
        }
        if modification.value is not None:
            entry["value"] = base64.b64encode(modification.value).decode("ascii")
        return json.dumps(entry, separators=(",", ":"))

    def _from_line(self, line: str, lineno: int) -> Modification:
        try:
            entry = json.loads(line)
            op = entry["op"]
            if op not in (PUT, DELETE):
                raise ValueError(f"unknown op {op!r}")
            value = entry.get("value")
            return Modification(
                seq=int(entry["seq"]),
                key=str(entry["key"]),
                op=op,
                value=base64.b64decode(value) if value is not None else None,
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise LedgerError(
                f"Malformed ledger entry at {self.ledger_path}:{lineno}: {exc}",
                {"path": str(self.ledger_path), "line": lineno},
            ) from exc

    def _load_modifications(self) -> Iterator[Modification]:
        if not self.ledger_path.exists():
            return
        with self.ledger_path.open("r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if line:
                    yield self._from_line(line, lineno)

    def _write_modification(self, modification: Modification) -> None:
        self._ensure_dir()
        with self.ledger_path.open("a", encoding="utf-8") as f:
            f.write(self._to_line(modification) + "\n")

    def count(self) -> int:
        """Count modifications in the ledger file."""
        if not self.ledger_path.exists():
            return 0
        count = 0
        with self.ledger_path.open("r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    count += 1
        return count
