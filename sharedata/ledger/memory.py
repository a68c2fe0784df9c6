"""In-process ledger, used for embedding and tests."""

from __future__ import annotations

from typing import Iterator

from .base import Ledger, Modification


class MemoryLedger(Ledger):
    def __init__(self) -> None:
        super().__init__()
        self._log: list[Modification] = []

    def _load_modifications(self) -> Iterator[Modification]:
        return iter(list(self._log))

    def _write_modification(self, modification: Modification) -> None:
        self._log.append(modification)

    def count(self) -> int:
        """Count modifications in the log."""
        return len(self._log)
