"""Registry configuration and wiring."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .contract import SharedDataContract
from .ledger import JsonlLedger
from .logging_config import LOG_LEVEL_ENV, setup_logging
from .queries import SharedDataQueries

HOME_ENV = "SHAREDATA_HOME"


@dataclass(frozen=True)
class RegistryConfig:
    """Where the ledger lives and how loudly the registry logs.

    The ledger is stored under <root>/.sharedata/ledger.jsonl by default.
    """

    root: Path
    state_dir_name: str = ".sharedata"
    ledger_filename: str = "ledger.jsonl"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, root: Path | None = None) -> RegistryConfig:
        """Build from $SHAREDATA_HOME / $SHAREDATA_LOG_LEVEL, falling back to cwd and INFO."""
        if root is None:
            env_root = os.environ.get(HOME_ENV)
            root = Path(env_root) if env_root else Path.cwd()
        return cls(
            root=root.resolve(),
            log_level=os.environ.get(LOG_LEVEL_ENV, "INFO").upper(),
        )

    @property
    def state_dir(self) -> Path:
        return self.root / self.state_dir_name

    @property
    def ledger_path(self) -> Path:
        return self.state_dir / self.ledger_filename

    def configure_logging(self) -> None:
        setup_logging(self.log_level)

    def open_ledger(self) -> JsonlLedger:
        return JsonlLedger(self.state_dir, filename=self.ledger_filename)

    def open_contract(self, ledger: JsonlLedger | None = None) -> SharedDataContract:
        return SharedDataContract(ledger if ledger is not None else self.open_ledger())

    def open_queries(self, ledger: JsonlLedger | None = None) -> SharedDataQueries:
        return SharedDataQueries(ledger if ledger is not None else self.open_ledger())
