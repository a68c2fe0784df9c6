"""
Listings and history over the shared data ledger.

All results are lazy, finite and single-pass. The underlying ledger cursor
is held in a with-block inside each generator, so it is released when the
generator is exhausted, closed early, or fails while decoding a value.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterator

from .contract import record_exists
from .errors import NotFound
from .ledger import Ledger, LedgerCursor
from .models import SharedRecord

logger = logging.getLogger(__name__)


def _records(open_cursor: Callable[[], LedgerCursor[tuple[str, bytes]]]) -> Iterator[SharedRecord]:
    # The cursor is opened on first iteration so an unconsumed result holds nothing
    with open_cursor() as cursor:
        for key, value in cursor:
            yield SharedRecord.from_bytes(value, key=key)


def _versions(open_cursor: Callable[[], LedgerCursor[bytes]], record_id: str) -> Iterator[SharedRecord]:
    with open_cursor() as cursor:
        for value in cursor:
            yield SharedRecord.from_bytes(value, key=record_id)


class SharedDataQueries:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def by_owner(self, owner_id: str) -> Iterator[SharedRecord]:
        """All current records owned by owner_id."""
        logger.debug("query ownerId == %s", owner_id)
        return _records(lambda: self.ledger.query_by_equality("ownerId", owner_id))

    def by_shared_with_match(self, third_party: str) -> Iterator[SharedRecord]:
        """
        All current records whose encoded sharing list contains third_party.

        This is substring containment, not list membership: "bob" also
        matches a record shared with "bobby".
        """
        logger.debug("query sharedWith contains %s", third_party)
        return _records(lambda: self.ledger.query_by_regex("sharedWith", re.escape(third_party)))

    def history(self, record_id: str) -> Iterator[SharedRecord]:
        """
        Every value ever stored at record_id, oldest first.

        Raises NotFound immediately if the record does not currently exist.
        """
        if not record_exists(self.ledger, record_id):
            logger.warning("rejected: history of missing shared data %s", record_id)
            raise NotFound(record_id)
        logger.debug("history %s", record_id)
        return _versions(lambda: self.ledger.history_of(record_id), record_id)
