"""
Shared data lifecycle management.

Owners create, update and delete records; the sharing list is managed
through grant/revoke, and any identity may request a permission decision.
Every operation reads the record at most once, checks all preconditions,
and only then persists, so a failed operation never leaves a partial write.
The requester identity is always an explicit argument.
"""

from __future__ import annotations

import logging

from . import permissions
from .errors import AlreadyExists, NotFound, NotOwner, SharedDataError
from .ledger import Ledger
from .models import Mode, PermissionType, SharedRecord

logger = logging.getLogger(__name__)


def record_exists(ledger: Ledger, record_id: str) -> bool:
    """True iff the ledger holds a non-empty value at record_id."""
    return bool(ledger.get(record_id))


class SharedDataContract:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def _reject(self, error: SharedDataError) -> SharedDataError:
        logger.warning("rejected: %s", error.message)
        return error

    def _fetch(self, record_id: str) -> SharedRecord:
        if not self.exists(record_id):
            raise self._reject(NotFound(record_id))
        value = self.ledger.get(record_id) or b""
        return SharedRecord.from_bytes(value, key=record_id)

    def _fetch_owned(self, record_id: str, requester: str) -> SharedRecord:
        record = self._fetch(record_id)
        if not permissions.is_owner(record, requester):
            raise self._reject(NotOwner(record_id, requester))
        return record

    def _persist(self, record: SharedRecord) -> SharedRecord:
        self.ledger.put(record.id, record.to_bytes())
        logger.info("%s %s by %s", record.mode.value, record.id, record.requester)
        return record

    def exists(self, record_id: str) -> bool:
        return record_exists(self.ledger, record_id)

    def create(
        self,
        record_id: str,
        requester: str,
        description: str,
        bucket: str,
        resource_location: str,
        timestamp: int,
    ) -> SharedRecord:
        if self.exists(record_id):
            raise self._reject(AlreadyExists(record_id))
        record = SharedRecord.new(record_id, requester, description, bucket, resource_location, timestamp)
        return self._persist(record)

    def read(self, record_id: str, requester: str) -> SharedRecord:
        """Return the record. Only the owner may read it directly."""
        record = self._fetch_owned(record_id, requester)
        logger.debug("read %s by %s", record_id, requester)
        return record

    def update(
        self,
        record_id: str,
        requester: str,
        description: str | None,
        bucket: str | None,
        resource_location: str | None,
        timestamp: int,
    ) -> SharedRecord:
        """
        Overwrite the descriptive fields of a record.

        Empty or None values leave the stored field unchanged.
        """
        record = self._fetch_owned(record_id, requester)
        updated = record.evolve(
            shared_data_description=description or record.shared_data_description,
            bucket=bucket or record.bucket,
            resource_location=resource_location or record.resource_location,
            mode=Mode.UPDATE,
            updated=timestamp,
            requester=requester,
            permission=PermissionType.NOT_APPLICABLE,
        )
        return self._persist(updated)

    def delete(self, record_id: str, requester: str) -> SharedRecord:
        """Remove the record and return the value it held when deleted."""
        record = self._fetch_owned(record_id, requester)
        self.ledger.delete(record_id)
        logger.info("%s %s by %s", Mode.DELETE.value, record_id, requester)
        return record

    # --- Sharing ---

    def grant_access(self, record_id: str, requester: str, third_party: str, timestamp: int) -> SharedRecord:
        record = self._fetch(record_id)
        try:
            updated = permissions.grant(record, requester, third_party, timestamp)
        except SharedDataError as exc:
            logger.warning("rejected: %s", exc.message)
            raise
        return self._persist(updated)

    def revoke_access(self, record_id: str, requester: str, third_party: str, timestamp: int) -> SharedRecord:
        record = self._fetch(record_id)
        try:
            updated = permissions.revoke(record, requester, third_party, timestamp)
        except SharedDataError as exc:
            logger.warning("rejected: %s", exc.message)
            raise
        return self._persist(updated)

    def request_permission(self, record_id: str, requester: str, timestamp: int) -> bool:
        """Record and return whether requester is on the sharing list."""
        record = self._fetch(record_id)
        allowed, updated = permissions.request_permission(record, requester, timestamp)
        self._persist(updated)
        return allowed
