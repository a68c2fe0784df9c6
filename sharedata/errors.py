"""Exception taxonomy for the shared data registry.

Every failure is terminal for the operation that raised it. The contract
checks all preconditions before persisting, so a raised error means the
ledger was not touched.
"""

from __future__ import annotations

from typing import Any


class SharedDataError(Exception):
    """Base exception for the registry."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ValidationError(SharedDataError, ValueError):
    """Malformed input to record construction or the sharing list."""

    pass


class AlreadyExists(SharedDataError):
    """A record is already stored under the requested id."""

    def __init__(self, record_id: str):
        super().__init__(
            f"The shared data {record_id} already exists",
            {"id": record_id},
        )
        self.record_id = record_id


class NotFound(SharedDataError):
    """No record is stored under the requested id."""

    def __init__(self, record_id: str):
        super().__init__(
            f"The shared data {record_id} does not exist",
            {"id": record_id},
        )
        self.record_id = record_id


class NotOwner(SharedDataError):
    """The requester is not the owner of the record."""

    def __init__(self, record_id: str, requester: str):
        super().__init__(
            f"The shared data {record_id} does not belong to {requester}",
            {"id": record_id, "requester": requester},
        )
        self.record_id = record_id
        self.requester = requester


class AlreadyGranted(SharedDataError):
    """The third party is already on the sharing list."""

    def __init__(self, record_id: str, third_party: str):
        super().__init__(
            f"The shared data {record_id} is already shared with {third_party}",
            {"id": record_id, "third_party": third_party},
        )
        self.record_id = record_id
        self.third_party = third_party


class NotGranted(SharedDataError):
    """The third party is not on the sharing list."""

    def __init__(self, record_id: str, third_party: str):
        super().__init__(
            f"The shared data {record_id} is not shared with {third_party}",
            {"id": record_id, "third_party": third_party},
        )
        self.record_id = record_id
        self.third_party = third_party


class LedgerError(SharedDataError):
    """The bundled ledger found a malformed entry in its storage."""

    pass
