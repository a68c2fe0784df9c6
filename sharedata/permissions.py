"""
Permission decisions over a record's sharing list.

These functions never touch the ledger. Each takes the current record value
and returns the record to persist; the caller decides whether to store it.
Only the owner may change the sharing list, but any identity may ask for a
permission decision, and the decision itself is recorded on the record so
every access attempt shows up in its history.
"""

from __future__ import annotations

from . import sharing
from .errors import AlreadyGranted, NotGranted, NotOwner
from .models import Mode, PermissionType, SharedRecord


def is_owner(record: SharedRecord, identity: str) -> bool:
    return record.owner_id == identity


def has_access(record: SharedRecord, identity: str) -> bool:
    """Literal sharing-list membership. The owner gets no implicit pass."""
    return identity.strip() in record.shared_with_list


def _require_owner(record: SharedRecord, requester: str) -> None:
    if not is_owner(record, requester):
        raise NotOwner(record.id, requester)


def grant(record: SharedRecord, requester: str, third_party: str, timestamp: int) -> SharedRecord:
    """Add third_party to the sharing list."""
    _require_owner(record, requester)
    third_party = sharing.validate_identity(third_party)

    shared_with = record.shared_with_list
    if third_party in shared_with:
        raise AlreadyGranted(record.id, third_party)
    shared_with.append(third_party)

    return record.evolve(
        shared_with=sharing.encode(shared_with),
        mode=Mode.GRANT,
        updated=timestamp,
        requester=requester,
        permission=PermissionType.NOT_APPLICABLE,
    )


def revoke(record: SharedRecord, requester: str, third_party: str, timestamp: int) -> SharedRecord:
    """Remove third_party from the sharing list."""
    _require_owner(record, requester)
    third_party = sharing.validate_identity(third_party)

    shared_with = record.shared_with_list
    if third_party not in shared_with:
        raise NotGranted(record.id, third_party)
    remaining = [identity for identity in shared_with if identity != third_party]

    return record.evolve(
        shared_with=sharing.encode(remaining),
        mode=Mode.REVOKE,
        updated=timestamp,
        requester=requester,
        permission=PermissionType.NOT_APPLICABLE,
    )


def request_permission(
    record: SharedRecord, requester: str, timestamp: int
) -> tuple[bool, SharedRecord]:
    """
    Decide whether requester may use the record.

    Returns:
        (decision, record to persist). The returned record always carries
        GRANTED or DENIED.
    """
    requester = requester.strip()
    allowed = has_access(record, requester)
    updated = record.evolve(
        mode=Mode.REQUEST,
        updated=timestamp,
        requester=requester,
        permission=PermissionType.GRANTED if allowed else PermissionType.DENIED,
    )
    return allowed, updated
