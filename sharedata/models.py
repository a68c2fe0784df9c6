"""
Shared record schema and its ledger wire format.

A SharedRecord is the only persisted entity. It is stored as a flat JSON
object under its id; the permission decision is persisted as its integer
code and the mode as the literal operation name.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Any

from . import sharing
from .errors import ValidationError


class PermissionType(IntEnum):
    GRANTED = 1
    DENIED = 2
    NOT_APPLICABLE = 3


class Mode(str, Enum):
    """Name of the last operation applied to a record."""

    CREATE = "createSharedData"
    UPDATE = "updateSharedData"
    DELETE = "deleteSharedData"
    GRANT = "grantAccess"
    REVOKE = "revokeAccess"
    REQUEST = "requestPermission"


# Wire keys, in serialization order
WIRE_FIELDS = (
    "id",
    "ownerId",
    "sharedWith",
    "sharedDataDescription",
    "bucket",
    "resourceLocation",
    "mode",
    "updated",
    "requester",
    "permission",
)


@dataclass(frozen=True)
class SharedRecord:
    """
    Description of an external resource and who may use it.

    Records are values: every mutation builds a new record with
    dataclasses.replace() and persists it whole.
    """

    id: str
    owner_id: str
    shared_with: str = ""  # encoded sharing list
    shared_data_description: str = ""
    bucket: str = ""
    resource_location: str = ""
    mode: Mode = Mode.CREATE
    updated: int = 0
    requester: str = ""
    permission: PermissionType = PermissionType.NOT_APPLICABLE

    def __post_init__(self) -> None:
        """Validate field-level invariants."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("Shared data id is required", {"id": self.id})
        if not isinstance(self.owner_id, str) or not self.owner_id.strip():
            raise ValidationError(
                f"Shared data {self.id} requires an owner", {"id": self.id}
            )
        if isinstance(self.updated, bool) or not isinstance(self.updated, int):
            raise ValidationError(
                f"Shared data {self.id} has a non-integer timestamp: {self.updated!r}",
                {"id": self.id, "updated": self.updated},
            )
        # Raw wire values ("grantAccess", 1) are coerced to their enum members
        if not isinstance(self.mode, Mode):
            try:
                object.__setattr__(self, "mode", Mode(self.mode))
            except ValueError:
                raise ValidationError(f"Invalid mode: {self.mode!r}", {"id": self.id}) from None
        if not isinstance(self.permission, PermissionType):
            try:
                if isinstance(self.permission, bool):
                    raise ValueError(self.permission)
                object.__setattr__(self, "permission", PermissionType(self.permission))
            except ValueError:
                raise ValidationError(
                    f"Invalid permission: {self.permission!r}", {"id": self.id}
                ) from None
        for name in ("shared_with", "shared_data_description", "bucket", "resource_location", "requester"):
            if not isinstance(getattr(self, name), str):
                raise ValidationError(f"Field {name} must be a string", {"id": self.id})

    @classmethod
    def new(
        cls,
        record_id: str,
        owner_id: str,
        description: str,
        bucket: str,
        resource_location: str,
        timestamp: int,
    ) -> SharedRecord:
        """Build the initial value of a freshly created record."""
        return cls(
            id=record_id,
            owner_id=owner_id,
            shared_with="",
            shared_data_description=description or "",
            bucket=bucket or "",
            resource_location=resource_location or "",
            mode=Mode.CREATE,
            updated=timestamp,
            requester=owner_id,
            permission=PermissionType.NOT_APPLICABLE,
        )

    @property
    def shared_with_list(self) -> list[str]:
        return sharing.decode(self.shared_with)

    def evolve(self, **changes: Any) -> SharedRecord:
        return replace(self, **changes)

    # --- Wire format ---

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "sharedWith": self.shared_with,
            "sharedDataDescription": self.shared_data_description,
            "bucket": self.bucket,
            "resourceLocation": self.resource_location,
            "mode": self.mode.value,
            "updated": self.updated,
            "requester": self.requester,
            "permission": int(self.permission),
        }

    def to_json(self) -> str:
        """Serialize to JSON string (single line)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def to_bytes(self) -> bytes:
        return self.to_json().encode("utf-8")

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, key: str | None = None) -> SharedRecord:
        """
        Reconstruct from a stored dict.

        Records written before bucket/resourceLocation existed read back
        with those fields empty; a missing id falls back to the ledger key.
        """
        if not isinstance(data, dict):
            raise ValidationError("Shared data must be a JSON object", {"key": key})
        try:
            mode = Mode(data.get("mode", Mode.CREATE.value))
        except ValueError as exc:
            raise ValidationError(f"Invalid mode: {data.get('mode')!r}", {"key": key}) from exc
        try:
            permission = PermissionType(data.get("permission", PermissionType.NOT_APPLICABLE))
        except ValueError as exc:
            raise ValidationError(
                f"Invalid permission: {data.get('permission')!r}", {"key": key}
            ) from exc
        owner_id = data.get("ownerId", "")
        return cls(
            id=data.get("id") or key or "",
            owner_id=owner_id,
            shared_with=data.get("sharedWith", ""),
            shared_data_description=data.get("sharedDataDescription", ""),
            bucket=data.get("bucket", ""),
            resource_location=data.get("resourceLocation", ""),
            mode=mode,
            updated=data.get("updated", 0),
            requester=data.get("requester", owner_id),
            permission=permission,
        )

    @classmethod
    def from_json(cls, line: str, *, key: str | None = None) -> SharedRecord:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Shared data is not valid JSON: {exc}", {"key": key}) from exc
        return cls.from_dict(data, key=key)

    @classmethod
    def from_bytes(cls, value: bytes, *, key: str | None = None) -> SharedRecord:
        return cls.from_json(value.decode("utf-8"), key=key)
