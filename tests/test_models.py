from __future__ import annotations

import json

import pytest

from sharedata.errors import ValidationError
from sharedata.models import WIRE_FIELDS, Mode, PermissionType, SharedRecord

STORED_1001 = (
    b'{"id":"1001","ownerId":"JhonDoe@somewhere.com","sharedWith":"",'
    b'"sharedDataDescription":"shared data 1001 value","bucket":"bucket-a",'
    b'"resourceLocation":"s3://bucket-a/1001","mode":"createSharedData",'
    b'"updated":1623856110467,"requester":"JhonDoe@somewhere.com","permission":3}'
)


def test_new_record_defaults() -> None:
    record = SharedRecord.new("1001", "JD", "d1", "b", "loc", 1000)
    assert record.owner_id == "JD"
    assert record.requester == "JD"
    assert record.shared_with == ""
    assert record.mode == Mode.CREATE
    assert record.permission == PermissionType.NOT_APPLICABLE
    assert record.updated == 1000


def test_wire_format_matches_stored_bytes() -> None:
    record = SharedRecord.new(
        "1001",
        "JhonDoe@somewhere.com",
        "shared data 1001 value",
        "bucket-a",
        "s3://bucket-a/1001",
        1623856110467,
    )
    assert record.to_bytes() == STORED_1001
    assert list(json.loads(record.to_json())) == list(WIRE_FIELDS)


def test_roundtrip_preserves_every_field() -> None:
    record = SharedRecord(
        id="7",
        owner_id="o",
        shared_with="a,b",
        shared_data_description="desc",
        bucket="bk",
        resource_location="loc",
        mode=Mode.REQUEST,
        updated=42,
        requester="a",
        permission=PermissionType.GRANTED,
    )
    assert SharedRecord.from_bytes(record.to_bytes()) == record


def test_permission_persisted_as_integer_code() -> None:
    record = SharedRecord.new("1", "o", "", "", "", 1).evolve(permission=PermissionType.DENIED)
    assert record.to_dict()["permission"] == 2
    assert record.to_dict()["mode"] == "createSharedData"


@pytest.mark.parametrize("record_id, owner_id", [("", "o"), ("1", ""), ("  ", "o"), ("1", None)])
def test_missing_id_or_owner_rejected(record_id: str, owner_id: str) -> None:
    with pytest.raises(ValidationError):
        SharedRecord(id=record_id, owner_id=owner_id)


def test_non_integer_timestamp_rejected() -> None:
    with pytest.raises(ValidationError, match="non-integer timestamp"):
        SharedRecord(id="1", owner_id="o", updated="yesterday")  # type: ignore[arg-type]


def test_unknown_mode_rejected_on_read() -> None:
    data = json.loads(STORED_1001)
    data["mode"] = "transferOwnership"
    with pytest.raises(ValidationError, match="Invalid mode"):
        SharedRecord.from_dict(data)


def test_legacy_shape_without_location_fields() -> None:
    legacy = {
        "ownerId": "JD",
        "sharedWith": "alice",
        "sharedDataDescription": "old",
        "mode": "grantAccess",
        "updated": 5,
        "requester": "JD",
        "permission": 3,
    }
    record = SharedRecord.from_dict(legacy, key="900")
    assert record.id == "900"
    assert record.bucket == ""
    assert record.resource_location == ""
    assert record.shared_with_list == ["alice"]


def test_value_only_shape_rejected() -> None:
    with pytest.raises(ValidationError, match="requires an owner"):
        SharedRecord.from_json('{"value":"something"}', key="1")


def test_invalid_json_rejected() -> None:
    with pytest.raises(ValidationError, match="not valid JSON"):
        SharedRecord.from_bytes(b"{not json", key="1")


def test_constructor_coerces_wire_values() -> None:
    record = SharedRecord(id="1", owner_id="o", mode="grantAccess", permission=1)  # type: ignore[arg-type]
    assert record.mode is Mode.GRANT
    assert record.permission is PermissionType.GRANTED


@pytest.mark.parametrize("field, value", [("mode", "transferOwnership"), ("permission", 7), ("permission", True)])
def test_constructor_rejects_unknown_wire_values(field: str, value: object) -> None:
    with pytest.raises(ValidationError, match="Invalid"):
        SharedRecord(id="1", owner_id="o", **{field: value})  # type: ignore[arg-type]
