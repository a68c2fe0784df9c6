"""
Sharing list encoding.

The sharing list is stored on the record as one flat string. Encoding never
produces duplicates because the permission engine refuses duplicate grants;
decoding therefore does not de-duplicate.

This module intentionally avoids third-party dependencies.
"""

from __future__ import annotations

from typing import Iterable

from .errors import ValidationError

DELIMITER = ","


def encode(identities: Iterable[str]) -> str:
    """Join identities with the delimiter. An empty list encodes as ""."""
    return DELIMITER.join(identity.strip() for identity in identities)


def decode(value: str | None) -> list[str]:
    """Split an encoded sharing list, preserving order."""
    if value is None or not value.strip():
        return []
    return value.strip().split(DELIMITER)


def validate_identity(identity: str) -> str:
    """Reject identities that cannot be stored in an encoded list."""
    if not isinstance(identity, str) or not identity.strip():
        raise ValidationError("Identity must be a non-empty string", {"identity": identity})
    if DELIMITER in identity:
        raise ValidationError(
            f"Identity {identity!r} must not contain {DELIMITER!r}",
            {"identity": identity},
        )
    return identity.strip()
