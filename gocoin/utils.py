"""Serialisation and hashing helpers shared by the chain and the store."""

from __future__ import annotations

import hashlib
import json
from typing import Any


def to_bytes(value: Any) -> bytes:
    """Encode a JSON-compatible value as bytes."""
    return json.dumps(value, sort_keys=True, separators=(",", ":")).encode("utf-8")


def from_bytes(data: bytes) -> Any:
    """Decode bytes produced by :func:`to_bytes`.

    Raises ``ValueError`` when the data is not a valid encoding.
    """
    return json.loads(data.decode("utf-8"))


def hash_value(value: Any) -> str:
    """Return the hex SHA-256 digest of a value.

    Strings are hashed as they are; anything else is hashed through its
    canonical JSON encoding, so key order in mappings does not matter.
    """
    if isinstance(value, str):
        text = value
    else:
        text = json.dumps(value, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(text.encode("utf-8")).hexdigest()