"""Digests over release configuration values."""

from __future__ import annotations

import json
from typing import Any

from relguard.release.digest import Digest, DigestParseError


def encode_values(values: dict[str, Any] | None) -> bytes:
    """Return the canonical encoding of *values*.

    Empty and missing values both encode to no bytes at all, so a release
    installed without values and one installed with ``{}`` share a digest.
    """
    if not values:
        return b""
    return json.dumps(
        values,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def digest_values(algorithm: str, values: dict[str, Any] | None) -> Digest:
    """Compute the digest of *values* with *algorithm*."""
    return Digest.from_bytes(algorithm, encode_values(values))


def verify_values(digest: str, values: dict[str, Any] | None) -> bool:
    """Return True if *values* hash to *digest*.

    Malformed digests and values that cannot be encoded never verify.
    """
    try:
        parsed = Digest.parse(digest)
    except DigestParseError:
        return False
    try:
        data = encode_values(values)
    except (TypeError, ValueError):
        return False
    return parsed.verify(data)
