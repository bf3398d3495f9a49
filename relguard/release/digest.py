"""Algorithm-tagged content digests.

A digest is written ``<algorithm>:<hex>``, e.g. ``sha256:9f86d0...``.
Parsing validates both the algorithm and the encoded length, so a digest
that parses can always be verified against content.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass

CANONICAL_ALGORITHM = "sha256"

# algorithm -> hex length
SUPPORTED_ALGORITHMS: dict[str, int] = {
    "sha256": 64,
    "sha384": 96,
    "sha512": 128,
}

_RE_DIGEST = re.compile(r"^([a-z0-9]+(?:[.+_-][a-z0-9]+)*):([a-f0-9]+)$")


class DigestParseError(ValueError):
    """Raised when a digest string is malformed or uses an unknown algorithm."""


@dataclass(frozen=True)
class Digest:
    """A parsed digest.  Two digests are equal iff algorithm and hex match."""

    algorithm: str
    hex: str

    @classmethod
    def parse(cls, value: str) -> Digest:
        match = _RE_DIGEST.match(value)
        if match is None:
            raise DigestParseError(f"invalid digest format: {value!r}")
        algorithm, encoded = match.group(1), match.group(2)
        expected = SUPPORTED_ALGORITHMS.get(algorithm)
        if expected is None:
            raise DigestParseError(f"unsupported digest algorithm: {algorithm!r}")
        if len(encoded) != expected:
            raise DigestParseError(f"invalid {algorithm} digest length: {len(encoded)}")
        return cls(algorithm=algorithm, hex=encoded)

    @classmethod
    def from_bytes(cls, algorithm: str, data: bytes) -> Digest:
        """Compute the digest of *data* with *algorithm*."""
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise DigestParseError(f"unsupported digest algorithm: {algorithm!r}")
        return cls(algorithm=algorithm, hex=hashlib.new(algorithm, data).hexdigest())

    def verify(self, data: bytes) -> bool:
        """Return True if *data* hashes to this digest."""
        return hashlib.new(self.algorithm, data).hexdigest() == self.hex

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.hex}"
