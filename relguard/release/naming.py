"""Release name shortening.

Helm stores each revision under a key derived from the release name, and
Kubernetes label values cap that name at 53 characters.  Longer names are
truncated and suffixed with a short hash of the full name, so distinct long
names stay distinct.  The same function must be applied when writing and
when reading, and applying it twice is a no-op.
"""

from __future__ import annotations

import hashlib

MAX_RELEASE_NAME_LENGTH = 53
_SHORT_HASH_LENGTH = 12


def shorten_name(name: str) -> str:
    """Return *name* shortened to at most 53 characters."""
    if len(name) <= MAX_RELEASE_NAME_LENGTH:
        return name
    short_hash = hashlib.sha256(name.encode("utf-8")).hexdigest()[:_SHORT_HASH_LENGTH]
    return f"{name[: MAX_RELEASE_NAME_LENGTH - (_SHORT_HASH_LENGTH + 1)]}-{short_hash}"
