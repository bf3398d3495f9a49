"""Read contract every release storage backend must satisfy."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from relguard.models.release import Release


class DriverReleaseNotFound(LookupError):
    """Raised by a backend when no record exists for the requested key."""

    def __init__(self, name: str, version: int | None = None) -> None:
        key = name if version is None else f"{name}.v{version}"
        super().__init__(f"release: not found: {key}")
        self.name = name
        self.version = version


@runtime_checkable
class ReleaseStorage(Protocol):
    """Release storage backend keyed by (shortened) release name.

    Both methods are single bounded reads.  A missing record is signalled
    with DriverReleaseNotFound; any other exception is an infrastructure
    failure and is passed through untouched by the verifiers.
    """

    def get(self, name: str, version: int) -> Release:
        """Return the record for *name* at revision *version*."""
        ...

    def last(self, name: str) -> Release:
        """Return the highest revision recorded for *name*."""
        ...
