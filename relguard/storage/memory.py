"""In-memory release storage.

Holds every revision per release name in a plain dict.  Intended for tests
and for verifying exported releases locally; it is not safe for use by
multiple writers across processes.
"""

from __future__ import annotations

import structlog

from relguard.models.release import Release
from relguard.storage.base import DriverReleaseNotFound

_log = structlog.get_logger(component="storage.memory")


class MemoryStorage:
    """ReleaseStorage backed by a dict of ``name -> {version -> Release}``."""

    def __init__(self, releases: list[Release] | None = None) -> None:
        self._releases: dict[str, dict[int, Release]] = {}
        for rls in releases or []:
            self.create(rls)

    def create(self, release: Release) -> None:
        """Store a new revision.  Raises ValueError if it already exists."""
        revisions = self._releases.setdefault(release.name, {})
        if release.version in revisions:
            raise ValueError(f"release {release.name}.v{release.version} already exists")
        revisions[release.version] = release
        _log.debug("release_created", release=release.name, version=release.version)

    def update(self, release: Release) -> None:
        """Replace an existing revision."""
        revisions = self._releases.get(release.name, {})
        if release.version not in revisions:
            raise DriverReleaseNotFound(release.name, release.version)
        revisions[release.version] = release
        _log.debug("release_updated", release=release.name, version=release.version)

    def delete(self, name: str, version: int) -> Release:
        """Remove and return a revision."""
        revisions = self._releases.get(name, {})
        if version not in revisions:
            raise DriverReleaseNotFound(name, version)
        rls = revisions.pop(version)
        if not revisions:
            del self._releases[name]
        _log.debug("release_deleted", release=name, version=version)
        return rls

    def get(self, name: str, version: int) -> Release:
        try:
            return self._releases[name][version]
        except KeyError:
            raise DriverReleaseNotFound(name, version) from None

    def last(self, name: str) -> Release:
        revisions = self._releases.get(name)
        if not revisions:
            raise DriverReleaseNotFound(name)
        return revisions[max(revisions)]

    def history(self, name: str) -> list[Release]:
        """Return every revision of *name*, oldest first."""
        revisions = self._releases.get(name)
        if not revisions:
            raise DriverReleaseNotFound(name)
        return [revisions[v] for v in sorted(revisions)]
