"""Release existence lookups against a storage backend."""

from __future__ import annotations

import structlog

from relguard.models.release import Release
from relguard.observability.metrics import storage_lookups_total
from relguard.release.naming import shorten_name
from relguard.storage.base import DriverReleaseNotFound, ReleaseStorage
from relguard.verify.errors import ReleaseNotFound

_log = structlog.get_logger(component="verify.lookup")


def fetch_last(storage: ReleaseStorage, name: str) -> Release:
    """Read the latest revision of *name*, counting the outcome."""
    try:
        rls = storage.last(name)
    except DriverReleaseNotFound:
        storage_lookups_total.labels(method="last", result="not_found").inc()
        raise
    except Exception as exc:
        storage_lookups_total.labels(method="last", result="error").inc()
        _log.debug("storage_lookup_failed", method="last", release=name, error=str(exc))
        raise
    storage_lookups_total.labels(method="last", result="found").inc()
    return rls


def fetch_version(storage: ReleaseStorage, name: str, version: int) -> Release:
    """Read revision *version* of *name*, counting the outcome."""
    try:
        rls = storage.get(name, version)
    except DriverReleaseNotFound:
        storage_lookups_total.labels(method="get", result="not_found").inc()
        raise
    except Exception as exc:
        storage_lookups_total.labels(method="get", result="error").inc()
        _log.debug("storage_lookup_failed", method="get", release=name, version=version, error=str(exc))
        raise
    storage_lookups_total.labels(method="get", result="found").inc()
    return rls


def last_release(storage: ReleaseStorage, release_name: str) -> Release:
    """Return the last release stored under *release_name*.

    The name is shortened before the lookup.

    Raises:
        ReleaseNotFound: no revision exists for the name.
    """
    try:
        return fetch_last(storage, shorten_name(release_name))
    except DriverReleaseNotFound:
        raise ReleaseNotFound() from None


def is_installed(storage: ReleaseStorage, release_name: str) -> bool:
    """Return True if any revision is stored under *release_name*.

    Backend errors other than not-found propagate.
    """
    try:
        fetch_last(storage, shorten_name(release_name))
    except DriverReleaseNotFound:
        return False
    return True
