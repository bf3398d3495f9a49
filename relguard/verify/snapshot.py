"""Snapshot digest verification.

Confirms that the release held by storage is exactly the object a Snapshot
was recorded for, by re-encoding its observed projection and comparing the
digest.  A snapshot names a revision the controller saw with its own eyes,
so a missing record here means it disappeared, not that it never existed.
"""

from __future__ import annotations

import structlog

from relguard.models.release import Release
from relguard.models.snapshot import Snapshot
from relguard.observability.metrics import track_verification
from relguard.release.digest import Digest, DigestParseError
from relguard.release.observation import observe_release
from relguard.storage.base import DriverReleaseNotFound, ReleaseStorage
from relguard.verify.errors import (
    ReleaseDigest,
    ReleaseDisappeared,
    ReleaseNotFound,
    ReleaseNotObserved,
)
from relguard.verify.lookup import fetch_last, fetch_version

_log = structlog.get_logger(component="verify.snapshot")


def verify_snapshot(storage: ReleaseStorage, snapshot: Snapshot | None) -> Release:
    """Verify *snapshot* against the exact revision it names.

    Returns the verified release.

    Raises:
        ReleaseNotFound:    *snapshot* is None; storage is not consulted.
        ReleaseDisappeared: the revision is no longer in storage.
        ReleaseDigest:      the snapshot digest is malformed.
        ReleaseNotObserved: the stored release does not match the digest.
    """
    with track_verification("verify_snapshot"):
        if snapshot is None:
            raise ReleaseNotFound()
        try:
            rls = fetch_version(storage, snapshot.name, snapshot.version)
        except DriverReleaseNotFound:
            _log.info("release_disappeared", release=snapshot.full_release_name)
            raise ReleaseDisappeared() from None
        verify_release_object(snapshot, rls)
        return rls


def verify_last_storage_item(storage: ReleaseStorage, snapshot: Snapshot | None) -> Release:
    """Verify *snapshot* against the latest revision stored for its name.

    Raises the same verdicts as verify_snapshot.
    """
    with track_verification("verify_last_storage_item"):
        if snapshot is None:
            raise ReleaseNotFound()
        try:
            rls = fetch_last(storage, snapshot.name)
        except DriverReleaseNotFound:
            _log.info("release_disappeared", release=snapshot.full_release_name)
            raise ReleaseDisappeared() from None
        verify_release_object(snapshot, rls)
        return rls


def verify_release_object(snapshot: Snapshot | None, release: Release | None) -> None:
    """Verify that *release* hashes to the digest recorded in *snapshot*.

    The observation is hashed with the algorithm named by the snapshot
    digest, so snapshots recorded with any supported algorithm stay valid.

    Raises:
        ReleaseNotFound:        *snapshot* or *release* is None.
        ReleaseDigest:          the snapshot digest is malformed.
        ReleaseNotObserved:     the digests differ.
        ObservationEncodeError: the release could not be encoded; this is a
                                malfunction and deliberately not a verdict.
    """
    with track_verification("verify_release_object"):
        if snapshot is None or release is None:
            raise ReleaseNotFound()
        try:
            expected = Digest.parse(snapshot.digest)
        except DigestParseError as exc:
            _log.warning("release_digest_invalid", release=snapshot.full_release_name, error=str(exc))
            raise ReleaseDigest() from exc

        data = observe_release(release).encode()
        if not expected.verify(data):
            _log.info(
                "release_not_observed",
                release=snapshot.full_release_name,
                stored_version=release.version,
                expected=str(expected),
            )
            raise ReleaseNotObserved()
