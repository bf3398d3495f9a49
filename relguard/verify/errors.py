"""Verification verdicts.

Every verifier failure that says something about the world is one of the
ReleaseVerificationError subclasses below; each carries a Verdict tag so
callers can switch on it.  These are terminal for the current attempt and
should drive a state transition, not a retry.

Two kinds of failure deliberately fall outside this hierarchy and should be
retried instead: backend errors other than not-found, which propagate
unchanged, and ObservationEncodeError, which signals an internal
malfunction while encoding a release.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from relguard.release.observation import ObservationEncodeError


class Verdict(StrEnum):
    """Outcome of verifying a release against its snapshot."""

    CONSISTENT = "consistent"
    TARGET_CHANGED = "target_changed"
    LOCKED = "locked"
    NOT_FOUND = "not_found"
    DISAPPEARED = "disappeared"
    DIGEST_ERROR = "digest_error"
    NOT_OBSERVED = "not_observed"
    CHART_CHANGED = "chart_changed"
    CONFIG_CHANGED = "config_changed"


class ReleaseVerificationError(Exception):
    """Base class of all verification verdicts."""

    verdict: ClassVar[Verdict]
    default_message: ClassVar[str] = "release verification failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ReleaseNotFound(ReleaseVerificationError):
    """No release exists where one was expected."""

    verdict = Verdict.NOT_FOUND
    default_message = "no release found"


class ReleaseDisappeared(ReleaseVerificationError):
    """A previously observed release is no longer in storage."""

    verdict = Verdict.DISAPPEARED
    default_message = "release disappeared from storage"


class ReleaseDigest(ReleaseVerificationError):
    """The snapshot digest could not be parsed."""

    verdict = Verdict.DIGEST_ERROR
    default_message = "release digest verification error"


class ReleaseNotObserved(ReleaseVerificationError):
    """The stored release does not hash to the snapshot digest."""

    verdict = Verdict.NOT_OBSERVED
    default_message = "release not observed to be made for object"


class ChartChanged(ReleaseVerificationError):
    """The release was built from a different chart name or version."""

    verdict = Verdict.CHART_CHANGED
    default_message = "release chart changed"


class ConfigDigest(ReleaseVerificationError):
    """The values no longer hash to the snapshot config digest."""

    verdict = Verdict.CONFIG_CHANGED
    default_message = "release config values changed"


__all__ = [
    "ChartChanged",
    "ConfigDigest",
    "ObservationEncodeError",
    "ReleaseDigest",
    "ReleaseDisappeared",
    "ReleaseNotFound",
    "ReleaseNotObserved",
    "ReleaseVerificationError",
    "Verdict",
]
