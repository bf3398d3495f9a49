"""Release state verification.

Submodules:
    errors       -- Verdict exceptions and the Verdict enumeration.
    target       -- Release target change detection.
    lookup       -- Release existence lookups.
    snapshot     -- Snapshot digest verification.
    consistency  -- Chart and values drift checks.
    classify     -- Full-pipeline state determination and next action.
"""

from relguard.verify.classify import Action, ReleaseState, determine_state, next_action
from relguard.verify.consistency import verify_release
from relguard.verify.errors import (
    ChartChanged,
    ConfigDigest,
    ObservationEncodeError,
    ReleaseDigest,
    ReleaseDisappeared,
    ReleaseNotFound,
    ReleaseNotObserved,
    ReleaseVerificationError,
    Verdict,
)
from relguard.verify.lookup import is_installed, last_release
from relguard.verify.snapshot import (
    verify_last_storage_item,
    verify_release_object,
    verify_snapshot,
)
from relguard.verify.target import release_target_changed

__all__ = [
    "Action",
    "ChartChanged",
    "ConfigDigest",
    "ObservationEncodeError",
    "ReleaseDigest",
    "ReleaseDisappeared",
    "ReleaseNotFound",
    "ReleaseNotObserved",
    "ReleaseState",
    "ReleaseVerificationError",
    "Verdict",
    "determine_state",
    "is_installed",
    "last_release",
    "next_action",
    "release_target_changed",
    "verify_last_storage_item",
    "verify_release",
    "verify_release_object",
    "verify_snapshot",
]
