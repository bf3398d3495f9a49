"""Release fingerprinting primitives.

Submodules:
    digest       -- Algorithm-tagged content digests (``algorithm:hex``).
    naming       -- Release name shortening to the storage key limit.
    observation  -- Canonical observed projection of a stored release.
    values       -- Digests over configuration values.
"""

from relguard.release.digest import CANONICAL_ALGORITHM, Digest, DigestParseError
from relguard.release.naming import shorten_name
from relguard.release.observation import (
    Observation,
    ObservationEncodeError,
    collect_test_hooks,
    digest_observation,
    ignore_hook_test_events,
    observe_release,
    observed_to_snapshot,
    snapshot_release,
)
from relguard.release.values import digest_values, verify_values

__all__ = [
    "CANONICAL_ALGORITHM",
    "Digest",
    "DigestParseError",
    "Observation",
    "ObservationEncodeError",
    "collect_test_hooks",
    "digest_observation",
    "digest_values",
    "ignore_hook_test_events",
    "observe_release",
    "observed_to_snapshot",
    "snapshot_release",
    "shorten_name",
    "verify_values",
]
