"""Canonical observed projection of a stored release.

The digest recorded in a Snapshot is computed over the encoding produced
here, so this module is the compatibility surface of the whole verification
scheme: identical releases must encode to identical bytes in every process
and every relguard version.  The observed fields are, by encoded key:

    name, namespace, version, labels, manifest, config,
    info            -- status, description, notes, first_deployed,
                       last_deployed, deleted
    chart_metadata  -- name, version, appVersion, apiVersion, description, type
    hooks           -- name, kind, path, manifest, events, weight,
                       delete_policies

Not observed: the chart's templates and default values, and hook execution
results (``last_run``), which Helm rewrites whenever a hook runs.  The
default filter also drops hooks that fire on ``test`` events.

Adding, removing or renaming a field changes every digest and invalidates
every recorded snapshot.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from relguard.models.release import ChartMetadata, Hook, Info, Release
from relguard.models.snapshot import Snapshot
from relguard.release.digest import CANONICAL_ALGORITHM, Digest
from relguard.release.values import digest_values


class ObservationEncodeError(RuntimeError):
    """Raised when an observation cannot be encoded.

    This is an internal malfunction, not a verification verdict: callers
    should retry rather than act on it.
    """

    def __init__(self, release_name: str, cause: Exception) -> None:
        super().__init__(f"failed to encode observed release '{release_name}': {cause}")
        self.release_name = release_name
        self.cause = cause


@dataclass(frozen=True)
class Observation:
    """The observed projection of a Release."""

    name: str
    namespace: str
    version: int
    info: Info
    chart_metadata: ChartMetadata
    config: dict[str, Any] = field(default_factory=dict)
    manifest: str = ""
    hooks: tuple[Hook, ...] = ()
    labels: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "namespace": self.namespace,
            "version": self.version,
            "info": self.info.to_dict(),
            "chart_metadata": self.chart_metadata.to_dict(),
            "config": self.config,
            "manifest": self.manifest,
            "hooks": [_observed_hook(h) for h in self.hooks],
            "labels": self.labels,
        }

    def encode(self) -> bytes:
        """Return the canonical encoding.

        Raises:
            ObservationEncodeError: the config holds values JSON cannot
                represent (non-string keys, NaN, arbitrary objects).
        """
        try:
            return json.dumps(
                self.to_dict(),
                sort_keys=True,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise ObservationEncodeError(self.name, exc) from exc


def _observed_hook(hook: Hook) -> dict[str, Any]:
    data = hook.to_dict()
    data.pop("last_run", None)
    return data


ObservationFilter = Callable[[Observation], Observation]


def ignore_hook_test_events(obs: Observation) -> Observation:
    """Drop hooks that only run on ``helm test``.

    Test hooks are recorded separately on the Snapshot, and running tests
    must not change the observed release.
    """
    return replace(obs, hooks=tuple(h for h in obs.hooks if not h.is_test()))


DEFAULT_FILTERS: tuple[ObservationFilter, ...] = (ignore_hook_test_events,)


def observe_release(release: Release, *filters: ObservationFilter) -> Observation:
    """Build the observation of *release*, then apply *filters* in order.

    Without explicit filters, DEFAULT_FILTERS apply.
    """
    obs = Observation(
        name=release.name,
        namespace=release.namespace,
        version=release.version,
        info=release.info,
        chart_metadata=release.chart.metadata,
        config=release.config,
        manifest=release.manifest,
        hooks=release.hooks,
        labels=release.labels,
    )
    for f in filters or DEFAULT_FILTERS:
        obs = f(obs)
    return obs


def digest_observation(algorithm: str, obs: Observation) -> Digest:
    """Compute the digest of the canonical encoding of *obs*."""
    return Digest.from_bytes(algorithm, obs.encode())


def collect_test_hooks(release: Release) -> dict[str, dict[str, Any]]:
    """Return an empty status entry for every test hook of *release*."""
    return {h.name: {} for h in release.hooks if h.is_test()}


def observed_to_snapshot(
    obs: Observation,
    algorithm: str = CANONICAL_ALGORITHM,
    test_hooks: dict[str, dict[str, Any]] | None = None,
) -> Snapshot:
    """Record *obs* as a Snapshot.

    The config digest is computed over the observed (merged) values, which
    are the values the controller passed to Helm for this revision.
    """
    return Snapshot(
        name=obs.name,
        namespace=obs.namespace,
        version=obs.version,
        digest=str(digest_observation(algorithm, obs)),
        config_digest=str(digest_values(algorithm, obs.config)),
        chart_name=obs.chart_metadata.name,
        chart_version=obs.chart_metadata.version,
        status=obs.info.status.value,
        first_deployed=obs.info.first_deployed,
        last_deployed=obs.info.last_deployed,
        deleted=obs.info.deleted,
        test_hooks=test_hooks or None,
    )


def snapshot_release(release: Release, algorithm: str = CANONICAL_ALGORITHM) -> Snapshot:
    """Observe *release* with the default filters and record it as a Snapshot."""
    return observed_to_snapshot(
        observe_release(release),
        algorithm=algorithm,
        test_hooks=collect_test_hooks(release),
    )
