"""Release state determination.

Runs the verifiers in reconcile order for a HelmRelease and turns the
outcome into a ReleaseState, then suggests the next release action.
Backend errors and ObservationEncodeError are not states: they propagate
so the reconcile loop can retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from relguard.models.release import ChartMetadata, Release
from relguard.models.snapshot import HelmRelease
from relguard.storage.base import ReleaseStorage
from relguard.verify.consistency import verify_release
from relguard.verify.errors import ReleaseNotFound, ReleaseVerificationError, Verdict
from relguard.verify.lookup import last_release
from relguard.verify.snapshot import verify_release_object
from relguard.verify.target import release_target_changed

_log = structlog.get_logger(component="verify.classify")


class Action(StrEnum):
    """Release action the reconciler should take next."""

    NONE = "none"
    INSTALL = "install"
    UPGRADE = "upgrade"
    UNLOCK = "unlock"
    UNINSTALL = "uninstall"


@dataclass(frozen=True)
class ReleaseState:
    """The verified state of a release and the release it was derived from."""

    verdict: Verdict
    release: Release | None = None
    reason: str = ""


def determine_state(
    storage: ReleaseStorage,
    obj: HelmRelease,
    chart: ChartMetadata,
    values: dict[str, Any] | None,
) -> ReleaseState:
    """Determine the state of the release *obj* targets.

    Order: target change, existence, pending lock, snapshot digest, then
    chart and values drift.
    """
    log = _log.bind(release=f"{obj.namespace}/{obj.name}")
    cur = obj.get_current()

    if release_target_changed(obj, chart.name):
        log.info("release_target_changed")
        return ReleaseState(Verdict.TARGET_CHANGED, reason="release target changed since last release")

    name = cur.name if cur is not None else obj.get_release_name()
    try:
        rls = last_release(storage, name)
    except ReleaseNotFound:
        if cur is None:
            return ReleaseState(Verdict.NOT_FOUND, reason="no release in storage")
        return ReleaseState(Verdict.DISAPPEARED, reason="release disappeared from storage")

    if rls.info.status.is_pending():
        log.info("release_locked", status=rls.info.status.value)
        return ReleaseState(Verdict.LOCKED, rls, f"release locked in {rls.info.status.value} state")

    if cur is None:
        return ReleaseState(Verdict.NOT_OBSERVED, rls, "release exists but has no snapshot")

    try:
        verify_release_object(cur, rls)
        verify_release(rls, cur, chart, values)
    except ReleaseVerificationError as exc:
        return ReleaseState(exc.verdict, rls, str(exc))
    return ReleaseState(Verdict.CONSISTENT, rls)


_ACTIONS: dict[Verdict, Action] = {
    Verdict.CONSISTENT: Action.NONE,
    Verdict.TARGET_CHANGED: Action.UNINSTALL,
    Verdict.LOCKED: Action.UNLOCK,
    Verdict.NOT_FOUND: Action.INSTALL,
    Verdict.DISAPPEARED: Action.INSTALL,
    Verdict.DIGEST_ERROR: Action.UPGRADE,
    Verdict.NOT_OBSERVED: Action.UPGRADE,
    Verdict.CHART_CHANGED: Action.UPGRADE,
    Verdict.CONFIG_CHANGED: Action.UPGRADE,
}


def next_action(state: ReleaseState) -> Action:
    """Return the release action that moves *state* towards consistency.

    Releases changed out-of-band are upgraded so the controller takes them
    back over; a moved target is uninstalled before the new install.
    """
    return _ACTIONS[state.verdict]
