"""Release target comparison."""

from __future__ import annotations

from relguard.models.snapshot import HelmRelease
from relguard.release.naming import shorten_name


def release_target_changed(obj: HelmRelease, chart_name: str) -> bool:
    """Return True if the release target moved since the current snapshot.

    The target is the (storage namespace, release namespace, release name,
    chart name) tuple.  A change means the old release must be uninstalled
    before the new one is installed.  Without a recorded storage namespace
    or a current snapshot there is nothing to compare against.
    """
    cur = obj.get_current()
    if not obj.status_storage_namespace or cur is None:
        return False
    return (
        obj.get_storage_namespace() != obj.status_storage_namespace
        or obj.get_release_namespace() != cur.namespace
        or shorten_name(obj.get_release_name()) != cur.name
        or chart_name != cur.chart_name
    )
