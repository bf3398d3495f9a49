"""Chart and values drift checks between a release and its snapshot."""

from __future__ import annotations

from typing import Any

import structlog

from relguard.models.release import ChartMetadata, Release
from relguard.models.snapshot import Snapshot
from relguard.observability.metrics import track_verification
from relguard.release.values import verify_values
from relguard.verify.errors import ChartChanged, ConfigDigest, ReleaseNotFound

_log = structlog.get_logger(component="verify.consistency")


def verify_release(
    release: Release | None,
    snapshot: Snapshot | None,
    chart: ChartMetadata | None,
    values: dict[str, Any] | None,
) -> None:
    """Verify that *release* was made from *chart* and *values*.

    The chart is checked before the values: when both drifted the result is
    ChartChanged.  Without *chart* only the values are checked.

    Raises:
        ReleaseNotFound: *release* is None.
        ChartChanged:    chart name or version differs from the release.
        ConfigDigest:    *snapshot* is None, or *values* do not hash to its
                         config digest.
    """
    with track_verification("verify_release"):
        if release is None:
            raise ReleaseNotFound()

        if chart is not None and not release.chart.metadata.same_chart(chart):
            _log.info(
                "release_chart_changed",
                release=release.name,
                stored=f"{release.chart.metadata.name}@{release.chart.metadata.version}",
                desired=f"{chart.name}@{chart.version}",
            )
            raise ChartChanged()

        if snapshot is None or not verify_values(snapshot.config_digest, values):
            _log.info("release_config_changed", release=release.name)
            raise ConfigDigest()
