"""Shared fixtures for relguard integration tests.

Provides an in-memory release storage populated with realistic Helm
release revisions, and snapshots recorded from them, so the verification
pipeline can be exercised end to end without a cluster.
"""

from __future__ import annotations

from typing import Any

import pytest

from relguard.models.release import Chart, ChartMetadata, Hook, Info, Release, ReleaseStatus
from relguard.models.snapshot import HelmRelease, Snapshot
from relguard.release.observation import snapshot_release
from relguard.storage.memory import MemoryStorage

# ---------------------------------------------------------------------------
# Release factory helpers
# ---------------------------------------------------------------------------

_MANIFEST = """---
apiVersion: apps/v1
kind: Deployment
metadata:
  name: podinfo
  namespace: apps
spec:
  replicas: 2
"""


def make_release(
    name: str = "podinfo",
    namespace: str = "apps",
    version: int = 1,
    chart_name: str = "podinfo",
    chart_version: str = "6.5.4",
    config: dict[str, Any] | None = None,
    status: ReleaseStatus = ReleaseStatus.DEPLOYED,
    manifest: str = _MANIFEST,
    hooks: tuple[Hook, ...] = (),
) -> Release:
    """Create a Release with sensible defaults for testing."""
    return Release(
        name=name,
        namespace=namespace,
        version=version,
        chart=Chart(
            metadata=ChartMetadata(name=chart_name, version=chart_version, app_version="6.5.4"),
            values={"replicaCount": 1},
        ),
        info=Info(
            status=status,
            first_deployed="2026-02-18T12:00:00Z",
            last_deployed=f"2026-02-18T12:{version:02d}:00Z",
            description="Install complete" if version == 1 else "Upgrade complete",
        ),
        config=config if config is not None else {"replicaCount": 2, "ingress": {"enabled": True}},
        manifest=manifest,
        hooks=hooks,
        labels={"owner": "helm-controller"},
    )


def make_helm_release(history: list[Snapshot] | None = None, **kwargs: Any) -> HelmRelease:
    """Create a HelmRelease targeting ``apps/podinfo``."""
    defaults: dict[str, Any] = {
        "name": "podinfo",
        "namespace": "flux-system",
        "release_name": "podinfo",
        "target_namespace": "apps",
        "storage_namespace": "apps",
        "status_storage_namespace": "apps",
        "history": history or [],
    }
    defaults.update(kwargs)
    return HelmRelease(**defaults)


# ---------------------------------------------------------------------------
# Storage fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def first_release() -> Release:
    return make_release(version=1, status=ReleaseStatus.SUPERSEDED)


@pytest.fixture()
def current_release() -> Release:
    return make_release(version=2, config={"replicaCount": 3, "ingress": {"enabled": True}})


@pytest.fixture()
def storage(first_release: Release, current_release: Release) -> MemoryStorage:
    return MemoryStorage([first_release, current_release])


@pytest.fixture()
def current_snapshot(current_release: Release) -> Snapshot:
    return snapshot_release(current_release)


@pytest.fixture()
def helm_release(current_snapshot: Snapshot) -> HelmRelease:
    return make_helm_release(history=[current_snapshot])
