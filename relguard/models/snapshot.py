"""Controller-side release fingerprints and the HelmRelease object they belong to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SNAPSHOT_API_VERSION = "v2"


@dataclass(frozen=True)
class Snapshot:
    """Fingerprint of a release the controller made.

    ``digest`` covers the observed projection of the stored release,
    ``config_digest`` covers the values the controller composed for it.
    Snapshots are never mutated; the next release action supersedes them.
    """

    name: str
    namespace: str
    version: int
    digest: str
    config_digest: str
    chart_name: str = ""
    chart_version: str = ""
    status: str = ""
    first_deployed: str = ""
    last_deployed: str = ""
    deleted: str = ""
    test_hooks: dict[str, dict[str, Any]] | None = None
    api_version: str = SNAPSHOT_API_VERSION

    @property
    def full_release_name(self) -> str:
        """Return ``namespace/name.vN``, the form used in log lines."""
        return f"{self.namespace}/{self.name}.v{self.version}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        """Create a Snapshot from its HelmRelease status JSON encoding."""
        return cls(
            api_version=str(data.get("apiVersion", SNAPSHOT_API_VERSION)),
            name=str(data.get("name", "")),
            namespace=str(data.get("namespace", "")),
            version=int(data.get("version", 0)),
            digest=str(data.get("digest", "")),
            config_digest=str(data.get("configDigest", "")),
            chart_name=str(data.get("chartName", "")),
            chart_version=str(data.get("chartVersion", "")),
            status=str(data.get("status", "")),
            first_deployed=str(data.get("firstDeployed", "")),
            last_deployed=str(data.get("lastDeployed", "")),
            deleted=str(data.get("deleted", "")),
            test_hooks=data.get("testHooks"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "apiVersion": self.api_version,
            "name": self.name,
            "namespace": self.namespace,
            "version": self.version,
            "digest": self.digest,
            "configDigest": self.config_digest,
            "chartName": self.chart_name,
            "chartVersion": self.chart_version,
            "status": self.status,
            "firstDeployed": self.first_deployed,
            "lastDeployed": self.last_deployed,
        }
        if self.deleted:
            data["deleted"] = self.deleted
        if self.test_hooks is not None:
            data["testHooks"] = self.test_hooks
        return data


@dataclass
class HelmRelease:
    """The controller object a release is reconciled for.

    Only the fields that resolve the release target are modelled.  The
    ``history`` holds snapshots newest first; ``status_storage_namespace``
    is the storage namespace recorded by the last release action.
    """

    name: str
    namespace: str
    release_name: str = ""
    target_namespace: str = ""
    storage_namespace: str = ""
    status_storage_namespace: str = ""
    history: list[Snapshot] = field(default_factory=list)

    def get_release_name(self) -> str:
        """Return the configured release name, or derive it from the object."""
        if self.release_name:
            return self.release_name
        if self.target_namespace:
            return f"{self.target_namespace}-{self.name}"
        return self.name

    def get_release_namespace(self) -> str:
        return self.target_namespace or self.namespace

    def get_storage_namespace(self) -> str:
        return self.storage_namespace or self.namespace

    def get_current(self) -> Snapshot | None:
        """Return the most recent snapshot, if any."""
        if not self.history:
            return None
        return self.history[0]
