"""Helm release record data structures.

A Release is the authoritative record of one applied revision, owned by the
storage backend.  Everything in this module is read-only to the verifiers:
instances are frozen and decoded from Helm's JSON release shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ReleaseStatus(StrEnum):
    """Lifecycle status of a stored release revision."""

    UNKNOWN = "unknown"
    DEPLOYED = "deployed"
    UNINSTALLED = "uninstalled"
    SUPERSEDED = "superseded"
    FAILED = "failed"
    UNINSTALLING = "uninstalling"
    PENDING_INSTALL = "pending-install"
    PENDING_UPGRADE = "pending-upgrade"
    PENDING_ROLLBACK = "pending-rollback"

    def is_pending(self) -> bool:
        """Return True if a Helm action on this revision never finished."""
        return self in (
            ReleaseStatus.PENDING_INSTALL,
            ReleaseStatus.PENDING_UPGRADE,
            ReleaseStatus.PENDING_ROLLBACK,
        )


# Hook events that mark a hook as a chart test.
TEST_HOOK_EVENTS = frozenset({"test", "test-success"})


@dataclass(frozen=True)
class ChartMetadata:
    """Identity of the chart a release was built from.

    Only ``name`` and ``version`` take part in drift checks; the remaining
    fields are informational but still part of the observed release.
    """

    name: str
    version: str
    app_version: str = ""
    api_version: str = ""
    description: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChartMetadata:
        return cls(
            name=str(data.get("name", "")),
            version=str(data.get("version", "")),
            app_version=str(data.get("appVersion", "")),
            api_version=str(data.get("apiVersion", "")),
            description=str(data.get("description", "")),
            type=str(data.get("type", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "appVersion": self.app_version,
            "apiVersion": self.api_version,
            "description": self.description,
            "type": self.type,
        }

    def same_chart(self, other: ChartMetadata) -> bool:
        """Return True if both refer to the same chart name and version."""
        return self.name == other.name and self.version == other.version


@dataclass(frozen=True)
class Chart:
    """The chart embedded in a release.  Templates are not retained."""

    metadata: ChartMetadata
    values: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Chart:
        return cls(
            metadata=ChartMetadata.from_dict(data.get("metadata") or {}),
            values=dict(data.get("values") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": self.metadata.to_dict(), "values": self.values}


@dataclass(frozen=True)
class Info:
    """Deployment information of a release revision.

    Timestamps are kept as the RFC 3339 strings found in storage so that a
    decode/encode cycle never changes the observed content.
    """

    status: ReleaseStatus = ReleaseStatus.UNKNOWN
    first_deployed: str = ""
    last_deployed: str = ""
    deleted: str = ""
    description: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Info:
        try:
            status = ReleaseStatus(data.get("status") or ReleaseStatus.UNKNOWN)
        except ValueError:
            status = ReleaseStatus.UNKNOWN
        return cls(
            status=status,
            first_deployed=str(data.get("first_deployed", "")),
            last_deployed=str(data.get("last_deployed", "")),
            deleted=str(data.get("deleted", "")),
            description=str(data.get("description", "")),
            notes=str(data.get("notes", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "first_deployed": self.first_deployed,
            "last_deployed": self.last_deployed,
            "deleted": self.deleted,
            "description": self.description,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Hook:
    """A lifecycle hook rendered for a release."""

    name: str
    kind: str = ""
    path: str = ""
    manifest: str = ""
    events: tuple[str, ...] = ()
    weight: int = 0
    delete_policies: tuple[str, ...] = ()
    last_run: dict[str, Any] | None = None  # execution result, not observed

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Hook:
        return cls(
            name=str(data.get("name", "")),
            kind=str(data.get("kind", "")),
            path=str(data.get("path", "")),
            manifest=str(data.get("manifest", "")),
            events=tuple(data.get("events") or ()),
            weight=int(data.get("weight", 0)),
            delete_policies=tuple(data.get("delete_policies") or ()),
            last_run=data.get("last_run"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "kind": self.kind,
            "path": self.path,
            "manifest": self.manifest,
            "events": list(self.events),
            "weight": self.weight,
            "delete_policies": list(self.delete_policies),
        }
        if self.last_run is not None:
            data["last_run"] = self.last_run
        return data

    def is_test(self) -> bool:
        return any(event in TEST_HOOK_EVENTS for event in self.events)


@dataclass(frozen=True)
class Release:
    """One stored release revision.

    ``config`` holds the user-supplied values merged for this revision; the
    chart's own default values live under ``chart.values``.
    """

    name: str
    namespace: str
    version: int
    chart: Chart
    info: Info = field(default_factory=Info)
    config: dict[str, Any] = field(default_factory=dict)
    manifest: str = ""
    hooks: tuple[Hook, ...] = ()
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Release:
        """Create a Release from Helm's JSON release encoding."""
        return cls(
            name=str(data.get("name", "")),
            namespace=str(data.get("namespace", "")),
            version=int(data.get("version", 0)),
            chart=Chart.from_dict(data.get("chart") or {}),
            info=Info.from_dict(data.get("info") or {}),
            config=dict(data.get("config") or {}),
            manifest=str(data.get("manifest", "")),
            hooks=tuple(Hook.from_dict(h) for h in data.get("hooks") or ()),
            labels={str(k): str(v) for k, v in (data.get("labels") or {}).items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "namespace": self.namespace,
            "version": self.version,
            "chart": self.chart.to_dict(),
            "info": self.info.to_dict(),
            "config": self.config,
            "manifest": self.manifest,
            "hooks": [h.to_dict() for h in self.hooks],
            "labels": self.labels,
        }
