"""Core data structures for relguard."""

from relguard.models.config import RelGuardConfig
from relguard.models.release import (
    Chart,
    ChartMetadata,
    Hook,
    Info,
    Release,
    ReleaseStatus,
)
from relguard.models.snapshot import HelmRelease, Snapshot

__all__ = [
    "Chart",
    "ChartMetadata",
    "HelmRelease",
    "Hook",
    "Info",
    "RelGuardConfig",
    "Release",
    "ReleaseStatus",
    "Snapshot",
]
