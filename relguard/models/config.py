"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DigestConfig:
    """Digest computation configuration."""

    algorithm: str = "sha256"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class RelGuardConfig:
    """Top-level relguard configuration."""

    digest: DigestConfig = field(default_factory=DigestConfig)
    log: LogConfig = field(default_factory=LogConfig)
