"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from relguard.models.config import DigestConfig, LogConfig, RelGuardConfig
from relguard.release.digest import SUPPORTED_ALGORITHMS


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"RELGUARD_{key}", default)


def _validate_algorithm(value: str) -> str:
    if value.lower() not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Invalid digest algorithm: {value}. Must be one of {sorted(SUPPORTED_ALGORITHMS)}")
    return value.lower()


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> RelGuardConfig:
    """Load configuration from RELGUARD_* environment variables."""
    return RelGuardConfig(
        digest=DigestConfig(
            algorithm=_validate_algorithm(_env("DIGEST_ALGORITHM", "sha256")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
