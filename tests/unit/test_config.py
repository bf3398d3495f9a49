"""Tests for environment-based configuration loading."""

from __future__ import annotations

import pytest

from relguard.config import load_config


class TestLoadConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("RELGUARD_DIGEST_ALGORITHM", "RELGUARD_LOG_LEVEL", "RELGUARD_LOG_FORMAT"):
            monkeypatch.delenv(key, raising=False)
        config = load_config()
        assert config.digest.algorithm == "sha256"
        assert config.log.level == "info"
        assert config.log.format == "json"

    def test_overrides_are_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELGUARD_DIGEST_ALGORITHM", "SHA512")
        monkeypatch.setenv("RELGUARD_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("RELGUARD_LOG_FORMAT", "Console")
        config = load_config()
        assert config.digest.algorithm == "sha512"
        assert config.log.level == "debug"
        assert config.log.format == "console"

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("RELGUARD_DIGEST_ALGORITHM", "md5"),
            ("RELGUARD_LOG_LEVEL", "verbose"),
            ("RELGUARD_LOG_FORMAT", "xml"),
        ],
    )
    def test_invalid_values(self, monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
        monkeypatch.setenv(key, value)
        with pytest.raises(ValueError):
            load_config()
