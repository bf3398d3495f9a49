"""Tests for the in-memory release storage."""

from __future__ import annotations

import pytest

from relguard.models.release import Chart, ChartMetadata, Release
from relguard.storage.base import DriverReleaseNotFound, ReleaseStorage
from relguard.storage.memory import MemoryStorage


def _make_release(name: str = "podinfo", version: int = 1) -> Release:
    return Release(name=name, namespace="apps", version=version, chart=Chart(ChartMetadata("podinfo", "6.5.4")))


class TestMemoryStorage:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryStorage(), ReleaseStorage)

    def test_get_and_last(self) -> None:
        storage = MemoryStorage([_make_release(version=1), _make_release(version=3), _make_release(version=2)])
        assert storage.get("podinfo", 2).version == 2
        assert storage.last("podinfo").version == 3

    def test_get_missing_version(self) -> None:
        storage = MemoryStorage([_make_release()])
        with pytest.raises(DriverReleaseNotFound) as excinfo:
            storage.get("podinfo", 7)
        assert excinfo.value.version == 7

    def test_last_missing_name(self) -> None:
        with pytest.raises(DriverReleaseNotFound):
            MemoryStorage().last("podinfo")

    def test_create_duplicate(self) -> None:
        storage = MemoryStorage([_make_release()])
        with pytest.raises(ValueError):
            storage.create(_make_release())

    def test_update_replaces(self) -> None:
        storage = MemoryStorage([_make_release()])
        updated = Release(
            name="podinfo", namespace="apps", version=1, chart=Chart(ChartMetadata("podinfo", "6.5.5"))
        )
        storage.update(updated)
        assert storage.get("podinfo", 1) is updated

    def test_update_missing(self) -> None:
        with pytest.raises(DriverReleaseNotFound):
            MemoryStorage().update(_make_release())

    def test_delete_last_revision_removes_name(self) -> None:
        storage = MemoryStorage([_make_release()])
        assert storage.delete("podinfo", 1).version == 1
        with pytest.raises(DriverReleaseNotFound):
            storage.last("podinfo")

    def test_delete_missing(self) -> None:
        with pytest.raises(DriverReleaseNotFound):
            MemoryStorage().delete("podinfo", 1)

    def test_history_is_ordered(self) -> None:
        storage = MemoryStorage([_make_release(version=2), _make_release(version=1)])
        assert [r.version for r in storage.history("podinfo")] == [1, 2]

    def test_names_are_independent(self) -> None:
        storage = MemoryStorage([_make_release("a", 5), _make_release("b", 1)])
        assert storage.last("a").version == 5
        assert storage.last("b").version == 1

    def test_not_found_message(self) -> None:
        assert str(DriverReleaseNotFound("podinfo", 2)) == "release: not found: podinfo.v2"
