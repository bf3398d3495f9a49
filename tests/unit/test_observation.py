"""Tests for the canonical release observation and snapshot recording."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from relguard.models.release import Chart, ChartMetadata, Hook, Info, Release, ReleaseStatus
from relguard.release.digest import Digest
from relguard.release.observation import (
    ObservationEncodeError,
    collect_test_hooks,
    digest_observation,
    ignore_hook_test_events,
    observe_release,
    observed_to_snapshot,
    snapshot_release,
)
from relguard.release.values import digest_values

# ---------------------------------------------------------------------------
# Helper factories
# ---------------------------------------------------------------------------

_PRE_INSTALL = Hook(name="db-migrate", kind="Job", path="templates/migrate.yaml", events=("pre-install",))
_TEST_HOOK = Hook(name="podinfo-test", kind="Pod", path="templates/test.yaml", events=("test",))


def _make_release(
    config: dict[str, Any] | None = None,
    hooks: tuple[Hook, ...] = (_PRE_INSTALL,),
    **kwargs: Any,
) -> Release:
    defaults: dict[str, Any] = {
        "name": "podinfo",
        "namespace": "apps",
        "version": 4,
        "chart": Chart(metadata=ChartMetadata(name="podinfo", version="6.5.4"), values={"replicaCount": 1}),
        "info": Info(status=ReleaseStatus.DEPLOYED, first_deployed="2026-02-18T12:00:00Z"),
        "config": config if config is not None else {"replicaCount": 2},
        "manifest": "kind: Deployment\n",
        "hooks": hooks,
        "labels": {"owner": "helm-controller"},
    }
    defaults.update(kwargs)
    return Release(**defaults)


# =====================================================================
# observe_release
# =====================================================================


class TestObserveRelease:
    def test_copies_observed_fields(self) -> None:
        rls = _make_release()
        obs = observe_release(rls)
        assert obs.name == "podinfo"
        assert obs.namespace == "apps"
        assert obs.version == 4
        assert obs.chart_metadata == rls.chart.metadata
        assert obs.config == {"replicaCount": 2}

    def test_default_filter_drops_test_hooks(self) -> None:
        obs = observe_release(_make_release(hooks=(_PRE_INSTALL, _TEST_HOOK)))
        assert obs.hooks == (_PRE_INSTALL,)

    def test_explicit_filters_replace_defaults(self) -> None:
        def keep_all(obs):
            return obs

        obs = observe_release(_make_release(hooks=(_PRE_INSTALL, _TEST_HOOK)), keep_all)
        assert obs.hooks == (_PRE_INSTALL, _TEST_HOOK)

    def test_ignore_hook_test_events_legacy_event(self) -> None:
        legacy = Hook(name="legacy-test", events=("test-success",))
        obs = observe_release(_make_release(hooks=(legacy,)), ignore_hook_test_events)
        assert obs.hooks == ()


# =====================================================================
# Canonical encoding
# =====================================================================


class TestEncode:
    def test_encoding_field_list(self) -> None:
        data = json.loads(observe_release(_make_release()).encode())
        assert set(data) == {
            "name",
            "namespace",
            "version",
            "info",
            "chart_metadata",
            "config",
            "manifest",
            "hooks",
            "labels",
        }
        assert "last_run" not in data["hooks"][0]

    def test_encoding_is_sorted_and_compact(self) -> None:
        encoded = observe_release(_make_release()).encode()
        assert b" " not in encoded.replace(b"kind: Deployment", b"")
        data = json.loads(encoded)
        assert list(data) == sorted(data)

    def test_config_key_order_does_not_matter(self) -> None:
        a = _make_release(config={"a": 1, "b": {"c": 2, "d": 3}})
        b = _make_release(config={"b": {"d": 3, "c": 2}, "a": 1})
        assert observe_release(a).encode() == observe_release(b).encode()

    def test_chart_default_values_not_observed(self) -> None:
        rls = _make_release()
        other = replace(rls, chart=Chart(metadata=rls.chart.metadata, values={"replicaCount": 9}))
        assert observe_release(rls).encode() == observe_release(other).encode()

    def test_hook_last_run_not_observed(self) -> None:
        ran = replace(_PRE_INSTALL, last_run={"phase": "Succeeded"})
        assert observe_release(_make_release(hooks=(ran,))).encode() == observe_release(_make_release()).encode()

    def test_test_hooks_not_observed(self) -> None:
        with_test = _make_release(hooks=(_PRE_INSTALL, _TEST_HOOK))
        assert observe_release(with_test).encode() == observe_release(_make_release()).encode()

    def test_unencodable_config_raises_encode_error(self) -> None:
        obs = observe_release(_make_release(config={"a": object()}))
        with pytest.raises(ObservationEncodeError) as excinfo:
            obs.encode()
        assert excinfo.value.release_name == "podinfo"
        assert isinstance(excinfo.value.cause, TypeError)

    def test_nan_config_raises_encode_error(self) -> None:
        with pytest.raises(ObservationEncodeError):
            observe_release(_make_release(config={"a": float("nan")})).encode()


_MUTATIONS = {
    "name": {"name": "podinfo-2"},
    "namespace": {"namespace": "other"},
    "version": {"version": 5},
    "status": {"info": Info(status=ReleaseStatus.FAILED, first_deployed="2026-02-18T12:00:00Z")},
    "chart": {"chart": Chart(metadata=ChartMetadata(name="podinfo", version="6.5.5"))},
    "config": {"config": {"replicaCount": 3}},
    "manifest": {"manifest": "kind: StatefulSet\n"},
    "hooks": {"hooks": ()},
    "labels": {"labels": {}},
}


class TestDigestSensitivity:
    @pytest.mark.parametrize("field_name", sorted(_MUTATIONS))
    def test_mutation_changes_digest(self, field_name: str) -> None:
        rls = _make_release()
        mutated = replace(rls, **_MUTATIONS[field_name])
        assert digest_observation("sha256", observe_release(rls)) != digest_observation(
            "sha256", observe_release(mutated)
        )

    @given(st.dictionaries(st.text(max_size=10), st.integers() | st.text(max_size=10) | st.booleans(), max_size=5))
    def test_identical_releases_share_digest(self, config: dict[str, Any]) -> None:
        a = observe_release(_make_release(config=dict(config)))
        b = observe_release(_make_release(config=dict(reversed(list(config.items())))))
        assert digest_observation("sha256", a) == digest_observation("sha256", b)


# =====================================================================
# Snapshot recording
# =====================================================================


class TestObservedToSnapshot:
    def test_snapshot_fields(self) -> None:
        rls = _make_release()
        obs = observe_release(rls)
        snap = observed_to_snapshot(obs)
        assert snap.name == "podinfo"
        assert snap.namespace == "apps"
        assert snap.version == 4
        assert snap.chart_name == "podinfo"
        assert snap.chart_version == "6.5.4"
        assert snap.status == "deployed"
        assert snap.first_deployed == "2026-02-18T12:00:00Z"
        assert Digest.parse(snap.digest) == digest_observation("sha256", obs)
        assert snap.config_digest == str(digest_values("sha256", rls.config))
        assert snap.test_hooks is None

    def test_snapshot_algorithm(self) -> None:
        snap = observed_to_snapshot(observe_release(_make_release()), algorithm="sha512")
        assert snap.digest.startswith("sha512:")
        assert snap.config_digest.startswith("sha512:")

    def test_snapshot_release_records_test_hooks(self) -> None:
        rls = _make_release(hooks=(_PRE_INSTALL, _TEST_HOOK))
        snap = snapshot_release(rls)
        assert snap.test_hooks == {"podinfo-test": {}}
        assert collect_test_hooks(rls) == {"podinfo-test": {}}
        # Test hooks are recorded but not part of the digest.
        assert snap.digest == snapshot_release(_make_release()).digest
