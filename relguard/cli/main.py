"""relguard CLI commands.

Human-readable diagnostics go to stderr through structlog; results are
printed to stdout as JSON so they can be piped into other tools.

Exit codes for ``verify``:
    0 -- release is consistent with the snapshot
    1 -- internal failure (e.g. the release could not be encoded)
    3 -- a verification verdict was reached
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from relguard import __version__
from relguard.config import load_config
from relguard.models.release import ChartMetadata, Release
from relguard.models.snapshot import Snapshot
from relguard.observability.logging import get_logger, setup_logging
from relguard.release.digest import SUPPORTED_ALGORITHMS
from relguard.release.naming import shorten_name
from relguard.release.observation import (
    ObservationEncodeError,
    digest_observation,
    observe_release,
    snapshot_release,
)
from relguard.release.values import digest_values
from relguard.verify.consistency import verify_release
from relguard.verify.errors import ReleaseVerificationError, Verdict
from relguard.verify.snapshot import verify_release_object

EXIT_VERDICT = 3

_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)
_ALGORITHM = click.Choice(sorted(SUPPORTED_ALGORITHMS))


def _load_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise click.ClickException(f"{path}: expected a JSON object")
    return data


def _load_release(path: Path) -> Release:
    try:
        return Release.from_dict(_load_json(path))
    except (AttributeError, TypeError, ValueError) as exc:
        raise click.ClickException(f"{path}: invalid release: {exc}") from exc


def _load_snapshot(path: Path) -> Snapshot:
    try:
        return Snapshot.from_dict(_load_json(path))
    except (AttributeError, TypeError, ValueError) as exc:
        raise click.ClickException(f"{path}: invalid snapshot: {exc}") from exc


def _echo_json(data: dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2, sort_keys=True))


@click.group()
@click.version_option(__version__, prog_name="relguard")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Verify Helm releases against recorded snapshots."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(f"invalid configuration: {exc}") from exc
    setup_logging(config.log.level, config.log.format)
    ctx.obj = config


@cli.command()
@click.option("--snapshot", "snapshot_path", type=_FILE, required=True, help="Snapshot JSON (HelmRelease status form).")
@click.option("--release", "release_path", type=_FILE, required=True, help="Stored release JSON (Helm encoding).")
@click.option("--chart-name", default=None, help="Desired chart name.")
@click.option("--chart-version", default=None, help="Desired chart version.")
@click.option("--values", "values_path", type=_FILE, default=None, help="Desired values JSON; defaults to the release config.")
def verify(
    snapshot_path: Path,
    release_path: Path,
    chart_name: str | None,
    chart_version: str | None,
    values_path: Path | None,
) -> None:
    """Check a stored release against a snapshot, chart and values."""
    log = get_logger("cli")
    snapshot = _load_snapshot(snapshot_path)
    release = _load_release(release_path)
    values = _load_json(values_path) if values_path is not None else release.config

    chart: ChartMetadata | None = None
    if chart_name is not None or chart_version is not None:
        if chart_name is None or chart_version is None:
            raise click.UsageError("--chart-name and --chart-version must be given together")
        chart = ChartMetadata(name=chart_name, version=chart_version)

    result: dict[str, Any] = {"release": snapshot.full_release_name}
    try:
        verify_release_object(snapshot, release)
        verify_release(release, snapshot, chart, values)
    except ReleaseVerificationError as exc:
        result.update(result=exc.verdict.value, message=str(exc))
        _echo_json(result)
        sys.exit(EXIT_VERDICT)
    except ObservationEncodeError as exc:
        log.error("release_encode_failed", release=exc.release_name, error=str(exc.cause))
        raise click.ClickException(str(exc)) from exc

    result.update(result=Verdict.CONSISTENT.value, message="release matches snapshot")
    _echo_json(result)


@cli.group()
def digest() -> None:
    """Compute canonical digests."""


@digest.command("release")
@click.argument("path", type=_FILE)
@click.option("--algorithm", type=_ALGORITHM, default=None, help="Defaults to RELGUARD_DIGEST_ALGORITHM.")
@click.pass_obj
def digest_release(config: Any, path: Path, algorithm: str | None) -> None:
    """Print the digest of a stored release's observed content."""
    release = _load_release(path)
    try:
        click.echo(str(digest_observation(algorithm or config.digest.algorithm, observe_release(release))))
    except ObservationEncodeError as exc:
        raise click.ClickException(str(exc)) from exc


@digest.command("values")
@click.argument("path", type=_FILE)
@click.option("--algorithm", type=_ALGORITHM, default=None, help="Defaults to RELGUARD_DIGEST_ALGORITHM.")
@click.pass_obj
def digest_values_cmd(config: Any, path: Path, algorithm: str | None) -> None:
    """Print the digest of a values file."""
    try:
        click.echo(str(digest_values(algorithm or config.digest.algorithm, _load_json(path))))
    except (TypeError, ValueError) as exc:
        raise click.ClickException(f"{path}: values cannot be encoded: {exc}") from exc


@cli.command()
@click.argument("path", type=_FILE)
@click.option("--algorithm", type=_ALGORITHM, default=None, help="Defaults to RELGUARD_DIGEST_ALGORITHM.")
@click.pass_obj
def snapshot(config: Any, path: Path, algorithm: str | None) -> None:
    """Record a stored release as a snapshot."""
    release = _load_release(path)
    try:
        _echo_json(snapshot_release(release, algorithm or config.digest.algorithm).to_dict())
    except ObservationEncodeError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.argument("name")
def shorten(name: str) -> None:
    """Print the storage key for a release name."""
    click.echo(shorten_name(name))
