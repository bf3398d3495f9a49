"""Entry point for `python -m relguard`.

Usage:
    python -m relguard verify --snapshot snapshot.json --release release.json
    uv run python -m relguard shorten my-release
"""

from __future__ import annotations

from relguard.cli import cli

cli()
