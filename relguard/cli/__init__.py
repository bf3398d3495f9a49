"""relguard command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``relguard`` script).
"""

from relguard.cli.main import cli

__all__ = ["cli"]
