"""relguard: Helm release state verification."""

__version__ = "0.1.0"
