"""Prometheus metrics for release verification."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import Counter

verifications_total = Counter(
    "relguard_verifications_total",
    "Release verifications by operation and outcome",
    ["operation", "result"],
)

storage_lookups_total = Counter(
    "relguard_storage_lookups_total",
    "Release storage reads by method and outcome",
    ["method", "result"],
)


@contextmanager
def track_verification(operation: str) -> Iterator[None]:
    """Count the outcome of the wrapped verification.

    Verdict exceptions are labelled with their verdict value, anything else
    raised counts as ``error``.  Exceptions always propagate.
    """
    try:
        yield
    except Exception as exc:
        verdict = getattr(exc, "verdict", None)
        result = str(verdict) if verdict is not None else "error"
        verifications_total.labels(operation=operation, result=result).inc()
        raise
    verifications_total.labels(operation=operation, result="ok").inc()
