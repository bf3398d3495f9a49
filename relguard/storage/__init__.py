"""Release storage read contract.

Submodules:
    base    -- ReleaseStorage protocol and the driver not-found signal.
    memory  -- In-memory implementation for tests and local verification.
"""

from relguard.storage.base import DriverReleaseNotFound, ReleaseStorage
from relguard.storage.memory import MemoryStorage

__all__ = ["DriverReleaseNotFound", "MemoryStorage", "ReleaseStorage"]
