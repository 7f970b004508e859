"""
Local error classifications.

Sync errors are recoverable by waiting for the next periodic resync;
configuration errors require fixing the configuration.
"""

from typing import Optional


class SyncError(Exception):
    """An authoritative fetch failed; the Session keeps its last known value."""

    def __init__(self, message: str, phase: Optional[str] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.phase = phase
        self.cause = cause
        self.recoverable = True


class ConfigurationError(Exception):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []
        self.recoverable = False
