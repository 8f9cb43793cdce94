"""Fatal error family for a version check.

Anything derived from ``VersionCheckError`` aborts the run. The lock-tool
metadata fetch is the only failure that is downgraded to a warning, and it
never raises one of these.
"""

from __future__ import annotations


class VersionCheckError(RuntimeError):
    """Base class for failures that must stop the pipeline."""


class PinnedFileError(VersionCheckError):
    """Raised when a local configuration file cannot be read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read {source}: {reason}")


class ConfigPatternNotFound(VersionCheckError):
    """Raised when a required pattern is missing from a local file."""

    def __init__(self, source: str, pattern: str) -> None:
        self.source = source
        self.pattern = pattern
        super().__init__(f"Pattern {pattern!r} not found in {source}")


class UpstreamFetchError(VersionCheckError):
    """Raised when the mandatory runtime version index cannot be fetched."""


class SignalEmitError(VersionCheckError):
    """Raised when one or more signal sinks could not be written."""
