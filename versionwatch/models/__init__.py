"""versionwatch data models — all Pydantic v2, all frozen (immutable)."""

from versionwatch.models.report import CheckOutcome, Signal, UpdateReport
from versionwatch.models.versions import (
    TRACKED_MINORS,
    LatestVersions,
    PinnedVersions,
    TrackedVersions,
)

__all__ = [
    # versions
    "TRACKED_MINORS",
    "TrackedVersions",
    "PinnedVersions",
    "LatestVersions",
    # report
    "UpdateReport",
    "Signal",
    "CheckOutcome",
]
