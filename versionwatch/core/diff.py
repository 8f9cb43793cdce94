"""Diff pinned against latest versions and build the ``UpdateReport``.

Comparison is plain string inequality, not version ordering: a pin that is
*ahead* of upstream still shows up as a change.
"""

from __future__ import annotations

from versionwatch.models.report import UpdateReport
from versionwatch.models.versions import LatestVersions, PinnedVersions

NOT_CONFIGURED = "not configured"


def compute_report(
    pinned: PinnedVersions,
    latest: LatestVersions,
    *,
    runtime_label: str = "Ruby",
    lock_tool_label: str = "Bundler",
) -> UpdateReport:
    """Compare *pinned* with *latest* and collect one line per outdated pin.

    A minor line with no latest version is never a change. The same holds
    for the lock tool: when its metadata could not be fetched there is
    nothing to compare against, so it does not mark updates as needed.
    """
    changes: list[str] = []

    for minor, latest_version in latest.runtime.items():
        current = pinned.runtime.get(minor)
        if latest_version and current != latest_version:
            changes.append(
                f"- {runtime_label} {minor}: {current or NOT_CONFIGURED} → {latest_version}"
            )

    if latest.lock_tool is not None and pinned.lock_tool != latest.lock_tool:
        changes.append(f"- {lock_tool_label}: {pinned.lock_tool} → {latest.lock_tool}")

    return UpdateReport(
        needed=bool(changes),
        changes=changes,
        pinned=pinned,
        latest=latest,
    )
