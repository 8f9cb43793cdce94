"""Version models — pinned and latest versions per tracked minor line.

The tracked minor lines are fixed, so each one gets its own field rather
than living in an open-ended mapping.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Tracked runtime minor lines, in report order.
TRACKED_MINORS: tuple[str, ...] = ("3.2", "3.3", "3.4")

_MINOR_FIELDS: dict[str, str] = {
    "3.2": "ruby_32",
    "3.3": "ruby_33",
    "3.4": "ruby_34",
}


def signal_suffix(minor: str) -> str:
    """Return the output-key suffix for a minor line ("3.2" -> "32")."""
    return minor.replace(".", "")


class TrackedVersions(BaseModel):
    """One full version string (or None) per tracked minor line."""

    model_config = ConfigDict(frozen=True)

    ruby_32: str | None = None
    ruby_33: str | None = None
    ruby_34: str | None = None

    @classmethod
    def from_minors(cls, versions: dict[str, str]) -> TrackedVersions:
        """Build from a ``{minor: version}`` mapping, ignoring untracked minors."""
        return cls(**{
            field: versions[minor]
            for minor, field in _MINOR_FIELDS.items()
            if minor in versions
        })

    def get(self, minor: str) -> str | None:
        """Return the version for *minor*.

        Raises KeyError if *minor* is not a tracked line.
        """
        return getattr(self, _MINOR_FIELDS[minor])

    def items(self) -> list[tuple[str, str | None]]:
        """Return ``(minor, version)`` pairs in tracked order."""
        return [(minor, self.get(minor)) for minor in TRACKED_MINORS]


class PinnedVersions(BaseModel):
    """Versions currently committed in the repository's configuration files."""

    model_config = ConfigDict(frozen=True)

    runtime: TrackedVersions = TrackedVersions()
    lock_tool: str


class LatestVersions(BaseModel):
    """Latest versions observed upstream at check time.

    ``lock_tool`` is None when the lock-tool metadata could not be fetched;
    the reason ends up in ``warnings``.
    """

    model_config = ConfigDict(frozen=True)

    runtime: TrackedVersions = TrackedVersions()
    lock_tool: str | None = None
    warnings: list[str] = Field(default_factory=list)
