"""Report models — outputs of the diff and emit phases."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from versionwatch.models.versions import LatestVersions, PinnedVersions


class UpdateReport(BaseModel):
    """Result of comparing pinned against latest versions.

    ``changes`` holds one human-readable line per outdated pin, in
    tracked order with the lock tool last.
    """

    model_config = ConfigDict(frozen=True)

    needed: bool = False
    changes: list[str] = []
    pinned: PinnedVersions
    latest: LatestVersions

    @property
    def message(self) -> str:
        """All change lines joined into one multi-line message."""
        return "\n".join(self.changes)


class Signal(BaseModel):
    """A single key/value pair consumed by the invoking pipeline."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class CheckOutcome(BaseModel):
    """Result of one ``VersionChecker.run()``.

    A fatal failure sets ``exit_code`` to 1 and records the diagnostic in
    ``error``. ``report`` is unset unless the failure came from a sink.
    """

    model_config = ConfigDict(frozen=True)

    report: UpdateReport | None = None
    signals: list[Signal] = []
    warnings: list[str] = []
    exit_code: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        """Whether the run completed without a fatal error."""
        return self.exit_code == 0
