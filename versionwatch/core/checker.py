"""VersionChecker — the single linear check: parse → fetch → diff → emit.

Each run starts from a clean slate: both local files are re-read and both
upstream sources re-fetched. Nothing is cached or persisted.

Fatal failures (``VersionCheckError``) propagate out of the individual
phases. ``run()`` is the boundary that turns them into an explicit
``CheckOutcome``; only the CLI maps that outcome to a process exit code.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from versionwatch.config import CheckerConfig
from versionwatch.core.diff import compute_report
from versionwatch.core.emitter import (
    GitHubOutputFileSink,
    SignalSink,
    StdoutSink,
    build_signals,
    emit,
)
from versionwatch.core.errors import VersionCheckError
from versionwatch.core.pinned import parse_pinned_versions
from versionwatch.core.upstream import UpstreamFetcher
from versionwatch.models.report import CheckOutcome, UpdateReport
from versionwatch.models.versions import LatestVersions, PinnedVersions

logger = logging.getLogger(__name__)


class VersionChecker:
    """Compares pinned runtime and lock-tool versions against upstream.

    Parameters
    ----------
    config:
        Paths, URLs, labels and output settings. Defaults to a fresh
        ``CheckerConfig`` read from the environment.
    fetcher:
        Upstream source. Defaults to an ``UpstreamFetcher`` built from
        *config*.
    sinks:
        Signal destinations. Defaults to stdout, plus the
        ``GITHUB_OUTPUT`` file when configured.
    stream:
        Where fetch warnings and the default stdout sink write.

    Usage
    -----
    >>> outcome = VersionChecker().run()
    >>> outcome.exit_code
    0
    """

    def __init__(
        self,
        config: CheckerConfig | None = None,
        *,
        fetcher: UpstreamFetcher | None = None,
        sinks: list[SignalSink] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._config = config or CheckerConfig()
        self._stream = stream
        self._fetcher = fetcher or UpstreamFetcher(
            self._config.runtime_index_url,
            self._config.lock_tool_api_url,
            timeout=self._config.request_timeout,
            lock_tool_label=self._config.lock_tool_label,
        )
        if sinks is None:
            sinks = [StdoutSink(stream)]
            if self._config.github_output is not None:
                sinks.append(GitHubOutputFileSink(self._config.github_output))
        self._sinks = sinks

    @property
    def config(self) -> CheckerConfig:
        return self._config

    @property
    def sinks(self) -> list[SignalSink]:
        """Return a copy of the configured sink list."""
        return list(self._sinks)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def parse_pinned(self) -> PinnedVersions:
        """Read the pinned versions from the local configuration files."""
        return parse_pinned_versions(self._config.workflow_file, self._config.dockerfile)

    def fetch_latest(self) -> LatestVersions:
        """Fetch the latest versions from upstream."""
        return self._fetcher.fetch()

    def check_for_updates(self) -> UpdateReport:
        """Parse, fetch and diff. Fatal errors propagate."""
        pinned = self.parse_pinned()
        latest = self.fetch_latest()
        report = compute_report(
            pinned,
            latest,
            runtime_label=self._config.runtime_label,
            lock_tool_label=self._config.lock_tool_label,
        )
        logger.info(
            "Update check complete: needed=%s, %d change(s)",
            report.needed,
            len(report.changes),
        )
        return report

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> CheckOutcome:
        """Run the full check and emit signals.

        Returns a ``CheckOutcome`` with ``exit_code`` 0 whether or not
        updates were found, or 1 with the diagnostic in ``error`` when a
        fatal failure stopped the run before anything was emitted, or when
        a signal sink could not be written.
        """
        try:
            report = self.check_for_updates()
        except VersionCheckError as exc:
            logger.error("Version check failed: %s", exc)
            return CheckOutcome(exit_code=1, error=str(exc))

        stream = self._stream or sys.stdout
        for warning in report.latest.warnings:
            stream.write(warning + "\n")

        signals = build_signals(report)
        try:
            emit(signals, self._sinks)
        except VersionCheckError as exc:
            logger.error("Version check failed: %s", exc)
            return CheckOutcome(
                report=report,
                signals=signals,
                warnings=list(report.latest.warnings),
                exit_code=1,
                error=str(exc),
            )
        return CheckOutcome(
            report=report,
            signals=signals,
            warnings=list(report.latest.warnings),
        )
