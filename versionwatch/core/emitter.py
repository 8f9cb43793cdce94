"""Signal emission — turns an ``UpdateReport`` into pipeline key/value signals.

Signals are built once and handed to every configured sink:

- ``StdoutSink`` writes ``::set-output name=KEY::VALUE`` workflow commands,
  with newlines escaped as ``%0A``
- ``GitHubOutputFileSink`` appends to the runner's ``GITHUB_OUTPUT`` file,
  using the heredoc form for multi-line values
"""

from __future__ import annotations

import logging
import sys
import uuid
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

from versionwatch.core.errors import SignalEmitError
from versionwatch.models.report import Signal, UpdateReport
from versionwatch.models.versions import TRACKED_MINORS, signal_suffix

logger = logging.getLogger(__name__)

NEWLINE_ESCAPE = "%0A"


def build_signals(report: UpdateReport) -> list[Signal]:
    """Build the ordered signal list for *report*.

    Only ``UPDATES_NEEDED=false`` when nothing changed; otherwise the flag,
    the message, one ``LATEST_<minor>`` per tracked line and the latest
    lock-tool version. Absent versions become empty strings.
    """
    if not report.needed:
        return [Signal(key="UPDATES_NEEDED", value="false")]

    signals = [
        Signal(key="UPDATES_NEEDED", value="true"),
        Signal(key="UPDATE_MESSAGE", value=report.message),
    ]
    for minor in TRACKED_MINORS:
        signals.append(
            Signal(
                key=f"LATEST_{signal_suffix(minor)}",
                value=report.latest.runtime.get(minor) or "",
            )
        )
    signals.append(Signal(key="LATEST_BUNDLER", value=report.latest.lock_tool or ""))
    return signals


def escape_value(value: str) -> str:
    """Escape embedded newlines for the single-line workflow command protocol."""
    return value.replace("\n", NEWLINE_ESCAPE)


def format_signal(signal: Signal) -> str:
    """Format *signal* as one ``::set-output`` workflow command line."""
    return f"::set-output name={signal.key}::{escape_value(signal.value)}"


@runtime_checkable
class SignalSink(Protocol):
    """Protocol for anything that can receive emitted signals."""

    @property
    def sink_name(self) -> str:
        """Return the unique name of this sink."""
        ...

    def accept(self, signal: Signal) -> None:
        """Record or forward a single signal."""
        ...


class StdoutSink:
    """Writes workflow command lines to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def sink_name(self) -> str:
        return "stdout"

    def accept(self, signal: Signal) -> None:
        stream = self._stream or sys.stdout
        stream.write(format_signal(signal) + "\n")
        stream.flush()


class GitHubOutputFileSink:
    """Appends signals to a ``GITHUB_OUTPUT``-style file.

    Single-line values are written as ``KEY=VALUE``. Multi-line values use
    the ``KEY<<DELIMITER`` form so the message keeps its real newlines.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def sink_name(self) -> str:
        return "github_output"

    @property
    def path(self) -> Path:
        return self._path

    def accept(self, signal: Signal) -> None:
        if "\n" in signal.value:
            delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
            entry = f"{signal.key}<<{delimiter}\n{signal.value}\n{delimiter}\n"
        else:
            entry = f"{signal.key}={signal.value}\n"
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(entry)
        logger.debug("GitHubOutputFileSink: wrote %s to %s", signal.key, self._path)


def emit(signals: list[Signal], sinks: list[SignalSink]) -> None:
    """Hand every signal, in order, to every sink.

    A sink that fails to write is logged and skipped so the remaining sinks
    still receive their signals. Raises SignalEmitError afterwards naming
    every sink that failed.
    """
    failed: list[str] = []
    for sink in sinks:
        try:
            for signal in signals:
                sink.accept(signal)
        except OSError as exc:
            logger.error("Sink %s failed: %s", sink.sink_name, exc)
            failed.append(f"{sink.sink_name} ({exc})")
            continue
        logger.info("Emitted %d signals to %s", len(signals), sink.sink_name)

    if failed:
        raise SignalEmitError("Could not write signals to " + ", ".join(failed))
