"""Pinned version parsing — reads versions committed to the repository.

The contract is narrow: locate the first match of a pattern in a file's
text, and fail with ``ConfigPatternNotFound(file, pattern)`` if there is
none. Both files are required; every failure here is fatal.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from versionwatch.core.errors import ConfigPatternNotFound, PinnedFileError
from versionwatch.models.versions import PinnedVersions, TrackedVersions

logger = logging.getLogger(__name__)

# A literal array of exactly three quoted strings, e.g. ["3.2.4", "3.3.5", "3.4.1"]
VERSION_ARRAY_PATTERN = re.compile(r'\["([^"]+)",\s*"([^"]+)",\s*"([^"]+)"\]')
MINOR_PREFIX_PATTERN = re.compile(r"^(\d+\.\d+)")
LOCK_TOOL_PATTERN = re.compile(r"bundler:(\d+\.\d+\.\d+)")


def read_text(path: Path) -> str:
    """Read a local configuration file, wrapping I/O and decoding errors as fatal."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PinnedFileError(str(path), exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise PinnedFileError(str(path), f"not valid UTF-8 ({exc.reason})") from exc


def find_first(text: str, pattern: re.Pattern[str], source: str) -> re.Match[str]:
    """Return the first match of *pattern* in *text*.

    Raises ConfigPatternNotFound naming *source* and the pattern if absent.
    """
    match = pattern.search(text)
    if match is None:
        raise ConfigPatternNotFound(source, pattern.pattern)
    return match


def parse_runtime_versions(text: str, source: str = "<workflow>") -> TrackedVersions:
    """Extract the pinned runtime versions from a CI pipeline definition.

    Array order is trusted: each entry is keyed by its own
    ``<major>.<minor>`` prefix. Entries for untracked minors are dropped,
    so those lines read as not configured.
    """
    match = find_first(text, VERSION_ARRAY_PATTERN, source)
    versions: dict[str, str] = {}
    for version in match.groups():
        minor = find_first(version, MINOR_PREFIX_PATTERN, source).group(1)
        versions[minor] = version
    logger.debug("Pinned runtime versions in %s: %s", source, versions)
    return TrackedVersions.from_minors(versions)


def parse_lock_tool_version(text: str, source: str = "<dockerfile>") -> str:
    """Extract the pinned lock-tool version from a container build definition."""
    return find_first(text, LOCK_TOOL_PATTERN, source).group(1)


def parse_pinned_versions(workflow_file: Path, dockerfile: Path) -> PinnedVersions:
    """Read both local files and build the ``PinnedVersions`` record."""
    workflow_text = read_text(workflow_file)
    dockerfile_text = read_text(dockerfile)

    pinned = PinnedVersions(
        runtime=parse_runtime_versions(workflow_text, str(workflow_file)),
        lock_tool=parse_lock_tool_version(dockerfile_text, str(dockerfile)),
    )
    logger.info(
        "Parsed pinned versions: runtime=%s lock_tool=%s",
        dict(pinned.runtime.items()),
        pinned.lock_tool,
    )
    return pinned
