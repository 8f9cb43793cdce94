"""Upstream version sources — fetches the latest runtime and lock-tool versions.

Two sequential HTTPS GETs, one attempt each:

- the runtime release index (plaintext); failure is fatal
- the lock-tool gem metadata (JSON); failure degrades to a warning and an
  absent latest version
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

import httpx
from packaging.version import Version

from versionwatch.core.errors import UpstreamFetchError
from versionwatch.models.versions import TRACKED_MINORS, LatestVersions, TrackedVersions

logger = logging.getLogger(__name__)

RELEASE_ARCHIVE_PATTERN = re.compile(r"ruby-(\d+\.\d+\.\d+)\.tar\.gz")


def parse_release_index(text: str) -> list[str]:
    """Return every version embedded in a release archive filename, in index order."""
    versions: list[str] = []
    for line in text.splitlines():
        match = RELEASE_ARCHIVE_PATTERN.search(line)
        if match:
            versions.append(match.group(1))
    return versions


def select_latest(candidates: Iterable[str]) -> TrackedVersions:
    """Pick the highest version per tracked minor line.

    Ordering is by ``packaging.version.Version``, so ``3.2.10`` beats
    ``3.2.9``. Minors with no candidate stay None.
    """
    candidates = list(candidates)
    latest: dict[str, str] = {}
    for minor in TRACKED_MINORS:
        matching = [v for v in candidates if v.startswith(minor + ".")]
        if matching:
            latest[minor] = max(matching, key=Version)
            logger.debug(
                "Minor %s: %d candidates, latest %s",
                minor,
                len(matching),
                latest[minor],
            )
    return TrackedVersions.from_minors(latest)


class UpstreamFetcher:
    """Fetches latest versions from the upstream sources.

    Parameters
    ----------
    runtime_index_url:
        URL of the plaintext release index.
    lock_tool_api_url:
        URL of the lock-tool gem metadata JSON.
    timeout:
        Per-request timeout in seconds.
    lock_tool_label:
        Name used in the fetch-failure warning.
    client:
        Optional pre-built ``httpx.Client``. When omitted, a client is
        created and closed by ``fetch()``.
    """

    def __init__(
        self,
        runtime_index_url: str,
        lock_tool_api_url: str,
        *,
        timeout: float = 30.0,
        lock_tool_label: str = "Bundler",
        client: httpx.Client | None = None,
    ) -> None:
        self._runtime_index_url = runtime_index_url
        self._lock_tool_api_url = lock_tool_api_url
        self._timeout = timeout
        self._lock_tool_label = lock_tool_label
        self._client = client

    def fetch(self) -> LatestVersions:
        """Fetch both sources and build the ``LatestVersions`` record."""
        if self._client is not None:
            return self._fetch_with(self._client)
        with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
            return self._fetch_with(client)

    def _fetch_with(self, client: httpx.Client) -> LatestVersions:
        runtime = self.fetch_runtime_versions(client)
        lock_tool, warning = self.fetch_lock_tool_version(client)
        return LatestVersions(
            runtime=runtime,
            lock_tool=lock_tool,
            warnings=[warning] if warning else [],
        )

    def fetch_runtime_versions(self, client: httpx.Client) -> TrackedVersions:
        """Fetch the release index and select the latest version per minor.

        Raises UpstreamFetchError on any transport error or non-2xx status.
        """
        logger.info("Fetching runtime release index from %s", self._runtime_index_url)
        try:
            response = client.get(self._runtime_index_url, timeout=self._timeout)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamFetchError(
                f"Could not fetch runtime release index from "
                f"{self._runtime_index_url}: {exc}"
            ) from exc

        candidates = parse_release_index(response.text)
        logger.info("Release index lists %d archives", len(candidates))
        return select_latest(candidates)

    def fetch_lock_tool_version(self, client: httpx.Client) -> tuple[str | None, str]:
        """Fetch the lock-tool metadata and return ``(version, warning)``.

        Never raises: on failure the version is None and the warning
        carries the underlying error message. On success the warning is
        an empty string.
        """
        logger.info("Fetching %s metadata from %s", self._lock_tool_label, self._lock_tool_api_url)
        try:
            response = client.get(self._lock_tool_api_url, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, dict) or not isinstance(data.get("version"), str):
                raise ValueError("response has no 'version' string field")
            return data["version"], ""
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # one line; HTTPStatusError text carries a help-link line
            reason = " ".join(str(exc).split())
            warning = f"Warning: Could not fetch {self._lock_tool_label} version: {reason}"
            logger.warning("%s", warning)
            return None, warning
