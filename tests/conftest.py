"""Shared test fixtures for versionwatch."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from versionwatch.config import CheckerConfig
from versionwatch.core.upstream import UpstreamFetcher

RUNTIME_INDEX_URL = "https://index.test/pub/ruby/index.txt"
LOCK_TOOL_API_URL = "https://gems.test/api/v1/gems/bundler.json"

WORKFLOW_TEMPLATE = """\
name: Build and publish
on:
  schedule:
    - cron: "0 4 * * 1"
jobs:
  build:
    runs-on: ubuntu-latest
    strategy:
      matrix:
        ruby: [{versions}]
    steps:
      - uses: actions/checkout@v4
"""

DOCKERFILE_TEMPLATE = """\
ARG RUBY_VERSION=3.4
FROM ruby:${{RUBY_VERSION}}-slim
RUN gem install bundler:{bundler} --no-document
WORKDIR /app
"""


def index_line(version: str) -> str:
    """One line of the release index in the upstream tab-separated layout."""
    minor = ".".join(version.split(".")[:2])
    return (
        f"ruby-{version}\t"
        f"https://cache.ruby-lang.org/pub/ruby/{minor}/ruby-{version}.tar.gz\t"
        f"da39a3ee5e6b4b0d3255bfef95601890afd80709"
    )


def make_index(*versions: str) -> str:
    """Build a release index listing *versions*, plus non-matching noise."""
    lines = ["name\turl\tsha1"]
    for version in versions:
        lines.append(index_line(version))
        lines.append(index_line(version).replace(".tar.gz", ".zip"))
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Repository fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write a workflow and Dockerfile into a temp repo root."""

    def _factory(
        runtime: tuple[str, ...] = ("3.2.3", "3.3.5", "3.4.0"),
        bundler: str = "2.5.0",
        *,
        workflow_text: str | None = None,
        dockerfile_text: str | None = None,
    ) -> Path:
        workflow_dir = tmp_path / ".github" / "workflows"
        workflow_dir.mkdir(parents=True, exist_ok=True)
        if workflow_text is None:
            workflow_text = WORKFLOW_TEMPLATE.format(
                versions=", ".join(f'"{v}"' for v in runtime)
            )
        if dockerfile_text is None:
            dockerfile_text = DOCKERFILE_TEMPLATE.format(bundler=bundler)
        (workflow_dir / "build-and-publish.yml").write_text(workflow_text)
        (tmp_path / "Dockerfile").write_text(dockerfile_text)
        return tmp_path

    return _factory


@pytest.fixture
def repo(make_repo: Callable[..., Path]) -> Path:
    """Convenience: a repo pinned to 3.2.3 / 3.3.5 / 3.4.0 and Bundler 2.5.0."""
    return make_repo()


@pytest.fixture
def make_config() -> Callable[..., CheckerConfig]:
    """Factory fixture: a CheckerConfig pointing at the test URLs."""

    def _factory(repo_root: Path, **overrides) -> CheckerConfig:
        settings = {
            "repo_root": repo_root,
            "runtime_index_url": RUNTIME_INDEX_URL,
            "lock_tool_api_url": LOCK_TOOL_API_URL,
            "request_timeout": 5.0,
            "github_output": None,
        }
        settings.update(overrides)
        return CheckerConfig(**settings)

    return _factory


# ---------------------------------------------------------------------------
# Upstream fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client() -> Callable[..., httpx.Client]:
    """Factory fixture: an httpx.Client answering the two upstream URLs.

    Pass a string for a 200 response body, an ``httpx.Response`` for full
    control, or an exception instance to have the transport raise it.
    """

    def _factory(
        index: str | httpx.Response | Exception = "",
        lock_tool: object = None,
    ) -> httpx.Client:
        if lock_tool is None:
            lock_tool = {"name": "bundler", "version": "2.5.0"}

        def _respond(answer: object) -> httpx.Response:
            if isinstance(answer, Exception):
                raise answer
            if isinstance(answer, httpx.Response):
                return answer
            if isinstance(answer, str):
                return httpx.Response(200, text=answer)
            return httpx.Response(200, text=json.dumps(answer))

        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == RUNTIME_INDEX_URL:
                return _respond(index)
            if str(request.url) == LOCK_TOOL_API_URL:
                return _respond(lock_tool)
            return httpx.Response(404)

        return httpx.Client(transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def make_fetcher(make_client: Callable[..., httpx.Client]) -> Callable[..., UpstreamFetcher]:
    """Factory fixture: an UpstreamFetcher wired to a mock client."""

    def _factory(index="", lock_tool=None) -> UpstreamFetcher:
        return UpstreamFetcher(
            RUNTIME_INDEX_URL,
            LOCK_TOOL_API_URL,
            timeout=5.0,
            client=make_client(index, lock_tool),
        )

    return _factory


@pytest.fixture
def release_index() -> Callable[..., str]:
    """Factory fixture: build release index text listing the given versions."""
    return make_index
