"""Unit tests for the CLI — command registration, signals, exit codes.

Upstream access is replaced with a mock-transport fetcher so no test
touches the network.
"""

from __future__ import annotations

import io
from pathlib import Path

import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from versionwatch.cli.app import app
from versionwatch.cli.commands import pinned as pinned_module

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_runner_output_file(monkeypatch):
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.delenv("VERSIONWATCH_GITHUB_OUTPUT", raising=False)


@pytest.fixture
def patch_upstream(monkeypatch, make_fetcher):
    """Route every UpstreamFetcher the checker builds to a mock transport."""

    def _patch(index: str = "", lock_tool=None) -> None:
        monkeypatch.setattr(
            "versionwatch.core.checker.UpstreamFetcher",
            lambda *args, **kwargs: make_fetcher(index=index, lock_tool=lock_tool),
        )

    return _patch


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    """The CLI must register all expected commands and show help."""

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "pinned" in result.output

    def test_check_command_exists(self):
        result = runner.invoke(app, ["check", "--help"])
        assert result.exit_code == 0

    def test_pinned_command_exists(self):
        result = runner.invoke(app, ["pinned", "--help"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Test: versionwatch check
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_updates_needed(self, repo: Path, patch_upstream, release_index):
        patch_upstream(index=release_index("3.2.3", "3.2.4", "3.3.5", "3.4.0", "3.4.1"))
        result = runner.invoke(app, ["check", "--root", str(repo)])
        assert result.exit_code == 0
        assert "::set-output name=UPDATES_NEEDED::true" in result.output
        assert (
            "::set-output name=UPDATE_MESSAGE::"
            "- Ruby 3.2: 3.2.3 → 3.2.4%0A- Ruby 3.4: 3.4.0 → 3.4.1"
        ) in result.output
        assert "::set-output name=LATEST_BUNDLER::2.5.0" in result.output

    def test_no_updates_exits_zero(self, repo: Path, patch_upstream, release_index):
        patch_upstream(index=release_index("3.2.3", "3.3.5", "3.4.0"))
        result = runner.invoke(app, ["check", "--root", str(repo)])
        assert result.exit_code == 0
        assert "::set-output name=UPDATES_NEEDED::false" in result.output
        assert "UPDATE_MESSAGE" not in result.output

    def test_pattern_failure_exits_one(self, make_repo, patch_upstream):
        root = make_repo(workflow_text="matrix:\n  ruby: 3.4\n")
        patch_upstream()
        result = runner.invoke(app, ["check", "--root", str(root)])
        assert result.exit_code == 1
        assert "Version check failed" in result.output
        assert "set-output" not in result.output

    def test_index_failure_exits_one(self, repo: Path, patch_upstream):
        patch_upstream(index=httpx.Response(502))
        result = runner.invoke(app, ["check", "--root", str(repo)])
        assert result.exit_code == 1

    def test_lock_tool_failure_warns_and_exits_zero(
        self, repo: Path, patch_upstream, release_index
    ):
        patch_upstream(index=release_index("3.2.3", "3.3.5", "3.4.0"), lock_tool="not json")
        result = runner.invoke(app, ["check", "--root", str(repo)])
        assert result.exit_code == 0
        assert "Warning: Could not fetch Bundler version" in result.output
        assert "::set-output name=UPDATES_NEEDED::false" in result.output

    def test_custom_file_locations(self, tmp_path: Path, patch_upstream, release_index):
        (tmp_path / "ci.yml").write_text('ruby: ["3.2.3", "3.3.5", "3.4.0"]\n')
        (tmp_path / "Containerfile").write_text("RUN gem install bundler:2.5.0\n")
        patch_upstream(index=release_index("3.2.3", "3.3.5", "3.4.0"))
        result = runner.invoke(
            app,
            [
                "check",
                "--root", str(tmp_path),
                "--workflow", "ci.yml",
                "--dockerfile", "Containerfile",
            ],
        )
        assert result.exit_code == 0
        assert "UPDATES_NEEDED::false" in result.output

    def test_summary_table(self, repo: Path, patch_upstream, release_index):
        patch_upstream(index=release_index("3.2.4", "3.3.5", "3.4.0"))
        result = runner.invoke(app, ["check", "--root", str(repo), "--summary"])
        assert result.exit_code == 0
        assert "Version Check" in result.output
        assert "Updates needed" in result.output


# ---------------------------------------------------------------------------
# Test: versionwatch pinned
# ---------------------------------------------------------------------------


class TestPinnedCommand:
    def test_shows_pinned_versions(self, repo: Path):
        result = runner.invoke(app, ["pinned", "--root", str(repo)])
        assert result.exit_code == 0
        assert "3.2.3" in result.output
        assert "3.4.0" in result.output
        assert "2.5.0" in result.output

    def test_missing_files_exit_one(self, tmp_path: Path):
        result = runner.invoke(app, ["pinned", "--root", str(tmp_path)])
        assert result.exit_code == 1
        assert "Cannot read pinned versions" in result.output

    def test_read_failure_goes_to_stderr(self, tmp_path: Path, monkeypatch):
        errors = Console(file=io.StringIO(), width=200)
        monkeypatch.setattr(pinned_module, "err_console", errors)
        result = runner.invoke(app, ["pinned", "--root", str(tmp_path)])
        assert result.exit_code == 1
        assert "Cannot read pinned versions" in errors.file.getvalue()
        assert "Cannot read pinned versions" not in result.stdout
