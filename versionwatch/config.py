"""Checker configuration — env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
VERSIONWATCH_* environment variables; CLI options override both.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CheckerConfig(BaseSettings):
    """Settings for a single version check.

    All settings can be overridden via VERSIONWATCH_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export VERSIONWATCH_REPO_ROOT=/src/app
        export VERSIONWATCH_REQUEST_TIMEOUT=10
        export VERSIONWATCH_LOG_LEVEL=DEBUG

    ``github_output`` is also picked up from the runner's own
    ``GITHUB_OUTPUT`` variable.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VERSIONWATCH_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Local inputs, relative paths resolve against repo_root
    repo_root: Path = Path(".")
    workflow_path: Path = Path(".github/workflows/build-and-publish.yml")
    dockerfile_path: Path = Path("Dockerfile")

    # Upstream sources
    runtime_index_url: str = "https://cache.ruby-lang.org/pub/ruby/index.txt"
    lock_tool_api_url: str = "https://rubygems.org/api/v1/gems/bundler.json"
    request_timeout: float = 30.0

    # Report labels
    runtime_label: str = "Ruby"
    lock_tool_label: str = "Bundler"

    # Output
    github_output: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("VERSIONWATCH_GITHUB_OUTPUT", "GITHUB_OUTPUT"),
    )
    log_level: str = "INFO"

    @field_validator("github_output", mode="before")
    @classmethod
    def _blank_output_is_unset(cls, value: object) -> object:
        # runners may export GITHUB_OUTPUT as an empty string
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def workflow_file(self) -> Path:
        """Absolute-or-root-relative path of the CI pipeline definition."""
        return self.repo_root / self.workflow_path

    @property
    def dockerfile(self) -> Path:
        """Absolute-or-root-relative path of the container build definition."""
        return self.repo_root / self.dockerfile_path


# Module-level default — import as `from versionwatch.config import config`
config = CheckerConfig()
