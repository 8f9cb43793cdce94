"""versionwatch: upstream version checks for CI pipelines.

Detects newer Ruby patch releases (per tracked minor line) and newer
Bundler releases, compares them with the versions pinned in the repository,
and emits ``::set-output`` signals for the pipeline:

  - Pinned versions parsed from the workflow and the Dockerfile
  - Latest versions fetched from the Ruby release index and RubyGems
  - Semantic ordering for picking the latest patch release
  - Lock-tool fetch failures degrade to a warning, never abort the run
"""

__version__ = "0.1.0"
__description__ = "Detect newer upstream Ruby and Bundler releases for CI pipelines"

from versionwatch.core.checker import VersionChecker
from versionwatch.cli.app import app as cli

__all__ = ["VersionChecker", "cli", "__version__"]
