"""Allow ``python -m versionwatch``."""

from versionwatch.cli.app import main

main()
