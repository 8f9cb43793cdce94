"""versionwatch CLI — Typer-based command-line interface.

Provides the ``versionwatch`` command with subcommands for running the
upstream version check and inspecting the locally pinned versions.

Human-facing output uses Rich; machine-facing signals are plain stdout.
"""
