"""CLI wrapper: Format the composer sources with ruff."""

from __future__ import annotations

from cli._runner import SOURCE_DIRS, run_module


def main() -> None:
    run_module("ruff", "format", *SOURCE_DIRS)
