"""CLI wrapper: Run the composer test suite (extra arguments go to pytest)."""

from __future__ import annotations

from cli._runner import run_module


def main() -> None:
    run_module("pytest")
