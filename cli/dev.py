"""CLI wrapper: Serve the composer API on localhost with auto-reload."""

from __future__ import annotations

from cli._runner import run_module


def main() -> None:
    run_module("uvicorn", "pdl_composer.main:app", "--reload", "--host", "127.0.0.1")
