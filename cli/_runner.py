"""
Shared CLI runner helper.

Developer wrappers run Python tools as ``python -m <module>`` subprocesses
against the project's source directories and exit with the tool's status.
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Sequence

# Directories linted and formatted by pdl-lint / pdl-format
SOURCE_DIRS = ("pdl_composer", "cli", "tests")


def run(cmd: Sequence[str]) -> None:
    """Run a command and exit with its return code."""
    result = subprocess.run(cmd)
    raise SystemExit(result.returncode)


def run_module(module: str, *args: str) -> None:
    """
    Run ``python -m <module>`` with ``args`` followed by the wrapper's own CLI
    arguments.

    Example:
        >>> run_module("ruff", "check", *SOURCE_DIRS)
    """
    run([sys.executable, "-m", module, *args, *sys.argv[1:]])
