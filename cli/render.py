"""Render a rule snapshot file to PDL text.

Usage:
    uv run pdl-render rule.json
    uv run pdl-render rule.json --effect deny
    cat rule.json | uv run pdl-render -

Snapshots are checked like API submissions: empty sibling lists, duplicate ids
and trees beyond the configured limits are rejected with exit code 2.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from pdl_composer.api.schemas.rule import RuleSnapshot
from pdl_composer.compiler import serialize_rule
from pdl_composer.domain.enums import Effect


def _read_snapshot(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render a JSON rule snapshot as PDL text")
    parser.add_argument("snapshot", help="Path to a rule snapshot JSON file, or - for stdin")
    parser.add_argument(
        "--effect",
        choices=[effect.value for effect in Effect],
        default=None,
        help="Override the snapshot's effect",
    )
    args = parser.parse_args(argv)

    try:
        rule = RuleSnapshot.model_validate_json(_read_snapshot(args.snapshot))
    except OSError as e:
        print(f"Cannot read snapshot: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print(f"Invalid snapshot:\n{e}", file=sys.stderr)
        return 2

    if args.effect:
        rule = rule.model_copy(update={"effect": Effect(args.effect)})

    print(serialize_rule(rule))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
