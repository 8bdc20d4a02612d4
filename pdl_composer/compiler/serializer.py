"""
Serializer: expression tree snapshot to PDL text.

Rendering is a pure, recursive function of the snapshot. The same tree always
yields byte-for-byte identical text; nothing depends on ids, clocks or
traversal order beyond the stored sibling order.

Layout:
- each node of a sibling list sits on its own line, indented two spaces per
  nesting level
- between two siblings, a connector line holds the first sibling's ``join``
- groups and has-expressions open ``(`` at the end of their line and close
  ``)`` on a line of their own at the enclosing indentation

Example:
    allow if subject.active is true
    and
    (
      action.name is "share"
      or
      not resource.tags has "finance"
    )
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

from pdl_composer.domain.enums import Operator, ValueType
from pdl_composer.domain.nodes import Clause, Group, Rule

logger = logging.getLogger(__name__)

INDENT_UNIT = "  "

# Rendered in place of a blank path so incomplete clauses still serialize
PLACEHOLDER_PATH = "path.to.field"


def _indent(depth: int) -> str:
    return INDENT_UNIT * depth


def _plain_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value(value_type: ValueType, value: Any) -> str:
    """
    Format a clause value as a PDL literal.

    - string: double-quoted, embedded verbatim (no escaping)
    - bool: ``true`` / ``false``
    - date: the raw token, unquoted
    - number and anything else: plain text
    """
    if value_type == ValueType.STRING:
        return f'"{_plain_text(value)}"'
    if value_type == ValueType.BOOL:
        return "true" if value else "false"
    if value_type == ValueType.DATE:
        return str(value)
    return _plain_text(value)


def _wrap(inner: str, depth: int) -> str:
    if not inner:
        return "()"
    return f"(\n{inner}\n{_indent(depth)})"


def render_item(item: Clause | Group, depth: int = 0) -> str:
    """
    Render one node without its leading indentation.

    Nested lines (inside groups and has-expressions) carry their own
    indentation.
    """
    if isinstance(item, Group):
        text = _wrap(render(item.items, depth + 1), depth)
        return f"not {text}" if item.negate else text

    path = item.path.strip() or PLACEHOLDER_PATH

    if item.operator == Operator.HAS:
        if item.is_has_expression:
            text = f"{path} has {_wrap(render(item.has_items, depth + 1), depth)}"
        else:
            text = f"{path} has {format_value(item.value_type, item.value)}"
    else:
        text = f"{path} {item.operator.value} {format_value(item.value_type, item.value)}"

    # Negation wraps the whole clause: `not path has (...)`
    return f"not {text}" if item.negate else text


def render(items: Sequence[Clause | Group], depth: int = 0) -> str:
    """
    Render a sibling list at ``depth``.

    Args:
        items: Ordered sibling nodes
        depth: Nesting level; each level indents by two spaces

    Returns:
        The rendered lines joined by newlines ("" for an empty list)
    """
    pad = _indent(depth)
    lines: list[str] = []

    for index, item in enumerate(items):
        lines.append(f"{pad}{render_item(item, depth)}")
        # The join of the last sibling is stored but never rendered
        if index < len(items) - 1:
            lines.append(f"{pad}{item.join.value}")

    return "\n".join(lines)


def serialize_rule(rule: Rule) -> str:
    """
    Render a complete rule: ``<effect> if <expression>``.

    Args:
        rule: Rule snapshot

    Returns:
        PDL text
    """
    start_time = time.time()

    try:
        text = f"{rule.effect.value} if {render(rule.items, 0)}"
        duration = time.time() - start_time

        logger.debug(
            "Rendered %s rule: %d bytes in %.6fs", rule.effect.value, len(text), duration
        )
        _record_render_metrics("success", duration, rule)

        return text

    except Exception:
        duration = time.time() - start_time
        _record_render_metrics("error", duration)
        raise


def _record_render_metrics(status: str, duration: float, rule: Rule | None = None) -> None:
    """
    Record serializer metrics to Prometheus.

    Metrics failures are silently ignored so they never break rendering.
    """
    try:
        from pdl_composer.core.observability import metrics
        from pdl_composer.core.validators import count_nodes

        metrics.render_total.labels(status=status).inc()
        metrics.render_duration_seconds.observe(duration)
        if rule is not None:
            metrics.render_nodes.observe(count_nodes(rule.items))
    except Exception:
        # Metrics should never break rendering
        pass
