"""
PDL compiler: deterministic rendering of expression trees to rule text.

Key Components:
- serializer: Recursive, indentation-aware tree-to-text rendering

Design Principles:
- Determinism: Same snapshot produces byte-for-byte identical text
- Tolerance: Incomplete clauses (blank paths) render with a placeholder
- One direction only: text is never parsed back into a tree
"""

from pdl_composer.compiler.serializer import format_value, render, render_item, serialize_rule

__all__ = [
    "render",
    "render_item",
    "format_value",
    "serialize_rule",
]
