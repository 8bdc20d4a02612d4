"""
Tree editor for PDL expression trees.

Key Components:
- tree_editor: Pure add/remove/update operations over sibling lists and nodes
- ids: Injectable id generators for new nodes
"""

from pdl_composer.editor.ids import CounterIdGenerator, IdGenerator, UuidIdGenerator
from pdl_composer.editor.tree_editor import TreeEditor, coerce_value

__all__ = [
    "TreeEditor",
    "coerce_value",
    "IdGenerator",
    "CounterIdGenerator",
    "UuidIdGenerator",
]
