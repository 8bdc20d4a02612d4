"""
Structural editing operations over expression trees.

Every operation is pure: it takes a frozen snapshot (a sibling list or a
node) and returns a new one, sharing untouched subtrees. Sibling lists are
returned as tuples.

The editor guarantees that no sibling list it produces is empty. Removing the
last node of a list replaces it with one fresh default clause.

Nested edits compose instead of needing a path-addressing scheme:

    editor.update_at(
        rule.items, 1,
        lambda group: editor.edit_items(group, lambda items: editor.remove_at(items, 0)),
    )
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from pdl_composer.core.errors import NotFoundError
from pdl_composer.domain.catalog import FieldCatalog, default_catalog
from pdl_composer.domain.enums import Connector, Effect, HasMode, Operator, ValueType
from pdl_composer.domain.nodes import (
    DEFAULT_VALUE_BY_TYPE,
    Clause,
    ClauseValue,
    Group,
    Rule,
    create_clause,
    create_group,
    create_member_clause,
    default_value_for,
)
from pdl_composer.editor.ids import CounterIdGenerator, IdGenerator

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT", Clause, Group)
Items = tuple[Clause | Group, ...]
ItemsTransform = Callable[[Items], Sequence[Clause | Group]]


def coerce_value(value_type: ValueType, raw: Any) -> ClauseValue:
    """
    Convert raw input (typically text from an input control) to ``value_type``.

    - number: int when the text is integral, else float; unparseable or
      non-finite input becomes the number default
    - bool: only ``true`` (any case) is true
    - string/date: kept as text
    - object: passed through unchanged

    Args:
        value_type: Target type
        raw: Value as entered

    Returns:
        Value whose representation matches ``value_type``
    """
    if value_type == ValueType.NUMBER:
        if isinstance(raw, bool):
            return int(raw)
        if isinstance(raw, int | float):
            return raw if math.isfinite(raw) else DEFAULT_VALUE_BY_TYPE[ValueType.NUMBER]
        text = str(raw).strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return DEFAULT_VALUE_BY_TYPE[ValueType.NUMBER]
        return number if math.isfinite(number) else DEFAULT_VALUE_BY_TYPE[ValueType.NUMBER]

    if value_type == ValueType.BOOL:
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() == "true"

    if value_type in (ValueType.STRING, ValueType.DATE):
        if isinstance(raw, bool):
            return "true" if raw else "false"
        return str(raw)

    return raw


class TreeEditor:
    """
    Pure editing operations over sibling lists, clauses, groups and rules.

    Args:
        id_generator: Source of ids for nodes the editor creates. Defaults to
                      a fresh counter (``auto-1``, ``auto-2``, ...).
        catalog: Field catalog used to retype clauses on path changes.
                 Defaults to the built-in catalog.
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        catalog: FieldCatalog | None = None,
    ) -> None:
        self.id_generator = id_generator or CounterIdGenerator()
        self.catalog = catalog or default_catalog

    # ------------------------------------------------------------------
    # Node construction
    # ------------------------------------------------------------------

    def new_clause(self) -> Clause:
        return create_clause(self.id_generator.next_id())

    def new_group(self) -> Group:
        return create_group(self.id_generator.next_id())

    def new_rule(self, effect: Effect = Effect.ALLOW) -> Rule:
        """A rule holding one default clause."""
        return Rule(effect=effect, items=(self.new_clause(),))

    # ------------------------------------------------------------------
    # Sibling list operations
    # ------------------------------------------------------------------

    def update_at(
        self,
        items: Sequence[Clause | Group],
        index: int,
        transform: Callable[[Any], Clause | Group],
    ) -> Items:
        """
        Replace ``items[index]`` with ``transform(items[index])``.

        Raises:
            NotFoundError: If ``index`` is out of range
        """
        self._check_index(items, index)
        return tuple(
            transform(item) if i == index else item for i, item in enumerate(items)
        )

    def remove_at(self, items: Sequence[Clause | Group], index: int) -> Items:
        """
        Remove ``items[index]``.

        If the list would become empty, a single fresh default clause is
        returned instead.

        Raises:
            NotFoundError: If ``index`` is out of range
        """
        self._check_index(items, index)
        remaining = tuple(item for i, item in enumerate(items) if i != index)
        if remaining:
            return remaining

        replacement = self.new_clause()
        logger.debug(
            "Sibling list emptied by removing %s; seeded %s", items[index].id, replacement.id
        )
        return (replacement,)

    def append_clause(self, items: Sequence[Clause | Group]) -> Items:
        return (*items, self.new_clause())

    def append_group(self, items: Sequence[Clause | Group]) -> Items:
        return (*items, self.new_group())

    # ------------------------------------------------------------------
    # Clause edits
    # ------------------------------------------------------------------

    def change_path(self, clause: Clause, path: str) -> Clause:
        """
        Point a clause at a new field.

        The catalog decides the new value type: arrays resolve to their
        element type, other fields to their declared type, and unknown paths
        keep the current type. The value is always reset to the default for
        the resulting type (kept as-is for types without a default).
        """
        value_type = clause.value_type
        meta = self.catalog.lookup(path)
        if meta is not None:
            value_type = meta.value_type

        return clause.model_copy(
            update={
                "path": path,
                "value_type": value_type,
                "value": default_value_for(value_type, clause.value),
            }
        )

    def change_operator(self, clause: Clause, operator: Operator) -> Clause:
        """
        Set the operator.

        Leaving ``has`` forces the has-mode back to ``value``; the nested
        ``has_items`` are left alone so switching back restores them.
        """
        operator = Operator(operator)
        has_mode = clause.has_mode if operator == Operator.HAS else HasMode.VALUE
        return clause.model_copy(update={"operator": operator, "has_mode": has_mode})

    def set_has_mode(self, clause: Clause, has_mode: HasMode) -> Clause:
        """
        Set the has-mode.

        Switching to ``expr`` with no nested nodes seeds one member clause so
        the rendered expression is never empty.
        """
        has_mode = HasMode(has_mode)
        update: dict[str, Any] = {"has_mode": has_mode}
        if has_mode == HasMode.EXPR and not clause.has_items:
            update["has_items"] = (create_member_clause(self.id_generator.next_id()),)
        return clause.model_copy(update=update)

    def set_value(self, clause: Clause, value: Any) -> Clause:
        """Set the value, coerced to the clause's current value type."""
        return clause.model_copy(update={"value": coerce_value(clause.value_type, value)})

    def set_has_items(self, clause: Clause, has_items: Sequence[Clause | Group]) -> Clause:
        return clause.model_copy(update={"has_items": self._non_empty(has_items)})

    # ------------------------------------------------------------------
    # Edits shared by clauses and groups
    # ------------------------------------------------------------------

    def set_negate(self, node: NodeT, negate: bool) -> NodeT:
        return node.model_copy(update={"negate": bool(negate)})

    def toggle_negate(self, node: NodeT) -> NodeT:
        return node.model_copy(update={"negate": not node.negate})

    def set_join(self, node: NodeT, join: Connector) -> NodeT:
        return node.model_copy(update={"join": Connector(join)})

    # ------------------------------------------------------------------
    # Group edits and nesting
    # ------------------------------------------------------------------

    def set_items(self, group: Group, items: Sequence[Clause | Group]) -> Group:
        return group.model_copy(update={"items": self._non_empty(items)})

    def edit_items(self, node: NodeT, transform: ItemsTransform) -> NodeT:
        """
        Apply a sibling-list operation one level deeper.

        For a group this edits ``items``; for a clause it edits
        ``has_items``.
        """
        if isinstance(node, Group):
            return self.set_items(node, transform(node.items))
        return self.set_has_items(node, transform(node.has_items))

    # ------------------------------------------------------------------
    # Rule edits
    # ------------------------------------------------------------------

    def set_effect(self, rule: Rule, effect: Effect) -> Rule:
        return rule.model_copy(update={"effect": Effect(effect)})

    def edit_rule(self, rule: Rule, transform: ItemsTransform) -> Rule:
        """Apply a sibling-list operation to the rule's root list."""
        return rule.model_copy(update={"items": self._non_empty(transform(rule.items))})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _non_empty(self, items: Sequence[Clause | Group]) -> Items:
        if items:
            return tuple(items)
        return (self.new_clause(),)

    @staticmethod
    def _check_index(items: Sequence[Clause | Group], index: int) -> None:
        if not 0 <= index < len(items):
            raise NotFoundError(
                f"No node at index {index}",
                details={"index": index, "length": len(items)},
            )
