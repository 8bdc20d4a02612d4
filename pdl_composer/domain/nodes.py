"""
Expression tree model for PDL rules.

A rule's condition is an ordered list of sibling nodes. Each node is either a
Clause (a leaf comparison) or a Group (a parenthesized sub-expression). The
two variants form a tagged union discriminated by ``type``; consumers branch
on the tag instead of relying on a class hierarchy.

All models are frozen. Editing a tree means building a new node with
``model_copy(update=...)``, which keeps every untouched subtree shared between
snapshots.

Snapshot JSON uses camelCase keys
(``op``, ``valueType``, ``hasMode``, ``hasItems``); snake_case field names are
accepted on input as well.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pdl_composer.domain.enums import Connector, Effect, HasMode, NodeKind, Operator, ValueType

# Path used by a fresh clause
DEFAULT_CLAUSE_PATH = "subject.id"

# Path and value of the clause seeded inside a fresh has-expression
DEFAULT_MEMBER_PATH = "role"
DEFAULT_MEMBER_VALUE = "employee"

# Literal each value type resets to when a clause is retyped
DEFAULT_VALUE_BY_TYPE: dict[ValueType, Any] = {
    ValueType.STRING: "value",
    ValueType.NUMBER: 0,
    ValueType.BOOL: False,
    ValueType.DATE: "2025-01-01",
}

ClauseValue = bool | int | float | str


def default_value_for(value_type: ValueType, fallback: Any = None) -> Any:
    """Return the default literal for ``value_type``, or ``fallback`` if it has none."""
    return DEFAULT_VALUE_BY_TYPE.get(value_type, fallback)


class Clause(BaseModel):
    """A leaf condition comparing a field path to a value via an operator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["clause"] = NodeKind.CLAUSE.value
    id: str
    path: str = DEFAULT_CLAUSE_PATH
    operator: Operator = Field(default=Operator.IS, alias="op")
    value_type: ValueType = Field(default=ValueType.STRING, alias="valueType")
    value: ClauseValue = DEFAULT_VALUE_BY_TYPE[ValueType.STRING]
    negate: bool = False
    join: Connector = Connector.AND
    has_mode: HasMode = Field(default=HasMode.VALUE, alias="hasMode")
    # Kept even when the operator is not `has`, so switching back restores it
    has_items: tuple[Node, ...] = Field(default=(), alias="hasItems")

    @property
    def is_has_expression(self) -> bool:
        return self.operator == Operator.HAS and self.has_mode == HasMode.EXPR


class Group(BaseModel):
    """A parenthesized, optionally negated list of sibling nodes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["group"] = NodeKind.GROUP.value
    id: str
    negate: bool = False
    join: Connector = Connector.AND
    items: tuple[Node, ...] = ()


Node = Annotated[Union[Clause, Group], Field(discriminator="type")]


class Rule(BaseModel):
    """Top-level pairing of an effect with the root sibling list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    effect: Effect = Effect.ALLOW
    items: tuple[Node, ...] = ()


Clause.model_rebuild()
Group.model_rebuild()
Rule.model_rebuild()


# ============================================================================
# Factories
# ============================================================================


def create_member_clause(id: str) -> Clause:
    """
    Build the clause seeded inside a fresh has-expression.

    Its own ``has_items`` is empty so that default construction terminates.
    """
    return Clause(
        id=id,
        path=DEFAULT_MEMBER_PATH,
        operator=Operator.IS,
        value_type=ValueType.STRING,
        value=DEFAULT_MEMBER_VALUE,
    )


def create_clause(
    id: str,
    *,
    path: str = DEFAULT_CLAUSE_PATH,
    operator: Operator = Operator.IS,
    value_type: ValueType = ValueType.STRING,
    value: ClauseValue | None = None,
    negate: bool = False,
    join: Connector = Connector.AND,
    has_mode: HasMode = HasMode.VALUE,
    has_items: tuple[Clause | Group, ...] | list[Clause | Group] | None = None,
) -> Clause:
    """
    Build a clause with every field filled in.

    Args:
        id: Node id; the caller guarantees it is unique within the tree
        path: Field reference
        operator: Comparison operator
        value_type: Type of ``value``
        value: Literal to compare against; defaults to the literal for ``value_type``
        negate: Whether the clause is prefixed with ``not``
        join: Connector to the next sibling
        has_mode: Right-hand side shape when ``operator`` is ``has``
        has_items: Nested expression for has-expressions; defaults to one
                   member clause with id ``<id>-h1``

    Returns:
        A new Clause
    """
    if value is None:
        value = default_value_for(value_type, DEFAULT_VALUE_BY_TYPE[ValueType.STRING])
    if has_items is None:
        has_items = (create_member_clause(f"{id}-h1"),)

    return Clause(
        id=id,
        path=path,
        operator=operator,
        value_type=value_type,
        value=value,
        negate=negate,
        join=join,
        has_mode=has_mode,
        has_items=tuple(has_items),
    )


def create_group(id: str) -> Group:
    """Build a group holding one default clause with id ``<id>-c1``."""
    return Group(id=id, items=(create_clause(f"{id}-c1"),))
