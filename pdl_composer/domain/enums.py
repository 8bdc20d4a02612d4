"""
Domain enums for the Policy Decision Language (PDL) composer.

These enums are the closed vocabularies of the rule language and of the
field catalog. Their values are the exact tokens written into generated PDL
text and into JSON snapshots.
"""

from enum import Enum


class NodeKind(str, Enum):
    """Discriminator for the two node variants of an expression tree."""

    CLAUSE = "clause"
    GROUP = "group"


class Effect(str, Enum):
    """Verdict a rule yields when its expression matches."""

    ALLOW = "allow"
    DENY = "deny"


class Operator(str, Enum):
    """
    Comparison operators a clause can use.

    HAS is array membership; it is the only operator whose right-hand side
    may be a nested expression instead of a single value.
    """

    IS = "is"  # Equality
    GREATER_THAN = "greater_than"  # Numbers or dates
    LESS_THAN = "less_than"  # Numbers or dates
    CONTAINS = "contains"  # String contains
    STARTS_WITH = "starts_with"  # String prefix
    ENDS_WITH = "ends_with"  # String suffix
    HAS = "has"  # Array membership


class Connector(str, Enum):
    """Token placed between two sibling nodes."""

    AND = "and"
    OR = "or"


class HasMode(str, Enum):
    """Right-hand side shape of a `has` clause."""

    VALUE = "value"
    EXPR = "expr"


class ValueType(str, Enum):
    """
    Runtime type of a clause value.

    OBJECT only arises from catalog fields that are arrays of objects; it has
    no default literal.
    """

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    DATE = "date"
    OBJECT = "object"


class FieldType(str, Enum):
    """Declared type of a field catalog entry."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    ARRAY = "array"
    DATE = "date"
