from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdl_composer.core.config import settings
from pdl_composer.core.validators import (
    validate_non_empty_lists,
    validate_tree_depth,
    validate_tree_node_count,
    validate_unique_ids,
)
from pdl_composer.domain.nodes import Clause, Group, Rule


class RuleSnapshot(Rule):
    """
    Rule snapshot submitted for rendering.

    Unlike the bare model, a submitted snapshot must respect the tree
    invariants and the configured size limits.
    """

    @field_validator("items")
    @classmethod
    def validate_items(cls, v: tuple[Clause | Group, ...]) -> tuple[Clause | Group, ...]:
        """Validate list non-emptiness, id uniqueness, depth and node count."""
        validate_tree_depth(v, max_depth=settings.max_tree_depth)
        validate_tree_node_count(v, max_nodes=settings.max_tree_nodes)
        validate_non_empty_lists(v)
        validate_unique_ids(v)
        return v


class RenderResponse(BaseModel):
    text: str = Field(..., description="Generated PDL text")
    node_count: int = Field(..., alias="nodeCount", description="Nodes in the submitted tree")
    depth: int = Field(..., description="Nesting depth of the submitted tree")

    model_config = ConfigDict(populate_by_name=True)
