"""
Unit tests for validator functions in pdl_composer.core.validators.

Tests cover:
- tree_depth and count_nodes
- iter_sibling_lists (rendered vs unused has_items)
- validate_tree_depth / validate_tree_node_count
- validate_non_empty_lists
- validate_unique_ids
"""

import pytest

from pdl_composer.core.validators import (
    count_nodes,
    iter_sibling_lists,
    tree_depth,
    validate_non_empty_lists,
    validate_tree_depth,
    validate_tree_node_count,
    validate_unique_ids,
)
from pdl_composer.domain.enums import HasMode, Operator
from pdl_composer.domain.nodes import Clause, Group, create_clause
from tests.factories import group, has_expr_clause


def _nested_groups(levels: int) -> tuple[Clause | Group, ...]:
    """Groups nested ``levels`` deep around a single bare clause."""
    items: tuple[Clause | Group, ...] = (Clause(id="leaf"),)
    for level in range(levels):
        items = (Group(id=f"g{level}", items=items),)
    return items


class TestTreeDepth:
    @pytest.mark.anyio
    async def test_empty_list_has_depth_zero(self):
        assert tree_depth(()) == 0

    @pytest.mark.anyio
    async def test_flat_list_has_depth_one(self):
        assert tree_depth((Clause(id="a"), Clause(id="b"))) == 1

    @pytest.mark.anyio
    async def test_each_group_adds_a_level(self):
        assert tree_depth(_nested_groups(3)) == 4

    @pytest.mark.anyio
    async def test_has_items_add_a_level(self):
        """Seeded member clauses count even when the expression is not rendered."""
        assert tree_depth((create_clause("a"),)) == 2


class TestCountNodes:
    @pytest.mark.anyio
    async def test_empty(self):
        assert count_nodes(()) == 0

    @pytest.mark.anyio
    async def test_counts_groups_and_clauses(self):
        items = (Clause(id="a"), Group(id="g", items=(Clause(id="b"), Clause(id="c"))))

        assert count_nodes(items) == 4

    @pytest.mark.anyio
    async def test_counts_unused_has_items(self):
        assert count_nodes((create_clause("a"),)) == 2


class TestIterSiblingLists:
    @pytest.mark.anyio
    async def test_paths_and_rendered_flags(self):
        items = (
            create_clause("a"),
            has_expr_clause("b", "subject.relations", [Clause(id="b1")]),
            Group(id="g", items=(Clause(id="c"),)),
        )

        lists = [(path, rendered) for path, _, rendered in iter_sibling_lists(items)]

        assert lists == [
            ("items", True),
            ("items[0].hasItems", False),
            ("items[0].hasItems[0].hasItems", False),
            ("items[1].hasItems", True),
            ("items[1].hasItems[0].hasItems", False),
            ("items[2].items", True),
            ("items[2].items[0].hasItems", False),
        ]

    @pytest.mark.anyio
    async def test_unused_flag_propagates_downwards(self):
        inner = has_expr_clause("b", "subject.relations", [Clause(id="c")])
        outer = Clause(id="a", operator=Operator.IS, has_mode=HasMode.EXPR, has_items=(inner,))

        flags = [rendered for _, _, rendered in iter_sibling_lists((outer,))]

        assert flags == [True, False, False, False]


class TestValidateTreeDepth:
    @pytest.mark.anyio
    async def test_within_limit(self):
        validate_tree_depth(_nested_groups(9), max_depth=10)

    @pytest.mark.anyio
    async def test_beyond_limit(self):
        with pytest.raises(ValueError, match="maximum depth of 10"):
            validate_tree_depth(_nested_groups(10), max_depth=10)


class TestValidateTreeNodeCount:
    @pytest.mark.anyio
    async def test_within_limit(self):
        validate_tree_node_count(tuple(Clause(id=str(i)) for i in range(5)), max_nodes=5)

    @pytest.mark.anyio
    async def test_beyond_limit(self):
        with pytest.raises(ValueError, match="maximum node count of 5"):
            validate_tree_node_count(tuple(Clause(id=str(i)) for i in range(6)), max_nodes=5)


class TestValidateNonEmptyLists:
    @pytest.mark.anyio
    async def test_empty_root_rejected(self):
        with pytest.raises(ValueError, match="'items'"):
            validate_non_empty_lists(())

    @pytest.mark.anyio
    async def test_empty_group_rejected(self):
        with pytest.raises(ValueError, match=r"items\[0\]\.items"):
            validate_non_empty_lists((Group(id="g"),))

    @pytest.mark.anyio
    async def test_empty_has_expression_rejected(self):
        with pytest.raises(ValueError, match="hasItems"):
            validate_non_empty_lists((has_expr_clause("a", "subject.relations", []),))

    @pytest.mark.anyio
    async def test_unused_empty_has_items_allowed(self):
        validate_non_empty_lists((Clause(id="a"), group("g", Clause(id="b"))))


class TestValidateUniqueIds:
    @pytest.mark.anyio
    async def test_unique_ids_pass(self):
        validate_unique_ids((create_clause("a"), group("g", create_clause("b"))))

    @pytest.mark.anyio
    async def test_duplicate_across_levels_rejected(self):
        items = (Clause(id="a"), group("g", Clause(id="a")))

        with pytest.raises(ValueError, match="Duplicate node id 'a'"):
            validate_unique_ids(items)

    @pytest.mark.anyio
    async def test_duplicate_inside_unused_has_items_rejected(self):
        items = (create_clause("a"), Clause(id="a-h1"))

        with pytest.raises(ValueError, match="a-h1"):
            validate_unique_ids(items)
