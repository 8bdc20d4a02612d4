"""Shared validators for expression tree snapshots received from callers."""

from collections.abc import Iterator, Sequence

from pdl_composer.domain.nodes import Clause, Group


def _children(node: Clause | Group) -> tuple[Clause | Group, ...]:
    if isinstance(node, Group):
        return node.items
    return node.has_items


def iter_sibling_lists(
    items: Sequence[Clause | Group], path: str = "items"
) -> Iterator[tuple[str, Sequence[Clause | Group], bool]]:
    """
    Walk every sibling list in a tree.

    Yields:
        (path, items, rendered) tuples. ``rendered`` is False for the
        ``has_items`` of clauses that are not has-expressions.
    """
    yield path, items, True
    for i, node in enumerate(items):
        if isinstance(node, Group):
            yield from iter_sibling_lists(node.items, f"{path}[{i}].items")
        else:
            for child_path, child_items, rendered in iter_sibling_lists(
                node.has_items, f"{path}[{i}].hasItems"
            ):
                yield child_path, child_items, rendered and node.is_has_expression


def tree_depth(items: Sequence[Clause | Group]) -> int:
    """
    Nesting depth of a sibling list.

    A flat list of clauses has depth 1; each group or nested has-expression
    level adds one. Empty lists have depth 0.
    """
    if not items:
        return 0
    return 1 + max(tree_depth(_children(node)) for node in items)


def count_nodes(items: Sequence[Clause | Group]) -> int:
    """Count every node structurally present in the tree, including unused has_items."""
    return sum(1 + count_nodes(_children(node)) for node in items)


def validate_tree_depth(items: Sequence[Clause | Group], max_depth: int = 10) -> None:
    """
    Validate that a tree doesn't exceed maximum depth.

    Raises:
        ValueError: If tree exceeds maximum depth
    """
    depth = tree_depth(items)
    if depth > max_depth:
        raise ValueError(f"Expression tree exceeds maximum depth of {max_depth} (got {depth})")


def validate_tree_node_count(items: Sequence[Clause | Group], max_nodes: int = 1000) -> None:
    """
    Validate that a tree doesn't exceed maximum node count.

    Raises:
        ValueError: If tree exceeds maximum node count
    """
    node_count = count_nodes(items)
    if node_count > max_nodes:
        raise ValueError(
            f"Expression tree exceeds maximum node count of {max_nodes} (got {node_count} nodes)"
        )


def validate_non_empty_lists(items: Sequence[Clause | Group]) -> None:
    """
    Validate that every rendered sibling list holds at least one node.

    Unused ``has_items`` may be empty; they are not rendered.

    Raises:
        ValueError: If a rendered list is empty
    """
    for path, siblings, rendered in iter_sibling_lists(items):
        if rendered and not siblings:
            raise ValueError(f"Sibling list at '{path}' cannot be empty")


def validate_unique_ids(items: Sequence[Clause | Group]) -> None:
    """
    Validate that node ids are unique across the tree.

    Raises:
        ValueError: If an id appears more than once
    """
    seen: set[str] = set()
    for path, siblings, _ in iter_sibling_lists(items):
        for i, node in enumerate(siblings):
            if node.id in seen:
                raise ValueError(f"Duplicate node id '{node.id}' at '{path}[{i}]'")
            seen.add(node.id)
