"""
FastAPI routes serving default nodes.

Clients building a tree fetch fresh default nodes here so their defaults stay
in step with the server. Ids are always supplied by the caller: the factories
never invent them.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from pdl_composer.domain.nodes import Clause, Group, create_clause, create_group

router = APIRouter(prefix="/nodes", tags=["Nodes"])

NodeId = Annotated[str, Query(alias="id", min_length=1, description="Id for the new node")]


@router.get(
    "/clause",
    response_model=Clause,
    summary="Build a default clause",
)
def default_clause(node_id: NodeId) -> Clause:
    """Default clause with the given id and a seeded has-expression."""
    return create_clause(node_id)


@router.get(
    "/group",
    response_model=Group,
    summary="Build a default group",
)
def default_group(node_id: NodeId) -> Group:
    """Default group with the given id holding one default clause."""
    return create_group(node_id)
