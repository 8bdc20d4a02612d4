"""
FastAPI routes for rules.

Rendering is one-way: snapshots go in, PDL text comes out. There is no
endpoint that parses PDL text.
"""

import logging

from fastapi import APIRouter

from pdl_composer.api.schemas.rule import RenderResponse, RuleSnapshot
from pdl_composer.compiler import serialize_rule
from pdl_composer.core.dependencies import Editor
from pdl_composer.core.validators import count_nodes, tree_depth
from pdl_composer.domain.enums import Effect
from pdl_composer.domain.nodes import Rule

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rules", tags=["Rules"])


@router.get(
    "/default",
    response_model=Rule,
    summary="Build a default rule",
    description="""
    A fresh `allow` rule holding one default clause. The clause id is
    generated by the server.
    """,
)
def default_rule(editor: Editor, effect: Effect = Effect.ALLOW) -> Rule:
    """Default rule with one clause."""
    return editor.new_rule(effect)


@router.post(
    "/render",
    response_model=RenderResponse,
    summary="Render a rule snapshot to PDL",
    description="""
    Render a rule snapshot into PDL text.

    **Request Body:**
    - `effect`: `allow` or `deny`
    - `items`: Root sibling list of clause/group nodes

    **Errors:**
    - 422 Unprocessable Entity: Malformed snapshot, empty sibling list,
      duplicate ids, or a tree beyond the configured depth/node limits
    """,
)
def render_rule(snapshot: RuleSnapshot) -> RenderResponse:
    """Render a submitted rule snapshot."""
    text = serialize_rule(snapshot)
    node_count = count_nodes(snapshot.items)

    logger.info(
        "Rendered %s rule with %d nodes",
        snapshot.effect.value,
        node_count,
        extra={"effect": snapshot.effect.value, "node_count": node_count},
    )

    return RenderResponse(text=text, node_count=node_count, depth=tree_depth(snapshot.items))
