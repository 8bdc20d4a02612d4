"""
FastAPI routes for the field catalog.

The catalog is read-only: it lists the field paths a clause can point at and
the value type each one implies.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Path

from pdl_composer.core.dependencies import Catalog
from pdl_composer.core.errors import NotFoundError
from pdl_composer.domain.catalog import FieldMeta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fields", tags=["Field Catalog"])


@router.get(
    "",
    response_model=list[FieldMeta],
    summary="List catalog fields",
    description="""
    Retrieve all field catalog entries in declaration order.

    Array fields carry an `elementType`; a clause pointed at an array field
    compares against that element type.
    """,
)
def list_fields(catalog: Catalog) -> list[FieldMeta]:
    """List all catalog fields."""
    fields = list(catalog)
    logger.info("Listed %d catalog fields", len(fields), extra={"count": len(fields)})
    return fields


@router.get(
    "/{field_path}",
    response_model=FieldMeta,
    summary="Get a catalog field",
    description="""
    Retrieve one catalog entry by its dotted path (e.g. `resource.tags`).

    **Errors:**
    - 404 Not Found: If the path is not catalogued
    """,
)
def get_field(
    field_path: Annotated[str, Path(description="Dotted field path")],
    catalog: Catalog,
) -> FieldMeta:
    """Get a catalog field by path."""
    field = catalog.lookup(field_path)
    if field is None:
        raise NotFoundError("Field not found", details={"path": field_path})
    return field
