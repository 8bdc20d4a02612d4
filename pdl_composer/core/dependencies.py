"""
FastAPI dependency injection utilities.

Provides the field catalog and the tree editor to endpoints. Both are built
once per process from settings; tests override them through
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from pdl_composer.core.config import settings
from pdl_composer.domain.catalog import FieldCatalog, load_catalog
from pdl_composer.editor import TreeEditor, UuidIdGenerator


@lru_cache
def get_catalog() -> FieldCatalog:
    """Field catalog named by FIELD_CATALOG_FILE, or the built-in one."""
    return load_catalog(settings.field_catalog_file)


@lru_cache
def get_editor() -> TreeEditor:
    """
    Process-wide tree editor.

    Uses random ids: requests from different clients must never be handed
    colliding ids.
    """
    return TreeEditor(id_generator=UuidIdGenerator(settings.id_prefix), catalog=get_catalog())


Catalog = Annotated[FieldCatalog, Depends(get_catalog)]
Editor = Annotated[TreeEditor, Depends(get_editor)]
