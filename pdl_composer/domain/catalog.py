"""
Field catalog: the read-only registry of known field paths.

The editor consults the catalog only to derive a clause's value type (and so
its default value) when the clause's path changes. The serializer never uses
it, and an unknown path is never an error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pdl_composer.core.errors import NotFoundError, ValidationError
from pdl_composer.domain.enums import FieldType, ValueType

logger = logging.getLogger(__name__)


class FieldMeta(BaseModel):
    """One catalog entry: a field path and its declared type."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str
    type: FieldType
    element_type: ValueType | None = Field(default=None, alias="elementType")

    @property
    def value_type(self) -> ValueType:
        """
        Type a clause comparing against this field should use.

        Arrays are compared element-wise, so they resolve to their element
        type (string when the entry does not declare one).
        """
        if self.type == FieldType.ARRAY:
            return self.element_type or ValueType.STRING
        return ValueType(self.type.value)


_ENTRIES_ADAPTER = TypeAdapter(list[FieldMeta])


class FieldCatalog:
    """Ordered, path-keyed lookup over catalog entries."""

    def __init__(self, entries: Iterable[FieldMeta]) -> None:
        self._entries = tuple(entries)
        # First entry wins when a path is declared twice
        self._by_path: dict[str, FieldMeta] = {}
        for entry in self._entries:
            self._by_path.setdefault(entry.path, entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def lookup(self, path: str) -> FieldMeta | None:
        """Return the entry for ``path``, or None when the path is not catalogued."""
        return self._by_path.get(path)

    def paths(self) -> list[str]:
        """Catalog paths in declaration order."""
        return [entry.path for entry in self._entries]

    @classmethod
    def from_file(cls, file_path: str | Path) -> FieldCatalog:
        """
        Load a catalog from a JSON file.

        The file holds an ordered list of ``{path, type, elementType?}``
        objects.

        Args:
            file_path: Location of the JSON catalog

        Returns:
            Loaded FieldCatalog

        Raises:
            NotFoundError: If the file does not exist
            ValidationError: If the content is not a valid catalog
        """
        path = Path(file_path)
        if not path.is_file():
            raise NotFoundError(
                "Field catalog file not found", details={"file_path": str(path)}
            )

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Field catalog is not valid JSON: {e.msg}",
                details={"file_path": str(path), "line": e.lineno},
            ) from e

        try:
            entries = _ENTRIES_ADAPTER.validate_python(raw)
        except PydanticValidationError as e:
            raise ValidationError(
                "Field catalog entries are invalid",
                details={"file_path": str(path), "errors": e.errors(include_url=False)},
            ) from e

        logger.info("Loaded %d field catalog entries from %s", len(entries), path)
        return cls(entries)


DEFAULT_FIELDS: tuple[FieldMeta, ...] = (
    FieldMeta(path="subject.id", type=FieldType.STRING),
    FieldMeta(path="subject.type", type=FieldType.STRING),
    FieldMeta(path="subject.active", type=FieldType.BOOL),
    FieldMeta(path="subject.roles", type=FieldType.ARRAY, element_type=ValueType.STRING),
    FieldMeta(path="subject.relations", type=FieldType.ARRAY, element_type=ValueType.OBJECT),
    FieldMeta(path="action.name", type=FieldType.STRING),
    FieldMeta(path="action.scopes", type=FieldType.ARRAY, element_type=ValueType.STRING),
    FieldMeta(path="resource.id", type=FieldType.STRING),
    FieldMeta(path="resource.type", type=FieldType.STRING),
    FieldMeta(path="resource.classification", type=FieldType.NUMBER),
    FieldMeta(path="resource.tags", type=FieldType.ARRAY, element_type=ValueType.STRING),
    FieldMeta(path="context.date", type=FieldType.DATE),
    FieldMeta(path="context.ip", type=FieldType.STRING),
)

default_catalog = FieldCatalog(DEFAULT_FIELDS)


def load_catalog(file_path: str | Path | None) -> FieldCatalog:
    """Load the catalog at ``file_path``, or return the built-in one when unset."""
    if not file_path:
        return default_catalog
    return FieldCatalog.from_file(file_path)
