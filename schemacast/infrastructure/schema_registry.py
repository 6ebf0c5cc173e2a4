"""In-memory schema registry usable as the ``$ref`` resolver.

Embedding applications that keep their schemas in a plain name -> definition
table can register them here and pass ``registry.resolve`` (or the registry
itself) wherever a ``SchemaResolver`` is expected.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

from schemacast.engine.errors import SchemaConfigError
from schemacast.engine.schema import Schema

logger = logging.getLogger(__name__)


class SchemaRegistry:
    def __init__(self, definitions: Mapping[str, MutableMapping[str, Any]] | None = None):
        self._schemas: dict[str, Schema] = {}
        for name, definition in (definitions or {}).items():
            self.register(name, definition)

    def register(self, name: str, definition: MutableMapping[str, Any]) -> Schema:
        """Compile ``definition`` under ``name``; references resolve through this registry."""

        normalized = str(name or "").strip()
        if not normalized:
            raise SchemaConfigError("schema_name_required")
        schema = Schema(definition, resolver=self.resolve, name=normalized)
        if normalized in self._schemas:
            logger.debug("replacing registered schema %s", normalized)
        self._schemas[normalized] = schema
        return schema

    def get(self, name: str) -> Schema | None:
        return self._schemas.get(str(name).strip())

    def resolve(self, name: str, context: Schema | None = None) -> Schema | None:
        _ = context
        return self.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._schemas))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._schemas

    def __call__(self, name: str, context: Schema | None = None) -> Schema | None:
        return self.resolve(name, context)
