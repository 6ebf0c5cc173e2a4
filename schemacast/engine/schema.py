"""Compiled schema entrypoint.

``Schema`` compiles a definition once and processes any number of values
against it. ``$ref`` lookups go through the resolver injected at
construction; the engine never stores named schemas itself.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping, Protocol

from schemacast.domain.process_result import ProcessResult
from schemacast.engine.errors import SchemaConfigError
from schemacast.engine.properties import PropertyValidator, build_property

logger = logging.getLogger(__name__)


class SchemaResolver(Protocol):
    """Turns a reference name into a compiled schema, or None when unknown."""

    def __call__(self, name: str, context: Schema) -> Schema | None:
        ...


class Schema:
    """Root validator for one schema definition; object-typed unless ``type`` says otherwise."""

    def __init__(
        self,
        definition: MutableMapping[str, Any],
        *,
        resolver: SchemaResolver | None = None,
        name: str | None = None,
    ) -> None:
        if not isinstance(definition, Mapping):
            raise SchemaConfigError(f"invalid_schema_definition:{type(definition).__name__}")
        self.definition = definition
        self.resolver = resolver
        self.name = name
        self.root: PropertyValidator = build_property(definition, context=self, default_type="object")
        logger.debug("compiled schema %s as %s", name or "<anonymous>", self.root.type_name)

    @property
    def properties(self) -> MutableMapping[str, Any]:
        """Live ``properties`` of the root definition; edits apply to the next ``process``."""

        properties = self.definition.get("properties")
        return properties if isinstance(properties, MutableMapping) else {}

    def process(self, value: Any) -> ProcessResult:
        return self.root.process(value)

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, type={self.root.type_name!r})"


def compile_schema(
    definition: MutableMapping[str, Any],
    *,
    resolver: SchemaResolver | None = None,
    name: str | None = None,
) -> Schema:
    """Compile ``definition``; raises ``SchemaConfigError`` for unknown property types."""

    return Schema(definition, resolver=resolver, name=name)
