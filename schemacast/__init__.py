"""Schema-driven casting and validation of decoded JSON value trees."""

from schemacast.domain.error_tree import ErrorTree
from schemacast.domain.process_result import MISSING, ProcessResult
from schemacast.engine.errors import (
    InvalidReferenceError,
    SchemaConfigError,
    UnknownPropertyTypeError,
    UnresolvedReferenceError,
)
from schemacast.engine.properties import PROPERTY_TYPES, PropertyValidator, build_property
from schemacast.engine.schema import Schema, SchemaResolver, compile_schema
from schemacast.infrastructure.schema_registry import SchemaRegistry

__all__ = [
    "MISSING",
    "PROPERTY_TYPES",
    "ErrorTree",
    "InvalidReferenceError",
    "ProcessResult",
    "PropertyValidator",
    "Schema",
    "SchemaConfigError",
    "SchemaRegistry",
    "SchemaResolver",
    "UnknownPropertyTypeError",
    "UnresolvedReferenceError",
    "build_property",
    "compile_schema",
]
