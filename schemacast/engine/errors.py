"""Configuration errors raised while compiling or resolving schemas.

Data violations never raise; they are collected into an ``ErrorTree``. The
exceptions below signal a broken schema definition or resolver setup and are
fail-closed: callers must fix the schema, not retry the input.
"""

from __future__ import annotations


class SchemaConfigError(ValueError):
    """Raised when a schema definition cannot be compiled or resolved."""


class UnknownPropertyTypeError(SchemaConfigError):
    """Raised at compile time for a ``type`` outside the supported set."""

    def __init__(self, type_name: object) -> None:
        super().__init__(f"unknown_property_type:{type_name}")
        self.type_name = type_name


class InvalidReferenceError(SchemaConfigError):
    """Raised when a ``$ref`` string or its fragment path cannot be used."""

    def __init__(self, reference: object, detail: str) -> None:
        super().__init__(f"invalid_reference:{reference}:{detail}")
        self.reference = reference
        self.detail = detail


class UnresolvedReferenceError(SchemaConfigError):
    """Raised the first time a ``$ref`` is exercised and the resolver finds nothing."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unresolved_reference:{name}")
        self.name = name
