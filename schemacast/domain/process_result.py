"""Result value returned by every ``process`` call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

from schemacast.domain.error_tree import ErrorTree


class _Missing:
    """Marker for a key that is not present in the input at all."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final[Any] = _Missing()


def is_empty_value(value: Any) -> bool:
    """True for values that skip keyword checks: absent, null or uncastable."""

    return value is MISSING or value is None


def to_document_value(value: Any) -> Any:
    """Render the internal absence marker as ``None`` in output documents."""

    return None if value is MISSING else value


@dataclass(frozen=True)
class ProcessResult:
    """Casted document plus the violations found while producing it."""

    doc: Any
    errors: ErrorTree = field(default_factory=ErrorTree)

    @property
    def valid(self) -> bool:
        return self.errors.is_empty()

    def to_dict(self) -> dict[str, object]:
        """Return deterministic dict representation for logging/tests."""

        return {
            "valid": self.valid,
            "doc": self.doc,
            "errors": self.errors.to_dict(),
        }
