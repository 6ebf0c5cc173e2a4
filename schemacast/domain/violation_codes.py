"""Canonical violation-code registry.

Every code is named after the schema keyword whose check failed, so a code in
an error report can be looked up in the schema definition directly.
"""

from __future__ import annotations

from typing import Final

REQUIRED: Final[str] = "required"

# String keywords.
MIN_LENGTH: Final[str] = "minLength"
MAX_LENGTH: Final[str] = "maxLength"
PATTERN: Final[str] = "pattern"
ENUM: Final[str] = "enum"
FORMAT: Final[str] = "format"

# Number keywords.
MINIMUM: Final[str] = "minimum"
MAXIMUM: Final[str] = "maximum"
DIVISIBLE_BY: Final[str] = "divisibleBy"

# Array keywords.
MIN_ITEMS: Final[str] = "minItems"
MAX_ITEMS: Final[str] = "maxItems"

# Flat canonical set, in evaluation order per property type.
CANONICAL_VIOLATION_CODES: Final[tuple[str, ...]] = (
    REQUIRED,
    MIN_LENGTH,
    MAX_LENGTH,
    PATTERN,
    ENUM,
    FORMAT,
    MINIMUM,
    MAXIMUM,
    DIVISIBLE_BY,
    MIN_ITEMS,
    MAX_ITEMS,
)


def is_registered_violation_code(code: str) -> bool:
    """Return True if the code is in the canonical registry."""

    return code.strip() in CANONICAL_VIOLATION_CODES
