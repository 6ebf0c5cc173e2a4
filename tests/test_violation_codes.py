from __future__ import annotations

import pytest

from schemacast.domain.violation_codes import (
    CANONICAL_VIOLATION_CODES,
    DIVISIBLE_BY,
    MINIMUM,
    REQUIRED,
    is_registered_violation_code,
)


@pytest.mark.schemacast
def test_registry_is_closed_and_unique():
    assert len(CANONICAL_VIOLATION_CODES) == len(set(CANONICAL_VIOLATION_CODES)) == 11
    assert set(CANONICAL_VIOLATION_CODES) == {
        "required",
        "minLength",
        "maxLength",
        "pattern",
        "enum",
        "format",
        "minimum",
        "maximum",
        "divisibleBy",
        "minItems",
        "maxItems",
    }


@pytest.mark.schemacast
def test_codes_are_keyword_names():
    assert REQUIRED == "required"
    assert MINIMUM == "minimum"
    assert DIVISIBLE_BY == "divisibleBy"


@pytest.mark.schemacast
@pytest.mark.parametrize("code", ["minimum", " enum ", "maxItems"])
def test_registered_codes_are_recognised(code):
    assert is_registered_violation_code(code)


@pytest.mark.schemacast
@pytest.mark.parametrize("code", ["", "type", "additionalProperties", "MINIMUM"])
def test_unknown_codes_are_rejected(code):
    assert not is_registered_violation_code(code)
