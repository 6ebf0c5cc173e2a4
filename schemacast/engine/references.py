"""``$ref`` parsing and fragment splicing.

A reference is either ``name`` (substitute the whole named schema) or
``name#.a.b`` (borrow the part of the named schema's definition found at the
dotted path ``a.b`` and splice it into the referring definition).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from schemacast.engine.errors import InvalidReferenceError

REF_KEY = "$ref"
FRAGMENT_MARKER = "#"


@dataclass(frozen=True)
class Reference:
    """Parsed form of a ``$ref`` string."""

    name: str
    fragment: tuple[str, ...] = ()

    @property
    def has_fragment(self) -> bool:
        return bool(self.fragment)


def parse_reference(raw: object) -> Reference:
    """Split ``name#.a.b`` into the schema name and fragment segments."""

    if not isinstance(raw, str) or not raw.strip():
        raise InvalidReferenceError(raw, "reference must be a non-empty string")
    name, marker, fragment = raw.strip().partition(FRAGMENT_MARKER)
    name = name.strip()
    if not name:
        raise InvalidReferenceError(raw, "missing schema name")
    if not marker:
        return Reference(name=name)
    segments = tuple(part for part in fragment.split(".") if part)
    if not segments:
        raise InvalidReferenceError(raw, "empty fragment path")
    return Reference(name=name, fragment=segments)


def resolve_fragment(definition: Mapping[str, Any], reference: Reference) -> tuple[Mapping[str, Any], Any]:
    """Walk the fragment path and return ``(parent_mapping, value)``."""

    parent: Mapping[str, Any] = definition
    current: Any = definition
    for segment in reference.fragment:
        if not isinstance(current, Mapping) or segment not in current:
            raise InvalidReferenceError(
                f"{reference.name}#.{'.'.join(reference.fragment)}",
                f"fragment segment {segment!r} not found",
            )
        parent = current
        current = current[segment]
    return parent, current


def splice_fragment(
    definition: Mapping[str, Any],
    referenced: Mapping[str, Any],
    reference: Reference,
    *,
    root_type: str,
) -> dict[str, Any]:
    """Return a copy of ``definition`` with the referenced fragment spliced in.

    The fragment lands under the last segment of its path; the ``$ref`` key is
    dropped. A definition without ``type`` takes the type of the mapping that
    held the fragment (``root_type`` when that is the referenced root), so
    ``person#.properties`` yields an object definition.
    """

    parent, fragment = resolve_fragment(referenced, reference)
    spliced = {key: value for key, value in definition.items() if key != REF_KEY}
    spliced[reference.fragment[-1]] = fragment
    if "type" not in spliced:
        if isinstance(parent.get("type"), str):
            spliced["type"] = parent["type"]
        elif parent is referenced:
            spliced["type"] = root_type
    return spliced
