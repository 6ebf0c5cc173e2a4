"""Property validators: cast, validate and process one value against its definition.

Validators hold a reference to the live definition mapping and re-read every
keyword on each call, so constraints may be added or removed between calls.
Composite validators memoize their children per key and rebuild a child when
its definition is replaced or retyped.
"""

from __future__ import annotations

import copy
import logging
import math
import re
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Final, Literal, Mapping, MutableMapping

from schemacast.domain.error_tree import ErrorTree
from schemacast.domain.process_result import MISSING, ProcessResult, is_empty_value, to_document_value
from schemacast.domain.violation_codes import (
    DIVISIBLE_BY,
    ENUM,
    FORMAT,
    MAX_ITEMS,
    MAX_LENGTH,
    MAXIMUM,
    MIN_ITEMS,
    MIN_LENGTH,
    MINIMUM,
    PATTERN,
    REQUIRED,
)
from schemacast.engine.errors import (
    InvalidReferenceError,
    SchemaConfigError,
    UnknownPropertyTypeError,
    UnresolvedReferenceError,
)
from schemacast.engine.formats import is_temporal_format, is_valid_format, parse_temporal, to_text
from schemacast.engine.references import REF_KEY, parse_reference, splice_fragment

if TYPE_CHECKING:
    from schemacast.engine.schema import Schema

logger = logging.getLogger(__name__)

PropertyTypeName = Literal["any", "string", "number", "integer", "array", "object"]
Definition = MutableMapping[str, Any]

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class PropertyValidator:
    """Validator for type ``any`` and base of every other property type."""

    type_name: ClassVar[str] = "any"

    def __init__(self, definition: Definition, *, context: Schema | None = None) -> None:
        self.definition = definition
        self.context = context

    def cast(self, raw: Any) -> Any:
        return raw

    def validate(self, keyword: str, predicate: Callable[[Any], bool]) -> bool:
        """Evaluate ``predicate`` on the configured keyword value; unset keywords pass."""

        if keyword not in self.definition:
            return True
        return bool(predicate(self.definition[keyword]))

    def _check(self, codes: list[str], keyword: str, predicate: Callable[[Any], bool]) -> None:
        if not self.validate(keyword, predicate):
            codes.append(keyword)

    def collect_errors(self, value: Any) -> list[str]:
        codes: list[str] = []
        self._check(codes, REQUIRED, lambda required: not (required and value is MISSING))
        return codes

    def process(self, raw: Any) -> ProcessResult:
        value = raw if is_empty_value(raw) else self.cast(raw)
        return ProcessResult(doc=to_document_value(value), errors=ErrorTree(self.collect_errors(value)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.definition)!r})"


class StringProperty(PropertyValidator):
    type_name: ClassVar[str] = "string"

    def _parse(self, text: str) -> Any:
        format_name = self.definition.get("format")
        if is_temporal_format(format_name):
            return parse_temporal(format_name, text)
        return text

    def cast(self, raw: Any) -> Any:
        return self._parse(to_text(raw))

    def collect_errors(self, value: Any) -> list[str]:
        codes = super().collect_errors(value)
        if is_empty_value(value):
            return codes
        text = value if isinstance(value, str) else to_text(value)
        self._check(codes, MIN_LENGTH, lambda bound: len(text) >= bound)
        self._check(codes, MAX_LENGTH, lambda bound: len(text) <= bound)
        self._check(codes, PATTERN, lambda pattern: re.fullmatch(pattern, text) is not None)
        self._check(codes, ENUM, lambda options: text in options or text in [str(option) for option in options])
        self._check(codes, FORMAT, lambda format_name: is_valid_format(format_name, text))
        return codes

    def process(self, raw: Any) -> ProcessResult:
        if is_empty_value(raw):
            return super().process(raw)
        # Checks run on the input text; the parsed date is only for the document.
        text = to_text(raw)
        return ProcessResult(doc=self._parse(text), errors=ErrorTree(self.collect_errors(text)))


class NumberProperty(PropertyValidator):
    type_name: ClassVar[str] = "number"

    def cast(self, raw: Any) -> Any:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float):
            number = raw
        else:
            match = _FLOAT_PREFIX.match(str(raw))
            if match is None:
                return None
            number = float(match.group(1))
        return None if math.isnan(number) else number

    def collect_errors(self, value: Any) -> list[str]:
        codes = super().collect_errors(value)
        if is_empty_value(value):
            return codes
        exclusive_min = bool(self.definition.get("excludeMinimum"))
        exclusive_max = bool(self.definition.get("excludeMaximum"))
        self._check(codes, MINIMUM, lambda bound: value > bound if exclusive_min else value >= bound)
        self._check(codes, MAXIMUM, lambda bound: value < bound if exclusive_max else value <= bound)
        self._check(codes, DIVISIBLE_BY, lambda divisor: divisor != 0 and value % divisor == 0)
        return codes


class IntegerProperty(NumberProperty):
    type_name: ClassVar[str] = "integer"

    def cast(self, raw: Any) -> Any:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float):
            return int(raw) if math.isfinite(raw) else None
        match = _INT_PREFIX.match(str(raw))
        return int(match.group(1)) if match else None


class _ChildCache:
    """Per-key memo of child validators, invalidated when the definition changes shape."""

    def __init__(self, context: Schema | None) -> None:
        self._context = context
        self._entries: dict[str, tuple[Definition, tuple[Any, Any], PropertyValidator]] = {}

    def get(self, key: str, definition: Definition) -> PropertyValidator:
        signature = (definition.get("type"), definition.get(REF_KEY))
        entry = self._entries.get(key)
        if entry is not None and entry[0] is definition and entry[1] == signature:
            return entry[2]
        validator = build_property(definition, context=self._context)
        self._entries[key] = (definition, signature, validator)
        return validator


def _as_list(raw: Any) -> list[Any]:
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


class ArrayProperty(PropertyValidator):
    type_name: ClassVar[str] = "array"

    def __init__(self, definition: Definition, *, context: Schema | None = None) -> None:
        super().__init__(definition, context=context)
        self._children = _ChildCache(context)
        _ = self.item_property  # compile items eagerly

    @property
    def item_property(self) -> PropertyValidator | None:
        items = self.definition.get("items")
        if items is None:
            return None
        if not isinstance(items, Mapping):
            raise SchemaConfigError(f"unsupported_items:{type(items).__name__}")
        return self._children.get("items", items)

    def cast(self, raw: Any) -> Any:
        elements = _as_list(raw)
        item = self.item_property
        if item is None:
            return elements
        return [element if is_empty_value(element) else item.cast(element) for element in elements]

    def _bound_errors(self, elements: Any) -> list[str]:
        codes = super().collect_errors(elements)
        if is_empty_value(elements):
            return codes
        self._check(codes, MIN_ITEMS, lambda bound: len(elements) >= bound)
        self._check(codes, MAX_ITEMS, lambda bound: len(elements) <= bound)
        return codes

    def _process_items(self, elements: list[Any]) -> list[ProcessResult]:
        item = self.item_property
        if item is None:
            return []
        return [item.process(element) for element in elements]

    def collect_errors(self, value: Any) -> list[str]:
        codes = self._bound_errors(value)
        if is_empty_value(value):
            return codes
        for result in self._process_items(_as_list(value)):
            codes.extend(code for code in result.errors.codes if code not in codes)
        return codes

    def process(self, raw: Any) -> ProcessResult:
        if is_empty_value(raw):
            return super().process(raw)
        elements = _as_list(raw)
        errors = ErrorTree(self._bound_errors(elements))
        results = self._process_items(elements)
        if not results:
            return ProcessResult(doc=elements, errors=errors)
        for index, result in enumerate(results):
            errors.extend(result.errors.codes)
            errors.merge(index, result.errors)
        return ProcessResult(doc=[result.doc for result in results], errors=errors)


class ObjectProperty(PropertyValidator):
    type_name: ClassVar[str] = "object"

    def __init__(self, definition: Definition, *, context: Schema | None = None) -> None:
        super().__init__(definition, context=context)
        self._children = _ChildCache(context)
        for name in self.properties:
            self.property_for(name)
        logger.debug("compiled object property with %d declared properties", len(self.properties))

    @property
    def properties(self) -> Definition:
        """Live ``properties`` mapping of the definition."""

        properties = self.definition.get("properties")
        if properties is None:
            return {}
        if not isinstance(properties, MutableMapping):
            raise SchemaConfigError(f"invalid_properties:{type(properties).__name__}")
        return properties

    def property_for(self, name: str) -> PropertyValidator:
        definition = self.properties[name]
        if not isinstance(definition, MutableMapping):
            raise SchemaConfigError(f"invalid_property_definition:{name}")
        return self._children.get(name, definition)

    def cast(self, raw: Any) -> Any:
        return self.process(raw).doc

    def process(self, raw: Any) -> ProcessResult:
        if is_empty_value(raw):
            return super().process(raw)
        source: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        errors = ErrorTree(self.collect_errors(raw))
        doc: dict[str, Any] = {}
        for name, definition in self.properties.items():
            result = self.property_for(name).process(source.get(name, MISSING))
            value = result.doc
            if value is None and "default" in definition:
                value = copy.deepcopy(definition["default"])
            doc[name] = value
            errors.merge(name, result.errors)
        return ProcessResult(doc=doc, errors=errors)


class ReferenceProperty(PropertyValidator):
    """Stand-in for a ``$ref`` definition, resolved through the context on every use."""

    type_name: ClassVar[str] = REF_KEY

    def _resolve_once(self) -> PropertyValidator:
        reference = parse_reference(self.definition.get(REF_KEY))
        resolver = self.context.resolver if self.context is not None else None
        schema = resolver(reference.name, self.context) if resolver is not None else None
        if schema is None:
            raise UnresolvedReferenceError(reference.name)
        logger.debug("resolved reference %s", self.definition.get(REF_KEY))
        if not reference.has_fragment:
            return schema.root
        base = schema.root
        if isinstance(base, ReferenceProperty):
            base = base.target()
        spliced = splice_fragment(self.definition, base.definition, reference, root_type=base.type_name)
        return build_property(spliced, context=self.context)

    def target(self) -> PropertyValidator:
        """Follow references until a typed validator is reached."""

        seen = {id(self)}
        target = self._resolve_once()
        while isinstance(target, ReferenceProperty):
            if id(target) in seen:
                raise InvalidReferenceError(self.definition.get(REF_KEY), "reference cycle")
            seen.add(id(target))
            target = target._resolve_once()
        return target

    def cast(self, raw: Any) -> Any:
        return self.target().cast(raw)

    def collect_errors(self, value: Any) -> list[str]:
        codes = super().collect_errors(value)
        if is_empty_value(value):
            return codes
        codes.extend(code for code in self.target().collect_errors(value) if code not in codes)
        return codes

    def process(self, raw: Any) -> ProcessResult:
        # Absent values are checked at the reference site without resolving.
        if is_empty_value(raw):
            return super().process(raw)
        return self.target().process(raw)


PROPERTY_TYPES: Final[dict[str, type[PropertyValidator]]] = {
    "any": PropertyValidator,
    "string": StringProperty,
    "number": NumberProperty,
    "integer": IntegerProperty,
    "array": ArrayProperty,
    "object": ObjectProperty,
}


def build_property(
    definition: Definition,
    *,
    context: Schema | None = None,
    default_type: PropertyTypeName = "any",
) -> PropertyValidator:
    """Compile one definition into its validator; unknown types fail immediately."""

    if not isinstance(definition, Mapping):
        raise SchemaConfigError(f"invalid_definition:{type(definition).__name__}")
    if REF_KEY in definition:
        return ReferenceProperty(definition, context=context)
    type_name = definition.get("type", default_type)
    property_class = PROPERTY_TYPES.get(type_name) if isinstance(type_name, str) else None
    if property_class is None:
        raise UnknownPropertyTypeError(type_name)
    return property_class(definition, context=context)
