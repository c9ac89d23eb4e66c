"""Turn default descriptors into typed values."""

from __future__ import annotations

import json
from typing import Any

from typed_access.codec import parse_complex, parse_duration, parse_timestamp
from typed_access.errors import DescriptorSyntaxError, UnsupportedFieldTypeError
from typed_access.literals import parse_bool, parse_float, parse_int, round_float32
from typed_access.types import (
    BYTE_TYPES,
    Kind,
    PrimitiveType,
    is_duration_type,
    is_timestamp_type,
    item_type,
    key_value_types,
    kind_of_type,
    origin_of,
    primitive_of,
    tuple_arity,
    unwrap_optional,
)


def parse_default(descriptor: str, layout: str, target: Any) -> Any:
    """Parse ``descriptor`` into a value of the annotated type ``target``.

    ``layout`` only matters for timestamps: a preset name or a strptime
    format. Optional targets are parsed against their inner type. List,
    tuple and dict targets take a JSON literal.

    Raises DescriptorSyntaxError ("invalid syntax") when the descriptor is
    malformed for the type and UnsupportedFieldTypeError for types without
    a textual form.
    """
    target, _ = unwrap_optional(target)
    if target is None or isinstance(target, str):
        raise UnsupportedFieldTypeError(target, descriptor)

    if is_timestamp_type(target):
        return parse_timestamp(descriptor, layout)
    if is_duration_type(target):
        return parse_duration(descriptor)

    origin = origin_of(target)
    if isinstance(origin, type) and issubclass(origin, BYTE_TYPES):
        return origin(descriptor.encode("utf-8"))

    if kind_of_type(target) in (Kind.SEQUENCE, Kind.MAP):
        try:
            literal = json.loads(descriptor)
        except json.JSONDecodeError:
            raise DescriptorSyntaxError(descriptor, target) from None
        return _convert_literal(literal, target, descriptor)

    prim = primitive_of(target)
    if prim is None:
        raise UnsupportedFieldTypeError(target, descriptor)
    try:
        return parse_scalar(descriptor, prim)
    except DescriptorSyntaxError:
        raise DescriptorSyntaxError(descriptor, target) from None


def parse_scalar(text: str, prim: PrimitiveType) -> Any:
    """Parse a scalar literal for one primitive kind."""
    if prim is PrimitiveType.STRING:
        return text
    if prim is PrimitiveType.BOOL:
        return parse_bool(text)
    if prim.is_integer:
        return parse_int(text, prim)
    if prim.is_float:
        return parse_float(text, prim)

    value = parse_complex(text)
    if prim is PrimitiveType.COMPLEX64:
        try:
            value = complex(round_float32(value.real), round_float32(value.imag))
        except OverflowError:
            raise DescriptorSyntaxError(text, prim) from None
    return value


def _convert_literal(item: Any, target: Any, descriptor: str) -> Any:
    """Convert a decoded JSON value to ``target``, re-parsing scalars as descriptors."""
    if target is None:
        return item
    target, optional = unwrap_optional(target)
    kind = kind_of_type(target)

    if kind is Kind.SEQUENCE and not issubclass(origin_of(target), BYTE_TYPES):
        if not isinstance(item, list):
            raise DescriptorSyntaxError(descriptor, target)
        arity = tuple_arity(target)
        if arity is not None and len(item) != arity:
            raise DescriptorSyntaxError(descriptor, target)
        items = [_convert_literal(x, item_type(target, i), descriptor) for i, x in enumerate(item)]
        return tuple(items) if issubclass(origin_of(target), tuple) else items

    if kind is Kind.MAP:
        if not isinstance(item, dict):
            raise DescriptorSyntaxError(descriptor, target)
        key_type, value_type = key_value_types(target)
        return {
            _convert_literal(k, key_type, descriptor): _convert_literal(v, value_type, descriptor)
            for k, v in item.items()
        }

    if kind is Kind.RECORD:
        raise UnsupportedFieldTypeError(target, descriptor)

    if item is None:
        if optional:
            return None
        raise DescriptorSyntaxError(descriptor, target)
    if isinstance(item, (list, dict)):
        raise DescriptorSyntaxError(descriptor, target)

    text = item if isinstance(item, str) else json.dumps(item)
    return parse_default(text, "", target)
