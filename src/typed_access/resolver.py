"""Resolve tokenized paths against object graphs."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
from typing import Any

from typed_access.codec import clone_duration, clone_timestamp
from typed_access.errors import (
    DescriptorError,
    PathNotFoundError,
    PathTooLongError,
    UnsupportedKeyTypeError,
    ValueNotAccessibleError,
)
from typed_access.introspection import field_types, find_field, get_field
from typed_access.literals import parse_bool, parse_float, parse_int
from typed_access.parsing import parse_path
from typed_access.types import (
    BYTE_TYPES,
    Kind,
    PrimitiveType,
    is_byte_sequence_type,
    item_type,
    key_value_types,
    kind_of,
    primitive_of,
    unwrap_optional,
)

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (bool, int, float, complex, str)


def get_path(obj: Any, path: str, *, ignore_case: bool = False) -> Any:
    """Return a copy of the value addressed by ``path`` inside ``obj``.

    Returns None when the path ends on an unset optional (or ``obj`` is None
    and the path is empty). Raises PathSyntaxError for malformed paths and
    PathResolutionError subclasses when the path does not fit the graph.
    """
    elements = parse_path(path)
    value = resolve(obj, elements, ignore_case=ignore_case)
    logger.debug("Resolved path %r to %s", path, type(value).__name__)
    return value


def resolve(
    value: Any,
    elements: Sequence[str],
    hint: Any = None,
    *,
    ignore_case: bool = False,
) -> Any:
    """Descend one element at a time and coerce the value at the end.

    ``hint`` is the static annotation of ``value`` when known; it supplies map
    key types and marks ``list[uint8]`` as a byte sequence.
    """
    hint = _usable(hint)
    if hint is not None:
        hint, _ = unwrap_optional(hint)

    if value is None:
        if not elements:
            return None
        raise PathTooLongError(elements[0])

    if not elements:
        return coerce(value, hint)

    head, rest = elements[0], elements[1:]
    kind = kind_of(value)

    if kind is Kind.RECORD:
        f = find_field(value, head, ignore_case)
        if f is None:
            raise PathNotFoundError(head)
        try:
            child = get_field(value, f.name)
        except AttributeError:
            # declared but never assigned (init=False without default, empty slot)
            raise PathNotFoundError(head) from None
        child_hint = field_types(type(value))[f.name]

    elif kind is Kind.SEQUENCE:
        index = _parse_index(head, len(value))
        child = value[index]
        child_hint = item_type(hint, index) if hint is not None else None

    elif kind is Kind.MAP:
        key_hint, child_hint = key_value_types(hint) if hint is not None else (None, None)
        key = _convert_key(head, _usable(key_hint), value)
        if key not in value:
            raise PathNotFoundError(head)
        child = value[key]

    else:
        raise PathTooLongError(head)

    return resolve(child, rest, child_hint, ignore_case=ignore_case)


def coerce(value: Any, hint: Any = None) -> Any:
    """Convert a terminal value into an independent, caller-usable copy."""
    if value is None:
        return None
    if isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, BYTE_TYPES):
        return bytes(value)
    if isinstance(value, datetime):
        return clone_timestamp(value)
    if isinstance(value, timedelta):
        return clone_duration(value)
    if isinstance(value, (list, tuple)) and is_byte_sequence_type(_usable(hint)):
        try:
            return bytes(value)
        except (TypeError, ValueError):
            pass
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error) as e:
        raise ValueNotAccessibleError(type(value)) from e


def _usable(hint: Any) -> Any:
    """Drop annotations left as strings by unresolvable forward references."""
    return None if isinstance(hint, str) else hint


def _parse_index(text: str, length: int) -> int:
    try:
        index = parse_int(text, PrimitiveType.UINT64)
    except DescriptorError:
        raise PathNotFoundError(text) from None
    if index >= length:
        raise PathNotFoundError(text)
    return index


def _convert_key(text: str, key_hint: Any, mapping: Mapping) -> Any:
    """Convert a path element to the key type of ``mapping``.

    Without a static key type the runtime type of an existing key is used.
    """
    if key_hint is None:
        sample = next(iter(mapping), None)
        if sample is None:
            raise PathNotFoundError(text)
        key_hint = type(sample)

    prim = primitive_of(key_hint)
    if prim is None or prim.is_complex:
        raise UnsupportedKeyTypeError(unwrap_optional(key_hint)[0], text)

    try:
        if prim is PrimitiveType.STRING:
            return text
        if prim is PrimitiveType.BOOL:
            return parse_bool(text)
        if prim.is_integer:
            return parse_int(text, prim)
        return parse_float(text, prim)
    except DescriptorError:
        raise PathNotFoundError(text) from None
