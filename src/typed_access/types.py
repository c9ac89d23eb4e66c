"""Primitive kinds and static-type analysis for typed object graphs."""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping
from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin


class PrimitiveType(Enum):
    """Scalar kinds a field can hold, with their declared widths."""

    BOOL = "bool"
    UINT8 = "uint8"
    INT8 = "int8"
    UINT16 = "uint16"
    INT16 = "int16"
    UINT32 = "uint32"
    INT32 = "int32"
    UINT64 = "uint64"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"

    @property
    def bits(self) -> int:
        """Return the width in bits (complex widths cover both parts)."""
        sizes = {
            PrimitiveType.BOOL: 1,
            PrimitiveType.UINT8: 8,
            PrimitiveType.INT8: 8,
            PrimitiveType.UINT16: 16,
            PrimitiveType.INT16: 16,
            PrimitiveType.UINT32: 32,
            PrimitiveType.INT32: 32,
            PrimitiveType.UINT64: 64,
            PrimitiveType.INT64: 64,
            PrimitiveType.FLOAT32: 32,
            PrimitiveType.FLOAT64: 64,
            PrimitiveType.COMPLEX64: 64,
            PrimitiveType.COMPLEX128: 128,
            PrimitiveType.STRING: 0,
        }
        return sizes[self]

    @property
    def is_signed(self) -> bool:
        return self in _SIGNED

    @property
    def is_unsigned(self) -> bool:
        return self in _UNSIGNED

    @property
    def is_integer(self) -> bool:
        return self in _SIGNED or self in _UNSIGNED

    @property
    def is_float(self) -> bool:
        return self in (PrimitiveType.FLOAT32, PrimitiveType.FLOAT64)

    @property
    def is_complex(self) -> bool:
        return self in (PrimitiveType.COMPLEX64, PrimitiveType.COMPLEX128)


_SIGNED = frozenset(
    {PrimitiveType.INT8, PrimitiveType.INT16, PrimitiveType.INT32, PrimitiveType.INT64}
)
_UNSIGNED = frozenset(
    {PrimitiveType.UINT8, PrimitiveType.UINT16, PrimitiveType.UINT32, PrimitiveType.UINT64}
)

def type_range(prim: PrimitiveType) -> tuple[int, int]:
    """Return the inclusive (min, max) range of an integer primitive."""
    if prim.is_signed:
        half = 1 << (prim.bits - 1)
        return -half, half - 1
    if prim.is_unsigned:
        return 0, (1 << prim.bits) - 1
    raise ValueError(f"{prim.value} is not an integer type")


# Width aliases for field annotations, e.g. ``age: int8 = 0``
int8 = Annotated[int, PrimitiveType.INT8]
int16 = Annotated[int, PrimitiveType.INT16]
int32 = Annotated[int, PrimitiveType.INT32]
int64 = Annotated[int, PrimitiveType.INT64]
uint8 = Annotated[int, PrimitiveType.UINT8]
uint16 = Annotated[int, PrimitiveType.UINT16]
uint32 = Annotated[int, PrimitiveType.UINT32]
uint64 = Annotated[int, PrimitiveType.UINT64]
float32 = Annotated[float, PrimitiveType.FLOAT32]
float64 = Annotated[float, PrimitiveType.FLOAT64]
complex64 = Annotated[complex, PrimitiveType.COMPLEX64]
complex128 = Annotated[complex, PrimitiveType.COMPLEX128]

# Unannotated builtins default to the widest width
_BUILTIN_PRIMITIVES: dict[type, PrimitiveType] = {
    bool: PrimitiveType.BOOL,
    int: PrimitiveType.INT64,
    float: PrimitiveType.FLOAT64,
    complex: PrimitiveType.COMPLEX128,
    str: PrimitiveType.STRING,
}

BYTE_TYPES: tuple[type, ...] = (bytes, bytearray)


class Kind(Enum):
    """Composite kinds a graph walk distinguishes. Optional references never appear here."""

    RECORD = "record"
    SEQUENCE = "sequence"
    MAP = "map"
    SCALAR = "scalar"


def is_record(value: Any) -> bool:
    """Check if a value is a record instance (not a record class)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def kind_of(value: Any) -> Kind:
    """Classify a runtime value."""
    if is_record(value):
        return Kind.RECORD
    if isinstance(value, (list, tuple) + BYTE_TYPES):
        return Kind.SEQUENCE
    if isinstance(value, Mapping):
        return Kind.MAP
    return Kind.SCALAR


def strip_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, ...]`` into ``(T, metadata)``."""
    if get_origin(hint) is Annotated:
        base, *metadata = get_args(hint)
        return base, tuple(metadata)
    return hint, ()


def unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """Collapse ``X | None`` to ``X``.

    Returns the inner hint and whether it was optional. Unions of several
    non-None members are returned unchanged.
    """
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = get_args(hint)
        members = [a for a in args if a is not type(None)]
        if len(members) == 1 and len(members) != len(args):
            return members[0], True
    return hint, False


def origin_of(hint: Any) -> Any:
    """Return the runtime class behind a hint (``list[int]`` -> ``list``)."""
    hint, _ = strip_annotated(hint)
    return get_origin(hint) or hint


def primitive_of(hint: Any) -> PrimitiveType | None:
    """Map a scalar annotation to its primitive kind, or None."""
    hint, _ = unwrap_optional(hint)
    base, metadata = strip_annotated(hint)
    for meta in metadata:
        if isinstance(meta, PrimitiveType):
            return meta
    if isinstance(base, type):
        # bool before int: bool is an int subclass
        for builtin, prim in _BUILTIN_PRIMITIVES.items():
            if base is builtin:
                return prim
        if issubclass(base, Enum):
            return None
        for builtin, prim in _BUILTIN_PRIMITIVES.items():
            if issubclass(base, builtin):
                return prim
    return None


def kind_of_type(hint: Any) -> Kind:
    """Classify a static annotation."""
    hint, _ = unwrap_optional(hint)
    origin = origin_of(hint)
    if not isinstance(origin, type):
        return Kind.SCALAR
    if dataclasses.is_dataclass(origin):
        return Kind.RECORD
    if issubclass(origin, (list, tuple) + BYTE_TYPES):
        return Kind.SEQUENCE
    if issubclass(origin, Mapping):
        return Kind.MAP
    return Kind.SCALAR


def is_timestamp_type(hint: Any) -> bool:
    origin = origin_of(unwrap_optional(hint)[0])
    return isinstance(origin, type) and issubclass(origin, datetime)


def is_duration_type(hint: Any) -> bool:
    origin = origin_of(unwrap_optional(hint)[0])
    return isinstance(origin, type) and issubclass(origin, timedelta)


def is_byte_sequence_type(hint: Any) -> bool:
    """Check for ``bytes``/``bytearray`` or a sequence of uint8."""
    hint, _ = unwrap_optional(hint)
    origin = origin_of(hint)
    if isinstance(origin, type) and issubclass(origin, BYTE_TYPES):
        return True
    if isinstance(origin, type) and issubclass(origin, (list, tuple)):
        return primitive_of(element_type(hint)) is PrimitiveType.UINT8
    return False


def element_type(hint: Any) -> Any:
    """Return the element annotation of ``list[T]`` / ``tuple[T, ...]``, or None."""
    hint, _ = unwrap_optional(hint)
    hint, _ = strip_annotated(hint)
    origin = get_origin(hint)
    args = get_args(hint)
    if not isinstance(origin, type) or not args:
        return None
    if issubclass(origin, tuple):
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    if issubclass(origin, list):
        return args[0]
    return None


def tuple_arity(hint: Any) -> int | None:
    """Return the declared length of a fixed ``tuple[A, B]``, or None when open-ended."""
    hint, _ = unwrap_optional(hint)
    hint, _ = strip_annotated(hint)
    origin = get_origin(hint)
    args = get_args(hint)
    if isinstance(origin, type) and issubclass(origin, tuple) and args and args[-1] is not Ellipsis:
        return len(args)
    return None


def item_type(hint: Any, index: int) -> Any:
    """Return the annotation of one sequence position (handles fixed tuples)."""
    hint, _ = unwrap_optional(hint)
    hint, _ = strip_annotated(hint)
    origin = get_origin(hint)
    args = get_args(hint)
    if isinstance(origin, type) and issubclass(origin, tuple) and args and args[-1] is not Ellipsis:
        return args[index] if index < len(args) else None
    return element_type(hint)


def key_value_types(hint: Any) -> tuple[Any, Any]:
    """Return ``(K, V)`` of ``dict[K, V]``, or ``(None, None)``."""
    hint, _ = unwrap_optional(hint)
    hint, _ = strip_annotated(hint)
    args = get_args(hint)
    origin = get_origin(hint)
    if isinstance(origin, type) and issubclass(origin, Mapping) and len(args) == 2:
        return args[0], args[1]
    return None, None
