"""Locale-free parsing of scalar literals at a declared width."""

from __future__ import annotations

import math
import re
import struct

from typed_access.errors import DescriptorSyntaxError
from typed_access.types import PrimitiveType, type_range

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_INFINITY = re.compile(r"[+-]?inf(?:inity)?", re.IGNORECASE)


def parse_bool(text: str) -> bool:
    """Parse the conventional short and long spellings of true/false."""
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise DescriptorSyntaxError(text, bool)


def parse_int(text: str, prim: PrimitiveType = PrimitiveType.INT64) -> int:
    """Parse a base-10 integer and check it fits the width of ``prim``."""
    pattern = _UNSIGNED_INT if prim.is_unsigned else _SIGNED_INT
    if not pattern.fullmatch(text):
        raise DescriptorSyntaxError(text, prim)
    value = int(text)
    min_val, max_val = type_range(prim)
    if value < min_val or value > max_val:
        raise DescriptorSyntaxError(text, prim)
    return value


def round_float32(value: float) -> float:
    """Round to the nearest single-precision value; raises OverflowError when out of range."""
    return struct.unpack("f", struct.pack("f", value))[0]


def parse_float(text: str, prim: PrimitiveType = PrimitiveType.FLOAT64) -> float:
    """Parse a decimal or exponential float literal at the precision of ``prim``."""
    if not _FLOAT.fullmatch(text):
        raise DescriptorSyntaxError(text, prim)
    value = float(text)
    if math.isinf(value) and not _INFINITY.fullmatch(text):
        raise DescriptorSyntaxError(text, prim)
    if prim is PrimitiveType.FLOAT32:
        try:
            value = round_float32(value)
        except OverflowError:
            raise DescriptorSyntaxError(text, prim) from None
    return value
