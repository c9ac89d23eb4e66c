"""Typed Access - default filling and path access for typed object graphs."""

from typed_access.accessors import (
    get_path_bool,
    get_path_bytes,
    get_path_complex,
    get_path_datetime,
    get_path_float,
    get_path_int,
    get_path_str,
    get_path_timedelta,
)
from typed_access.default_parser import parse_default
from typed_access.defaults import set_defaults
from typed_access.errors import (
    DefaultTagError,
    DescriptorError,
    DescriptorSyntaxError,
    ErrorKind,
    PathNotFoundError,
    PathResolutionError,
    PathSyntaxError,
    PathTooLongError,
    PathTypeError,
    TypedAccessError,
    UnsupportedFieldTypeError,
    UnsupportedKeyTypeError,
    ValueNotAccessibleError,
)
from typed_access.introspection import DEFAULT_KEY, LAYOUT_KEY, tagged
from typed_access.parsing import parse_path
from typed_access.resolver import get_path
from typed_access.types import (
    PrimitiveType,
    complex64,
    complex128,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    uint8,
    uint16,
    uint32,
    uint64,
)

__all__ = [
    # Main API
    "get_path",
    "set_defaults",
    "tagged",
    "parse_path",
    "parse_default",
    # Typed getters
    "get_path_str",
    "get_path_bool",
    "get_path_int",
    "get_path_float",
    "get_path_complex",
    "get_path_bytes",
    "get_path_datetime",
    "get_path_timedelta",
    # Field annotations
    "PrimitiveType",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
    "complex64",
    "complex128",
    "DEFAULT_KEY",
    "LAYOUT_KEY",
    # Errors
    "ErrorKind",
    "TypedAccessError",
    "PathSyntaxError",
    "PathResolutionError",
    "PathTooLongError",
    "PathNotFoundError",
    "PathTypeError",
    "UnsupportedKeyTypeError",
    "ValueNotAccessibleError",
    "DescriptorError",
    "DescriptorSyntaxError",
    "UnsupportedFieldTypeError",
    "DefaultTagError",
]

__version__ = "0.1.0"
