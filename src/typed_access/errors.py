"""Exception types raised by path parsing, path resolution and defaulting."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Closed set of failure kinds, shared by all exceptions in this module."""

    # Path syntax
    NESTED_BRACKETS = "nested brackets not permitted"
    UNMATCHED_CLOSE_BRACKET = "closed bracket without matching open"
    BRACKETS_OPEN = "brackets left open"
    QUOTES_OPEN = "quotes left open"
    UNKNOWN_ESCAPE = "unknown escape character"
    ESCAPE_INCOMPLETE = "escape sequence needs a second character"
    CONTROL_CHARACTER = "control character not permitted"
    SPACE_IN_ELEMENT = "space not permitted in element"

    # Path resolution
    PATH_TOO_LONG = "path too long"
    NOT_FOUND = "object for path segment not found"
    UNSUPPORTED_KEY_TYPE = "unsupported key type"
    NOT_ACCESSIBLE = "value not accessible"
    WRONG_TYPE = "wrong type"

    # Default descriptors
    INVALID_SYNTAX = "invalid syntax"
    UNSUPPORTED_FIELD_TYPE = "unsupported field type"


class TypedAccessError(Exception):
    """Base class for all errors raised by typed_access."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        super().__init__(message or kind.value)


class PathSyntaxError(TypedAccessError, ValueError):
    """A path string could not be tokenized."""

    def __init__(self, kind: ErrorKind, path: str, position: int | None = None) -> None:
        self.path = path
        self.position = position
        super().__init__(kind)


class PathResolutionError(TypedAccessError, LookupError):
    """A tokenized path does not fit the shape of the object graph."""

    def __init__(self, kind: ErrorKind, element: str | None = None, message: str | None = None) -> None:
        self.element = element
        super().__init__(kind, message)


class PathTooLongError(PathResolutionError):
    def __init__(self, element: str | None = None) -> None:
        super().__init__(ErrorKind.PATH_TOO_LONG, element)


class PathNotFoundError(PathResolutionError):
    def __init__(self, element: str | None = None) -> None:
        super().__init__(ErrorKind.NOT_FOUND, element)


class UnsupportedKeyTypeError(PathResolutionError):
    def __init__(self, key_type: Any, element: str | None = None) -> None:
        self.key_type = key_type
        name = getattr(key_type, "__name__", repr(key_type))
        super().__init__(ErrorKind.UNSUPPORTED_KEY_TYPE, element, f"unsupported key type: {name}")


class ValueNotAccessibleError(PathResolutionError):
    def __init__(self, value_type: type) -> None:
        self.value_type = value_type
        super().__init__(
            ErrorKind.NOT_ACCESSIBLE,
            message=f"value not accessible: {value_type.__name__} cannot be copied",
        )


class PathTypeError(PathResolutionError, TypeError):
    """The resolved value does not have the type a typed getter promises."""

    def __init__(self, expected: str, actual: Any) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(ErrorKind.WRONG_TYPE, message=f"object is not a {expected}")


class DescriptorError(TypedAccessError, ValueError):
    """A default descriptor could not be turned into a value."""

    def __init__(
        self,
        kind: ErrorKind,
        descriptor: str | None = None,
        target: Any = None,
        message: str | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.target = target
        super().__init__(kind, message)


class DescriptorSyntaxError(DescriptorError):
    def __init__(self, descriptor: str | None = None, target: Any = None) -> None:
        super().__init__(ErrorKind.INVALID_SYNTAX, descriptor, target)


class UnsupportedFieldTypeError(DescriptorError):
    def __init__(self, target: Any, descriptor: str | None = None) -> None:
        name = getattr(target, "__name__", repr(target))
        super().__init__(
            ErrorKind.UNSUPPORTED_FIELD_TYPE, descriptor, target, f"unsupported field type: {name}"
        )


class DefaultTagError(DescriptorError):
    """A descriptor error annotated with the field that carried the descriptor."""

    def __init__(self, field_name: str, error: DescriptorError) -> None:
        self.field_name = field_name
        super().__init__(
            error.kind,
            error.descriptor,
            error.target,
            f"failed to parse default tag for field {field_name}: {error}",
        )
