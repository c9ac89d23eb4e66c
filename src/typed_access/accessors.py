"""Typed getters on top of ``get_path``.

Each getter raises PathNotFoundError when the path resolves to nothing and
PathTypeError when the resolved value has another type.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, TypeVar

from typed_access.errors import PathNotFoundError, PathTypeError
from typed_access.resolver import get_path

T = TypeVar("T")


def _typed_getter(expected: type[T], name: str) -> Callable[..., T]:
    def getter(obj: Any, path: str, *, ignore_case: bool = False) -> T:
        value = get_path(obj, path, ignore_case=ignore_case)
        if value is None:
            raise PathNotFoundError(path)
        # bool is an int subclass but never a valid int result
        if isinstance(value, bool) and expected is not bool:
            raise PathTypeError(name, value)
        if not isinstance(value, expected):
            raise PathTypeError(name, value)
        return value

    getter.__name__ = f"get_path_{name}"
    getter.__doc__ = f"Return the {name} addressed by ``path`` inside ``obj``."
    return getter


get_path_str = _typed_getter(str, "str")
get_path_bool = _typed_getter(bool, "bool")
get_path_int = _typed_getter(int, "int")
get_path_float = _typed_getter(float, "float")
get_path_complex = _typed_getter(complex, "complex")
get_path_bytes = _typed_getter(bytes, "bytes")
get_path_datetime = _typed_getter(datetime, "datetime")
get_path_timedelta = _typed_getter(timedelta, "timedelta")
