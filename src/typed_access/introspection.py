"""Privileged field access for records.

Reads and writes go through ``object.__getattribute__`` and
``object.__setattr__`` so that underscore-named fields, frozen dataclasses and
classes overriding attribute hooks are all reachable the same way.
"""

from __future__ import annotations

import dataclasses
import sys
import typing
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

# Metadata keys carrying a field's default descriptor and timestamp layout
DEFAULT_KEY = "default"
LAYOUT_KEY = "layout"


def tagged(descriptor: str, *, layout: str = "", **kwargs: Any) -> Any:
    """Declare a dataclass field that carries a default descriptor.

    Remaining keyword arguments go to ``dataclasses.field``, e.g.::

        @dataclass
        class Address:
            city: str = tagged("Berlin", default="")
            born: datetime | None = tagged("04.09.1990", layout="%d.%m.%Y", default=None)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[DEFAULT_KEY] = descriptor
    if layout:
        metadata[LAYOUT_KEY] = layout
    return dataclasses.field(metadata=metadata, **kwargs)


def field_tags(f: dataclasses.Field) -> tuple[str, str]:
    """Return ``(descriptor, layout)`` of a field; empty strings when absent."""
    return f.metadata.get(DEFAULT_KEY, ""), f.metadata.get(LAYOUT_KEY, "")


@lru_cache(maxsize=None)
def field_types(cls: type) -> dict[str, Any]:
    """Return the resolved annotation of every field of a record class.

    String annotations are evaluated with ``typing.get_type_hints``. When some
    forward reference cannot be resolved, each annotation is evaluated on its
    own; only the ones that still fail stay strings, and callers fall back to
    the runtime type of the field's value for those.
    """
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        hints = _hints_per_field(cls)
    return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}


def _hints_per_field(cls: type) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for name, annotation in klass.__dict__.get("__annotations__", {}).items():
            if isinstance(annotation, str):
                try:
                    annotation = eval(annotation, globalns, localns)
                except (NameError, AttributeError, TypeError, SyntaxError):
                    pass
            hints[name] = annotation
    return hints


def record_fields(record: Any) -> tuple[dataclasses.Field, ...]:
    """Return the fields of a record instance, inherited ones included."""
    return dataclasses.fields(record)


def find_field(record: Any, name: str, ignore_case: bool = False) -> dataclasses.Field | None:
    """Find a field by its exact name, optionally falling back to a case-insensitive match."""
    fields = record_fields(record)
    for f in fields:
        if f.name == name:
            return f
    if ignore_case:
        folded = name.casefold()
        for f in fields:
            if f.name.casefold() == folded:
                return f
    return None


def get_field(record: Any, name: str) -> Any:
    """Read a field regardless of visibility or attribute hooks."""
    return object.__getattribute__(record, name)


def set_field(record: Any, name: str, value: Any) -> None:
    """Write a field regardless of visibility, frozenness or attribute hooks."""
    object.__setattr__(record, name, value)


@dataclass
class FieldRef:
    """Addressable reference to one storage slot of a composite.

    ``container`` is a record (``key`` is the field name), a sequence
    (``key`` is the index) or a mapping (``key`` is the map key).
    """

    container: Any
    key: Any

    def get(self) -> Any:
        if isinstance(self.container, (Mapping, Sequence)):
            return self.container[self.key]
        return get_field(self.container, self.key)

    def set(self, value: Any) -> None:
        if isinstance(self.container, (MutableMapping, MutableSequence)):
            self.container[self.key] = value
        else:
            set_field(self.container, self.key, value)

