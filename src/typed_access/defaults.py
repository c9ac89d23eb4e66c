"""Fill default values into object graphs.

Every record field declared with ``tagged(...)`` gets its descriptor parsed
against the field's annotation and written into the field, whatever value it
held before. Records, sequences and maps are walked recursively.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from typed_access.default_parser import parse_default
from typed_access.errors import DefaultTagError, DescriptorError
from typed_access.introspection import FieldRef, field_tags, field_types, record_fields
from typed_access.types import Kind, kind_of, kind_of_type, unwrap_optional

logger = logging.getLogger(__name__)


def set_defaults(obj: Any) -> None:
    """Fill defaults into a record, sequence or map in place.

    Anything else, including None, is left alone. The first failure raises
    DefaultTagError naming the field; fields already written stay written.
    """
    if obj is None:
        return
    kind = kind_of(obj)
    if kind is Kind.RECORD:
        _fill_record(obj)
    elif kind is Kind.SEQUENCE:
        _fill_sequence(obj)
    elif kind is Kind.MAP:
        _fill_map(obj)


def _fill_record(record: Any) -> None:
    hints = field_types(type(record))
    for f in record_fields(record):
        descriptor, layout = field_tags(f)
        ref = FieldRef(record, f.name)
        try:
            value = ref.get()
        except AttributeError:
            # never assigned; filled below when it carries a descriptor
            value = None

        hint = hints[f.name]
        if isinstance(hint, str):
            hint = type(value) if value is not None else None
        hint, _ = unwrap_optional(hint)
        kind = kind_of(value) if value is not None else kind_of_type(hint)

        if kind is Kind.RECORD:
            set_defaults(value)
        elif descriptor:
            try:
                default = parse_default(descriptor, layout, hint)
            except DescriptorError as e:
                raise DefaultTagError(f.name, e) from e
            ref.set(default)
            logger.debug("Set default of %s.%s from %r", type(record).__name__, f.name, descriptor)
        elif kind in (Kind.SEQUENCE, Kind.MAP):
            set_defaults(value)


def _fill_sequence(seq: Any) -> None:
    for item in seq:
        if item is not None and kind_of(item) is not Kind.SCALAR:
            set_defaults(item)


def _fill_map(mapping: Any) -> None:
    writable = isinstance(mapping, MutableMapping)
    for key in list(mapping):
        ref = FieldRef(mapping, key)
        item = ref.get()
        if item is None or kind_of(item) is Kind.SCALAR:
            continue
        set_defaults(item)
        if writable:
            ref.set(item)
