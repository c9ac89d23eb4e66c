"""Tests for parsing default descriptors into typed values."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from typed_access import (
    DescriptorSyntaxError,
    ErrorKind,
    UnsupportedFieldTypeError,
    complex64,
    float32,
    int8,
    int32,
    parse_default,
    uint8,
    uint64,
)
from typed_access.default_parser import parse_scalar
from typed_access.literals import round_float32
from typed_access.types import PrimitiveType


@dataclass
class Color:
    name: str = ""


class TestScalars:
    """Tests for string, bool and numeric descriptors."""

    def test_string(self):
        assert parse_default("John", "", str) == "John"
        assert parse_default("", "", str) == ""

    @pytest.mark.parametrize("text, expected", [("true", True), ("T", True), ("0", False), ("FALSE", False)])
    def test_bool(self, text, expected):
        assert parse_default(text, "", bool) is expected

    def test_integers(self):
        assert parse_default("30", "", int) == 30
        assert parse_default("-128", "", int8) == -128
        assert parse_default("4294967295", "", uint64) == 4294967295
        assert parse_default("-2147483648", "", int32) == -(2**31)

    def test_integer_out_of_width(self):
        with pytest.raises(DescriptorSyntaxError) as exc_info:
            parse_default("1000", "", int8)
        assert str(exc_info.value) == "invalid syntax"
        assert exc_info.value.descriptor == "1000"
        assert exc_info.value.target is int8

    def test_floats(self):
        assert parse_default("64.05", "", float) == 64.05
        assert parse_default("32.05", "", float32) == round_float32(32.05)

    def test_complex(self):
        assert parse_default("3.5+2.7i", "", complex) == complex(3.5, 2.7)
        value = parse_default("3.5+2.7i", "", complex64)
        assert value == complex(3.5, round_float32(2.7))
        assert value != complex(3.5, 2.7)

    def test_parse_scalar(self):
        assert parse_scalar("12", PrimitiveType.UINT8) == 12
        assert parse_scalar("x", PrimitiveType.STRING) == "x"
        with pytest.raises(DescriptorSyntaxError):
            parse_scalar("1e39+0i", PrimitiveType.COMPLEX64)

    @pytest.mark.parametrize(
        "text, target",
        [("error", bool), ("3.5", int), ("abc", float), ("256", uint8), ("3.5", complex)],
    )
    def test_invalid(self, text, target):
        with pytest.raises(DescriptorSyntaxError) as exc_info:
            parse_default(text, "", target)
        assert exc_info.value.kind is ErrorKind.INVALID_SYNTAX


class TestSpecialTypes:
    """Tests for timestamps, durations and byte strings."""

    def test_timestamp_with_custom_layout(self):
        value = parse_default("04.09.1990", "%d.%m.%Y", datetime)
        assert value == datetime(1990, 9, 4, tzinfo=timezone.utc)

    def test_timestamp_default_layout(self):
        value = parse_default("1990-09-04T10:00:00Z", "", datetime)
        assert value == datetime(1990, 9, 4, 10, tzinfo=timezone.utc)

    def test_duration(self):
        assert parse_default("2h30m", "", timedelta) == timedelta(hours=2, minutes=30)

    def test_bytes(self):
        assert parse_default("Hello", "", bytes) == b"Hello"
        value = parse_default("straße", "", bytearray)
        assert isinstance(value, bytearray)
        assert value == "straße".encode("utf-8")


class TestOptionalTargets:
    def test_optional_is_parsed_as_inner_type(self):
        assert parse_default("5", "", Optional[int8]) == 5
        assert parse_default("2h", "", timedelta | None) == timedelta(hours=2)


class TestContainers:
    """Tests for JSON literal descriptors."""

    def test_list(self):
        assert parse_default('["a","b"]', "", list[str]) == ["a", "b"]
        assert parse_default("[1, 2]", "", Optional[list[int8]]) == [1, 2]

    def test_tuple(self):
        assert parse_default('["a", 1]', "", tuple[str, int]) == ("a", 1)
        assert parse_default("[1, 2, 3]", "", tuple[int, ...]) == (1, 2, 3)

    @pytest.mark.parametrize("descriptor", ["[1, 2, 3]", "[1]", "[]"])
    def test_fixed_tuple_length(self, descriptor):
        with pytest.raises(DescriptorSyntaxError):
            parse_default(descriptor, "", tuple[int, int])

    def test_dict(self):
        assert parse_default('{"a": 5,"b": 6}', "", dict[str, int]) == {"a": 5, "b": 6}
        assert parse_default('{"1": true}', "", dict[int, bool]) == {1: True}

    def test_nested_elements_are_parsed_as_descriptors(self):
        value = parse_default('{"x": ["1h", "30m"]}', "", dict[str, list[timedelta]])
        assert value == {"x": [timedelta(hours=1), timedelta(minutes=30)]}

    def test_element_out_of_width(self):
        with pytest.raises(DescriptorSyntaxError):
            parse_default("[1, 300]", "", list[uint8])

    def test_malformed_json(self):
        with pytest.raises(DescriptorSyntaxError):
            parse_default('{"a": 5},"b": 6}}', "", dict[str, int])

    def test_wrong_json_shape(self):
        with pytest.raises(DescriptorSyntaxError):
            parse_default('{"a": 1}', "", list[int])
        with pytest.raises(DescriptorSyntaxError):
            parse_default("[1]", "", dict[str, int])

    def test_null_element(self):
        assert parse_default("[null, 1]", "", list[Optional[int]]) == [None, 1]
        with pytest.raises(DescriptorSyntaxError):
            parse_default("[null]", "", list[int])


class TestUnsupported:
    @pytest.mark.parametrize(
        "descriptor, target", [("x", Color), ("x", None), ("x", "Color"), ("[{}]", list[Color])]
    )
    def test_unsupported_types(self, descriptor, target):
        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            parse_default(descriptor, "", target)
        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_FIELD_TYPE

    def test_message_names_type(self):
        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            parse_default("x", "", Color)
        assert str(exc_info.value) == "unsupported field type: Color"
