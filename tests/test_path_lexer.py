"""Tests for the path lexer."""

import pytest

from typed_access.errors import ErrorKind, PathSyntaxError
from typed_access.parsing import PathLexer, parse_path, strip_root


class TestPathLexer:
    """Tests for tokenizing paths."""

    def test_tokenize_dotted(self):
        """Test that every token of a dotted path is an element."""
        lexer = PathLexer()
        lexer.build()

        tokens = lexer.tokenize("a.b.c")

        assert [t.type for t in tokens] == ["ELEMENT", "ELEMENT", "ELEMENT"]
        assert [t.value for t in tokens] == ["a", "b", "c"]

    def test_lexer_is_reusable(self):
        """Test that input() resets modes left over from a failed run."""
        lexer = PathLexer()
        lexer.build()

        with pytest.raises(PathSyntaxError):
            lexer.tokenize('["open')

        assert [t.value for t in lexer.tokenize("x.y")] == ["x", "y"]


class TestParsePath:
    """Tests for parse_path."""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("a.b.c", ("a", "b", "c")),
            ("$..foo.bar", ("foo", "bar")),
            ("$.baz[0].qux", ("baz", "0", "qux")),
            ("baz[0].qux", ("baz", "0", "qux")),
            ("baz/0/v/qux", ("baz", "0", "v", "qux")),
            ("baz\\0\\qux", ("baz", "0", "qux")),
            ("a..b", ("a", "b")),
            ("[0][1]", ("0", "1")),
            ("a[]", ("a",)),
            ("  address.city  ", ("address", "city")),
            ("$..$.foo", ("foo",)),
        ],
    )
    def test_elements(self, path, expected):
        assert parse_path(path) == expected

    @pytest.mark.parametrize("path", ["", "   ", "$.", "$..", "$.. "])
    def test_empty_paths(self, path):
        assert parse_path(path) == ()

    def test_quoted_element_keeps_separators(self):
        assert parse_path('hobbies."Motor.cycle/x"') == ("hobbies", "Motor.cycle/x")

    def test_quoted_element_keeps_spaces(self):
        assert parse_path('map["New York"]') == ("map", "New York")

    def test_quotes_join_surrounding_text(self):
        assert parse_path('a"b.c"d') == ("ab.cd",)

    def test_escapes_inside_quotes(self):
        assert parse_path(r'"a\.b\\c\"d"') == ('a.b\\c"d',)
        assert parse_path(r'x["\[0\]"]') == ("x", "[0]")

    def test_non_ascii_elements(self):
        assert parse_path("address.straße") == ("address", "straße")


class TestParsePathErrors:
    """Tests for malformed paths."""

    @pytest.mark.parametrize(
        "path, kind",
        [
            ("$..[[0].foo", ErrorKind.NESTED_BRACKETS),
            ("$..0].foo", ErrorKind.UNMATCHED_CLOSE_BRACKET),
            ('address["\\nstreet"]', ErrorKind.UNKNOWN_ESCAPE),
            ('"foo\\', ErrorKind.ESCAPE_INCOMPLETE),
            ('"foo', ErrorKind.QUOTES_OPEN),
            ('["foo', ErrorKind.QUOTES_OPEN),
            ("foo[0", ErrorKind.BRACKETS_OPEN),
            ("foo[a.b]", ErrorKind.BRACKETS_OPEN),
            ("foo[a/b]", ErrorKind.BRACKETS_OPEN),
            ("foo\x01bar", ErrorKind.CONTROL_CHARACTER),
            ("foo\tbar", ErrorKind.CONTROL_CHARACTER),
            ('"foo\nbar"', ErrorKind.CONTROL_CHARACTER),
            ("foo bar", ErrorKind.SPACE_IN_ELEMENT),
            ("foo[a b]", ErrorKind.SPACE_IN_ELEMENT),
            ("foo\u00a0bar", ErrorKind.SPACE_IN_ELEMENT),
        ],
    )
    def test_error_kinds(self, path, kind):
        with pytest.raises(PathSyntaxError) as exc_info:
            parse_path(path)
        assert exc_info.value.kind is kind
        assert str(exc_info.value) == kind.value

    def test_error_carries_position(self):
        with pytest.raises(PathSyntaxError) as exc_info:
            parse_path("ab]")
        assert exc_info.value.position == 2
        assert exc_info.value.path == "ab]"

    def test_first_error_wins(self):
        with pytest.raises(PathSyntaxError) as exc_info:
            parse_path("a b]")
        assert exc_info.value.kind is ErrorKind.SPACE_IN_ELEMENT

    def test_syntax_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_path("a]")


class TestStripRoot:
    def test_prefixes(self):
        assert strip_root("$..a") == "a"
        assert strip_root("$.a") == "a"
        assert strip_root(" $.a ") == "a"
        assert strip_root("a.$") == "a.$"
        assert strip_root("$..$.a") == "a"
        assert strip_root("$.$..a") == "$..a"
