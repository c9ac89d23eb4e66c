"""Lexer for the path language.

A path is a sequence of elements separated by ``.``, ``/`` or ``\\``::

    address.city
    $..hobbies["Motor.cycles"]
    addresses[0]/zip

An element may be written inside ``[...]`` and may be wrapped in ``"..."``
to admit separators and spaces; inside quotes ``\\`` escapes one of
``. \\ / [ ] "``.
"""

from __future__ import annotations

import logging

import ply.lex as lex

from typed_access.errors import ErrorKind, PathSyntaxError

logger = logging.getLogger(__name__)

# Characters a backslash may escape inside quotes
ESCAPABLE = frozenset('.\\/[]"')

# Leading JSONPath-style root markers, stripped in this order
ROOT_PREFIXES = ("$..", "$.")


class PathLexer:
    """Lexer for tokenizing paths into ELEMENT tokens.

    Characters accumulate in a buffer shared by all states; separators and
    brackets flush the buffer as one element.
    """

    states = (
        ("bracket", "exclusive"),
        ("quoted", "exclusive"),
    )

    tokens = [
        "ELEMENT",
        "SEPARATOR",
        "LBRACKET",
        "RBRACKET",
        "QUOTE",
        "ESCAPE",
        "CHARS",
    ]

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore
        self.path = ""
        self._buffer: list[str] = []

    # --- Helpers ---

    def _fail(self, kind: ErrorKind, t: lex.LexToken) -> None:
        raise PathSyntaxError(kind, self.path, t.lexpos)

    def _flush(self, t: lex.LexToken) -> lex.LexToken | None:
        """Turn the buffer into an ELEMENT token, or None when it is empty."""
        if not self._buffer:
            return None
        t.type = "ELEMENT"
        t.value = "".join(self._buffer)
        self._buffer = []
        return t

    def _reject(self, t: lex.LexToken) -> None:
        c = t.value[0]
        if c < " ":
            self._fail(ErrorKind.CONTROL_CHARACTER, t)
        self._fail(ErrorKind.SPACE_IN_ELEMENT, t)

    # --- INITIAL state ---

    def t_SEPARATOR(self, t: lex.LexToken) -> lex.LexToken | None:
        r"[./\\]"
        return self._flush(t)

    def t_LBRACKET(self, t: lex.LexToken) -> lex.LexToken | None:
        r"\["
        t.lexer.push_state("bracket")
        return self._flush(t)

    def t_RBRACKET(self, t: lex.LexToken) -> None:
        r"\]"
        self._fail(ErrorKind.UNMATCHED_CLOSE_BRACKET, t)

    def t_QUOTE(self, t: lex.LexToken) -> None:
        r'"'
        t.lexer.push_state("quoted")

    def t_CHARS(self, t: lex.LexToken) -> None:
        r'[^./\\\[\]"\x00-\x1f\s]+'
        self._buffer.append(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        self._reject(t)

    # --- Exclusive bracket state ---

    def t_bracket_SEPARATOR(self, t: lex.LexToken) -> None:
        r"[./\\]"
        self._fail(ErrorKind.BRACKETS_OPEN, t)

    def t_bracket_LBRACKET(self, t: lex.LexToken) -> None:
        r"\["
        self._fail(ErrorKind.NESTED_BRACKETS, t)

    def t_bracket_RBRACKET(self, t: lex.LexToken) -> lex.LexToken | None:
        r"\]"
        t.lexer.pop_state()
        return self._flush(t)

    def t_bracket_QUOTE(self, t: lex.LexToken) -> None:
        r'"'
        t.lexer.push_state("quoted")

    def t_bracket_CHARS(self, t: lex.LexToken) -> None:
        r'[^./\\\[\]"\x00-\x1f\s]+'
        self._buffer.append(t.value)

    def t_bracket_error(self, t: lex.LexToken) -> None:
        self._reject(t)

    # --- Exclusive quoted state ---

    def t_quoted_QUOTE(self, t: lex.LexToken) -> None:
        r'"'
        t.lexer.pop_state()

    def t_quoted_ESCAPE(self, t: lex.LexToken) -> None:
        r"\\[\s\S]?"
        if len(t.value) == 1:
            self._fail(ErrorKind.ESCAPE_INCOMPLETE, t)
        if t.value[1] not in ESCAPABLE:
            self._fail(ErrorKind.UNKNOWN_ESCAPE, t)
        self._buffer.append(t.value[1])

    def t_quoted_CHARS(self, t: lex.LexToken) -> None:
        r'[^"\\\x00-\x1f]+'
        self._buffer.append(t.value)

    def t_quoted_error(self, t: lex.LexToken) -> None:
        self._fail(ErrorKind.CONTROL_CHARACTER, t)

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize and reset all modes."""
        self.path = data
        self._buffer = []
        self.lexer.lexstatestack = []
        self.lexer.begin("INITIAL")
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all ELEMENT tokens.

        Raises PathSyntaxError if the input ends inside quotes or brackets.
        """
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)

        state = self.lexer.current_state()
        if state == "quoted":
            raise PathSyntaxError(ErrorKind.QUOTES_OPEN, self.path, len(data))
        if state == "bracket":
            raise PathSyntaxError(ErrorKind.BRACKETS_OPEN, self.path, len(data))

        if self._buffer:
            tok = lex.LexToken()
            tok.type = "ELEMENT"
            tok.value = "".join(self._buffer)
            tok.lineno = self.lexer.lineno
            tok.lexpos = len(data)
            self._buffer = []
            tokens.append(tok)
        return tokens


def strip_root(path: str) -> str:
    """Remove surrounding whitespace, then a leading ``$..`` and a leading ``$.`` in turn."""
    path = path.strip()
    for prefix in ROOT_PREFIXES:
        if path.startswith(prefix):
            path = path[len(prefix):]
    return path


def parse_path(path: str) -> tuple[str, ...]:
    """Split a path string into its elements.

    An empty or all-whitespace path yields no elements. The first syntax
    error raises PathSyntaxError.
    """
    body = strip_root(path)
    if not body.strip():
        return ()

    lexer = PathLexer()
    lexer.build()
    elements = tuple(tok.value for tok in lexer.tokenize(body) if tok.value)
    logger.debug("Tokenized path %r into %r", path, elements)
    return elements
