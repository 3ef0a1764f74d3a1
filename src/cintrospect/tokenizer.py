"""tokenizer.py – Pull-based lexer for C struct declarations.

Wraps any iterable of text lines (an open file, ``io.StringIO``, a list of
strings) and produces :class:`~cintrospect.tokens.Token` values on demand,
skipping whitespace, ``//`` line comments and ``/* ... */`` block comments.
Lines are only read when the cursor runs off the end of the current one.

Tokens can be pushed back for lookahead::

    tok = tokenizer.next_token()
    nxt = tokenizer.next_token()
    tokenizer.push_back(nxt, tok)   # tok is produced again first
"""

from collections.abc import Iterable, Iterator

from cintrospect.tokens import PUNCTUATION, Token, TokenKind, classify_word


def _is_word_char(c: str) -> bool:
    return c.isalnum() or c == "_"


class Tokenizer:
    """Token stream over a line source.

    The tokenizer owns *source*: :meth:`close` (or leaving a ``with`` block)
    closes it when it has a ``close()`` method.  Running out of lines, or the
    source failing to read, ends the stream; :meth:`next_token` never raises.
    """

    def __init__(self, source: Iterable[str]) -> None:
        self._source = source
        self._lines: Iterator[str] | None = None
        self._line = ""
        self._pos = 0
        self._lineno = 0
        self._exhausted = False
        self._pushed: list[Token] = []

    # -- line handling --

    def _read_next_line(self) -> bool:
        """Load the next line into the buffer; False once the source is done."""
        if self._exhausted:
            return False
        try:
            if self._lines is None:
                self._lines = iter(self._source)
            line = next(self._lines)
        except (StopIteration, OSError, ValueError):
            self._exhausted = True
            self._line = ""
            self._pos = 0
            return False
        self._line = line
        self._pos = 0
        self._lineno += 1
        return True

    def _at_line_end(self) -> bool:
        return self._pos >= len(self._line)

    # -- skipping --

    def _skip_whitespace(self) -> None:
        """Advance past whitespace, crossing line boundaries as needed."""
        while not self._exhausted:
            line = self._line
            while self._pos < len(line) and line[self._pos].isspace():
                self._pos += 1
            if not self._at_line_end():
                return
            self._read_next_line()

    def _skip_comment(self) -> bool:
        """Skip one comment at the cursor.  Returns True if anything was skipped."""
        if self._line.startswith("//", self._pos):
            self._read_next_line()
            return True
        if not self._line.startswith("/*", self._pos):
            return False

        self._pos += 2
        prev = ""
        while True:
            if self._at_line_end():
                if not self._read_next_line():
                    return True  # unterminated comment runs to end of input
                prev = ""
                continue
            c = self._line[self._pos]
            self._pos += 1
            if prev == "*" and c == "/":
                return True
            prev = c

    def _skip_blanks(self) -> bool:
        """Skip whitespace and comments until a token starts.  False at end of input."""
        while not self._exhausted:
            self._skip_whitespace()
            if self._exhausted:
                break
            if not self._skip_comment():
                return True
        return False

    # -- public API --

    def next_token(self) -> Token | None:
        """Return the next token, or ``None`` once the stream has ended."""
        if self._pushed:
            return self._pushed.pop()

        if not self._skip_blanks():
            return None

        line = self._line
        start = self._pos
        c = line[start]

        kind = PUNCTUATION.get(c)
        if kind is not None:
            self._pos += 1
            return Token(kind, c, self._lineno)

        end = start
        while end < len(line) and _is_word_char(line[end]):
            end += 1
        if end == start:
            self._pos += 1
            return Token(TokenKind.PUNCT, c, self._lineno)

        self._pos = end
        return classify_word(line[start:end], self._lineno)

    def push_back(self, *tokens: Token) -> None:
        """Return *tokens* to the stream.

        Tokens are pushed in argument order, so the last one is produced first.
        Pass them in reverse order of desired re-consumption.
        """
        self._pushed.extend(tokens)

    @property
    def lineno(self) -> int:
        """Number of the line currently under the cursor (1-indexed)."""
        return self._lineno

    def close(self) -> None:
        """Release the underlying source and end the stream."""
        self._exhausted = True
        self._pushed.clear()
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next_token()
        if tok is None:
            raise StopIteration
        return tok

    def __enter__(self) -> "Tokenizer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
