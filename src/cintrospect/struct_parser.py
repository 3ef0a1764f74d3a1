"""struct_parser.py – Extract struct/typedef definitions from C source.

Recursive-descent parser over :class:`~cintrospect.tokenizer.Tokenizer` that
recognises two constructs::

    struct Name { type field; type *ptr; ... };
    typedef struct [Tag] { type field; ... } Name;

Everything else in the file is skipped.  Results are produced lazily by
:class:`StructIter`, one :class:`~cintrospect.structures.CStruct` per
recognised construct, in file order.

Type names are accepted verbatim: any identifier is a valid field type and no
symbol table of known types is kept.  Nested structs, arrays, bit-fields and
function pointers end the field list, which makes the enclosing struct fail
to parse; it is skipped and scanning resumes after the point of failure.
"""

import io
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

from rich.markup import escape

from cintrospect.diagnostics import (
    MALFORMED_STRUCT,
    MALFORMED_TYPEDEF,
    SOURCE_UNAVAILABLE,
    ParseReport,
    err_console,
)
from cintrospect.structures import CDeclaration, CStruct
from cintrospect.tokenizer import Tokenizer
from cintrospect.tokens import TYPE_KINDS, Token, TokenKind


class StructSyntaxError(Exception):
    """A ``struct``/``typedef`` construct did not complete.

    Raised by :func:`parse_struct` and :func:`parse_typedef_struct`;
    :class:`StructIter` catches it and keeps scanning.
    """

    def __init__(self, message: str, lineno: int = 0):
        self.message = message
        self.lineno = lineno
        super().__init__(f"line {lineno}: {message}" if lineno > 0 else message)


def _describe(tok: Token | None) -> str:
    return "end of input" if tok is None else repr(tok.text)


def _expect(tokenizer: Tokenizer, kind: TokenKind, what: str) -> Token:
    """Pull one token and require it to be of *kind*."""
    tok = tokenizer.next_token()
    if tok is None or tok.kind is not kind:
        lineno = tok.lineno if tok is not None else tokenizer.lineno
        raise StructSyntaxError(f"expected {what}, got {_describe(tok)}", lineno)
    return tok


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------


def parse_declaration(tokenizer: Tokenizer) -> CDeclaration | None:
    """Parse one ``type name;`` or ``type *name;`` field.

    Returns ``None`` when the tokens at the cursor are not a field
    declaration.  In that case every token read is pushed back, so the
    stream is left exactly where it was.
    """
    type_tok = tokenizer.next_token()
    if type_tok is None:
        return None
    if type_tok.kind not in TYPE_KINDS:
        tokenizer.push_back(type_tok)
        return None

    consumed = [type_tok]
    typename = type_tok.text

    candidate = tokenizer.next_token()
    if candidate is not None and candidate.kind is TokenKind.STAR:
        consumed.append(candidate)
        typename += "*"
        candidate = tokenizer.next_token()

    if candidate is not None:
        consumed.append(candidate)
        if candidate.kind is TokenKind.IDENTIFIER:
            semi = tokenizer.next_token()
            if semi is not None and semi.kind is TokenKind.SEMICOLON:
                return CDeclaration(typename=typename, name=candidate.text)
            if semi is not None:
                consumed.append(semi)

    tokenizer.push_back(*reversed(consumed))
    return None


def _parse_fields(tokenizer: Tokenizer) -> tuple[CDeclaration, ...]:
    fields: list[CDeclaration] = []
    while True:
        decl = parse_declaration(tokenizer)
        if decl is None:
            return tuple(fields)
        fields.append(decl)


def parse_struct(tokenizer: Tokenizer) -> CStruct:
    """Parse ``Name { fields } ;`` following an already consumed ``struct``."""
    name = _expect(tokenizer, TokenKind.IDENTIFIER, "struct name")
    _expect(tokenizer, TokenKind.LBRACE, "'{'")
    fields = _parse_fields(tokenizer)
    _expect(tokenizer, TokenKind.RBRACE, "'}' or field declaration")
    _expect(tokenizer, TokenKind.SEMICOLON, "';' after struct body")
    return CStruct(name=name.text, fields=fields)


def parse_typedef_struct(tokenizer: Tokenizer) -> CStruct:
    """Parse ``struct [Tag] { fields } Name ;`` following a consumed ``typedef``.

    The optional tag is discarded; the struct takes the typedef name.
    """
    _expect(tokenizer, TokenKind.STRUCT, "'struct' after 'typedef'")
    tag = tokenizer.next_token()
    if tag is not None and tag.kind is not TokenKind.IDENTIFIER:
        tokenizer.push_back(tag)
    _expect(tokenizer, TokenKind.LBRACE, "'{'")
    fields = _parse_fields(tokenizer)
    _expect(tokenizer, TokenKind.RBRACE, "'}' or field declaration")
    name = _expect(tokenizer, TokenKind.IDENTIFIER, "typedef name")
    _expect(tokenizer, TokenKind.SEMICOLON, "';' after typedef")
    return CStruct(name=name.text, fields=fields)


# ---------------------------------------------------------------------------
# Struct stream
# ---------------------------------------------------------------------------


class StructIter:
    """Lazy, forward-only iterator of :class:`CStruct` over a token stream.

    Owns the tokenizer (and through it the source).  The iterator is finite
    and not restartable: once exhausted, or after :meth:`close`, it produces
    nothing.  A ``None`` tokenizer gives an iterator that is already finished.
    """

    def __init__(self, tokenizer: Tokenizer | None, report: ParseReport | None = None):
        self._tokenizer = tokenizer
        self.report = report

    def __iter__(self) -> Iterator[CStruct]:
        return self

    def __next__(self) -> CStruct:
        tokenizer = self._tokenizer
        if tokenizer is None:
            raise StopIteration

        while True:
            tok = tokenizer.next_token()
            if tok is None:
                self.close()
                raise StopIteration

            if tok.kind is TokenKind.STRUCT:
                parse, code = parse_struct, MALFORMED_STRUCT
            elif tok.kind is TokenKind.TYPEDEF:
                parse, code = parse_typedef_struct, MALFORMED_TYPEDEF
            else:
                continue

            try:
                return parse(tokenizer)
            except StructSyntaxError as exc:
                if self.report is not None:
                    self.report.warning(
                        exc.lineno, code, f"skipped '{tok.text}' at line {tok.lineno}: {exc.message}"
                    )

    @property
    def finished(self) -> bool:
        return self._tokenizer is None

    def close(self) -> None:
        """Release the source; the iterator produces nothing afterwards."""
        if self._tokenizer is not None:
            self._tokenizer.close()
            self._tokenizer = None

    def __enter__(self) -> "StructIter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def parse_c_file(
    filepath: str | Path,
    *,
    encoding: str = "utf-8",
    report: ParseReport | None = None,
) -> StructIter:
    """Open *filepath* and return an iterator over the structs it declares.

    A file that cannot be opened is reported on stderr (and in *report*) and
    yields an empty iterator instead of raising.
    """
    path = Path(filepath)
    if report is not None and report.filepath is None:
        report.filepath = path

    try:
        fh = open(path, encoding=encoding, errors="replace")
    except OSError as exc:
        msg = f"couldn't open '{path}': {exc.strerror or exc}"
        err_console.print(f"[yellow]{escape(msg)}[/yellow]", soft_wrap=True)
        if report is not None:
            report.error(0, SOURCE_UNAVAILABLE, msg)
        return StructIter(None, report)

    return StructIter(Tokenizer(fh), report)


def parse_c_text(text: str, *, report: ParseReport | None = None) -> StructIter:
    """Return an iterator over the structs declared in the string *text*."""
    return StructIter(Tokenizer(io.StringIO(text, newline=None)), report)
