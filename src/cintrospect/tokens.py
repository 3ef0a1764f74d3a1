"""tokens.py – Lexical token model for the C struct scanner.

A :class:`Token` is a transient value produced by
:class:`cintrospect.tokenizer.Tokenizer` and consumed (or pushed back) by the
struct parser.  Tokens compare by kind and text only; the line number is
carried for diagnostics.
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenKind(Enum):
    """Token kinds recognised by the tokenizer."""

    # Punctuation
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    SEMICOLON = auto()  # ;
    STAR = auto()  # *

    # Keywords
    INT = auto()
    LONG = auto()
    STRUCT = auto()
    TYPEDEF = auto()
    CLASS = auto()

    # Word spans
    IDENTIFIER = auto()
    NUMBER = auto()  # word span starting with a digit

    # Any other single character
    PUNCT = auto()


PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# Matched case-sensitively against the whole word span.
KEYWORDS: dict[str, TokenKind] = {
    "struct": TokenKind.STRUCT,
    "typedef": TokenKind.TYPEDEF,
    "class": TokenKind.CLASS,
    "int": TokenKind.INT,
    "long": TokenKind.LONG,
}

# Tokens accepted as the type of a field declaration.
TYPE_KINDS = frozenset({TokenKind.INT, TokenKind.LONG, TokenKind.IDENTIFIER})


@dataclass(frozen=True)
class Token:
    """One lexical unit.

    Attributes:
        kind: The token kind
        text: Literal source text of the token
        lineno: Line the token started on (1-indexed, 0 if unknown)
    """

    kind: TokenKind
    text: str
    lineno: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, line={self.lineno})"


def classify_word(word: str, lineno: int = 0) -> Token:
    """Build the token for an alphanumeric/underscore span."""
    kind = KEYWORDS.get(word)
    if kind is None:
        kind = TokenKind.NUMBER if word[0].isdigit() else TokenKind.IDENTIFIER
    return Token(kind, word, lineno)


def token_value(tok: Token) -> str:
    """Return the literal text of *tok*."""
    return tok.text
