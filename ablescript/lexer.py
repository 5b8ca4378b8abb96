"""
AbleScript - Lexer
Tokenizes AbleScript source code into a stream of spanned tokens.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional
from enum import Enum, auto

from .ast_nodes import Abool


class TokenType(Enum):
    # Literals
    BOOLEAN     = auto()   # true false
    INTEGER     = auto()
    STRING      = auto()   # "..."
    ABOOLEAN    = auto()   # always sometimes never
    IDENTIFIER  = auto()
    NUL         = auto()   # nul
    # Punctuation
    LOG_NOT     = auto()   # !
    LPAREN      = auto()   # (
    RPAREN      = auto()   # )
    COMMA       = auto()   # ,
    SEMICOLON   = auto()   # ;
    # Keywords
    PRINT       = auto()   # print
    ASSIGNMENT  = auto()   # =
    # Arithmetic
    ADDITION    = auto()   # +
    SUBTRACT    = auto()   # -
    MULTIPLY    = auto()   # *
    DIVIDE      = auto()   # /
    # Comparisons
    OP_LT       = auto()   # <
    OP_GT       = auto()   # >
    OP_EQ       = auto()   # ==
    OP_NEQ      = auto()   # !=
    # Logical
    LOG_AND     = auto()   # &&
    LOG_OR      = auto()   # ||


_KEYWORDS = {
    "print":     (TokenType.PRINT, None),
    "true":      (TokenType.BOOLEAN, True),
    "false":     (TokenType.BOOLEAN, False),
    "always":    (TokenType.ABOOLEAN, Abool.ALWAYS),
    "sometimes": (TokenType.ABOOLEAN, Abool.SOMETIMES),
    "never":     (TokenType.ABOOLEAN, Abool.NEVER),
    "nul":       (TokenType.NUL, None),
}


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) offset range into the source text."""
    start: int
    end: int

    def __repr__(self):
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any
    span: Span

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, span={self.span!r})"


class LexerError(Exception):
    def __init__(self, message: str, span: Span):
        super().__init__(f"[LexerError] {message} at {span!r}")
        self.message = message
        self.span = span


# Token specification: ordered list of (TokenType, regex) pairs
_TOKEN_SPEC = [
    (TokenType.OP_EQ,      r'=='),
    (TokenType.OP_NEQ,     r'!='),
    (TokenType.LOG_AND,    r'&&'),
    (TokenType.LOG_OR,     r'\|\|'),
    (TokenType.ASSIGNMENT, r'='),
    (TokenType.LOG_NOT,    r'!'),
    (TokenType.OP_LT,      r'<'),
    (TokenType.OP_GT,      r'>'),
    (TokenType.INTEGER,    r'\d+'),
    (TokenType.STRING,     r'"[^"]*"'),
    (TokenType.IDENTIFIER, r'[A-Za-z_][A-Za-z0-9_]*'),
    (TokenType.ADDITION,   r'\+'),
    (TokenType.SUBTRACT,   r'-'),
    (TokenType.MULTIPLY,   r'\*'),
    (TokenType.DIVIDE,     r'/'),
    (TokenType.LPAREN,     r'\('),
    (TokenType.RPAREN,     r'\)'),
    (TokenType.COMMA,      r','),
    (TokenType.SEMICOLON,  r';'),
]

_MASTER_RE = re.compile(
    r'(?:' + '|'.join(f'(?P<T{i}>{spec[1]})' for i, spec in enumerate(_TOKEN_SPEC)) + r')',
    re.ASCII
)

_WHITESPACE_RE = re.compile(r'\s+')
_COMMENT_RE    = re.compile(r'//[^\n]*')


def tokenize(source: str) -> List[Token]:
    """
    Convert AbleScript source string into a list of spanned Tokens.
    Raises LexerError on unrecognized characters or unterminated strings.
    """
    tokens: List[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        m = _WHITESPACE_RE.match(source, pos)
        if m:
            pos = m.end()
            continue

        m = _COMMENT_RE.match(source, pos)
        if m:
            pos = m.end()
            continue

        m = _MASTER_RE.match(source, pos)
        if not m:
            if source[pos] == '"':
                raise LexerError("Unterminated string literal", Span(pos, length))
            raise LexerError(f"Unexpected character: {source[pos]!r}", Span(pos, pos + 1))

        raw = m.group(0)
        tok_type = _TOKEN_SPEC[int(m.lastgroup[1:])][0]
        value: Any = None

        if tok_type == TokenType.IDENTIFIER:
            tok_type, value = _KEYWORDS.get(raw, (TokenType.IDENTIFIER, raw))
        elif tok_type == TokenType.INTEGER:
            value = int(raw)
        elif tok_type == TokenType.STRING:
            value = raw[1:-1]

        tokens.append(Token(tok_type, value, Span(pos, m.end())))
        pos = m.end()

    return tokens


class TokenStream:
    """
    Pull-based token source with a single token of lookahead.

    ``peek`` inspects the next token without consuming it, ``next`` consumes
    and returns it. Both return None once the stream is exhausted.
    """

    def __init__(self, tokens: List[Token], source_length: int = 0):
        self._tokens = tokens
        self._pos = 0
        if tokens:
            source_length = max(source_length, tokens[-1].span.end)
        self._end = source_length

    def peek(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def next(self) -> Optional[Token]:
        tok = self.peek()
        if tok is not None:
            self._pos += 1
        return tok

    def span(self) -> Span:
        """Span of the next unconsumed token, or an empty span at end of input."""
        tok = self.peek()
        if tok is not None:
            return tok.span
        return Span(self._end, self._end)
