"""
AbleScript - Parser
Converts a spanned token stream into statements and expressions.

Infix operators are folded strictly left to right with no precedence:
``a + b * c`` parses as ``(a + b) * c``.
"""

from enum import Enum
from typing import List, Optional, Union

from .lexer import Token, TokenType, TokenStream, Span, tokenize
from .ast_nodes import (
    BinOp, Iden, Expr, Literal, Identifier, Not, BinaryExpr,
    PrintStmt, VarAssignment, FunctionCall, ParseNode,
)


class ErrorKind(Enum):
    UNEXPECTED_TOKEN    = "Unexpected token"
    INVALID_IDENTIFIER  = "Invalid identifier"
    END_OF_TOKEN_STREAM = "Unexpected end of token stream"


class ParseError(Exception):
    def __init__(self, kind: ErrorKind, span: Optional[Span]):
        where = f" at {span!r}" if span is not None else ""
        super().__init__(f"[ParseError] {kind.value}{where}")
        self.kind = kind
        self.span = span


_BINARY_OPS = {
    TokenType.ADDITION: BinOp.ADD,
    TokenType.SUBTRACT: BinOp.SUBTRACT,
    TokenType.MULTIPLY: BinOp.MULTIPLY,
    TokenType.DIVIDE:   BinOp.DIVIDE,
    TokenType.OP_LT:    BinOp.LT,
    TokenType.OP_GT:    BinOp.GT,
    TokenType.OP_EQ:    BinOp.EQ,
    TokenType.OP_NEQ:   BinOp.NEQ,
    TokenType.LOG_AND:  BinOp.AND,
    TokenType.LOG_OR:   BinOp.OR,
}

_LITERALS = (
    TokenType.BOOLEAN,
    TokenType.INTEGER,
    TokenType.ABOOLEAN,
    TokenType.NUL,
)


class Parser:
    """
    Single-pass, fail-fast parser.

    ``source`` is either AbleScript source text or an already lexed list of
    tokens; ``source_length`` places end-of-stream errors for a token list.
    With ``tdark`` set, every "lang" inside string literals and
    identifier references is rewritten to "script".
    """

    def __init__(
        self,
        source: Union[str, List[Token]],
        tdark: bool = False,
        source_length: int = 0,
    ):
        if isinstance(source, str):
            self._lexer = TokenStream(tokenize(source), len(source))
        else:
            self._lexer = TokenStream(list(source), source_length)
        self._tdark = tdark

    @property
    def tdark(self) -> bool:
        return self._tdark

    # ------------------------------------------------------------------ public

    def parse(self) -> List[ParseNode]:
        nodes = []
        while True:
            token = self._lexer.next()
            if token is None:
                return nodes
            nodes.append(self._parse_statement(token))

    # ------------------------------------------------------------------ helpers

    def _require(self, ttype: TokenType) -> Token:
        tok = self._lexer.next()
        if tok is None:
            raise self._end_of_stream()
        if tok.type != ttype:
            raise ParseError(ErrorKind.UNEXPECTED_TOKEN, tok.span)
        return tok

    def _end_of_stream(self) -> ParseError:
        return ParseError(ErrorKind.END_OF_TOKEN_STREAM, self._lexer.span())

    def _theme(self, text: str) -> str:
        if self._tdark:
            return text.replace("lang", "script")
        return text

    @staticmethod
    def _target(token: Token) -> Iden:
        if token.type != TokenType.IDENTIFIER:
            raise ParseError(ErrorKind.INVALID_IDENTIFIER, token.span)
        return Iden(token.value)

    # ------------------------------------------------------------------ statements

    def _parse_statement(self, token: Token) -> ParseNode:
        peek = self._lexer.peek()
        if peek is not None and peek.type == TokenType.LPAREN:
            return self._parse_call(token)
        if peek is not None and peek.type == TokenType.ASSIGNMENT:
            return self._parse_assignment(token)

        expr = self._parse_primary(token)

        while True:
            peek = self._lexer.peek()
            if peek is None:
                return expr
            if peek.type == TokenType.PRINT:
                self._lexer.next()
                semi = self._require(TokenType.SEMICOLON)
                return PrintStmt(span=Span(token.span.start, semi.span.end), expr=expr)
            expr = self._parse_operation(peek, expr)

    def _parse_assignment(self, token: Token) -> VarAssignment:
        iden = self._target(token)
        self._lexer.next()  # consume '='

        value = self._parse_primary(self._lexer.next())

        while True:
            peek = self._lexer.peek()
            if peek is None:
                raise self._end_of_stream()
            if peek.type == TokenType.SEMICOLON:
                break
            value = self._parse_operation(peek, value)

        semi = self._lexer.next()
        return VarAssignment(span=Span(token.span.start, semi.span.end), iden=iden, value=value)

    def _parse_call(self, token: Token) -> FunctionCall:
        iden = self._target(token)
        self._lexer.next()  # consume '('

        args = []
        while True:
            tok = self._lexer.next()
            if tok is not None and tok.type == TokenType.RPAREN:
                break

            # An argument is a single primary; infix operators are not folded here.
            args.append(self._parse_primary(tok))

            sep = self._lexer.next()
            if sep is not None and sep.type == TokenType.RPAREN:
                break
            if sep is not None and sep.type == TokenType.COMMA:
                continue
            raise ParseError(ErrorKind.UNEXPECTED_TOKEN, None)

        semi = self._require(TokenType.SEMICOLON)
        return FunctionCall(span=Span(token.span.start, semi.span.end), iden=iden, args=args)

    # ------------------------------------------------------------------ expressions

    def _parse_operation(self, token: Optional[Token], left: Expr) -> BinaryExpr:
        """Fold one ``<op> primary`` pair onto ``left``; ``token`` is peeked."""
        if token is None:
            raise self._end_of_stream()
        op = _BINARY_OPS.get(token.type)
        if op is None:
            raise ParseError(ErrorKind.UNEXPECTED_TOKEN, token.span)

        self._lexer.next()
        right = self._parse_primary(self._lexer.next())
        return BinaryExpr(
            span=Span(left.span.start, right.span.end),
            op=op,
            left=left,
            right=right,
        )

    def _parse_primary(self, token: Optional[Token]) -> Expr:
        if token is None:
            raise self._end_of_stream()

        if token.type in _LITERALS:
            return Literal(span=token.span, value=token.value)

        if token.type == TokenType.STRING:
            return Literal(span=token.span, value=self._theme(token.value))

        if token.type == TokenType.IDENTIFIER:
            return Identifier(span=token.span, iden=Iden(self._theme(token.value)))

        if token.type == TokenType.LOG_NOT:
            expr = self._parse_primary(self._lexer.next())
            return Not(span=Span(token.span.start, expr.span.end), expr=expr)

        if token.type == TokenType.LPAREN:
            return self._parse_paren()

        raise ParseError(ErrorKind.UNEXPECTED_TOKEN, token.span)

    def _parse_paren(self) -> Expr:
        expr = self._parse_primary(self._lexer.next())

        while True:
            peek = self._lexer.peek()
            if peek is None:
                # Unterminated group: the accumulated expression is returned as is.
                return expr
            if peek.type == TokenType.RPAREN:
                self._lexer.next()
                return expr
            expr = self._parse_operation(peek, expr)
