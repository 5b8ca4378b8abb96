"""
AbleScript - AST Node Definitions
Spanned expression and statement nodes handed to the evaluator.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Union


class Abool(Enum):
    """Almost-boolean: the three-state truth value."""
    ALWAYS    = auto()
    SOMETIMES = auto()
    NEVER     = auto()


class BinOp(Enum):
    ADD      = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE   = auto()
    LT       = auto()
    GT       = auto()
    EQ       = auto()
    NEQ      = auto()
    AND      = auto()
    OR       = auto()


@dataclass(frozen=True)
class Iden:
    """A variable or function name, as opposed to a string value."""
    name: str


@dataclass
class Expr:
    """Base class for all expression nodes."""
    span: Any = None


@dataclass
class Literal(Expr):
    """bool, int, str, Abool, or None for nul."""
    value: Any = None


@dataclass
class Identifier(Expr):
    iden: Iden = None


@dataclass
class Not(Expr):
    """!expr"""
    expr: Expr = None


@dataclass
class BinaryExpr(Expr):
    """left <op> right"""
    op: BinOp = None
    left: Expr = None
    right: Expr = None


@dataclass
class Stmt:
    """Base class for all statement nodes."""
    span: Any = None


@dataclass
class PrintStmt(Stmt):
    """expr print;"""
    expr: Expr = None


@dataclass
class VarAssignment(Stmt):
    """iden = expr;"""
    iden: Iden = None
    value: Expr = None


@dataclass
class FunctionCall(Stmt):
    """iden(arg, ...);"""
    iden: Iden = None
    args: List[Expr] = field(default_factory=list)


# A bare expression standing alone is an implicit statement.
ParseNode = Union[Stmt, Expr]
