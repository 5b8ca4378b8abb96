"""
AbleScript - Front End Driver
Runs the lexer and parser in sequence and serializes the resulting AST.
"""

import json
import sys
from enum import Enum
from typing import List, Optional

from .lexer import tokenize, LexerError, Span
from .parser import Parser, ParseError
from .ast_nodes import ParseNode


class CompilationError(Exception):
    """Unified front-end error wrapper."""
    pass


def parse_source(source: str, tdark: bool = False, debug: bool = False) -> List[ParseNode]:
    """
    Lex and parse AbleScript source text.

    Parameters
    ----------
    source : AbleScript source code string
    tdark  : rewrite "lang" to "script" in strings and identifier references
    debug  : print each phase summary to stderr

    Returns
    -------
    List of statements and bare expressions, in source order

    Raises
    ------
    CompilationError on any phase failure
    """
    def log(msg):
        if debug:
            print(f"[ablescript] {msg}", file=sys.stderr)

    # ── Phase 1: Lexical Analysis ─────────────────────────────────────────────
    log("Phase 1: Lexical analysis")
    try:
        tokens = tokenize(source)
    except LexerError as e:
        raise CompilationError(_located("LexerError", e.message, source, e.span)) from e

    log(f"  {len(tokens)} tokens produced")

    # ── Phase 2: Parsing ──────────────────────────────────────────────────────
    log(f"Phase 2: Parsing (tdark={'on' if tdark else 'off'})")
    try:
        parser = Parser(tokens, tdark=tdark, source_length=len(source))
        nodes = parser.parse()
    except ParseError as e:
        raise CompilationError(_located("ParseError", e.kind.value, source, e.span)) from e

    log(f"  {len(nodes)} top-level statements")
    return nodes


def compile_file(
    input_path: str,
    output_path: str,
    tdark: bool = False,
    debug: bool = False,
) -> None:
    """Read an AbleScript file and write its JSON AST to output_path."""
    with open(input_path, "r", encoding="utf-8") as f:
        source = f.read()

    result = ast_to_json(parse_source(source, tdark=tdark, debug=debug))

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(result)


# ── Diagnostics ───────────────────────────────────────────────────────────────

def line_col(source: str, offset: int):
    """1-based (line, column) of a source offset."""
    line = source.count("\n", 0, offset) + 1
    col = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, col


def _located(phase: str, message: str, source: str, span: Optional[Span]) -> str:
    if span is None:
        return f"[{phase}] {message}"
    line, col = line_col(source, span.start)
    return f"[{phase}] Line {line}, column {col}: {message}"


# ── AST serialization ─────────────────────────────────────────────────────────

def ast_to_json(nodes) -> str:
    return json.dumps(_node_to_dict(nodes), indent=2)


def _node_to_dict(node):
    if node is None:
        return None
    if isinstance(node, list):
        return [_node_to_dict(n) for n in node]
    if isinstance(node, Enum):
        return node.name
    if isinstance(node, Span):
        return {"start": node.start, "end": node.end}
    if not hasattr(node, '__dataclass_fields__'):
        return node  # primitive
    d = {"_type": type(node).__name__}
    for field_name in node.__dataclass_fields__:
        val = getattr(node, field_name)
        d[field_name] = _node_to_dict(val)
    return d
