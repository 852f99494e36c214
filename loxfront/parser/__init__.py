"""
Lox Parser Package

Implements a recursive descent parser for the Lox expression grammar.

Key Features:
- One method per precedence level, left-associative folding
- Immutable AST nodes with visitor dispatch
- Syntax errors reported through an ErrorReporter
- Panic-mode synchronization hook for statement-level recovery
"""

from .ast_nodes import Expr, ExprVisitor, Binary, Grouping, Literal, Unary
from .ast_printer import AstPrinter
from .parser import Parser, ParseResult, parse_string
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "ParseResult",
    "parse_string",

    # AST nodes
    "Expr", "ExprVisitor",
    "Binary", "Grouping", "Literal", "Unary",
    "AstPrinter",

    # Error handling
    "ParseError",
]
