"""
loxfront - Lox language front end

Scanner and expression parser for the Lox scripting language. Turns source
text into tokens and tokens into an expression tree, reporting every
lexical and syntax error it finds instead of stopping at the first.

Architecture:
    loxfront/
    ├── lexer/           # Tokens, scanner, error reporting
    └── parser/          # AST nodes, recursive descent parser

Example:
    >>> from loxfront import parse_string, AstPrinter
    >>> result = parse_string("1 + 2 * 3")
    >>> AstPrinter().print(result.expression)
    '(+ 1.0 (* 2.0 3.0))'
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Scanner, Token, TokenType, DiagnosticCollector, ErrorReporter
from .parser import Parser, ParseResult, ParseError, AstPrinter, parse_string

__all__ = [
    # Core classes
    "Scanner",
    "Parser",
    "Token",
    "TokenType",
    "AstPrinter",

    # Error handling
    "ErrorReporter",
    "DiagnosticCollector",
    "ParseError",

    # Convenience
    "ParseResult",
    "parse_string",

    # Version info
    "__version__",
    "__license__",
]
