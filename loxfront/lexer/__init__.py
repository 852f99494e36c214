"""
Lox Lexer Package

Implements the scanner that groups Lox source characters into tokens.

Key Features:
- Longest-match operators (!=, ==, <=, >=)
- Keyword priority over identifiers
- Number and string literal decoding
- Line tracking for diagnostics
- Non-fatal lexical errors reported through an ErrorReporter
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .scanner import Scanner, scan_string
from .errors import Diagnostic, ErrorReporter, DiagnosticCollector

__all__ = [
    "Scanner",
    "scan_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "ErrorReporter",
    "DiagnosticCollector",
]
