"""
Lox Scanner - turns source text into tokens

One left-to-right pass over the whole source string. Lexical errors are
handed to the reporter and scanning carries on, so a single pass can
surface every bad character in a file.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Any

from .tokens import (
    Token, TokenType, KEYWORDS, SINGLE_CHAR_TOKENS, EQUAL_SUFFIX_OPERATORS
)
from .errors import (
    ErrorReporter, DiagnosticCollector, UNEXPECTED_CHARACTER, UNTERMINATED_STRING
)

logger = logging.getLogger(__name__)


@dataclass
class _Cursor:
    """Scan position over the source: the lexeme window [start, current) and the line."""
    start: int = 0
    current: int = 0
    line: int = 1
    start_line: int = 1  # line the current lexeme began on


class Scanner:
    """
    Lox lexical analyzer.

    Converts source code text into a list of tokens ending in a single EOF
    token. Two-character operators and keywords take priority over their
    shorter or more generic readings.

    Example:
        >>> tokens = Scanner("1 + 2").scan_tokens()
        >>> [t.type.name for t in tokens]
        ['NUMBER', 'PLUS', 'NUMBER', 'EOF']
    """

    def __init__(self, source: str, reporter: Optional[ErrorReporter] = None,
                 filename: str = "<string>"):
        """
        Initialize the scanner with source code.

        Args:
            source: Complete source text
            reporter: Sink for lexical errors; a DiagnosticCollector by default
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.reporter = reporter if reporter is not None else DiagnosticCollector(filename)
        self._cursor = _Cursor()
        self._tokens: List[Token] = []

    def scan_tokens(self) -> List[Token]:
        """
        Scan the entire source.

        Returns:
            List of tokens including the EOF token. Never raises on
            malformed input; bad characters are reported and skipped.
        """
        self._cursor = _Cursor()
        self._tokens = []

        while not self._is_at_end():
            # Beginning of the next lexeme
            self._cursor.start = self._cursor.current
            self._cursor.start_line = self._cursor.line
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", None, self._cursor.line))

        logger.debug("%s: scanned %d tokens over %d lines",
                     self.filename, len(self._tokens), self._cursor.line)
        return self._tokens

    tokenize = scan_tokens

    def _scan_token(self) -> None:
        c = self._advance()

        if c in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[c])
        elif c in EQUAL_SUFFIX_OPERATORS:
            single, double = EQUAL_SUFFIX_OPERATORS[c]
            self._add_token(double if self._match("=") else single)
        elif c == "/":
            if self._match("/"):
                # A comment goes until the end of the line
                while self._peek() != "\n" and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif c in (" ", "\r", "\t"):
            pass
        elif c == "\n":
            self._cursor.line += 1
        elif c == '"':
            self._string()
        elif self._is_digit(c):
            self._number()
        elif self._is_alpha(c):
            self._identifier()
        else:
            self.reporter.error(self._cursor.line, UNEXPECTED_CHARACTER, code="L001")

    def _string(self) -> None:
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == "\n":
                self._cursor.line += 1
            self._advance()

        if self._is_at_end():
            self.reporter.error(self._cursor.line, UNTERMINATED_STRING, code="L002")
            return

        # The closing quote
        self._advance()

        value = self.source[self._cursor.start + 1:self._cursor.current - 1]
        self._add_token(TokenType.STRING, value)

    def _number(self) -> None:
        while self._is_digit(self._peek()):
            self._advance()

        # Only take the '.' if a digit follows it
        if self._peek() == "." and self._is_digit(self._peek_next()):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self._lexeme()))

    def _identifier(self) -> None:
        while self._is_alpha_numeric(self._peek()):
            self._advance()

        self._add_token(KEYWORDS.get(self._lexeme(), TokenType.IDENTIFIER))

    def _add_token(self, token_type: TokenType, literal: Any = None) -> None:
        self._tokens.append(Token(token_type, self._lexeme(), literal,
                                  self._cursor.start_line))

    def _lexeme(self) -> str:
        return self.source[self._cursor.start:self._cursor.current]

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is the expected one."""
        if self._is_at_end() or self.source[self._cursor.current] != expected:
            return False
        self._cursor.current += 1
        return True

    def _advance(self) -> str:
        c = self.source[self._cursor.current]
        self._cursor.current += 1
        return c

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self.source[self._cursor.current]

    def _peek_next(self) -> str:
        if self._cursor.current + 1 >= len(self.source):
            return "\0"
        return self.source[self._cursor.current + 1]

    def _is_at_end(self) -> bool:
        return self._cursor.current >= len(self.source)

    @staticmethod
    def _is_digit(c: str) -> bool:
        return "0" <= c <= "9"

    @staticmethod
    def _is_alpha(c: str) -> bool:
        return ("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_"

    @classmethod
    def _is_alpha_numeric(cls, c: str) -> bool:
        return cls._is_alpha(c) or cls._is_digit(c)


def scan_string(source: str, reporter: Optional[ErrorReporter] = None,
                filename: str = "<string>") -> List[Token]:
    """
    Convenience function to scan a source string.

    Args:
        source: Source code string
        reporter: Sink for lexical errors
        filename: Filename for error reporting

    Returns:
        List of tokens ending in EOF
    """
    return Scanner(source, reporter, filename).scan_tokens()
