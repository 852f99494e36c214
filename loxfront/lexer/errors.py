"""
Error reporting for the Lox front end.

The scanner and parser never print or abort on bad input. They hand every
problem to an ErrorReporter, which decides what to do with it. The default
reporter, DiagnosticCollector, keeps a Diagnostic per report so a caller can
surface every error found in one pass.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, List
from dataclasses import dataclass, field

from .tokens import Token, TokenType, SourceLocation, KEYWORDS

logger = logging.getLogger(__name__)


@dataclass
class Diagnostic:
    """A single reported error."""
    message: str
    location: SourceLocation
    severity: str  # always "error"; rendered as the label
    code: Optional[str] = None
    where: str = ""  # " at end", " at 'x'" for syntax errors
    help_text: Optional[str] = None
    suggestions: List[str] = field(default_factory=list)

    @property
    def line(self) -> int:
        return self.location.line

    def __str__(self) -> str:
        label = self.severity.capitalize()
        result = f"[line {self.location.line}] {label}{self.where}: {self.message}"

        if self.help_text:
            result += f"\n  help: {self.help_text}"

        for suggestion in self.suggestions:
            result += f"\n  - {suggestion}"

        return result


class ErrorReporter(ABC):
    """
    Sink for front-end errors.

    Lexical errors are reported by line, syntax errors by the token the
    parser was looking at.
    """

    @abstractmethod
    def error(self, line: int, message: str, code: Optional[str] = None) -> None:
        """Report a lexical error at a source line."""

    @abstractmethod
    def token_error(self, token: Token, message: str, code: Optional[str] = None,
                    help_text: Optional[str] = None,
                    suggestions: Optional[List[str]] = None) -> None:
        """Report a syntax error at a token."""


class DiagnosticCollector(ErrorReporter):
    """
    Reporter that records every error as a Diagnostic.

    Example:
        >>> collector = DiagnosticCollector()
        >>> tokens = Scanner('"abc', collector).scan_tokens()
        >>> print(collector.diagnostics[0])
        [line 1] Error: Unterminated string.
    """

    def __init__(self, filename: str = "<string>"):
        self.filename = filename
        self.diagnostics: List[Diagnostic] = []

    def error(self, line: int, message: str, code: Optional[str] = None) -> None:
        self._add(Diagnostic(
            message=message,
            location=SourceLocation(self.filename, line),
            severity="error",
            code=code,
        ))

    def token_error(self, token: Token, message: str, code: Optional[str] = None,
                    help_text: Optional[str] = None,
                    suggestions: Optional[List[str]] = None) -> None:
        if token.type == TokenType.EOF:
            where = " at end"
        else:
            where = f" at '{token.lexeme}'"

        self._add(Diagnostic(
            message=message,
            location=SourceLocation(self.filename, token.line),
            severity="error",
            code=code,
            where=where,
            help_text=help_text,
            suggestions=list(suggestions or []),
        ))

    def _add(self, diagnostic: Diagnostic) -> None:
        logger.debug("reported %s", diagnostic)
        self.diagnostics.append(diagnostic)

    @property
    def error_count(self) -> int:
        return len(self.diagnostics)

    def has_errors(self) -> bool:
        """Check if any error has been reported."""
        return self.error_count > 0

    def clear(self) -> None:
        self.diagnostics.clear()


class ErrorRecovery:
    """
    Suggestions attached to diagnostics.

    Lets a reporter point at the keyword a user most likely meant.
    """

    @staticmethod
    def suggest_keyword_corrections(invalid_word: str, candidates=None) -> List[str]:
        """Suggest keywords within edit distance 2 of a misspelled word."""
        if candidates is None:
            candidates = KEYWORDS.keys()

        word = invalid_word.lower()
        close = [k for k in candidates if ErrorRecovery._edit_distance(word, k) <= 2]
        return sorted(close, key=lambda k: ErrorRecovery._edit_distance(word, k))[:3]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


UNEXPECTED_CHARACTER = "Unexpected character."
UNTERMINATED_STRING = "Unterminated string."
