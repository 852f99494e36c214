"""
Error handling for the Lox parser.

ParseError is the signal that unwinds a failed expression back to the
point that can recover from it. By the time it is raised the error has
already been handed to the reporter.
"""

from typing import List, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import ErrorRecovery


class ParseError(Exception):
    """
    Raised when the current token cannot satisfy the active grammar rule.

    Carries the offending token so a statement-level driver can resume
    after it.
    """

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    def __str__(self) -> str:
        return f"[line {self.token.line}] {self.message}"


class SyntaxErrorRecovery:
    """
    Panic-mode recovery helpers for the parser.
    """

    # Keywords that start a new statement; recovery stops in front of them
    STATEMENT_KEYWORDS = frozenset({
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    })

    # Words a misspelled literal is compared against
    LITERAL_WORDS = ("true", "false", "nil")

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> Optional[str]:
        """Help text for a token the parser expected but did not find."""
        if expected == TokenType.RIGHT_PAREN:
            return "Add a closing parenthesis ')'"
        return None

    @staticmethod
    def suggest_literal_corrections(found: Token) -> List[str]:
        """Suggest a literal keyword when an identifier looks like a typo of one."""
        if found.type != TokenType.IDENTIFIER:
            return []

        matches = ErrorRecovery.suggest_keyword_corrections(
            found.lexeme, SyntaxErrorRecovery.LITERAL_WORDS
        )
        return [f"Did you mean '{word}'?" for word in matches]


EXPECT_EXPRESSION = "Expect expression."
EXPECT_RIGHT_PAREN = "Expect ')' after expression."
NESTED_TOO_DEEPLY = "Expression nested too deeply."
