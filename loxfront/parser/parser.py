"""
Lox Recursive Descent Parser

One method per precedence level, lowest first. Each binary level folds
left-associatively: parse an operand at the next level up, then keep
consuming operators of this level and folding the result into a Binary
node with what has been built so far on the left.

    expression -> equality
    equality   -> comparison ( ( "!=" | "==" ) comparison )*
    comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       -> factor ( ( "-" | "+" ) factor )*
    factor     -> unary ( ( "/" | "*" ) unary )*
    unary      -> ( "!" | "-" ) unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil"
                | "(" expression ")"
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic, ErrorReporter, DiagnosticCollector
from ..lexer.scanner import Scanner
from .ast_nodes import Expr, Binary, Grouping, Literal, Unary
from .errors import (
    ParseError, SyntaxErrorRecovery, EXPECT_EXPRESSION, EXPECT_RIGHT_PAREN,
    NESTED_TOO_DEEPLY,
)

logger = logging.getLogger(__name__)

# Each grouping and each unary operator opens one level
MAX_NESTING_DEPTH = 64


class Parser:
    """
    Lox expression parser.

    Consumes a token list ending in EOF and builds one expression tree.
    Syntax errors are reported and the parse yields None instead of raising.
    """

    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the scanner, terminated by one EOF token
            reporter: Sink for syntax errors; a DiagnosticCollector by default
        """
        self.tokens = tokens
        self.current = 0
        self._depth = 0
        self.reporter = reporter if reporter is not None else DiagnosticCollector()

    def parse(self) -> Optional[Expr]:
        """
        Parse the token list into an expression tree.

        Returns:
            The root expression, or None if a syntax error was reported
        """
        self._depth = 0
        try:
            return self._expression()
        except ParseError as e:
            logger.debug("parse abandoned at line %d: %s", e.token.line, e.message)
            return None

    def synchronize(self) -> None:
        """
        Discard tokens until a likely statement boundary.

        Stops just after a ';' or just before a keyword that starts a
        statement, so a statement-level driver can resume after a
        ParseError without reporting cascaded errors.
        """
        self._advance()

        while not self._is_at_end():
            if self._previous().type == TokenType.SEMICOLON:
                return

            if self._peek().type in SyntaxErrorRecovery.STATEMENT_KEYWORDS:
                return

            self._advance()

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _expression(self) -> Expr:
        return self._equality()

    def _equality(self) -> Expr:
        expr = self._comparison()

        while self._match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self._previous()
            right = self._comparison()
            expr = Binary(expr, operator, right)

        return expr

    def _comparison(self) -> Expr:
        expr = self._term()

        while self._match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                          TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self._previous()
            right = self._term()
            expr = Binary(expr, operator, right)

        return expr

    def _term(self) -> Expr:
        expr = self._factor()

        while self._match(TokenType.MINUS, TokenType.PLUS):
            operator = self._previous()
            right = self._factor()
            expr = Binary(expr, operator, right)

        return expr

    def _factor(self) -> Expr:
        expr = self._unary()

        while self._match(TokenType.SLASH, TokenType.STAR):
            operator = self._previous()
            right = self._unary()
            expr = Binary(expr, operator, right)

        return expr

    def _unary(self) -> Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            self._enter_nested(operator)
            right = self._unary()
            self._depth -= 1
            return Unary(operator, right)

        return self._primary()

    def _primary(self) -> Expr:
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)

        if self._match(TokenType.LEFT_PAREN):
            self._enter_nested(self._previous())
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, EXPECT_RIGHT_PAREN)
            self._depth -= 1
            return Grouping(expr)

        # Nothing left to try: this token cannot start an expression
        found = self._peek()
        raise self._error(
            found, EXPECT_EXPRESSION, code="P002",
            suggestions=SyntaxErrorRecovery.suggest_literal_corrections(found),
        )

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or report and raise ParseError."""
        if self._check(token_type):
            return self._advance()

        raise self._error(
            self._peek(), message, code="P001",
            help_text=SyntaxErrorRecovery.suggest_missing_token(token_type),
        )

    def _enter_nested(self, opener: Token) -> None:
        """Open one nesting level, refusing to go past MAX_NESTING_DEPTH."""
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise self._error(opener, NESTED_TOO_DEEPLY, code="P003")

    def _error(self, token: Token, message: str, code: Optional[str] = None,
               help_text: Optional[str] = None,
               suggestions: Optional[List[str]] = None) -> ParseError:
        """Report a syntax error and build the signal that unwinds the parse."""
        self.reporter.token_error(token, message, code=code,
                                  help_text=help_text, suggestions=suggestions)
        return ParseError(token, message)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of scanning and parsing one source string."""
    expression: Optional[Expr]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    @property
    def ok(self) -> bool:
        return self.expression is not None and not self.has_errors


def parse_string(source: str, filename: str = "<string>") -> ParseResult:
    """
    Convenience function to scan and parse a source string.

    Lexical and syntax errors from both passes end up in the result's
    diagnostics, in the order they were found.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        ParseResult holding the expression (or None) and all diagnostics
    """
    collector = DiagnosticCollector(filename)
    tokens = Scanner(source, collector, filename).scan_tokens()
    expression = Parser(tokens, collector).parse()
    return ParseResult(expression, list(collector.diagnostics))
