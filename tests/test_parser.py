"""
Test suite for the Lox expression parser.

Tests cover:
- Precedence and associativity of every grammar level
- Literals, grouping and unary operators
- Syntax error reporting and the no-result contract
- Panic-mode synchronization
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from loxfront.lexer import Scanner, Token, TokenType, DiagnosticCollector
from loxfront.parser import (
    Parser, ParseError, AstPrinter, Binary, Grouping, Literal, Unary, parse_string
)
from loxfront.parser.parser import MAX_NESTING_DEPTH
from loxfront.parser.errors import SyntaxErrorRecovery


class ParserTestCase(unittest.TestCase):
    """Shared helpers for parser tests."""

    def setUp(self):
        self.printer = AstPrinter()

    def _parse(self, source: str):
        self.errors = DiagnosticCollector()
        tokens = Scanner(source, self.errors).scan_tokens()
        self.parser = Parser(tokens, self.errors)
        return self.parser.parse()

    def _render(self, source: str) -> str:
        expr = self._parse(source)
        self.assertIsNotNone(expr, f"Unexpected errors: {self.errors.diagnostics}")
        self.assertFalse(self.errors.has_errors())
        return self.printer.print(expr)


class TestPrecedence(ParserTestCase):
    """Operator precedence and associativity."""

    def test_multiplication_binds_tighter(self):
        """1 + 2 * 3 nests the product on the right of '+'."""
        expr = self._parse("1 + 2 * 3")

        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.PLUS)
        self.assertEqual(expr.left, Literal(1.0))

        right = expr.right
        self.assertIsInstance(right, Binary)
        self.assertEqual(right.operator.type, TokenType.STAR)
        self.assertEqual(right.left, Literal(2.0))
        self.assertEqual(right.right, Literal(3.0))

    def test_grouping_overrides_precedence(self):
        """(1 + 2) * 3 puts the grouped sum on the left of '*'."""
        expr = self._parse("(1 + 2) * 3")

        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.STAR)
        self.assertIsInstance(expr.left, Grouping)
        self.assertIsInstance(expr.left.expression, Binary)
        self.assertEqual(expr.left.expression.operator.type, TokenType.PLUS)
        self.assertEqual(expr.right, Literal(3.0))

    def test_equality_is_left_associative(self):
        """1 == 2 == 3 folds as (1 == 2) == 3."""
        expr = self._parse("1 == 2 == 3")

        self.assertEqual(expr.operator.type, TokenType.EQUAL_EQUAL)
        self.assertIsInstance(expr.left, Binary)
        self.assertEqual(expr.left.operator.type, TokenType.EQUAL_EQUAL)
        self.assertEqual(expr.left.left, Literal(1.0))
        self.assertEqual(expr.left.right, Literal(2.0))
        self.assertEqual(expr.right, Literal(3.0))

    def test_each_level_is_left_associative(self):
        cases = {
            "1 - 2 - 3": "(- (- 1.0 2.0) 3.0)",
            "8 / 4 / 2": "(/ (/ 8.0 4.0) 2.0)",
            "1 < 2 < 3": "(< (< 1.0 2.0) 3.0)",
            "1 != 2 == 3": "(== (!= 1.0 2.0) 3.0)",
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(self._render(source), expected)

    def test_levels_from_lowest_to_highest(self):
        self.assertEqual(
            self._render("1 == 2 > 3 + 4 * -5"),
            "(== 1.0 (> 2.0 (+ 3.0 (* 4.0 (- 5.0)))))",
        )

    def test_comparison_operators(self):
        for op in (">", ">=", "<", "<="):
            with self.subTest(op=op):
                self.assertEqual(self._render(f"1 {op} 2"), f"({op} 1.0 2.0)")

    def test_comparison_binds_tighter_than_equality(self):
        self.assertEqual(
            self._render("1 < 2 == 3 > 4"),
            "(== (< 1.0 2.0) (> 3.0 4.0))",
        )


class TestUnaryAndPrimary(ParserTestCase):
    """Unary operators, literals and grouping."""

    def test_literals(self):
        self.assertEqual(self._parse("123"), Literal(123.0))
        self.assertEqual(self._parse('"text"'), Literal("text"))
        self.assertEqual(self._parse("nil"), Literal(None))

        true_expr = self._parse("true")
        self.assertIs(true_expr.value, True)
        false_expr = self._parse("false")
        self.assertIs(false_expr.value, False)

    def test_unary_minus(self):
        expr = self._parse("-1")
        self.assertIsInstance(expr, Unary)
        self.assertEqual(expr.operator.type, TokenType.MINUS)
        self.assertEqual(expr.right, Literal(1.0))

    def test_nested_unary(self):
        self.assertEqual(self._render("!!true"), "(! (! true))")
        self.assertEqual(self._render("-(-1)"), "(- (group (- 1.0)))")

    def test_unary_binds_tighter_than_factor(self):
        self.assertEqual(
            self._render("-123 * (45.67)"),
            "(* (- 123.0) (group 45.67))",
        )

    def test_unary_operators_only(self):
        """Unary nodes only ever hold '!' or '-'."""
        expr = self._parse("!-!-1")
        while isinstance(expr, Unary):
            self.assertIn(expr.operator.type, (TokenType.BANG, TokenType.MINUS))
            expr = expr.right
        self.assertEqual(expr, Literal(1.0))

    def test_string_concatenation(self):
        self.assertEqual(self._render('"a" + "b"'), "(+ a b)")

    def test_nested_grouping(self):
        self.assertEqual(self._render("((1))"), "(group (group 1.0))")

    def test_trailing_tokens_are_left_unconsumed(self):
        """Parsing stops after one complete expression."""
        expr = self._parse("1 2")
        self.assertEqual(expr, Literal(1.0))
        self.assertFalse(self.errors.has_errors())
        self.assertEqual(self.parser.tokens[self.parser.current].type, TokenType.NUMBER)

    def test_tree_is_immutable(self):
        expr = self._parse("1 + 2")
        with self.assertRaises(AttributeError):
            expr.left = Literal(5.0)

    def test_children(self):
        expr = self._parse("(1 + -2)")
        self.assertEqual(len(expr.children()), 1)
        inner = expr.children()[0]
        self.assertEqual(inner.children()[0], Literal(1.0))
        self.assertIsInstance(inner.children()[1], Unary)
        self.assertEqual(Literal(1.0).children(), [])


class TestSyntaxErrors(ParserTestCase):
    """Failed parses report and yield no result."""

    def test_missing_closing_paren(self):
        """(1 + 2 yields None and one error naming ')'."""
        expr = self._parse("(1 + 2")

        self.assertIsNone(expr)
        self.assertEqual(self.errors.error_count, 1)
        diagnostic = self.errors.diagnostics[0]
        self.assertEqual(diagnostic.message, "Expect ')' after expression.")
        self.assertIn(")", diagnostic.message)
        self.assertEqual(diagnostic.where, " at end")
        self.assertEqual(diagnostic.code, "P001")

    def test_only_eof(self):
        """A token list holding only EOF is not a valid expression."""
        errors = DiagnosticCollector()
        parser = Parser([Token(TokenType.EOF, "", None, 1)], errors)

        self.assertIsNone(parser.parse())
        self.assertEqual(errors.error_count, 1)
        self.assertEqual(errors.diagnostics[0].message, "Expect expression.")
        self.assertEqual(errors.diagnostics[0].where, " at end")

    def test_missing_right_operand(self):
        self.assertIsNone(self._parse("1 +"))
        self.assertEqual(self.errors.error_count, 1)
        self.assertEqual(self.errors.diagnostics[0].message, "Expect expression.")

    def test_error_at_token(self):
        self.assertIsNone(self._parse("(1 2)"))
        diagnostic = self.errors.diagnostics[0]
        self.assertEqual(diagnostic.where, " at '2'")
        self.assertEqual(diagnostic.line, 1)

    def test_error_line(self):
        self.assertIsNone(self._parse("1 +\n\n*"))
        self.assertEqual(self.errors.diagnostics[0].line, 3)
        self.assertEqual(self.errors.diagnostics[0].where, " at '*'")

    def test_identifier_cannot_start_expression(self):
        self.assertIsNone(self._parse("x + 1"))
        self.assertEqual(self.errors.diagnostics[0].message, "Expect expression.")
        self.assertEqual(self.errors.diagnostics[0].code, "P002")

    def test_no_partial_tree(self):
        """An error deep in the right operand abandons the whole expression."""
        self.assertIsNone(self._parse("1 + 2 * (3 - )"))
        self.assertEqual(self.errors.error_count, 1)

    def test_misspelled_literal_suggestion(self):
        self.assertIsNone(self._parse("ture"))
        self.assertIn("Did you mean 'true'?", self.errors.diagnostics[0].suggestions)

    def test_parse_never_raises(self):
        for source in ("", ")", "(((", "== 1", "!", "-"):
            with self.subTest(source=source):
                self.assertIsNone(self._parse(source))
                self.assertTrue(self.errors.has_errors())

    def test_default_reporter(self):
        parser = Parser(Scanner("(").scan_tokens())
        self.assertIsNone(parser.parse())
        self.assertTrue(parser.reporter.has_errors())

    def test_deep_grouping_is_reported(self):
        """Runaway nesting is a syntax error, not a RecursionError."""
        depth = 200
        self.assertIsNone(self._parse("(" * depth + "1" + ")" * depth))
        self.assertEqual(self.errors.error_count, 1)
        diagnostic = self.errors.diagnostics[0]
        self.assertEqual(diagnostic.message, "Expression nested too deeply.")
        self.assertEqual(diagnostic.code, "P003")
        self.assertEqual(diagnostic.where, " at '('")

    def test_deep_unary_chain_is_reported(self):
        self.assertIsNone(self._parse("-" * 1000 + "1"))
        self.assertEqual(self.errors.error_count, 1)
        self.assertEqual(self.errors.diagnostics[0].message, "Expression nested too deeply.")

    def test_nesting_up_to_the_limit_parses(self):
        depth = MAX_NESTING_DEPTH
        expr = self._parse("(" * depth + "1" + ")" * depth)
        self.assertIsNotNone(expr)
        self.assertFalse(self.errors.has_errors())

        for _ in range(depth):
            self.assertIsInstance(expr, Grouping)
            expr = expr.expression
        self.assertEqual(expr, Literal(1.0))

    def test_sibling_groups_do_not_accumulate_depth(self):
        source = " + ".join(["(1)"] * (MAX_NESTING_DEPTH * 2))
        self.assertIsNotNone(self._parse(source))
        self.assertFalse(self.errors.has_errors())


class TestSynchronize(ParserTestCase):
    """Panic-mode recovery to the next statement boundary."""

    def _parser_for(self, source: str) -> Parser:
        self.errors = DiagnosticCollector()
        return Parser(Scanner(source, self.errors).scan_tokens(), self.errors)

    def _current(self, parser: Parser) -> Token:
        return parser.tokens[parser.current]

    def test_stops_after_semicolon(self):
        parser = self._parser_for("1 2 3 ; 4")
        parser.synchronize()
        current = self._current(parser)
        self.assertEqual(current.type, TokenType.NUMBER)
        self.assertEqual(current.lexeme, "4")

    def test_stops_before_statement_keyword(self):
        for keyword in ("class", "fun", "var", "for", "if", "while", "print", "return"):
            with self.subTest(keyword=keyword):
                parser = self._parser_for(f"a b {keyword} c")
                parser.synchronize()
                self.assertEqual(self._current(parser).lexeme, keyword)

    def test_other_keywords_are_discarded(self):
        parser = self._parser_for("a and or else this print")
        parser.synchronize()
        self.assertEqual(self._current(parser).type, TokenType.PRINT)

    def test_runs_to_eof(self):
        parser = self._parser_for("1 + 2")
        parser.synchronize()
        self.assertEqual(self._current(parser).type, TokenType.EOF)

    def test_at_eof_is_a_no_op(self):
        parser = self._parser_for("")
        parser.synchronize()
        self.assertEqual(self._current(parser).type, TokenType.EOF)

    def test_recovery_driver(self):
        """A statement-level loop can report one error per broken statement."""
        parser = self._parser_for("(1 ; 2 + 3 ; ) ; -4")

        results = []
        while parser.tokens[parser.current].type != TokenType.EOF:
            expr = parser.parse()
            if expr is None:
                parser.synchronize()
                continue
            results.append(self.printer.print(expr))
            # Step over the ';' that ends the statement
            if parser.tokens[parser.current].type == TokenType.SEMICOLON:
                parser.current += 1

        self.assertEqual(results, ["(+ 2.0 3.0)", "(- 4.0)"])
        self.assertEqual(self.errors.error_count, 2)
        self.assertEqual(
            [d.where for d in self.errors.diagnostics],
            [" at ';'", " at ')'"],
        )


class TestParseString(unittest.TestCase):
    """The scan + parse convenience entry point."""

    def test_success(self):
        result = parse_string("1 + 2")
        self.assertTrue(result.ok)
        self.assertFalse(result.has_errors)
        self.assertEqual(result.diagnostics, [])
        self.assertEqual(AstPrinter().print(result.expression), "(+ 1.0 2.0)")

    def test_lexical_and_syntax_errors_are_collected(self):
        result = parse_string("@ 1 +", filename="bad.lox")
        self.assertFalse(result.ok)
        self.assertIsNone(result.expression)
        self.assertEqual(
            [d.message for d in result.diagnostics],
            ["Unexpected character.", "Expect expression."],
        )
        self.assertEqual(result.diagnostics[0].location.filename, "bad.lox")

    def test_lexical_error_with_valid_expression(self):
        result = parse_string("1 # + 2")
        self.assertIsNotNone(result.expression)
        self.assertTrue(result.has_errors)
        self.assertFalse(result.ok)

    def test_deep_nesting_does_not_raise(self):
        result = parse_string("(" * 500 + "1" + ")" * 500)
        self.assertIsNone(result.expression)
        self.assertEqual(
            [d.message for d in result.diagnostics], ["Expression nested too deeply."]
        )


class TestParseError(unittest.TestCase):
    """The internal unwinding signal."""

    def test_carries_token_and_message(self):
        token = Token(TokenType.RIGHT_PAREN, ")", None, 7)
        error = ParseError(token, "Expect expression.")
        self.assertIs(error.token, token)
        self.assertEqual(error.message, "Expect expression.")
        self.assertEqual(str(error), "[line 7] Expect expression.")


class TestSyntaxErrorRecovery(unittest.TestCase):
    """Help text attached to syntax errors."""

    def test_missing_paren_help(self):
        self.assertEqual(
            SyntaxErrorRecovery.suggest_missing_token(TokenType.RIGHT_PAREN),
            "Add a closing parenthesis ')'",
        )

    def test_no_help_for_other_tokens(self):
        self.assertIsNone(SyntaxErrorRecovery.suggest_missing_token(TokenType.SEMICOLON))

    def test_literal_suggestions_only_for_identifiers(self):
        self.assertEqual(
            SyntaxErrorRecovery.suggest_literal_corrections(Token(TokenType.IDENTIFIER, "nul", None, 1)),
            ["Did you mean 'nil'?"],
        )
        self.assertEqual(
            SyntaxErrorRecovery.suggest_literal_corrections(Token(TokenType.PLUS, "+", None, 1)),
            [],
        )


if __name__ == "__main__":
    unittest.main()
