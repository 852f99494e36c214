"""
Parenthesized prefix rendering of expression trees, for debugging and tests.

    -123 * (45.67)   ->   (* (- 123.0) (group 45.67))
"""

from typing import Any

from .ast_nodes import Expr, ExprVisitor, Binary, Grouping, Literal, Unary


class AstPrinter(ExprVisitor):
    """Renders an expression tree as a Lisp-like string."""

    def print(self, expr: Expr) -> str:
        return expr.accept(self)

    def visit_binary_expr(self, expr: Binary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr: Literal) -> str:
        return self._format_value(expr.value)

    def visit_unary_expr(self, expr: Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def _parenthesize(self, name: str, *exprs: Expr) -> str:
        parts = [name] + [e.accept(self) for e in exprs]
        return "(" + " ".join(parts) + ")"

    @staticmethod
    def _format_value(value: Any) -> str:
        if value is None:
            return "nil"
        # bool before the generic case: str(True) is "True"
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
