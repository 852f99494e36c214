"""
Abstract Syntax Tree node definitions for Lox expressions.

Four immutable node types make up the expression tree. Each node owns its
children and supports the visitor pattern; ExprVisitor declares one method
per node type, so adding a node type means every visitor must handle it.
"""

from abc import ABC, abstractmethod
from typing import Any, List
from dataclasses import dataclass

from ..lexer.tokens import Token


class ExprVisitor(ABC):
    """Visitor interface for traversing expression trees."""

    @abstractmethod
    def visit_binary_expr(self, expr: 'Binary') -> Any:
        pass

    @abstractmethod
    def visit_grouping_expr(self, expr: 'Grouping') -> Any:
        pass

    @abstractmethod
    def visit_literal_expr(self, expr: 'Literal') -> Any:
        pass

    @abstractmethod
    def visit_unary_expr(self, expr: 'Unary') -> Any:
        pass


class Expr(ABC):
    """Base class for expressions."""

    @abstractmethod
    def accept(self, visitor: ExprVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""

    @abstractmethod
    def children(self) -> List['Expr']:
        """Get all child nodes."""


@dataclass(frozen=True)
class Binary(Expr):
    """Binary operation: arithmetic, comparison or equality."""
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_binary_expr(self)

    def children(self) -> List[Expr]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Grouping(Expr):
    """Parenthesized expression."""
    expression: Expr

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_grouping_expr(self)

    def children(self) -> List[Expr]:
        return [self.expression]


@dataclass(frozen=True)
class Literal(Expr):
    """Literal value: float, str, bool or None (nil)."""
    value: Any

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_literal_expr(self)

    def children(self) -> List[Expr]:
        return []


@dataclass(frozen=True)
class Unary(Expr):
    """Prefix operation: '!' or '-'."""
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_unary_expr(self)

    def children(self) -> List[Expr]:
        return [self.right]
