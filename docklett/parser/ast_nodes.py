"""
Abstract Syntax Tree node definitions for Docklett.

Nodes are immutable dataclasses. Each one carries the tokens it was built
from, so any node can report a source location, and supports the visitor
pattern through ``accept``.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any
from dataclasses import dataclass

from ..lexer.tokens import SourceLocation, Token


class ExpressionVisitor(ABC):
    """Visitor interface for expression nodes."""

    @abstractmethod
    def visit_literal_expr(self, expr: 'Literal') -> Any:
        pass

    @abstractmethod
    def visit_variable_expr(self, expr: 'Variable') -> Any:
        pass

    @abstractmethod
    def visit_unary_expr(self, expr: 'Unary') -> Any:
        pass

    @abstractmethod
    def visit_binary_expr(self, expr: 'Binary') -> Any:
        pass

    @abstractmethod
    def visit_grouping_expr(self, expr: 'Grouping') -> Any:
        pass

    @abstractmethod
    def visit_assignment_expr(self, expr: 'Assignment') -> Any:
        pass


class StatementVisitor(ABC):
    """Visitor interface for statement nodes."""

    @abstractmethod
    def visit_expression_stmt(self, stmt: 'ExpressionStatement') -> Any:
        pass

    @abstractmethod
    def visit_variable_declaration_stmt(self, stmt: 'VariableDeclaration') -> Any:
        pass

    @abstractmethod
    def visit_block_stmt(self, stmt: 'Block') -> Any:
        pass

    @abstractmethod
    def visit_if_stmt(self, stmt: 'If') -> Any:
        pass

    @abstractmethod
    def visit_instruction_stmt(self, stmt: 'Instruction') -> Any:
        pass


# ============================================================================
# Expressions
# ============================================================================

class Expression(ABC):
    """Base class for expressions."""

    @abstractmethod
    def accept(self, visitor: ExpressionVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        pass

    @property
    @abstractmethod
    def location(self) -> SourceLocation:
        """Location used when reporting errors about this expression."""
        pass


@dataclass(frozen=True)
class Literal(Expression):
    """Literal value: number, string or boolean."""
    value: Any
    token: Token

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_literal_expr(self)

    @property
    def location(self) -> SourceLocation:
        return self.token.location


@dataclass(frozen=True)
class Variable(Expression):
    """Reference to a variable by name."""
    name: Token

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_variable_expr(self)

    @property
    def location(self) -> SourceLocation:
        return self.name.location


@dataclass(frozen=True)
class Unary(Expression):
    """Prefix operation (! or -)."""
    operator: Token
    right: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_unary_expr(self)

    @property
    def location(self) -> SourceLocation:
        return self.operator.location


@dataclass(frozen=True)
class Binary(Expression):
    """Infix operation; reports errors at the operator."""
    left: Expression
    operator: Token
    right: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_binary_expr(self)

    @property
    def location(self) -> SourceLocation:
        return self.operator.location


@dataclass(frozen=True)
class Grouping(Expression):
    """Parenthesized expression."""
    expression: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_grouping_expr(self)

    @property
    def location(self) -> SourceLocation:
        return self.expression.location


@dataclass(frozen=True)
class Assignment(Expression):
    """Assignment to an existing variable."""
    name: Token
    value: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_assignment_expr(self)

    @property
    def location(self) -> SourceLocation:
        return self.name.location


# ============================================================================
# Statements
# ============================================================================

class Statement(ABC):
    """Base class for statements."""

    @abstractmethod
    def accept(self, visitor: StatementVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        pass

    @property
    @abstractmethod
    def location(self) -> Optional[SourceLocation]:
        pass


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """Expression evaluated for its side effects."""
    expression: Expression

    def accept(self, visitor: StatementVisitor) -> Any:
        return visitor.visit_expression_stmt(self)

    @property
    def location(self) -> SourceLocation:
        return self.expression.location


@dataclass(frozen=True)
class VariableDeclaration(Statement):
    """@SET name [= initializer]"""
    name: Token
    initializer: Optional[Expression] = None

    def accept(self, visitor: StatementVisitor) -> Any:
        return visitor.visit_variable_declaration_stmt(self)

    @property
    def location(self) -> SourceLocation:
        return self.name.location


@dataclass(frozen=True)
class Block(Statement):
    """Statements executed in their own scope."""
    statements: List[Statement]

    def accept(self, visitor: StatementVisitor) -> Any:
        return visitor.visit_block_stmt(self)

    @property
    def location(self) -> Optional[SourceLocation]:
        if self.statements:
            return self.statements[0].location
        return None


@dataclass(frozen=True)
class If(Statement):
    """
    Conditional. An @ELIF chain is stored as a nested If in else_branch.
    """
    condition: Expression
    then_branch: Statement
    else_branch: Optional[Statement] = None

    def accept(self, visitor: StatementVisitor) -> Any:
        return visitor.visit_if_stmt(self)

    @property
    def location(self) -> SourceLocation:
        return self.condition.location


@dataclass(frozen=True)
class Instruction(Statement):
    """Dockerfile instruction passed through unchanged."""
    token: Token

    def accept(self, visitor: StatementVisitor) -> Any:
        return visitor.visit_instruction_stmt(self)

    @property
    def text(self) -> str:
        return self.token.value

    @property
    def location(self) -> SourceLocation:
        return self.token.location
