"""
Tree-walking interpreter for Docklett.

Evaluates expressions and executes statements against a chain of
Environments. Dockerfile instructions met along the way are collected in
``instructions`` in execution order.

Operand rules for binary operators, checked in this order:
1. both numbers: arithmetic and comparison; int stays int for + - *,
   / always gives a float
2. both strings: + concatenates, == != > < compare
3. both booleans: == != only
4. either nil: == != only
5. anything else is an error

Author: xwest
"""

import logging
from typing import Any, List, Optional

from ..lexer.tokens import TokenType
from ..parser.ast_nodes import (
    ExpressionVisitor, StatementVisitor, Expression, Statement,
    Literal, Variable, Unary, Binary, Grouping, Assignment,
    ExpressionStatement, VariableDeclaration, Block, If, Instruction
)
from .environment import Environment
from .errors import (
    InterpreterError, create_operand_error, create_mismatched_operands_error,
    create_division_by_zero_error, create_unsupported_operator_error,
    create_numeric_overflow_error, type_name
)

logger = logging.getLogger(__name__)


def is_number(value: Any) -> bool:
    """int or float, but never bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Interpreter(ExpressionVisitor, StatementVisitor):
    """
    Docklett interpreter.

    One instance owns one root Environment for its whole lifetime; blocks
    get short-lived child environments.
    """

    def __init__(self, environment: Optional[Environment] = None):
        self.globals = environment if environment is not None else Environment()
        self.environment = self.globals
        self.instructions: List[str] = []

    def interpret(self, statements: List[Statement]) -> Optional[InterpreterError]:
        """
        Execute statements in order, stopping at the first runtime error.

        Returns:
            The error that stopped execution, or None
        """
        try:
            for statement in statements:
                self.execute(statement)
        except InterpreterError as e:
            logger.debug("runtime error: %s", e)
            return e

        return None

    def evaluate(self, expression: Expression) -> Any:
        """Evaluate an expression. Raises InterpreterError on failure."""
        return expression.accept(self)

    def execute(self, statement: Statement) -> None:
        statement.accept(self)

    def execute_block(self, statements: List[Statement], environment: Environment) -> None:
        """Run statements in the given environment, restoring the current one after."""
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    @staticmethod
    def is_truthy(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        if is_number(value):
            return value != 0
        if isinstance(value, str):
            return value != ""
        return True

    # Statements

    def visit_expression_stmt(self, stmt: ExpressionStatement) -> None:
        self.evaluate(stmt.expression)

    def visit_variable_declaration_stmt(self, stmt: VariableDeclaration) -> None:
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)

        self.environment.define(stmt.name.lexeme, value)

    def visit_block_stmt(self, stmt: Block) -> None:
        self.execute_block(stmt.statements, Environment(self.environment))

    def visit_if_stmt(self, stmt: If) -> None:
        if self.is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    def visit_instruction_stmt(self, stmt: Instruction) -> None:
        logger.debug("emit: %s", stmt.text)
        self.instructions.append(stmt.text)

    # Expressions

    def visit_literal_expr(self, expr: Literal) -> Any:
        return expr.value

    def visit_variable_expr(self, expr: Variable) -> Any:
        return self.environment.get(expr.name)

    def visit_grouping_expr(self, expr: Grouping) -> Any:
        return self.evaluate(expr.expression)

    def visit_assignment_expr(self, expr: Assignment) -> Any:
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def visit_unary_expr(self, expr: Unary) -> Any:
        right = self.evaluate(expr.right)

        if expr.operator.type == TokenType.LOGICAL_NOT:
            if not isinstance(right, bool):
                raise create_operand_error(
                    expr, f"operator '!' requires a boolean, got {type_name(right)}"
                )
            return not right

        if expr.operator.type == TokenType.MINUS:
            if not is_number(right):
                raise create_operand_error(
                    expr, f"operator '-' requires a number, got {type_name(right)}"
                )
            return -right

        raise create_unsupported_operator_error(expr, expr.operator, type_name(right))

    def visit_binary_expr(self, expr: Binary) -> Any:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)

        if is_number(left) and is_number(right):
            try:
                return self._execute_numeric(expr, left, right)
            except OverflowError:
                # int too large for a float, or a float result out of range
                raise create_numeric_overflow_error(expr) from None

        if isinstance(left, str) and isinstance(right, str):
            return self._execute_string(expr, left, right)

        if isinstance(left, bool) and isinstance(right, bool):
            return self._execute_equality(expr, left, right, "boolean")

        if left is None or right is None:
            return self._execute_equality(expr, left, right, "nil")

        raise create_mismatched_operands_error(expr, left, right)

    def _execute_numeric(self, expr: Binary, left, right) -> Any:
        op = expr.operator.type

        if op == TokenType.PLUS:
            return left + right
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.MULTIPLY:
            return left * right
        if op == TokenType.DIVIDE:
            if right == 0:
                raise create_division_by_zero_error(expr)
            return float(left) / float(right)
        if op == TokenType.EQUAL:
            return left == right
        if op == TokenType.NOT_EQUAL:
            return left != right
        if op == TokenType.GREATER_THAN:
            return left > right
        if op == TokenType.GREATER_EQUAL:
            return left >= right
        if op == TokenType.LESS_THAN:
            return left < right
        if op == TokenType.LESS_EQUAL:
            return left <= right

        raise create_unsupported_operator_error(expr, expr.operator, "number")

    def _execute_string(self, expr: Binary, left: str, right: str) -> Any:
        op = expr.operator.type

        if op == TokenType.PLUS:
            return left + right
        if op == TokenType.EQUAL:
            return left == right
        if op == TokenType.NOT_EQUAL:
            return left != right
        if op == TokenType.GREATER_THAN:
            return left > right
        if op == TokenType.LESS_THAN:
            return left < right

        raise create_unsupported_operator_error(expr, expr.operator, "string")

    def _execute_equality(self, expr: Binary, left, right, kind: str) -> bool:
        """== and != for booleans and nil; nil only equals nil."""
        op = expr.operator.type

        if op == TokenType.EQUAL:
            return left is right
        if op == TokenType.NOT_EQUAL:
            return left is not right

        raise create_unsupported_operator_error(expr, expr.operator, kind)


def interpret(statements: List[Statement],
              environment: Optional[Environment] = None) -> Optional[InterpreterError]:
    """
    Run statements with a fresh interpreter.

    Args:
        statements: Parsed statements
        environment: Root environment to run in, a new one if omitted

    Returns:
        The runtime error that stopped execution, or None
    """
    return Interpreter(environment).interpret(statements)
