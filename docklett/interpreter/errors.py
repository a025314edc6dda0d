"""
Runtime errors for the Docklett interpreter.

An InterpreterError points at the token or node that caused it. Execution
stops at the first one; ``interpret`` returns it to the caller.

Author: xwest
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, SourceLocation
from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import Expression, Statement


class InterpreterError(Exception):
    """
    Error raised while evaluating an expression or executing a statement.
    """

    def __init__(
        self,
        message: str,
        origin: Union[Token, Expression, Statement, None] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.origin = origin
        location = origin.location if origin is not None else None
        lexeme = origin.lexeme if isinstance(origin, Token) else None

        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            lexeme=lexeme,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def line(self) -> int:
        """Source line of the error, 0 when unknown."""
        if self.location is None:
            return 0
        return self.location.line

    def __str__(self) -> str:
        if self.line > 0:
            return f"line {self.line}: {self.message}"
        return self.message


# Runtime error codes
RUNTIME_ERROR_CODES = {
    "R001": "Undefined variable",
    "R002": "Operand type error",
    "R003": "Division by zero",
    "R004": "Unsupported operator",
    "R005": "Numeric overflow",
}


def type_name(value) -> str:
    """Docklett name of a runtime value's kind."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def create_undefined_variable_error(name: Token, suggestions: Optional[List[str]] = None) -> InterpreterError:
    return InterpreterError(
        message=f"undefined variable '{name.lexeme}'",
        origin=name,
        code="R001",
        help_text="Declare the variable with '@SET' before using it.",
        suggestions=[f"Did you mean '{s}'?" for s in suggestions or []]
    )


def create_operand_error(expr: Expression, message: str) -> InterpreterError:
    return InterpreterError(message=message, origin=expr, code="R002")


def create_mismatched_operands_error(expr: Expression, left, right) -> InterpreterError:
    return InterpreterError(
        message=f"mismatched or unsupported types: {type_name(left)} and {type_name(right)}",
        origin=expr,
        code="R002",
        help_text="Both operands of a binary operator must be the same kind of value."
    )


def create_division_by_zero_error(expr: Expression) -> InterpreterError:
    return InterpreterError(message="division by zero", origin=expr, code="R003")


def create_unsupported_operator_error(expr: Expression, operator: Token, kind: str) -> InterpreterError:
    return InterpreterError(
        message=f"operator '{operator.lexeme}' is not supported for {kind} operands",
        origin=expr,
        code="R004"
    )


def create_numeric_overflow_error(expr: Expression) -> InterpreterError:
    return InterpreterError(
        message="numeric overflow",
        origin=expr,
        code="R005",
        help_text="The result does not fit in a floating-point number."
    )
