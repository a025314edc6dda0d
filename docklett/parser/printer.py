"""
AST printers for Docklett.

TreePrinter draws any node as an indented tree, one field per line:

    Binary
    ├─Left: Literal
    │ └─Value: 1
    ├─Operator: PLUS [+] @Line:1,Col:3
    └─Right: Literal
      └─Value: 2

SourcePrinter turns statements back into Docklett source.

Author: xwest
"""

from typing import Any, List, Tuple

from ..lexer.tokens import Token
from .ast_nodes import (
    ExpressionVisitor, StatementVisitor, Expression, Statement,
    Literal, Variable, Unary, Binary, Grouping, Assignment,
    ExpressionStatement, VariableDeclaration, Block, If, Instruction
)


def format_value(value: Any) -> str:
    """Render a runtime value the way Docklett source spells it."""
    if value is None:
        return "nil"
    if value is True:
        return "TRUE"
    if value is False:
        return "FALSE"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


class TreePrinter(ExpressionVisitor, StatementVisitor):
    """Renders nodes as a box-drawing tree."""

    def __init__(self):
        # One entry per open ancestor: was it the last field of its parent?
        self._is_last_child: List[bool] = []

    def print(self, node) -> str:
        self._is_last_child = []
        return node.accept(self)

    def print_program(self, statements: List[Statement]) -> str:
        return "".join(self.print(statement) for statement in statements)

    def _indent(self, is_last: bool) -> str:
        prefix = "".join("  " if last else "│ " for last in self._is_last_child)
        return prefix + ("└─" if is_last else "├─")

    def _format_token(self, token: Token) -> str:
        base = f"{token.type.name} [{token.lexeme}] @Line:{token.line},Col:{token.column}"
        if token.value is not None:
            base += f" (Literal: {token.value})"
        return base

    def _node(self, title: str, fields: List[Tuple[str, Any]]) -> str:
        result = title + "\n"

        for index, (label, child) in enumerate(fields):
            is_last = index == len(fields) - 1
            result += self._indent(is_last) + f"{label}: "

            if isinstance(child, (Expression, Statement)):
                self._is_last_child.append(is_last)
                try:
                    result += child.accept(self)
                finally:
                    self._is_last_child.pop()
            elif isinstance(child, Token):
                result += self._format_token(child) + "\n"
            else:
                result += format_value(child) + "\n"

        return result

    # Expressions

    def visit_literal_expr(self, expr: Literal) -> str:
        return self._node("Literal", [("Value", expr.value)])

    def visit_variable_expr(self, expr: Variable) -> str:
        return self._node("Variable", [("Name", expr.name)])

    def visit_unary_expr(self, expr: Unary) -> str:
        return self._node("Unary", [("Operator", expr.operator), ("Right", expr.right)])

    def visit_binary_expr(self, expr: Binary) -> str:
        return self._node("Binary", [
            ("Left", expr.left),
            ("Operator", expr.operator),
            ("Right", expr.right),
        ])

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self._node("Grouping", [("Expression", expr.expression)])

    def visit_assignment_expr(self, expr: Assignment) -> str:
        return self._node("Assignment", [("Name", expr.name), ("Value", expr.value)])

    # Statements

    def visit_expression_stmt(self, stmt: ExpressionStatement) -> str:
        return self._node("ExpressionStatement", [("Expression", stmt.expression)])

    def visit_variable_declaration_stmt(self, stmt: VariableDeclaration) -> str:
        fields = [("Name", stmt.name)]
        if stmt.initializer is not None:
            fields.append(("Initializer", stmt.initializer))
        return self._node("VariableDeclaration", fields)

    def visit_block_stmt(self, stmt: Block) -> str:
        return self._node("Block", [(f"[{i}]", s) for i, s in enumerate(stmt.statements)])

    def visit_if_stmt(self, stmt: If) -> str:
        fields = [("Condition", stmt.condition), ("Then", stmt.then_branch)]
        if stmt.else_branch is not None:
            fields.append(("Else", stmt.else_branch))
        return self._node("If", fields)

    def visit_instruction_stmt(self, stmt: Instruction) -> str:
        return self._node("Instruction", [("Token", stmt.token)])


class SourcePrinter(ExpressionVisitor, StatementVisitor):
    """
    Renders statements back into Docklett source.

    Printing, parsing and printing again yields the same text. Loop headers
    are not kept in the tree, so a @FOR block comes back as '@FOR _ IN'.
    """

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self._depth = 0
        # Bare TRUE/FALSE only scan as keywords on '@' lines
        self._directive_line = False

    def print(self, statements: List[Statement]) -> str:
        self._depth = 0
        return "".join(statement.accept(self) for statement in statements)

    def _line(self, text: str) -> str:
        return self.indent * self._depth + text + "\n"

    def _expression(self, expr: Expression, directive_line: bool) -> str:
        self._directive_line = directive_line
        return expr.accept(self)

    def _body(self, block: Block) -> str:
        self._depth += 1
        try:
            return "".join(statement.accept(self) for statement in block.statements)
        finally:
            self._depth -= 1

    # Expressions

    def visit_literal_expr(self, expr: Literal) -> str:
        if isinstance(expr.value, bool):
            word = "TRUE" if expr.value else "FALSE"
            return word if self._directive_line else "@" + word
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return expr.token.lexeme

    def visit_variable_expr(self, expr: Variable) -> str:
        return expr.name.lexeme

    def visit_unary_expr(self, expr: Unary) -> str:
        return expr.operator.lexeme + expr.right.accept(self)

    def visit_binary_expr(self, expr: Binary) -> str:
        return f"{expr.left.accept(self)} {expr.operator.lexeme} {expr.right.accept(self)}"

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return f"({expr.expression.accept(self)})"

    def visit_assignment_expr(self, expr: Assignment) -> str:
        return f"{expr.name.lexeme} = {expr.value.accept(self)}"

    # Statements

    def visit_expression_stmt(self, stmt: ExpressionStatement) -> str:
        return self._line(self._expression(stmt.expression, False))

    def visit_variable_declaration_stmt(self, stmt: VariableDeclaration) -> str:
        if stmt.initializer is None:
            return self._line(f"@SET {stmt.name.lexeme}")
        return self._line(f"@SET {stmt.name.lexeme} = {self._expression(stmt.initializer, True)}")

    def visit_block_stmt(self, stmt: Block) -> str:
        return self._line("@FOR _ IN") + self._body(stmt) + self._line("@END")

    def visit_if_stmt(self, stmt: If) -> str:
        result = self._line(f"@IF {self._expression(stmt.condition, True)}")
        result += self._body(stmt.then_branch)

        branch = stmt.else_branch
        while isinstance(branch, If):
            result += self._line(f"@ELIF {self._expression(branch.condition, True)}")
            result += self._body(branch.then_branch)
            branch = branch.else_branch

        if branch is not None:
            result += self._line("@ELSE")
            result += self._body(branch)

        return result + self._line("@END")

    def visit_instruction_stmt(self, stmt: Instruction) -> str:
        return self._line(stmt.text)
