"""
Docklett Parser Package

Recursive descent parser producing immutable AST nodes, with panic-mode
error recovery and printers for debugging and round-tripping.

Author: xwest
"""

from .ast_nodes import (
    Expression, Literal, Variable, Unary, Binary, Grouping, Assignment,
    Statement, ExpressionStatement, VariableDeclaration, Block, If, Instruction,
    ExpressionVisitor, StatementVisitor
)
from .parser import Parser, parse
from .errors import ParseError
from .printer import TreePrinter, SourcePrinter

__all__ = [
    "Parser",
    "parse",
    "ParseError",
    "TreePrinter",
    "SourcePrinter",
    "ExpressionVisitor",
    "StatementVisitor",
    "Expression",
    "Literal",
    "Variable",
    "Unary",
    "Binary",
    "Grouping",
    "Assignment",
    "Statement",
    "ExpressionStatement",
    "VariableDeclaration",
    "Block",
    "If",
    "Instruction",
]
