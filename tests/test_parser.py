"""
Test suite for the Docklett parser.

Tests cover:
- Expression precedence and associativity
- Declarations, instructions, @IF chains and @FOR blocks
- Panic-mode recovery and error reporting

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from docklett.lexer.lexer import scan
from docklett.lexer.tokens import TokenType
from docklett.parser.parser import Parser, parse
from docklett.parser.ast_nodes import (
    Literal, Variable, Unary, Binary, Grouping, Assignment,
    ExpressionStatement, VariableDeclaration, Block, If, Instruction
)


class ParserTestCase(unittest.TestCase):

    def _parse(self, source: str):
        tokens, scan_errors = scan(source, "<test>")
        self.assertEqual(scan_errors, [], f"Unexpected scan errors: {scan_errors}")
        return parse(tokens)

    def _parse_ok(self, source: str):
        statements, errors = self._parse(source)
        self.assertEqual(errors, [], f"Unexpected parse errors: {[str(e) for e in errors]}")
        return statements

    def _expression(self, source: str):
        """Parse 'x = <source>' and return the assigned expression."""
        statements = self._parse_ok(f"x = {source}")
        return statements[0].expression.value


class TestExpressions(ParserTestCase):
    """Test cases for expression parsing."""

    def test_precedence(self):
        expr = self._expression("1 + 2 * 3")
        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.PLUS)
        self.assertIsInstance(expr.right, Binary)
        self.assertEqual(expr.right.operator.type, TokenType.MULTIPLY)

    def test_left_associative(self):
        expr = self._expression("1 - 2 - 3")
        self.assertEqual(expr.operator.type, TokenType.MINUS)
        self.assertIsInstance(expr.left, Binary)
        self.assertEqual(expr.left.left.value, 1)
        self.assertEqual(expr.right.value, 3)

    def test_comparison_below_term(self):
        expr = self._expression("a + 1 > b == TRUE")
        self.assertEqual(expr.operator.type, TokenType.EQUAL)
        self.assertEqual(expr.left.operator.type, TokenType.GREATER_THAN)
        self.assertEqual(expr.left.left.operator.type, TokenType.PLUS)
        # TRUE outside a directive line is a variable name
        self.assertIsInstance(expr.right, Variable)

    def test_grouping(self):
        expr = self._expression("(1 + 2) * 3")
        self.assertEqual(expr.operator.type, TokenType.MULTIPLY)
        self.assertIsInstance(expr.left, Grouping)
        self.assertIsInstance(expr.left.expression, Binary)

    def test_unary(self):
        expr = self._expression("-!y")
        self.assertIsInstance(expr, Unary)
        self.assertEqual(expr.operator.type, TokenType.MINUS)
        self.assertIsInstance(expr.right, Unary)
        self.assertEqual(expr.right.operator.type, TokenType.LOGICAL_NOT)
        self.assertIsInstance(expr.right.right, Variable)

    def test_literals(self):
        statements = self._parse_ok('@SET a = TRUE\n@SET b = "txt"\n@SET c = 2.5\n')
        values = [s.initializer.value for s in statements]
        self.assertEqual(values, [True, "txt", 2.5])
        self.assertTrue(all(isinstance(s.initializer, Literal) for s in statements))

    def test_assignment_is_right_associative(self):
        statements = self._parse_ok("a = b = 1")
        expr = statements[0].expression
        self.assertIsInstance(expr, Assignment)
        self.assertEqual(expr.name.lexeme, "a")
        self.assertIsInstance(expr.value, Assignment)
        self.assertEqual(expr.value.name.lexeme, "b")

    def test_compound_assignment(self):
        expr = self._parse_ok("x += 2")[0].expression
        self.assertIsInstance(expr, Assignment)
        self.assertIsInstance(expr.value, Binary)
        self.assertEqual(expr.value.operator.type, TokenType.PLUS)
        self.assertEqual(expr.value.operator.lexeme, "+")
        self.assertEqual(expr.value.left.name.lexeme, "x")
        self.assertEqual(expr.value.right.value, 2)

    def test_compound_assignment_groups_right_side(self):
        expr = self._parse_ok("x -= 1 - 2")[0].expression
        self.assertEqual(expr.value.operator.type, TokenType.MINUS)
        self.assertIsInstance(expr.value.right, Grouping)

    def test_invalid_assignment_target(self):
        statements, errors = self._parse("1 = 2\n")
        self.assertEqual(statements, [])
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "invalid assignment target")
        self.assertEqual(errors[0].token.type, TokenType.ASSIGN)

    def test_missing_right_paren(self):
        statements, errors = self._parse("x = (1 + 2\n")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "expected ')' after expression")

    def test_unexpected_end_of_input(self):
        _, errors = self._parse("x = ")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "unexpected end of input")
        self.assertEqual(errors[0].where, " at end")


class TestStatements(ParserTestCase):
    """Test cases for statement parsing."""

    def test_variable_declaration(self):
        statements = self._parse_ok("@SET x = 1 + 2\n@SET y\n")
        self.assertEqual(len(statements), 2)
        self.assertIsInstance(statements[0], VariableDeclaration)
        self.assertEqual(statements[0].name.lexeme, "x")
        self.assertIsInstance(statements[0].initializer, Binary)
        self.assertIsNone(statements[1].initializer)

    def test_blank_lines_and_missing_final_newline(self):
        statements = self._parse_ok("\n\n@SET x = 1\n\n\nx = 2")
        self.assertEqual(len(statements), 2)
        self.assertIsInstance(statements[1], ExpressionStatement)

    def test_instruction(self):
        statements = self._parse_ok("FROM alpine\nRUN echo hi\n")
        self.assertEqual([type(s) for s in statements], [Instruction, Instruction])
        self.assertEqual(statements[0].text, "FROM alpine")

    def test_if_elif_else_chain(self):
        source = (
            "@IF x\n"
            "RUN a\n"
            "@ELIF y\n"
            "RUN b\n"
            "@ELSE\n"
            "RUN c\n"
            "@END\n"
        )
        statements = self._parse_ok(source)
        self.assertEqual(len(statements), 1)

        outer = statements[0]
        self.assertIsInstance(outer, If)
        self.assertEqual(outer.condition.name.lexeme, "x")
        self.assertIsInstance(outer.then_branch, Block)
        self.assertEqual(outer.then_branch.statements[0].text, "RUN a")

        inner = outer.else_branch
        self.assertIsInstance(inner, If)
        self.assertEqual(inner.condition.name.lexeme, "y")
        self.assertEqual(inner.then_branch.statements[0].text, "RUN b")
        self.assertIsInstance(inner.else_branch, Block)
        self.assertEqual(inner.else_branch.statements[0].text, "RUN c")

    def test_if_without_else(self):
        statement = self._parse_ok("@IF TRUE\n@SET x = 1\n@END")[0]
        self.assertIsInstance(statement.condition, Literal)
        self.assertIsNone(statement.else_branch)
        self.assertIsInstance(statement.then_branch.statements[0], VariableDeclaration)

    def test_nested_if(self):
        source = "@IF a\n@IF b\nRUN x\n@ELSE\nRUN y\n@END\n@ELIF c\nRUN z\n@END\n"
        outer = self._parse_ok(source)[0]
        nested = outer.then_branch.statements[0]
        self.assertIsInstance(nested, If)
        self.assertIsInstance(nested.else_branch, Block)
        self.assertIsInstance(outer.else_branch, If)

    def test_for_block(self):
        statements = self._parse_ok("@FOR item IN items\nRUN echo\n@SET n = 1\n@END\n")
        self.assertEqual(len(statements), 1)
        self.assertIsInstance(statements[0], Block)
        self.assertEqual(len(statements[0].statements), 2)

    def test_missing_end(self):
        statements, errors = self._parse("@IF x\nRUN a\n")
        self.assertEqual(statements, [])
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "expected @END to close @IF block")
        self.assertEqual(errors[0].diagnostic.code, "P004")

    def test_stray_end(self):
        _, errors = self._parse("@END\nFROM alpine\n")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].diagnostic.code, "P005")

    def test_missing_newline_after_expression(self):
        _, errors = self._parse("x = 1 2\n")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "expected newline after expression")
        self.assertEqual(errors[0].report_line(),
                         "[line 1] Error at '2': expected newline after expression")


class TestRecovery(ParserTestCase):
    """Test cases for panic-mode error recovery."""

    def test_three_independent_errors(self):
        source = (
            "@SET = 1\n"
            "@SET ok = 1\n"
            "x = (1 + 2\n"
            "@SET y = 2\n"
            "z = * 3\n"
        )
        statements, errors = self._parse(source)
        self.assertEqual(len(errors), 3)
        self.assertEqual([e.token.line for e in errors], [1, 3, 5])
        self.assertEqual(statements, [])

    def test_error_inside_block_is_contained(self):
        _, errors = self._parse("@IF TRUE\n@SET = 1\nRUN ok\n@END\n")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "expected identifier after @SET")

    def test_broken_if_header_keeps_block(self):
        _, errors = self._parse("@IF (\nRUN echo hi\n@END\n")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "unexpected end of line")

    def test_broken_elif_header_keeps_block(self):
        source = "@IF a\nRUN a\n@ELIF b c\nRUN b\n@ELSE\nRUN c\n@END\nFROM alpine\n"
        _, errors = self._parse(source)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "expected newline after condition")
        self.assertEqual(errors[0].token.line, 3)

    def test_broken_for_header_keeps_block(self):
        _, errors = self._parse("@FOR IN items\nRUN echo\n@END\n")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "expected loop variable after @FOR")

    def test_errors_in_header_and_body(self):
        _, errors = self._parse("@IF * 2\n@SET = 1\n@END\n@SET y = )\n")
        self.assertEqual([e.token.line for e in errors], [1, 2, 4])

    def test_recovery_stops_at_instruction(self):
        tokens, _ = scan("@SET x = 1 +\nRUN echo\n")
        parser = Parser(tokens)
        parser.parse()
        self.assertEqual(len(parser.errors), 1)

    def test_all_or_nothing(self):
        statements, errors = self._parse("@SET x = 1\n@SET = 2\nFROM alpine\n")
        self.assertEqual(statements, [])
        self.assertEqual(len(errors), 1)

    def test_eof_never_consumed(self):
        tokens, _ = scan("@SET")
        parser = Parser(tokens)
        parser.parse()
        self.assertEqual(len(parser.errors), 1)
        self.assertEqual(parser.errors[0].where, " at end")
        self.assertEqual(parser.tokens[parser.current].type, TokenType.EOF)


if __name__ == "__main__":
    unittest.main()
