"""
Test suite for the Docklett tree and source printers.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from docklett.lexer.lexer import scan
from docklett.parser.parser import parse
from docklett.parser.printer import TreePrinter, SourcePrinter, format_value


def parse_source(source: str):
    tokens, scan_errors = scan(source, "<test>")
    assert not scan_errors, scan_errors
    statements, errors = parse(tokens)
    assert not errors, [str(e) for e in errors]
    return statements


class TestTreePrinter(unittest.TestCase):
    """Test cases for the tree printer."""

    def test_binary_tree(self):
        binary = parse_source("x = 1 + 2")[0].expression.value
        expected = (
            "Binary\n"
            "├─Left: Literal\n"
            "│ └─Value: 1\n"
            "├─Operator: PLUS [+] @Line:1,Col:7\n"
            "└─Right: Literal\n"
            "  └─Value: 2\n"
        )
        self.assertEqual(TreePrinter().print(binary), expected)

    def test_declaration_tree(self):
        statement = parse_source('@SET name = "app"')[0]
        expected = (
            "VariableDeclaration\n"
            "├─Name: IDENTIFIER [name] @Line:1,Col:6 (Literal: name)\n"
            "└─Initializer: Literal\n"
            "  └─Value: \"app\"\n"
        )
        self.assertEqual(TreePrinter().print(statement), expected)

    def test_if_tree_contains_branches(self):
        statements = parse_source("@IF x > 1\nRUN a\n@ELSE\nRUN b\n@END\n")
        text = TreePrinter().print_program(statements)

        self.assertTrue(text.startswith("If\n├─Condition: Binary\n"))
        self.assertIn("├─Then: Block\n", text)
        self.assertIn("└─Else: Block\n", text)
        self.assertIn("RAW_LINE [RUN b] @Line:4,Col:1 (Literal: RUN b)", text)

    def test_format_value(self):
        self.assertEqual(format_value(None), "nil")
        self.assertEqual(format_value(True), "TRUE")
        self.assertEqual(format_value(2.5), "2.5")
        self.assertEqual(format_value("s"), '"s"')


class TestSourcePrinter(unittest.TestCase):
    """Test cases for printing statements back to source."""

    def test_simple_program(self):
        source = "@SET x = 1\n@IF x > 0\nRUN echo\n@END\n"
        printed = SourcePrinter().print(parse_source(source))
        self.assertEqual(printed, "@SET x = 1\n@IF x > 0\n  RUN echo\n@END\n")

    def test_boolean_outside_directive_line(self):
        printed = SourcePrinter().print(parse_source("@SET x\nx = @TRUE\n"))
        self.assertEqual(printed, "@SET x\nx = @TRUE\n")

    def test_compound_assignment_is_expanded(self):
        printed = SourcePrinter().print(parse_source("@SET x = 1\nx -= 2 - 1\n"))
        self.assertEqual(printed, "@SET x = 1\nx = x - (2 - 1)\n")

    def test_round_trip(self):
        source = (
            "# build file\n"
            "@SET debug = TRUE\n"
            "@SET count = (1 + 2) * 3\n"
            "FROM alpine:3.19\n"
            "@IF debug == TRUE\n"
            "    RUN echo \"debug\" \\\n"
            "        --verbose\n"
            "@ELIF count > 5\n"
            "    count -= 1\n"
            "@ELIF !debug\n"
            "    count = -count\n"
            "@ELSE\n"
            "    @SET flag = FALSE\n"
            "@END\n"
            "@FOR item IN items\n"
            "    @SET inner = \"x\"\n"
            "@END\n"
            "CMD [\"sh\"]\n"
        )
        first = SourcePrinter().print(parse_source(source))
        second = SourcePrinter().print(parse_source(first))

        self.assertEqual(first, second)
        self.assertIn("@FOR _ IN\n", first)
        self.assertIn("  count = count - 1\n", first)


if __name__ == "__main__":
    unittest.main()
