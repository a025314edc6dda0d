#!/usr/bin/env python3
"""
Main test runner for the Docklett tests.

Runs a quick end-to-end pipeline check, then the unittest suites under tests/.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_pipeline_check() -> bool:
    """Scan, parse and run a small Docklett file."""

    print("🚀 Docklett Test Suite")
    print("=" * 60)

    try:
        from docklett.lexer.lexer import Lexer
        from docklett.parser.parser import Parser
        from docklett.interpreter.interpreter import Interpreter
        print("✅ All docklett modules imported successfully")
        print()
    except ImportError as e:
        print(f"❌ Failed to import docklett modules: {e}")
        return False

    print("Testing simple pipeline...")
    code = """
@SET debug = TRUE
FROM alpine:3.19
@IF debug
RUN apk add --no-cache gdb
@ELSE
RUN echo release
@END
"""

    print("  🔧 Scanning...")
    lexer = Lexer(code, "<pipeline>")
    tokens = lexer.tokenize()
    if lexer.has_errors():
        print(f"     ❌ Scan errors: {len(lexer.errors)}")
        return False
    print(f"     Generated {len(tokens)} tokens")

    print("  🔧 Parsing...")
    parser = Parser(tokens)
    statements = parser.parse()
    if parser.errors:
        for error in parser.errors:
            print(f"     ❌ {error.report_line()}")
        return False
    print(f"     Generated {len(statements)} statements")

    print("  🔧 Interpreting...")
    interpreter = Interpreter()
    error = interpreter.interpret(statements)
    if error is not None:
        print(f"     ❌ Runtime error: {error}")
        return False

    if interpreter.instructions != ["FROM alpine:3.19", "RUN apk add --no-cache gdb"]:
        print(f"     ❌ Unexpected output: {interpreter.instructions}")
        return False
    print(f"     ✅ Emitted {len(interpreter.instructions)} instructions")
    print()
    return True


def run_all_tests() -> bool:
    if not run_pipeline_check():
        return False

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
