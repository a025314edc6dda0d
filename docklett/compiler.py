"""
Docklett compilation pipeline.

Runs the phases in order: scan, parse, interpret. Scan and parse errors
are gathered into one batch and the program is not executed when there
are any. Parsing is skipped when scanning already failed.

Author: xwest
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .lexer.tokens import Token
from .lexer.lexer import Lexer
from .lexer.errors import Diagnostic, ScanError
from .parser.ast_nodes import Statement
from .parser.parser import Parser
from .parser.errors import ParseError
from .interpreter.environment import Environment
from .interpreter.errors import InterpreterError
from .interpreter.interpreter import Interpreter

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Output of the scan and parse phases."""
    filename: str
    source: str
    tokens: List[Token] = field(default_factory=list)
    statements: List[Statement] = field(default_factory=list)
    errors: List[Union[ScanError, ParseError]] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if scanning or parsing found any errors."""
        return len(self.errors) > 0

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return [error.diagnostic for error in self.errors]


@dataclass
class RunResult:
    """Output of a full compile and run."""
    compile_result: CompileResult
    environment: Optional[Environment] = None
    instructions: List[str] = field(default_factory=list)
    error: Optional[InterpreterError] = None

    @property
    def succeeded(self) -> bool:
        return not self.compile_result.has_errors() and self.error is None

    @property
    def diagnostics(self) -> List[Diagnostic]:
        diagnostics = self.compile_result.diagnostics
        if self.error is not None:
            diagnostics.append(self.error.diagnostic)
        return diagnostics

    def render(self) -> str:
        """Emitted Dockerfile text, one instruction per line."""
        return "".join(line + "\n" for line in self.instructions)


class Compiler:
    """Drives one source text through the Docklett phases."""

    def compile(self, source: str, filename: str = "<string>") -> CompileResult:
        """
        Scan and parse a source string.

        Args:
            source: Docklett source text
            filename: Name used in diagnostics

        Returns:
            CompileResult; statements is empty when errors were found
        """
        result = CompileResult(filename=filename, source=source)

        lexer = Lexer(source, filename)
        result.tokens = lexer.tokenize()
        if lexer.has_errors():
            result.errors.extend(lexer.errors)
            logger.info("%s: %d scan errors, not parsing", filename, len(lexer.errors))
            return result

        parser = Parser(result.tokens)
        result.statements = parser.parse()
        if parser.errors:
            result.errors.extend(parser.errors)
            logger.info("%s: %d parse errors", filename, len(parser.errors))
            return result

        logger.info("%s: %d tokens, %d statements", filename,
                    len(result.tokens), len(result.statements))
        return result

    def run(self, source: str, filename: str = "<string>",
            environment: Optional[Environment] = None) -> RunResult:
        """
        Compile and, if that succeeded, execute a source string.

        Args:
            source: Docklett source text
            filename: Name used in diagnostics
            environment: Root environment, a fresh one if omitted
        """
        compile_result = self.compile(source, filename)
        result = RunResult(compile_result=compile_result)
        if compile_result.has_errors():
            return result

        interpreter = Interpreter(environment)
        result.error = interpreter.interpret(compile_result.statements)
        result.environment = interpreter.globals
        result.instructions = list(interpreter.instructions)

        if result.error is not None:
            logger.info("%s: stopped by runtime error: %s", filename, result.error)
        else:
            logger.info("%s: emitted %d instructions", filename, len(result.instructions))

        return result

    def compile_file(self, path: Union[str, Path]) -> CompileResult:
        """Read a UTF-8 file and compile it."""
        path = Path(path)
        return self.compile(path.read_text(encoding="utf-8"), str(path))

    def run_file(self, path: Union[str, Path],
                 environment: Optional[Environment] = None) -> RunResult:
        """Read a UTF-8 file, compile and run it."""
        path = Path(path)
        return self.run(path.read_text(encoding="utf-8"), str(path), environment)
