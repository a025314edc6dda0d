"""
Docklett Package

A small templating language on top of Dockerfiles: ordinary instructions
pass through, '@' directives add variables and conditionals.

Architecture:
    docklett/
    ├── lexer/           # Tokens and scanning
    ├── parser/          # AST, recursive descent parser, printers
    ├── interpreter/     # Environments and tree-walking evaluation
    ├── compiler.py      # Scan -> parse -> run pipeline
    └── cli.py           # Command line entry point

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer, scan
from .parser import Parser, parse
from .interpreter import Environment, Interpreter, interpret
from .compiler import Compiler, CompileResult, RunResult

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Interpreter",
    "Environment",
    "Compiler",
    "CompileResult",
    "RunResult",

    # Phase functions
    "scan",
    "parse",
    "interpret",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
