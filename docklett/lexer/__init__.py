"""
Docklett Lexer Package

Scanner for Docklett sources: Dockerfile instructions pass through as raw
lines, '@' directives and expression lines are tokenized.

Key Features:
- Significant NEWLINE tokens (statement terminators)
- Raw host-command lines with backslash continuation
- Error recovery: every lexical error of a pass is reported
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, DSL_KEYWORDS, HOST_COMMAND_KEYWORDS
from .lexer import Lexer, scan
from .errors import Diagnostic, ScanError

__all__ = [
    "Lexer",
    "scan",
    "Token",
    "TokenType",
    "SourceLocation",
    "DSL_KEYWORDS",
    "HOST_COMMAND_KEYWORDS",
    "Diagnostic",
    "ScanError",
]
