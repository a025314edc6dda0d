"""
Token definitions for the Docklett scanner.

Docklett source mixes three kinds of lines:
- Dockerfile instructions (FROM, RUN, COPY, ...) that pass through as raw lines
- Directives introduced by '@' (@SET, @IF, @ELIF, @ELSE, @FOR, @END)
- Plain expression lines (x = x + 1)

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in Docklett.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of file
    NEWLINE = auto()                # Statement terminator (significant)
    ILLEGAL = auto()                # Unrecognized input

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    IDENTIFIER = auto()             # variable_name
    STRING = auto()                 # "hello"
    NUMBER = auto()                 # 42, 3.14

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = auto()                 # =
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=

    PLUS = auto()                   # +
    PLUS_ASSIGN = auto()            # +=
    MINUS = auto()                  # -
    MINUS_ASSIGN = auto()           # -=
    MULTIPLY = auto()               # *
    MULTIPLY_ASSIGN = auto()        # *=
    DIVIDE = auto()                 # /
    DIVIDE_ASSIGN = auto()          # /=

    LOGICAL_NOT = auto()            # !
    LOGICAL_AND = auto()            # &&

    LESS_THAN = auto()              # <
    LESS_EQUAL = auto()             # <=
    GREATER_THAN = auto()           # >
    GREATER_EQUAL = auto()          # >=

    # ========================================================================
    # Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    COLON = auto()                  # :
    COMMA = auto()                  # ,

    # ========================================================================
    # Directive keywords (written as @SET, @IF, ...)
    # ========================================================================
    SET = auto()
    IF = auto()
    ELIF = auto()
    ELSE = auto()
    FOR = auto()
    IN = auto()
    END = auto()
    TRUE = auto()
    FALSE = auto()

    # ========================================================================
    # Host commands
    # ========================================================================
    RAW_LINE = auto()               # FROM alpine:3.19 (kept verbatim)


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Line and column are one-based; offset counts code points from the
    start of the source.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Docklett language.

    Contains the token type, lexeme (raw text), literal value,
    and source location for error reporting.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Literal value (int/float, str, bool, instruction text)
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {
            TokenType.STRING, TokenType.NUMBER, TokenType.TRUE, TokenType.FALSE
        }

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a directive keyword."""
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator."""
        return self.type in OPERATOR_TYPES


# Directive keywords, looked up after '@' (case-sensitive)
DSL_KEYWORDS = {
    "SET": TokenType.SET,
    "IF": TokenType.IF,
    "ELIF": TokenType.ELIF,
    "ELSE": TokenType.ELSE,
    "FOR": TokenType.FOR,
    "IN": TokenType.IN,
    "END": TokenType.END,
    "TRUE": TokenType.TRUE,
    "FALSE": TokenType.FALSE,
}

# Dockerfile verbs; a line starting with one of these is kept verbatim.
# Keys are upper case, lookups are case-insensitive.
HOST_COMMAND_KEYWORDS = {
    "ADD": TokenType.RAW_LINE,
    "ARG": TokenType.RAW_LINE,
    "CMD": TokenType.RAW_LINE,
    "COPY": TokenType.RAW_LINE,
    "ENTRYPOINT": TokenType.RAW_LINE,
    "ENV": TokenType.RAW_LINE,
    "EXPOSE": TokenType.RAW_LINE,
    "FROM": TokenType.RAW_LINE,
    "HEALTHCHECK": TokenType.RAW_LINE,
    "LABEL": TokenType.RAW_LINE,
    "MAINTAINER": TokenType.RAW_LINE,
    "ONBUILD": TokenType.RAW_LINE,
    "RUN": TokenType.RAW_LINE,
    "SHELL": TokenType.RAW_LINE,
    "STOPSIGNAL": TokenType.RAW_LINE,
    "USER": TokenType.RAW_LINE,
    "VOLUME": TokenType.RAW_LINE,
    "WORKDIR": TokenType.RAW_LINE,
}

# Longest match first: two-character forms are tried before one-character ones
OPERATORS = {
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "&&": TokenType.LOGICAL_AND,
    "+=": TokenType.PLUS_ASSIGN,
    "-=": TokenType.MINUS_ASSIGN,
    "*=": TokenType.MULTIPLY_ASSIGN,
    "/=": TokenType.DIVIDE_ASSIGN,

    "=": TokenType.ASSIGN,
    "!": TokenType.LOGICAL_NOT,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,

    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}

KEYWORD_TYPES = frozenset(DSL_KEYWORDS.values())

OPERATOR_TYPES = frozenset(
    token_type for lexeme, token_type in OPERATORS.items()
    if lexeme not in {"(", ")", "{", "}", "[", "]", ":", ","}
)
