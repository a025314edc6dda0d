"""
Error handling for the Docklett parser.

Syntax errors carry the offending token and a Diagnostic. The parser
recovers from each one, so a single parse reports every broken line.

Author: xwest
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=token.location,
            severity="error",
            code=code,
            lexeme=token.lexeme,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def location(self):
        return self.diagnostic.location

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def where(self) -> str:
        """' at end' for EOF, otherwise " at 'lexeme'"."""
        if self.token.type == TokenType.EOF:
            return " at end"
        if self.token.type == TokenType.NEWLINE:
            return " at newline"
        return f" at '{self.token.lexeme}'"

    def report_line(self) -> str:
        """One-line summary in the form '[line N] Error at 'x': message'."""
        return f"[line {self.token.line}] Error{self.where}: {self.message}"

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """Recovery boundaries and suggestion helpers for syntax diagnostics."""

    # Tokens that start a statement; synchronization stops in front of them
    STATEMENT_BOUNDARIES = {
        TokenType.SET,
        TokenType.IF,
        TokenType.ELIF,
        TokenType.ELSE,
        TokenType.FOR,
        TokenType.END,
        TokenType.RAW_LINE,
    }

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.NEWLINE: ["Put each statement on its own line"],
            TokenType.END: ["Close the block with '@END'"],
            TokenType.IDENTIFIER: ["Use a name made of letters, digits and '_'"],
            TokenType.IN: ["Write loops as '@FOR name IN items'"],
        }
        return token_suggestions.get(expected, [])

    @staticmethod
    def suggest_operator_corrections(found: Token) -> List[str]:
        """Suggest fixes when an operator shows up where an operand belongs."""
        corrections = {
            TokenType.ASSIGN: ["Use '==' for comparison"],
            TokenType.LOGICAL_AND: ["'&&' needs an operand on both sides"],
            TokenType.PLUS: ["Unary '+' is not supported, drop it"],
        }
        return corrections.get(found.type, [])


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Expected token not found",
    "P003": "Invalid assignment target",
    "P004": "Unclosed block",
    "P005": "Invalid expression",
}


def create_expected_token_error(expected: Union[TokenType, str], found: Token,
                                message: Optional[str] = None) -> ParseError:
    """Create an error for a token that does not match what the grammar needs."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    code = "P004" if expected == TokenType.END else "P002"
    suggestions = SyntaxErrorRecovery.suggest_missing_token(expected) if isinstance(expected, TokenType) else []

    return ParseError(
        message=message or f"expected {expected_str}, found {found.type.name}",
        token=found,
        code=code,
        help_text=f"The parser expected to see {expected_str} at this position.",
        suggestions=suggestions
    )


def create_unexpected_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    if found.type == TokenType.EOF:
        message = "unexpected end of input"
    elif found.type == TokenType.NEWLINE:
        message = "unexpected end of line"
    else:
        message = f"unexpected token {found.lexeme}"

    return ParseError(
        message=message,
        token=found,
        code="P001",
        help_text="Expected a literal, a variable name or '('.",
        suggestions=SyntaxErrorRecovery.suggest_operator_corrections(found)
    )


def create_invalid_assignment_error(operator: Token) -> ParseError:
    """Create an error for assigning to something that is not a variable."""
    return ParseError(
        message="invalid assignment target",
        token=operator,
        code="P003",
        help_text=f"Only a variable name may appear to the left of '{operator.lexeme}'.",
    )


def create_invalid_directive_error(found: Token, context: str) -> ParseError:
    """Create an error for a directive that is not valid where it appears."""
    return ParseError(
        message=f"{found.lexeme} is not valid {context}",
        token=found,
        code="P005",
        help_text="@ELIF and @ELSE belong inside an @IF block, @END closes one.",
    )
