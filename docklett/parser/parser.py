"""
Docklett Recursive Descent Parser

Builds statements from the scanner's token stream. Expressions use one
method per precedence tier, lowest first:

    assignment -> equality -> comparison -> term -> factor -> unary -> primary

Statements are newline-terminated. Directive blocks (@IF/@ELIF/@ELSE,
@FOR) run until their @END.

Errors use panic-mode recovery: the failing rule raises ParseError, the
nearest declaration catches it, records it and skips ahead to the next
statement boundary so one pass finds every broken statement.

Author: xwest
"""

import logging
from typing import List, Optional, Tuple

from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    Expression, Literal, Variable, Unary, Binary, Grouping, Assignment,
    Statement, ExpressionStatement, VariableDeclaration, Block, If, Instruction
)
from .errors import (
    ParseError, SyntaxErrorRecovery, create_expected_token_error,
    create_unexpected_token_error, create_invalid_assignment_error,
    create_invalid_directive_error
)

logger = logging.getLogger(__name__)


# Compound assignment operator -> the binary operator it applies
COMPOUND_ASSIGNMENT = {
    TokenType.PLUS_ASSIGN: TokenType.PLUS,
    TokenType.MINUS_ASSIGN: TokenType.MINUS,
    TokenType.MULTIPLY_ASSIGN: TokenType.MULTIPLY,
    TokenType.DIVIDE_ASSIGN: TokenType.DIVIDE,
}

ASSIGNMENT_OPERATORS = (TokenType.ASSIGN,) + tuple(COMPOUND_ASSIGNMENT)


class Parser:
    """
    Docklett parser.

    ``parse()`` returns the statement list, or an empty list when any
    syntax error was found. The errors themselves are on ``self.errors``.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
        """
        self.tokens = tokens
        self.current = 0
        self.errors: List[ParseError] = []

    def parse(self) -> List[Statement]:
        """
        Parse the token stream into statements.

        Returns:
            Statements in source order, or [] if there were syntax errors
        """
        self.current = 0
        self.errors = []
        statements = []

        while not self._is_at_end():
            # Blank lines
            if self._match(TokenType.NEWLINE):
                continue

            statement = self._parse_declaration()
            if statement is not None:
                statements.append(statement)

        if self.errors:
            logger.debug("parse failed with %d errors", len(self.errors))
            return []

        return statements

    # Statements

    def _parse_declaration(self) -> Optional[Statement]:
        """Parse one declaration, recovering from any syntax error inside it."""
        try:
            if self._match(TokenType.SET):
                return self._parse_variable_declaration()
            return self._parse_statement()
        except ParseError as e:
            self._report(e)
            self._synchronize()
            return None

    def _parse_variable_declaration(self) -> VariableDeclaration:
        """@SET name [= expression]"""
        name = self._consume(TokenType.IDENTIFIER, "expected identifier after @SET")

        initializer = None
        if self._match(TokenType.ASSIGN):
            initializer = self._parse_expression()

        self._consume_line_end("expected newline after variable declaration")
        return VariableDeclaration(name, initializer)

    def _parse_statement(self) -> Statement:
        if self._match(TokenType.IF):
            return self._parse_if_statement()
        if self._match(TokenType.FOR):
            return self._parse_for_block()
        if self._match(TokenType.RAW_LINE):
            return self._parse_instruction()

        if self._check_any(TokenType.ELIF, TokenType.ELSE):
            raise create_invalid_directive_error(self._peek(), "outside an @IF block")
        if self._check(TokenType.END):
            raise create_invalid_directive_error(self._peek(), "without an open block")

        return self._parse_expression_statement()

    def _parse_instruction(self) -> Instruction:
        token = self._previous()
        self._consume_line_end("expected newline after instruction")
        return Instruction(token)

    def _parse_expression_statement(self) -> ExpressionStatement:
        expr = self._parse_expression()
        self._consume_line_end("expected newline after expression")
        return ExpressionStatement(expr)

    def _parse_if_statement(self) -> If:
        """
        @IF condition ... [@ELIF condition ...]* [@ELSE ...] @END

        Only the outermost clause consumes the @END.
        """
        statement = self._parse_if_clause()
        self._consume(TokenType.END, "expected @END to close @IF block")
        self._consume_line_end("expected newline after @END")
        return statement

    def _parse_if_clause(self) -> If:
        condition = self._parse_condition()

        then_branch = self._parse_body()
        else_branch = None

        if self._match(TokenType.ELIF):
            else_branch = self._parse_if_clause()
        elif self._match(TokenType.ELSE):
            self._consume_line_end("expected newline after @ELSE")
            else_branch = self._parse_body()

        return If(condition, then_branch, else_branch)

    def _parse_condition(self) -> Optional[Expression]:
        """
        Condition of an @IF/@ELIF header and its newline.

        A broken header is reported and skipped; the clause body and its
        @END are still parsed.
        """
        try:
            condition = self._parse_expression()
            self._consume(TokenType.NEWLINE, "expected newline after condition")
            return condition
        except ParseError as e:
            self._report(e)
            self._skip_header()
            return None

    def _parse_for_block(self) -> Block:
        """
        @FOR name IN ... @END

        Loops are not expanded: the header is checked, the rest of it is
        skipped and the body becomes a plain block.
        """
        try:
            self._consume(TokenType.IDENTIFIER, "expected loop variable after @FOR")
            self._consume(TokenType.IN, "expected IN after loop variable")
        except ParseError as e:
            self._report(e)

        self._skip_header()

        body = self._parse_body()
        self._consume(TokenType.END, "expected @END to close @FOR block")
        self._consume_line_end("expected newline after @END")
        return body

    def _parse_body(self) -> Block:
        """Parse declarations up to the next @ELIF, @ELSE or @END."""
        statements = []

        while not self._is_at_end() and not self._check_any(
            TokenType.ELIF, TokenType.ELSE, TokenType.END
        ):
            if self._match(TokenType.NEWLINE):
                continue

            statement = self._parse_declaration()
            if statement is not None:
                statements.append(statement)

        return Block(statements)

    # Expressions

    def _parse_expression(self) -> Expression:
        return self._parse_assignment()

    def _parse_assignment(self) -> Expression:
        """Right-associative; compound forms desugar to name = name op value."""
        expr = self._parse_equality()

        if self._match(*ASSIGNMENT_OPERATORS):
            operator = self._previous()
            value = self._parse_assignment()

            if not isinstance(expr, Variable):
                raise create_invalid_assignment_error(operator)

            if operator.type in COMPOUND_ASSIGNMENT:
                binary_operator = Token(
                    COMPOUND_ASSIGNMENT[operator.type],
                    operator.lexeme[:-1],
                    None,
                    operator.location
                )
                # x -= a - b means x = x - (a - b)
                if isinstance(value, (Binary, Assignment)):
                    value = Grouping(value)
                value = Binary(Variable(expr.name), binary_operator, value)

            return Assignment(expr.name, value)

        return expr

    def _parse_equality(self) -> Expression:
        expr = self._parse_comparison()

        while self._match(TokenType.EQUAL, TokenType.NOT_EQUAL):
            operator = self._previous()
            right = self._parse_comparison()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_comparison(self) -> Expression:
        expr = self._parse_term()

        while self._match(TokenType.GREATER_THAN, TokenType.GREATER_EQUAL,
                          TokenType.LESS_THAN, TokenType.LESS_EQUAL):
            operator = self._previous()
            right = self._parse_term()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_term(self) -> Expression:
        expr = self._parse_factor()

        while self._match(TokenType.PLUS, TokenType.MINUS):
            operator = self._previous()
            right = self._parse_factor()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_factor(self) -> Expression:
        expr = self._parse_unary()

        while self._match(TokenType.MULTIPLY, TokenType.DIVIDE):
            operator = self._previous()
            right = self._parse_unary()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_unary(self) -> Expression:
        if self._match(TokenType.LOGICAL_NOT, TokenType.MINUS):
            operator = self._previous()
            right = self._parse_unary()
            return Unary(operator, right)

        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        if self._match(TokenType.TRUE, TokenType.FALSE, TokenType.NUMBER, TokenType.STRING):
            token = self._previous()
            return Literal(token.value, token)

        if self._match(TokenType.IDENTIFIER):
            return Variable(self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expr = self._parse_expression()
            self._consume(TokenType.RIGHT_PAREN, "expected ')' after expression")
            return Grouping(expr)

        raise create_unexpected_token_error(self._peek())

    # Error recovery

    def _report(self, error: ParseError):
        self.errors.append(error)
        logger.debug("%s", error.report_line())

    def _skip_header(self):
        """Skip the rest of a block header line, newline included."""
        while not self._check(TokenType.NEWLINE) and not self._is_at_end():
            self._advance()
        self._match(TokenType.NEWLINE)

    def _synchronize(self):
        """
        Discard the offending token, then everything up to a statement boundary.

        Stops once the previous token was a NEWLINE or the current one starts
        a statement. EOF is never consumed.
        """
        self._advance()

        while not self._is_at_end():
            if self._previous().type == TokenType.NEWLINE:
                return
            if self._peek().type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES:
                return
            self._advance()

    # Utility methods

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _check_any(self, *token_types: TokenType) -> bool:
        return self._peek().type in token_types

    def _advance(self) -> Token:
        """Consume and return current token. Never moves past EOF."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        return self.tokens[self.current]

    def _previous(self) -> Token:
        """Return previous token."""
        if self.current > 0:
            return self.tokens[self.current - 1]
        return self.tokens[0]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()

        raise create_expected_token_error(token_type, self._peek(), message)

    def _consume_line_end(self, message: str):
        """A statement ends at a NEWLINE (consumed) or at EOF (left in place)."""
        if self._match(TokenType.NEWLINE) or self._is_at_end():
            return

        raise create_expected_token_error(TokenType.NEWLINE, self._peek(), message)


def parse(tokens: List[Token]) -> Tuple[List[Statement], List[ParseError]]:
    """
    Parse a token list.

    Args:
        tokens: Tokens ending with EOF

    Returns:
        (statements, errors); statements is empty whenever errors is not
    """
    parser = Parser(tokens)
    statements = parser.parse()
    return statements, list(parser.errors)
