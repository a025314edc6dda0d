"""
Docklett Lexer - turns a Docklett/Dockerfile source into tokens

Three scanning modes share one pass over the text:
- normal: expressions, operators, literals, identifiers
- directive: the rest of a line after '@', where bare words like TRUE
  are keywords
- raw line: a Dockerfile instruction, swallowed verbatim up to the newline
  (backslash continuations included)

Newlines are real tokens here, the grammar uses them as terminators.

Author: xwest
"""

import logging
import math
from typing import List, Optional, Tuple

from .tokens import (
    Token, TokenType, SourceLocation, DSL_KEYWORDS, HOST_COMMAND_KEYWORDS, OPERATORS
)
from .errors import (
    ScanError, create_unexpected_character_error,
    create_unterminated_string_error, create_unrecognized_directive_error,
    create_number_too_large_error
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    Docklett lexical analyzer.

    Converts source text into a list of positioned tokens. Errors are
    collected on ``self.errors`` and scanning continues past them.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string (UTF-8 decoded)
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[ScanError] = []

        # Per-line state, reset at every newline
        self.directive_mode = False
        self.line_has_tokens = False

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens.clear()
        self.errors.clear()
        self.directive_mode = False
        self.line_has_tokens = False

        while self.pos < len(self.source):
            try:
                self._skip_whitespace_and_comments()

                if self.pos >= len(self.source):
                    break

                token = self._next_token()
                self.tokens.append(token)

                if token.type == TokenType.NEWLINE:
                    self.directive_mode = False
                    self.line_has_tokens = False
                else:
                    self.line_has_tokens = True

            except ScanError as e:
                # Offending input is already consumed, leave an ILLEGAL token in its place
                self.tokens.append(Token(TokenType.ILLEGAL, e.diagnostic.lexeme or "", None, e.location))
                self.errors.append(e)
                self.line_has_tokens = True
                logger.debug("scan error at %s: %s", e.location, e.message)

        eof_location = SourceLocation(self.filename, self.line, self.column, self.pos)
        self.tokens.append(Token(TokenType.EOF, "", None, eof_location))

        logger.debug("scanned %d tokens from %s (%d errors)",
                     len(self.tokens), self.filename, len(self.errors))
        return self.tokens

    def _next_token(self) -> Token:
        """Scan one token starting at the current position."""
        location = self._location()
        current_char = self.source[self.pos]

        if current_char == '\n':
            self._advance()
            return Token(TokenType.NEWLINE, '\n', None, location)

        if current_char == '"':
            return self._tokenize_string(location)

        if current_char == '@':
            return self._tokenize_directive(location)

        if current_char.isdecimal():
            return self._tokenize_number(location)

        if self._is_identifier_start(current_char):
            return self._tokenize_word(location)

        # Two-character operators first, then the single-character fallback
        for op_len in (2, 1):
            candidate = self.source[self.pos:self.pos + op_len]
            if len(candidate) == op_len and candidate in OPERATORS:
                self._advance_by(op_len)
                return Token(OPERATORS[candidate], candidate, None, location)

        self._advance()
        raise create_unexpected_character_error(current_char, location)

    def _tokenize_string(self, location: SourceLocation) -> Token:
        """Tokenize a verbatim string literal, newlines allowed."""
        start_pos = self.pos
        self._advance()  # Skip opening quote

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            self._advance()

        if self.pos >= len(self.source):
            raise create_unterminated_string_error(self.source[start_pos:self.pos], location)

        self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, lexeme[1:-1], location)

    def _tokenize_directive(self, location: SourceLocation) -> Token:
        """Tokenize '@WORD' against the directive keyword table."""
        start_pos = self.pos
        self._advance()  # Skip '@'
        self.directive_mode = True

        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        word = self.source[start_pos + 1:self.pos]
        token_type = DSL_KEYWORDS.get(word)
        if token_type is None:
            raise create_unrecognized_directive_error(word, location)

        return Token(token_type, self.source[start_pos:self.pos], self._keyword_value(token_type), location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize an integer, or a float when a single '.' follows the digits."""
        start_pos = self.pos
        is_float = False

        while self.pos < len(self.source) and self.source[self.pos].isdecimal():
            self._advance()

        if self._current() == '.':
            is_float = True
            self._advance()
            while self.pos < len(self.source) and self.source[self.pos].isdecimal():
                self._advance()

        lexeme = self.source[start_pos:self.pos]
        try:
            value = float(lexeme) if is_float else int(lexeme)
        except ValueError:
            # int() refuses literals past the interpreter digit limit
            raise create_number_too_large_error(lexeme, location) from None

        if math.isinf(value):
            raise create_number_too_large_error(lexeme, location)

        return Token(TokenType.NUMBER, lexeme, value, location)

    def _tokenize_word(self, location: SourceLocation) -> Token:
        """Tokenize an identifier, a directive keyword, or a host-command line."""
        start_pos = self.pos
        self._advance()

        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        word = self.source[start_pos:self.pos]

        if self.directive_mode:
            token_type = DSL_KEYWORDS.get(word)
            if token_type is not None:
                return Token(token_type, word, self._keyword_value(token_type), location)
        elif not self.line_has_tokens and word.upper() in HOST_COMMAND_KEYWORDS:
            return self._tokenize_raw_line(start_pos, location)

        return Token(TokenType.IDENTIFIER, word, word, location)

    def _tokenize_raw_line(self, start_pos: int, location: SourceLocation) -> Token:
        """
        Consume a host-command line verbatim.

        Stops before the terminating newline so it still becomes a NEWLINE
        token. A trailing backslash continues the instruction on the next
        physical line.
        """
        last_non_blank = ''
        while self.pos < len(self.source):
            current_char = self.source[self.pos]
            if current_char == '\n':
                if last_non_blank != '\\':
                    break
                last_non_blank = ''
            elif current_char not in ' \t\r':
                last_non_blank = current_char
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.RAW_LINE, lexeme, lexeme.rstrip(), location)

    @staticmethod
    def _keyword_value(token_type: TokenType) -> Optional[bool]:
        if token_type == TokenType.TRUE:
            return True
        if token_type == TokenType.FALSE:
            return False
        return None

    def _is_identifier_start(self, char: str) -> bool:
        """Check if character can start an identifier."""
        return char.isalpha() or char == '_'

    def _is_identifier_continue(self, char: str) -> bool:
        """Check if character can continue an identifier."""
        return char.isalpha() or char.isdecimal() or char == '_'

    def _skip_whitespace_and_comments(self):
        """Skip blanks and '#' comments, leaving the newline in place."""
        while self.pos < len(self.source):
            current_char = self.source[self.pos]

            if current_char in ' \t\r':
                self._advance()
                continue

            if current_char == '#':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            break

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _current(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return '\0'

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


def scan(source: str, filename: str = "<string>") -> Tuple[List[Token], List[ScanError]]:
    """
    Scan a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        (tokens, errors); tokens always end with EOF even when errors exist
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()
    return tokens, list(lexer.errors)
