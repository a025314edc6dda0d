"""
Error handling for the Docklett scanner.

Also home of the Diagnostic record shared by every phase (scan, parse,
runtime), so a caller can render all of them the same way.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation, DSL_KEYWORDS


@dataclass
class Diagnostic:
    """A single diagnostic: where, what, and how bad."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    lexeme: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def __str__(self) -> str:
        code = f"[{self.code}]" if self.code else ""
        result = f"{self.severity.upper()}{code}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class ScanError(Exception):
    """
    Lexical error found while scanning.

    Scanning does not stop on a ScanError; the lexer records it and
    carries on so one pass reports every bad character.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        lexeme: Optional[str] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            lexeme=lexeme,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorRecovery:
    """Suggestion helpers used when building scan diagnostics."""

    @staticmethod
    def suggest_directive_corrections(invalid_word: str) -> List[str]:
        """Suggest directive keywords within edit distance 2 of the given word."""
        candidates = []
        for keyword in DSL_KEYWORDS:
            distance = ErrorRecovery.edit_distance(invalid_word.upper(), keyword)
            if distance <= 2:
                candidates.append((distance, keyword))

        return [f"@{keyword}" for _, keyword in sorted(candidates)[:3]]

    @staticmethod
    def edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery.edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


# Scan error codes
ERROR_CODES = {
    "L001": "Unexpected character",
    "L002": "Unterminated string literal",
    "L003": "Unrecognized directive",
    "L004": "Number literal too large",
}


def create_unexpected_character_error(char: str, location: SourceLocation) -> ScanError:
    """Create an error for a character that starts no token."""
    if char == "&":
        help_text = "Logical and is written '&&'."
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in Docklett source."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return ScanError(
        message=f"unexpected character: '{char}'",
        location=location,
        lexeme=char,
        code="L001",
        help_text=help_text
    )


def create_unterminated_string_error(lexeme: str, location: SourceLocation) -> ScanError:
    """Create an error for a string literal that runs into end of input."""
    return ScanError(
        message="unterminated string literal",
        location=location,
        lexeme=lexeme,
        code="L002",
        help_text="String literals must be closed with a matching '\"'."
    )


def create_unrecognized_directive_error(word: str, location: SourceLocation) -> ScanError:
    """Create an error for an '@word' that is not a directive keyword."""
    suggestions = ErrorRecovery.suggest_directive_corrections(word)
    return ScanError(
        message=f"unrecognized directive '@{word}'",
        location=location,
        lexeme=f"@{word}",
        code="L003",
        help_text="Directives are: " + ", ".join(f"@{k}" for k in DSL_KEYWORDS),
        suggestions=[f"Did you mean '{s}'?" for s in suggestions]
    )


def create_number_too_large_error(lexeme: str, location: SourceLocation) -> ScanError:
    """Create an error for a number literal with no finite value."""
    return ScanError(
        message="number literal too large",
        location=location,
        lexeme=lexeme,
        code="L004",
        help_text="Integer literals are limited in digits and floats must be finite."
    )
