"""
Variable storage for the Docklett interpreter.

Each Environment is one scope with a link to the enclosing scope. Lookup and
assignment walk outward; definition is always local, so an inner @SET
shadows an outer variable of the same name.

Author: xwest
"""

from typing import Any, Dict, List, Optional

from ..lexer.tokens import Token
from ..lexer.errors import ErrorRecovery
from .errors import create_undefined_variable_error


class Environment:
    """A scope of variable bindings."""

    def __init__(self, enclosing: Optional['Environment'] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Any) -> None:
        """Bind name in this scope, replacing any local binding."""
        self.values[name] = value

    def get(self, name: Token) -> Any:
        """Look up a variable in this scope and enclosing scopes."""
        scope = self._resolve(name.lexeme)
        if scope is None:
            raise create_undefined_variable_error(name, self.get_similar_names(name.lexeme))

        return scope.values[name.lexeme]

    def assign(self, name: Token, value: Any) -> None:
        """Overwrite the nearest existing binding. Never creates one."""
        scope = self._resolve(name.lexeme)
        if scope is None:
            raise create_undefined_variable_error(name, self.get_similar_names(name.lexeme))

        scope.values[name.lexeme] = value

    def _resolve(self, name: str) -> Optional['Environment']:
        """Find the innermost scope that binds name."""
        if name in self.values:
            return self

        if self.enclosing is not None:
            return self.enclosing._resolve(name)

        return None

    def is_defined(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.enclosing is not None and self.enclosing.is_defined(name)

    def get_all_values(self) -> Dict[str, Any]:
        """Get all bindings visible in this scope, inner ones winning."""
        result = {}

        if self.enclosing is not None:
            result.update(self.enclosing.get_all_values())

        result.update(self.values)
        return result

    def get_similar_names(self, name: str, max_distance: int = 2) -> List[str]:
        """Visible names close to the given one (for error suggestions)."""
        candidates = []
        for candidate in self.get_all_values():
            distance = ErrorRecovery.edit_distance(name, candidate)
            if distance <= max_distance:
                candidates.append((distance, candidate))

        return [candidate for _, candidate in sorted(candidates)[:3]]

    def __repr__(self) -> str:
        return f"Environment({self.values!r}, enclosing={self.enclosing is not None})"
