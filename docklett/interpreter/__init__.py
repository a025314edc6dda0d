"""
Docklett Interpreter Package

Tree-walking evaluation of parsed Docklett statements over a chain of
lexically nested environments.

Author: xwest
"""

from .environment import Environment
from .errors import InterpreterError
from .interpreter import Interpreter, interpret

__all__ = [
    "Environment",
    "Interpreter",
    "InterpreterError",
    "interpret",
]
