"""Single-variable math expression parsing and evaluation."""

from .evaluator import ExpressionEvaluator
from .lexer import Token, tokenize
from .parser import CONSTANTS, FUNCTIONS, Node, parse

__all__ = [
    "ExpressionEvaluator",
    "Token",
    "tokenize",
    "CONSTANTS",
    "FUNCTIONS",
    "Node",
    "parse",
]
