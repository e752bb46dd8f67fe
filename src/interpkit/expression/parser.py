"""Recursive descent parser producing an evaluable expression tree.

Precedence, lowest first::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('-' | '+') unary | power
    power   := primary ('^' unary)?
    primary := NUMBER | CONSTANT | VARIABLE
             | FUNCTION '(' expr ')' | '(' expr ')'

Exponentiation is right associative and binds tighter than a leading minus,
so ``-x^2`` is ``-(x^2)`` and ``2^-1`` is ``0.5``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Set
import math

from ..errors import EvaluationError
from .lexer import END, IDENT, LPAREN, NUMBER, OP, RPAREN, Token, tokenize


FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "exp": math.exp,
    "log": math.log,
    "ln": math.log,
    "sqrt": math.sqrt,
    "abs": abs,
}

CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

DEFAULT_VARIABLE = "x"


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------


class Node:
    """Base class for expression tree nodes."""

    def evaluate(self, x: float) -> float:  # pragma: no cover - interface
        raise NotImplementedError

    def variables(self) -> Set[str]:
        return set()


@dataclass(frozen=True)
class Number(Node):
    value: float

    def evaluate(self, x: float) -> float:
        return self.value


@dataclass(frozen=True)
class Variable(Node):
    name: str

    def evaluate(self, x: float) -> float:
        return x

    def variables(self) -> Set[str]:
        return {self.name}


@dataclass(frozen=True)
class Negate(Node):
    operand: Node

    def evaluate(self, x: float) -> float:
        return -self.operand.evaluate(x)

    def variables(self) -> Set[str]:
        return self.operand.variables()


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, x: float) -> float:
        a = self.left.evaluate(x)
        b = self.right.evaluate(x)
        if self.op == "+":
            return a + b
        if self.op == "-":
            return a - b
        if self.op == "*":
            return a * b
        if self.op == "/":
            if b == 0:
                raise ZeroDivisionError("division by zero")
            return a / b
        return math.pow(a, b)

    def variables(self) -> Set[str]:
        return self.left.variables() | self.right.variables()


@dataclass(frozen=True)
class Call(Node):
    name: str
    argument: Node

    def evaluate(self, x: float) -> float:
        return float(FUNCTIONS[self.name](self.argument.evaluate(x)))

    def variables(self) -> Set[str]:
        return self.argument.variables()


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class Parser:
    """Parse a token list into a :class:`Node` tree."""

    def __init__(self, expression: str, variable: str = DEFAULT_VARIABLE):
        self.expression = expression
        self.variable = variable.lower()
        self.tokens: List[Token] = tokenize(expression)
        self.index = 0

    # -- helpers ------------------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != END:
            self.index += 1
        return token

    def _error(self, message: str, token: Token) -> EvaluationError:
        return EvaluationError(message, expression=self.expression, position=token.position)

    # -- grammar ------------------------------------------------------------

    def parse(self) -> Node:
        if self.current.kind == END:
            raise EvaluationError("Empty expression", expression=self.expression)
        try:
            node = self._expr()
        except RecursionError:
            raise EvaluationError(
                "Expression is nested too deeply", expression=self.expression
            ) from None
        token = self.current
        if token.kind == RPAREN:
            raise self._error("Unmatched ')'", token)
        if token.kind != END:
            raise self._error(
                f"Unexpected token {token} (implicit multiplication is not supported)",
                token,
            )
        return node

    def _expr(self) -> Node:
        node = self._term()
        while self.current.kind == OP and self.current.text in "+-":
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self.current.kind == OP and self.current.text in "*/":
            op = self._advance().text
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        token = self.current
        if token.kind == OP and token.text in "+-":
            self._advance()
            operand = self._unary()
            return Negate(operand) if token.text == "-" else operand
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self.current.kind == OP and self.current.text == "^":
            self._advance()
            return BinaryOp("^", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self._advance()
        if token.kind == NUMBER:
            return Number(token.value)
        if token.kind == LPAREN:
            return self._group(token)
        if token.kind == IDENT:
            name = token.text
            if name == self.variable:
                return Variable(name)
            if name in CONSTANTS:
                return Number(CONSTANTS[name])
            if name in FUNCTIONS:
                opening = self.current
                if opening.kind != LPAREN:
                    raise self._error(f"Expected '(' after function {name!r}", opening)
                self._advance()
                return Call(name, self._group(opening))
            raise self._error(f"Unrecognized identifier {name!r}", token)
        if token.kind == END:
            raise self._error("Unexpected end of expression, missing operand", token)
        if token.kind == RPAREN:
            raise self._error("Unmatched ')'", token)
        raise self._error(f"Missing operand before {token}", token)

    def _group(self, opening: Token) -> Node:
        if self.current.kind == RPAREN:
            raise self._error("Empty brackets", self.current)
        node = self._expr()
        if self.current.kind != RPAREN:
            if self.current.kind == END:
                raise self._error("Unmatched '('", opening)
            raise self._error(f"Expected ')' but found {self.current}", self.current)
        self._advance()
        return node


def parse(expression: str, variable: str = DEFAULT_VARIABLE) -> Node:
    """Parse ``expression`` and return the root of its tree."""

    return Parser(expression, variable).parse()
