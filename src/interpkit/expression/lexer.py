"""Tokenizer for single-variable math expressions.

Grammar of the token stream:

* numbers: ``12``, ``3.5``, ``.5``, ``1e-3``
* identifiers: function names, the constants ``pi``/``e`` and the variable
* operators ``+ - * / ^`` and the brackets ``(`` ``)``

Identifiers are lower-cased so ``SIN(X)`` and ``sin(x)`` are the same.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List
import re

from ..errors import EvaluationError

TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<number>[0-9.]+(?:[eE][+-]?[0-9]+)?)
    | (?P<ident>[A-Za-z_][A-Za-z_0-9]*)
    | (?P<op>[-+*/^])
    | (?P<lparen>\()
    | (?P<rparen>\))
    """,
    re.VERBOSE,
)

NUMBER = "number"
IDENT = "ident"
OP = "op"
LPAREN = "lparen"
RPAREN = "rparen"
END = "end"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    position: int
    value: float = 0.0

    def __str__(self) -> str:
        return "end of input" if self.kind == END else repr(self.text)


def iter_tokens(expression: str) -> Iterator[Token]:
    """Yield tokens of ``expression`` followed by a single ``END`` token."""

    pos = 0
    length = len(expression)
    while pos < length:
        m = TOKEN_RE.match(expression, pos)
        if m is None:
            raise EvaluationError(
                f"Unrecognized token {expression[pos]!r}",
                expression=expression,
                position=pos,
            )
        kind = m.lastgroup
        text = m.group()
        if kind == NUMBER:
            try:
                value = float(text)
            except ValueError:
                raise EvaluationError(
                    f"Malformed numeric literal {text!r}",
                    expression=expression,
                    position=pos,
                ) from None
            yield Token(NUMBER, text, pos, value)
        elif kind == IDENT:
            yield Token(IDENT, text.lower(), pos)
        elif kind != "ws":
            yield Token(kind, text, pos)
        pos = m.end()
    yield Token(END, "", length)


def tokenize(expression: str) -> List[Token]:
    """Return the full token list for ``expression``."""

    return list(iter_tokens(expression))
