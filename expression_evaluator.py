"""Tokenizado, parseo y evaluación de expresiones aritméticas.

El evaluador reconoce cadenas infijas con números decimales, los cuatro
operadores binarios ``+ - * /``, signos unarios y paréntesis. La expresión
se convierte primero en un AST (``Number``, ``UnaryOp``, ``BinaryOp``) y
después se reduce con las operaciones de un proveedor aritmético, de modo
que el mismo parser sirve al motor de ``float`` y al de precisión
arbitraria.
"""

import math
import re
from dataclasses import dataclass
from typing import NamedTuple, Union


class EvaluationFailure(ValueError):
    """Expresión vacía, mal formada, división por cero o resultado no finito."""


# ── Tokens ───────────────────────────────────────────────────────

class Token(NamedTuple):
    kind: str       # "number" | "op" | "lparen" | "rparen"
    text: str
    position: int


_TOKEN_RE = re.compile(
    r"\s*(?:(?P<number>\d+\.?\d*|\.\d+)|(?P<op>[+\-*/])|(?P<lparen>\()|(?P<rparen>\)))"
)


def tokenize(expression: str) -> list[Token]:
    """Divide la expresión en tokens. Ignora espacios."""
    tokens = []
    pos = 0
    end = len(expression.rstrip())

    while pos < end:
        match = _TOKEN_RE.match(expression, pos)
        if not match:
            raise EvaluationFailure(
                f"Carácter inválido en la posición {pos}: {expression[pos]!r}"
            )
        kind = match.lastgroup
        tokens.append(Token(kind, match.group(kind), match.start(kind)))
        pos = match.end()

    # "1.2.3" se tokeniza como "1.2" seguido de ".3"
    for prev, cur in zip(tokens, tokens[1:]):
        if prev.kind == "number" and cur.kind == "number":
            raise EvaluationFailure(f"Número mal formado en la posición {cur.position}")

    return tokens


# ── AST ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Number:
    text: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    left: "Node"
    right: "Node"
    op: str


Node = Union[Number, UnaryOp, BinaryOp]


class _Parser:
    """Descenso recursivo sobre la gramática

        expr   := term (("+" | "-") term)*
        term   := factor (("*" | "/") factor)*
        factor := ("+" | "-") factor | NUMBER | "(" expr ")"
    """

    def __init__(self, tokens: list[Token]):
        self._tokens = tokens
        self._index = 0

    def parse(self) -> Node:
        if not self._tokens:
            raise EvaluationFailure("Expresión vacía")
        node = self._expr()
        leftover = self._peek()
        if leftover is not None:
            raise EvaluationFailure(
                f"Token inesperado {leftover.text!r} en la posición {leftover.position}"
            )
        return node

    def _peek(self):
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _advance(self) -> Token:
        tok = self._tokens[self._index]
        self._index += 1
        return tok

    def _match_op(self, ops: str):
        tok = self._peek()
        if tok is not None and tok.kind == "op" and tok.text in ops:
            self._index += 1
            return tok.text
        return None

    def _expr(self) -> Node:
        node = self._term()
        while True:
            op = self._match_op("+-")
            if op is None:
                return node
            node = BinaryOp(node, self._term(), op)

    def _term(self) -> Node:
        node = self._factor()
        while True:
            op = self._match_op("*/")
            if op is None:
                return node
            node = BinaryOp(node, self._factor(), op)

    def _factor(self) -> Node:
        tok = self._peek()
        if tok is None:
            raise EvaluationFailure("Falta un operando al final de la expresión")

        if tok.kind == "op" and tok.text in "+-":
            self._advance()
            return UnaryOp(tok.text, self._factor())

        if tok.kind == "number":
            self._advance()
            return Number(tok.text)

        if tok.kind == "lparen":
            self._advance()
            node = self._expr()
            closing = self._peek()
            if closing is None or closing.kind != "rparen":
                raise EvaluationFailure("Falta ')'")
            self._advance()
            return node

        raise EvaluationFailure(
            f"Token inesperado {tok.text!r} en la posición {tok.position}"
        )


def parse(expression: str) -> Node:
    return _Parser(tokenize(expression)).parse()


# ── Proveedores aritméticos ──────────────────────────────────────

class FloatArithmeticProvider:
    """Aritmética IEEE-754 de doble precisión."""

    def number(self, text: str):
        return float(text)

    @staticmethod
    def _divide(a, b):
        if b == 0:
            raise ZeroDivisionError("División por cero")
        return a / b

    def build_operators(self) -> dict:
        return {
            "+": lambda a, b: a + b,
            "-": lambda a, b: a - b,
            "*": lambda a, b: a * b,
            "/": self._divide,
        }

    def is_finite(self, value) -> bool:
        return math.isfinite(value)


# ── Evaluador ────────────────────────────────────────────────────

class ExpressionEvaluator:
    """Parsea una expresión y la reduce con el proveedor aritmético."""

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else FloatArithmeticProvider()

    @property
    def provider(self):
        return self._provider

    def evaluate(self, expression: str):
        """Devuelve el valor numérico de la expresión.

        Raises:
            EvaluationFailure: expresión vacía o inválida, división por
                cero o resultado no finito.
        """
        if not expression or not expression.strip():
            raise EvaluationFailure("Expresión vacía")

        operators = self._provider.build_operators()

        try:
            tree = parse(expression)
            value = self._reduce(tree, operators)
        except ZeroDivisionError as exc:
            raise EvaluationFailure("División por cero") from exc
        except ArithmeticError as exc:
            raise EvaluationFailure("Desbordamiento") from exc
        except RecursionError as exc:
            raise EvaluationFailure("Expresión demasiado anidada") from exc

        if not self._provider.is_finite(value):
            raise EvaluationFailure("Resultado no finito")
        return value

    def _reduce(self, node: Node, operators: dict):
        if isinstance(node, Number):
            return self._provider.number(node.text)

        if isinstance(node, UnaryOp):
            operand = self._reduce(node.operand, operators)
            return -operand if node.op == "-" else operand

        left = self._reduce(node.left, operators)
        right = self._reduce(node.right, operators)
        result = operators[node.op](left, right)
        # inf * 0 produciría NaN más adelante; cortar en el primer no finito
        if not self._provider.is_finite(result):
            raise OverflowError(f"Resultado no finito en '{node.op}'")
        return result
