"""
Motor de cálculo para la calculadora de cuatro operaciones.

Este módulo provee la clase CalculatorEngine que evalúa expresiones
aritméticas y da formato al resultado. Está diseñado como módulo
independiente que puede ser reemplazado por implementaciones alternativas
(e.g., ArbitraryPrecisionCalculatorEngine).

Contrato de interfaz:
    - evaluate(expression: str) -> str          (lanza EvaluationFailure)
    - try_evaluate(expression: str) -> EvaluationResult   (nunca lanza)
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from expression_evaluator import EvaluationFailure, ExpressionEvaluator, FloatArithmeticProvider

logger = logging.getLogger(__name__)

ERROR_TEXT = "Error"


@dataclass(frozen=True)
class EvaluationResult:
    """Valor numérico finito o fallo de evaluación."""

    value: Optional[object] = None
    text: str = ERROR_TEXT
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str) -> "EvaluationResult":
        return cls(value=None, text=ERROR_TEXT, error=message)


# ── Conversión texto <-> número ──────────────────────────────────

def format_number(value: float) -> str:
    """Entero sin punto decimal; el resto con precisión completa."""
    if not math.isfinite(value):
        raise EvaluationFailure("Resultado no finito")
    if value == int(value):
        return str(int(value))
    return repr(value)


def parse_display_number(text: str) -> float:
    """Interpreta un texto de la pantalla ("0", "2.5", "-3", ...) como número."""
    try:
        value = float(text)
    except (TypeError, ValueError) as exc:
        raise EvaluationFailure(f"No es un número: {text!r}") from exc
    if not math.isfinite(value):
        raise EvaluationFailure(f"No es un número finito: {text!r}")
    return value


class CalculatorEngine:
    """Evalúa expresiones de cuatro operaciones con aritmética de doble precisión."""

    def __init__(self):
        self._provider = FloatArithmeticProvider()
        self._evaluator = ExpressionEvaluator(self._provider)

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Raises:
            EvaluationFailure: expresión vacía o inválida, división por cero
                o resultado no finito.
        """
        value = self._evaluator.evaluate(expression)
        return self._format_result(value)

    def try_evaluate(self, expression: str) -> EvaluationResult:
        try:
            value = self._evaluator.evaluate(expression)
            return EvaluationResult(value=value, text=self._format_result(value))
        except EvaluationFailure as exc:
            logger.debug("Fallo al evaluar %r: %s", expression, exc)
            return EvaluationResult.failure(str(exc))

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def _format_result(value) -> str:
        return format_number(value)
