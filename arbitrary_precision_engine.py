"""Motor de cálculo con precisión arbitraria y expansión progresiva."""

from __future__ import annotations

import logging

from calculator_engine import ERROR_TEXT, EvaluationResult
from expression_evaluator import EvaluationFailure, ExpressionEvaluator

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc

logger = logging.getLogger(__name__)


class MPMathArithmeticProvider:
    """Proveedor aritmético basado en mpmath."""

    def number(self, text: str):
        if text.startswith("."):
            text = "0" + text
        if text.endswith("."):
            text += "0"
        return mp.mpf(text)

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
        return bool(mp.isfinite(value))


class ArbitraryPrecisionCalculatorEngine:
    """Evalúa expresiones con precisión arbitraria y dígitos progresivos."""

    INTEGER_DIGITS_LIMIT = 4000

    def __init__(self, initial_digits: int = 18, precision_step: int = 24):
        self._provider = MPMathArithmeticProvider()
        self._evaluator = ExpressionEvaluator(self._provider)

        self._initial_digits = max(8, initial_digits)
        self._precision_step = max(8, precision_step)

        self._working_digits = self._initial_digits
        self._last_expression: str | None = None
        self._last_value = None

    @property
    def working_digits(self) -> int:
        return self._working_digits

    def evaluate(self, expression: str) -> str:
        self._working_digits = self._initial_digits
        self._last_value = self._evaluate_with_digits(expression, self._working_digits)
        self._last_expression = expression
        return self._format_result(self._last_value, self._working_digits)

    def try_evaluate(self, expression: str) -> EvaluationResult:
        try:
            text = self.evaluate(expression)
        except EvaluationFailure as exc:
            logger.debug("Fallo al evaluar %r: %s", expression, exc)
            return EvaluationResult.failure(str(exc))
        return EvaluationResult(value=self._last_value, text=text)

    def can_expand_precision(self) -> bool:
        return self._last_expression is not None

    def request_more_precision(self) -> str:
        if not self._last_expression:
            raise EvaluationFailure("No hay cálculo previo")

        self._working_digits += self._precision_step
        self._last_value = self._evaluate_with_digits(
            self._last_expression,
            self._working_digits,
        )
        return self._format_result(self._last_value, self._working_digits)

    def _evaluate_with_digits(self, expression: str, digits: int):
        with mp.workdps(self._internal_dps(digits)):
            return self._evaluator.evaluate(expression)

    @staticmethod
    def _internal_dps(digits: int) -> int:
        return max(40, digits * 2 + 10)

    @classmethod
    def _format_result(cls, value, digits: int) -> str:
        if not mp.isfinite(value):
            return ERROR_TEXT

        if value == 0:
            return "0"

        internal_dps = cls._internal_dps(digits)
        with mp.workdps(internal_dps):
            magnitude = abs(value)

            # Entero exacto solo mientras quepa en la precisión de trabajo
            integer_digits = min(internal_dps, cls.INTEGER_DIGITS_LIMIT)
            if mp.floor(value) == value and magnitude < mp.mpf(10) ** integer_digits:
                return str(int(value))

            # Error de redondeo por debajo de los dígitos visibles: entero
            if magnitude < mp.mpf(10) ** digits:
                nearest = mp.nint(value)
                if nearest != 0 and abs(value - nearest) <= magnitude * mp.mpf(10) ** (-digits):
                    return str(int(nearest))

            return mp.nstr(value, n=digits)
