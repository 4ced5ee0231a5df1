"""
Estado de la calculadora y máquina de eventos de botones.

CalculatorSession guarda la entrada actual, el último resultado y el
historial de cálculos. Solo cambia a través de handle(event); la interfaz
lee el estado con current_input(), current_result() e history_entries(),
o se suscribe para recibir un aviso tras cada evento.

Los botones que construyen la expresión solo concatenan texto: la validez
de la expresión se comprueba al pulsar "=".
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple

from calculator_engine import (
    ERROR_TEXT,
    CalculatorEngine,
    format_number,
    parse_display_number,
)
from expression_evaluator import EvaluationFailure

logger = logging.getLogger(__name__)


class EventKind(Enum):
    CLEAR = "C"
    BACKSPACE = "⌫"
    PERCENT = "%"
    SQUARE_ROOT = "√"
    EVALUATE = "="
    CLEAR_HISTORY = "clear_history"
    DIGIT = "digit"
    OPERATOR = "operator"
    DECIMAL_POINT = "."


_INPUT_KINDS = (EventKind.DIGIT, EventKind.OPERATOR, EventKind.DECIMAL_POINT)
_OPERATORS = "+-*/"


@dataclass(frozen=True)
class ButtonEvent:
    """Pulsación de un botón. ``token`` solo aplica a dígitos y operadores."""

    kind: EventKind
    token: str = ""

    def __post_init__(self):
        if self.kind is EventKind.DIGIT:
            if len(self.token) != 1 or self.token not in "0123456789":
                raise ValueError(f"Dígito inválido: {self.token!r}")
        elif self.kind is EventKind.OPERATOR:
            if len(self.token) != 1 or self.token not in _OPERATORS:
                raise ValueError(f"Operador inválido: {self.token!r}")
        elif self.kind is EventKind.DECIMAL_POINT:
            if self.token not in ("", "."):
                raise ValueError(f"Punto decimal inválido: {self.token!r}")
            object.__setattr__(self, "token", ".")
        elif self.token:
            raise ValueError(f"{self.kind.name} no lleva token")

    @classmethod
    def digit(cls, d) -> "ButtonEvent":
        return cls(EventKind.DIGIT, str(d))

    @classmethod
    def operator(cls, op: str) -> "ButtonEvent":
        return cls(EventKind.OPERATOR, op)

    @classmethod
    def from_label(cls, label: str) -> "ButtonEvent":
        """Convierte la etiqueta de una tecla ("7", "+", "C", "⌫", ...) en evento."""
        if label.isdigit() and len(label) == 1:
            return cls.digit(label)
        if label in _OPERATORS and len(label) == 1:
            return cls.operator(label)
        for kind in EventKind:
            if kind not in (EventKind.DIGIT, EventKind.OPERATOR) and kind.value == label:
                return cls(kind)
        raise ValueError(f"Tecla desconocida: {label!r}")


CLEAR = ButtonEvent(EventKind.CLEAR)
BACKSPACE = ButtonEvent(EventKind.BACKSPACE)
PERCENT = ButtonEvent(EventKind.PERCENT)
SQUARE_ROOT = ButtonEvent(EventKind.SQUARE_ROOT)
EVALUATE = ButtonEvent(EventKind.EVALUATE)
CLEAR_HISTORY = ButtonEvent(EventKind.CLEAR_HISTORY)
DECIMAL_POINT = ButtonEvent(EventKind.DECIMAL_POINT)


class HistoryEntry(NamedTuple):
    input: str
    result: str

    def __str__(self):
        return f"{self.input} = {self.result}"


class CalculatorSession:
    """Entrada, resultado e historial de una sesión de calculadora."""

    def __init__(self, engine=None):
        self.engine = engine if engine is not None else CalculatorEngine()
        self._input = ""
        self._result = "0"
        self._history: list[HistoryEntry] = []
        self._listeners: list[Callable[["CalculatorSession"], None]] = []

    # ── Lectura del estado ───────────────────────────────────────

    def current_input(self) -> str:
        return self._input

    def current_result(self) -> str:
        return self._result

    def history_entries(self) -> list[HistoryEntry]:
        return list(self._history)

    # ── Suscripciones ────────────────────────────────────────────

    def subscribe(self, listener: Callable[["CalculatorSession"], None]):
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[["CalculatorSession"], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Fallo en el listener %r", listener)

    # ── Eventos ──────────────────────────────────────────────────

    def handle(self, event: ButtonEvent):
        logger.debug("Evento %s %r", event.kind.name, event.token)
        kind = event.kind

        if kind is EventKind.CLEAR:
            self._input = ""
            self._result = "0"
        elif kind is EventKind.BACKSPACE:
            self._input = self._input[:-1]
        elif kind is EventKind.PERCENT:
            self._result = self._percent(self._result)
        elif kind is EventKind.SQUARE_ROOT:
            self._result = self._square_root(self._result)
        elif kind is EventKind.EVALUATE:
            self._evaluate()
        elif kind is EventKind.CLEAR_HISTORY:
            self._history = []
        elif kind in _INPUT_KINDS:
            self._input += event.token

        self._notify()

    def _evaluate(self):
        outcome = self.engine.try_evaluate(self._input)
        if not outcome.ok:
            self._result = ERROR_TEXT
            return
        self._result = outcome.text
        self._history.append(HistoryEntry(self._input, outcome.text))

    @staticmethod
    def _percent(result: str) -> str:
        try:
            return format_number(parse_display_number(result) / 100)
        except EvaluationFailure:
            return ERROR_TEXT

    @staticmethod
    def _square_root(result: str) -> str:
        try:
            number = parse_display_number(result)
        except EvaluationFailure:
            number = 0.0
        if number < 0:
            return ERROR_TEXT
        return format_number(math.sqrt(number))
