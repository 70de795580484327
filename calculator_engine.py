"""
Motor de cálculo de la calculadora de cuatro operaciones.

Este módulo provee la máquina de estados con acumulador que interpreta
los eventos de entrada (dígitos, punto, operadores, igual, borrar) y
realiza la aritmética decimal con redondeo fijo. Está diseñado como
módulo independiente de la interfaz gráfica: sólo depende de un
TextBuffer para la pantalla y de un notificador para los errores.

Contrato de interfaz:
    - handle_event(state, event, notify=None) -> EngineState
    - CalculatorEngine.dispatch(event) -> EngineState
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
)
from enum import Enum
from fractions import Fraction
from typing import Callable, NamedTuple, Optional, Union

from display_buffer import ZERO_TEXT, DisplayBuffer, MemoryTextBuffer, TextBuffer


logger = logging.getLogger(__name__)

SIGNIFICANT_DIGITS = 16
DIVISION_SCALE = 12

# Suma, resta y multiplicación: 16 cifras significativas
ARITHMETIC_CONTEXT = Context(prec=SIGNIFICANT_DIGITS, rounding=ROUND_HALF_UP)

Notifier = Callable[[str], None]


# ═════════════════════════════════════════════════════════════════
#  Errores
# ═════════════════════════════════════════════════════════════════

class CalculatorError(ArithmeticError):
    """Fallo recuperable de una operación; nunca es fatal."""


class DivisionByZero(CalculatorError):
    def __init__(self, message: str = "División por 0 no permitida."):
        super().__init__(message)


class ArithmeticFailure(CalculatorError):
    def __init__(self, detail: str):
        super().__init__(f"Error de cálculo: {detail}")
        self.detail = detail


# ═════════════════════════════════════════════════════════════════
#  Operadores y eventos
# ═════════════════════════════════════════════════════════════════

class Operator(Enum):
    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @property
    def symbol(self) -> str:
        return self.value


class EventKind(Enum):
    CLEAR = "clear"
    BACKSPACE = "backspace"
    DIGIT = "digit"
    DOT = "dot"
    OPERATOR = "operator"
    EQUALS = "equals"


class InputEvent(NamedTuple):
    kind: EventKind
    value: Optional[Union[str, Operator]] = None

    @classmethod
    def clear(cls) -> "InputEvent":
        return cls(EventKind.CLEAR)

    @classmethod
    def backspace(cls) -> "InputEvent":
        return cls(EventKind.BACKSPACE)

    @classmethod
    def digit(cls, digit: str) -> "InputEvent":
        if not (isinstance(digit, str) and len(digit) == 1 and digit in "0123456789"):
            raise ValueError(f"Dígito no válido: {digit!r}")
        return cls(EventKind.DIGIT, digit)

    @classmethod
    def dot(cls) -> "InputEvent":
        return cls(EventKind.DOT)

    @classmethod
    def operator(cls, op: Operator) -> "InputEvent":
        if not isinstance(op, Operator):
            raise ValueError(f"Operador no válido: {op!r}")
        return cls(EventKind.OPERATOR, op)

    @classmethod
    def equals(cls) -> "InputEvent":
        return cls(EventKind.EQUALS)


# ═════════════════════════════════════════════════════════════════
#  Estado
# ═════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EngineState:
    accumulator: Decimal = Decimal(0)
    pending_operator: Optional[Operator] = None
    start_new_number: bool = True
    display_text: str = ZERO_TEXT

    @classmethod
    def initial(cls) -> "EngineState":
        return cls()


# ═════════════════════════════════════════════════════════════════
#  Aritmética
# ═════════════════════════════════════════════════════════════════

def _divide(a: Decimal, b: Decimal) -> Decimal:
    """Cociente exacto redondeado a DIVISION_SCALE decimales, mitad hacia arriba."""
    quotient = Fraction(a) / Fraction(b) * 10 ** DIVISION_SCALE
    whole, remainder = divmod(abs(quotient.numerator), quotient.denominator)
    if 2 * remainder >= quotient.denominator:
        whole += 1
    if quotient < 0:
        whole = -whole
    return Decimal(f"{whole}E-{DIVISION_SCALE}")


def compute(a: Decimal, b: Decimal, op: Operator) -> Decimal:
    """Aplica op a los operandos.

    Raises:
        DivisionByZero: divisor exactamente cero.
        ArithmeticFailure: cualquier otro fallo de la aritmética decimal.
    """
    try:
        if op is Operator.ADD:
            return ARITHMETIC_CONTEXT.add(a, b)
        if op is Operator.SUBTRACT:
            return ARITHMETIC_CONTEXT.subtract(a, b)
        if op is Operator.MULTIPLY:
            return ARITHMETIC_CONTEXT.multiply(a, b)
        if op is Operator.DIVIDE:
            if b == 0:
                raise DivisionByZero()
            return _divide(a, b)
    except CalculatorError:
        raise
    except (DecimalException, OverflowError, ValueError) as exc:
        error_name = type(exc).__name__
        raise ArithmeticFailure(str(exc) or error_name) from exc

    raise ArithmeticFailure(f"operador desconocido {op!r}")


def format_decimal(value: Decimal) -> str:
    """Texto plano, sin exponente ni ceros finales."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return ZERO_TEXT
    return text


# ═════════════════════════════════════════════════════════════════
#  Transición de estados
# ═════════════════════════════════════════════════════════════════

def _buffer_for(state: EngineState) -> DisplayBuffer:
    return DisplayBuffer(MemoryTextBuffer(state.display_text),
                         start_new_number=state.start_new_number)


def _with_buffer(state: EngineState, buffer: DisplayBuffer) -> EngineState:
    return replace(state, display_text=buffer.text,
                   start_new_number=buffer.start_new_number)


def _recover(state: EngineState, error: CalculatorError,
             notify: Optional[Notifier],
             pending_operator: Optional[Operator]) -> EngineState:
    # Se descarta la operación: el acumulador no cambia
    logger.warning("Operación descartada: %s", error)
    if notify is not None:
        notify(str(error))
    return replace(state, display_text=format_decimal(state.accumulator),
                   pending_operator=pending_operator, start_new_number=True)


def _apply_operator(state: EngineState, op: Operator,
                    notify: Optional[Notifier]) -> EngineState:
    buffer = _buffer_for(state)
    accumulator = state.accumulator
    display_text = state.display_text

    if state.pending_operator is None:
        accumulator = buffer.current_value()
    elif not state.start_new_number:
        # Encadenado: se evalúa la operación pendiente antes del nuevo operador
        try:
            accumulator = compute(accumulator, buffer.current_value(),
                                  state.pending_operator)
        except CalculatorError as exc:
            # El nuevo operador se adopta igualmente
            return _recover(state, exc, notify, op)
        display_text = format_decimal(accumulator)

    return EngineState(accumulator=accumulator, pending_operator=op,
                       start_new_number=True, display_text=display_text)


def _apply_equals(state: EngineState, notify: Optional[Notifier]) -> EngineState:
    if state.pending_operator is None:
        return state

    buffer = _buffer_for(state)
    try:
        result = compute(state.accumulator, buffer.current_value(),
                         state.pending_operator)
    except CalculatorError as exc:
        return _recover(state, exc, notify, state.pending_operator)

    return EngineState(accumulator=result, pending_operator=None,
                       start_new_number=True, display_text=format_decimal(result))


def handle_event(state: EngineState, event: InputEvent,
                 notify: Optional[Notifier] = None) -> EngineState:
    """Devuelve el estado que resulta de aplicar event a state.

    No modifica state. El único efecto secundario es la llamada
    síncrona a notify con un mensaje legible cuando una operación falla.
    """
    kind = event.kind

    if kind is EventKind.CLEAR:
        return EngineState.initial()

    if kind is EventKind.DIGIT:
        buffer = _buffer_for(state)
        buffer.append_digit(event.value)
        return _with_buffer(state, buffer)

    if kind is EventKind.DOT:
        buffer = _buffer_for(state)
        buffer.append_dot()
        return _with_buffer(state, buffer)

    if kind is EventKind.BACKSPACE:
        buffer = _buffer_for(state)
        buffer.backspace()
        return _with_buffer(state, buffer)

    if kind is EventKind.OPERATOR:
        return _apply_operator(state, event.value, notify)

    if kind is EventKind.EQUALS:
        return _apply_equals(state, notify)

    raise ValueError(f"Evento desconocido: {event!r}")


# ═════════════════════════════════════════════════════════════════
#  Motor con estado
# ═════════════════════════════════════════════════════════════════

class CalculatorEngine:
    """Dueño único del EngineState; refleja el texto en la pantalla."""

    def __init__(self, display: TextBuffer | None = None,
                 notifier: Notifier | None = None):
        self._display = display if display is not None else MemoryTextBuffer()
        self._notifier = notifier
        self._state = EngineState.initial()
        self._display.set_text(self._state.display_text)

    # ── Propiedades ──────────────────────────────────────────────

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def display_text(self) -> str:
        return self._display.get_text()

    @property
    def notifier(self) -> Notifier | None:
        return self._notifier

    @notifier.setter
    def notifier(self, notifier: Notifier | None):
        self._notifier = notifier

    # ── Despacho ─────────────────────────────────────────────────

    def dispatch(self, event: InputEvent) -> EngineState:
        logger.debug("Evento %s %r", event.kind.value, event.value)
        self._state = handle_event(self._state, event, self._notifier)
        self._display.set_text(self._state.display_text)
        return self._state

    def clear(self) -> EngineState:
        return self.dispatch(InputEvent.clear())

    def digit(self, digit: str) -> EngineState:
        return self.dispatch(InputEvent.digit(digit))

    def dot(self) -> EngineState:
        return self.dispatch(InputEvent.dot())

    def backspace(self) -> EngineState:
        return self.dispatch(InputEvent.backspace())

    def operator(self, op: Operator) -> EngineState:
        return self.dispatch(InputEvent.operator(op))

    def equals(self) -> EngineState:
        return self.dispatch(InputEvent.equals())
