"""
Búfer de pantalla de la calculadora.

Mantiene el texto del número que se está tecleando (o del último
resultado) y aplica las reglas de edición dígito a dígito. No sabe
nada de aritmética ni de widgets: escribe sobre cualquier objeto que
cumpla el contrato TextBuffer.

Contrato de interfaz:
    - get_text() -> str
    - set_text(text: str)
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Protocol


logger = logging.getLogger(__name__)

ZERO_TEXT = "0"


class TextBuffer(Protocol):
    """Capacidad mínima de texto que el motor necesita de la pantalla."""

    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...


class MemoryTextBuffer:
    """Implementación en memoria, sin interfaz gráfica."""

    def __init__(self, text: str = ZERO_TEXT):
        self._text = text

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text


class DisplayBuffer:
    """Edita el número en pantalla y guarda la marca de número nuevo."""

    def __init__(self, target: TextBuffer | None = None,
                 start_new_number: bool = True):
        self._target = target if target is not None else MemoryTextBuffer()
        self.start_new_number = start_new_number

    # ── Texto ────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        return self._target.get_text()

    def set_text(self, text: str):
        self._target.set_text(text)

    def reset(self):
        self._target.set_text(ZERO_TEXT)
        self.start_new_number = True

    # ── Edición ──────────────────────────────────────────────────

    def append_digit(self, digit: str):
        current = self.text
        if self.start_new_number or current == ZERO_TEXT:
            self.set_text(digit)
        else:
            self.set_text(current + digit)
        self.start_new_number = False

    def append_dot(self):
        if self.start_new_number:
            self.set_text("0.")
            self.start_new_number = False
            return

        current = self.text
        if "." not in current:
            self.set_text(current + ".")

    def backspace(self):
        # Un resultado recién calculado no se edita
        if self.start_new_number:
            return

        current = self.text
        if len(current) > 1:
            self.set_text(current[:-1])
        else:
            self.set_text(ZERO_TEXT)
            self.start_new_number = True

    # ── Valor numérico ───────────────────────────────────────────

    def current_value(self) -> Decimal:
        """Interpreta el texto como Decimal.

        Si el texto no es un número finito devuelve cero. Por
        construcción no debería ocurrir; se registra un aviso.
        """
        text = self.text
        try:
            value = Decimal(text)
        except (InvalidOperation, TypeError, ValueError):
            logger.warning("Texto de pantalla no numérico %r, se usa 0", text)
            return Decimal(0)

        if not value.is_finite():
            logger.warning("Texto de pantalla no finito %r, se usa 0", text)
            return Decimal(0)
        return value
