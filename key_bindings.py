"""Traducción de botones y teclas a eventos del motor."""

from __future__ import annotations

from calculator_engine import InputEvent, Operator


# ── Definición del teclado ───────────────────────────────────────
#  Cada fila es una lista de (texto, columnas, tipo_color)
#  tipo_color: "num", "op", "special", "equals"

KEYPAD = [
    [("C", 1, "special"), ("←", 1, "special"),
     ("÷", 1, "op"), ("×", 1, "op")],
    [("7", 1, "num"), ("8", 1, "num"), ("9", 1, "num"), ("−", 1, "op")],
    [("4", 1, "num"), ("5", 1, "num"), ("6", 1, "num"), ("+", 1, "op")],
    [("1", 1, "num"), ("2", 1, "num"), ("3", 1, "num"), ("=", 1, "equals")],
    [("0", 2, "num"), (".", 1, "num"), ("=", 1, "equals")],
]

_LABEL_OPERATORS = {op.symbol: op for op in Operator}

_CHAR_OPERATORS = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
}

# Teclado numérico (keysym de Tk)
_KEYSYM_EVENTS = {
    "Return": InputEvent.equals(),
    "KP_Enter": InputEvent.equals(),
    "BackSpace": InputEvent.backspace(),
    "Escape": InputEvent.clear(),
    "KP_Decimal": InputEvent.dot(),
    "KP_Add": InputEvent.operator(Operator.ADD),
    "KP_Subtract": InputEvent.operator(Operator.SUBTRACT),
    "KP_Multiply": InputEvent.operator(Operator.MULTIPLY),
    "KP_Divide": InputEvent.operator(Operator.DIVIDE),
}


def event_for_label(label: str) -> InputEvent | None:
    """Evento asociado al texto de un botón del teclado en pantalla."""
    if label == "C":
        return InputEvent.clear()
    if label == "←":
        return InputEvent.backspace()
    if label == ".":
        return InputEvent.dot()
    if label == "=":
        return InputEvent.equals()
    if label in _LABEL_OPERATORS:
        return InputEvent.operator(_LABEL_OPERATORS[label])
    if len(label) == 1 and label.isdigit() and label.isascii():
        return InputEvent.digit(label)
    return None


def event_for_key(char: str, keysym: str = "") -> InputEvent | None:
    """Evento asociado a una pulsación de teclado.

    char es el carácter producido (puede ser vacío) y keysym el nombre
    de la tecla según Tk.
    """
    if keysym in _KEYSYM_EVENTS:
        return _KEYSYM_EVENTS[keysym]
    if keysym.startswith("KP_") and keysym[3:].isdigit():
        return InputEvent.digit(keysym[3:])

    if not char:
        return None
    if len(char) == 1 and char in "0123456789":
        return InputEvent.digit(char)
    if char == ".":
        return InputEvent.dot()
    if char in _CHAR_OPERATORS:
        return InputEvent.operator(_CHAR_OPERATORS[char])
    if char in ("=", "\r", "\n"):
        return InputEvent.equals()
    if char == "\x08":
        return InputEvent.backspace()
    if char == "\x1b":
        return InputEvent.clear()
    return None
