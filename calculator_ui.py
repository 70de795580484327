"""
Interfaz gráfica de la calculadora.

Usa tkinter. Cada pulsación se procesa de forma síncrona en el bucle
de eventos: el motor es rápido y no bloquea la interfaz.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont
from tkinter import messagebox

from calculator_engine import CalculatorEngine, InputEvent
from display_buffer import ZERO_TEXT
from key_bindings import KEYPAD, event_for_key, event_for_label


logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  Adaptadores del motor
# ═════════════════════════════════════════════════════════════════

class EntryTextBuffer:
    """TextBuffer respaldado por la StringVar del campo de resultado."""

    def __init__(self, var):
        self._var = var

    def get_text(self) -> str:
        return self._var.get()

    def set_text(self, text: str) -> None:
        self._var.set(text)


class MessageBoxNotifier:
    """Muestra los errores del motor en un diálogo modal."""

    TITLE = "Error"

    def __init__(self, parent=None):
        self._parent = parent

    def __call__(self, message: str):
        messagebox.showerror(self.TITLE, message, parent=self._parent)


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    TITLE = "Calculadora"
    MIN_WIDTH = 340
    MIN_HEIGHT = 460

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "display_fg": "#A6E3A1",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
    }

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title(self.TITLE)
        self.root.configure(bg=self.C["bg"])
        self.root.minsize(self.MIN_WIDTH, self.MIN_HEIGHT)

        self._init_fonts()
        self._create_display()

        notifier = MessageBoxNotifier(self.root)
        if engine is None:
            engine = CalculatorEngine(EntryTextBuffer(self.display_var), notifier)
        elif engine.notifier is None:
            engine.notifier = notifier
        self.engine = engine
        self.display_var.set(self.engine.display_text)

        self._create_keypad()
        self._bind_keyboard()

        self.root.focus_set()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_display = tkfont.Font(family="Consolas", size=28)
        self._f_btn = tkfont.Font(family="Segoe UI", size=20)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=12)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.display_var = tk.StringVar(value=ZERO_TEXT)
        self.display_entry = tk.Entry(
            frame, textvariable=self.display_var, state="readonly",
            font=self._f_display, fg=self.C["display_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0, takefocus=0,
        )
        self.display_entry.pack(fill="x")

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(sum(span for _text, span, _kind in row) for row in KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(KEYPAD):
            col_pos = 0
            for text, span, kind in row_def:
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    takefocus=0,
                    command=lambda t=text: self._on_button(t),
                )
                btn.grid(row=r, column=col_pos, columnspan=span,
                         sticky="nsew", padx=4, pady=4, ipady=8)
                col_pos += span

        for r in range(len(KEYPAD)):
            frame.rowconfigure(r, weight=1)

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    # ── Acciones ─────────────────────────────────────────────────

    def _on_button(self, label: str):
        event = event_for_label(label)
        if event is not None:
            self._dispatch(event)

    def _on_keypress(self, tk_event):
        event = event_for_key(tk_event.char, tk_event.keysym)
        if event is None:
            return None
        self._dispatch(event)
        return "break"

    def _dispatch(self, event: InputEvent):
        state = self.engine.dispatch(event)
        # Un motor externo puede escribir en otro TextBuffer
        if self.display_var.get() != state.display_text:
            self.display_var.set(state.display_text)
        self.root.focus_set()
