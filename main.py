"""Punto de entrada de la calculadora."""

import tkinter as tk

from calculator_ui import CalculatorApp
from logging_config import configure_logging


WINDOW_GEOMETRY = "340x460"
LOG_LEVEL = None  # None: CALCULADORA_LOG_LEVEL o WARNING


def main():
    configure_logging(LOG_LEVEL)
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    CalculatorApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
