import pytest

tk = pytest.importorskip("tkinter")

import calculator_ui  # noqa: E402
from calculator_engine import CalculatorEngine  # noqa: E402
from calculator_ui import CalculatorApp, EntryTextBuffer, MessageBoxNotifier  # noqa: E402


class _FakeVar:
    def __init__(self, v=""):
        self.v = v

    def set(self, x):
        self.v = x

    def get(self):
        return self.v


class _FakeRoot:
    def focus_set(self):
        return None


class _FakeKeyEvent:
    def __init__(self, char, keysym):
        self.char = char
        self.keysym = keysym


class _DummyApp(CalculatorApp):
    def __init__(self, engine):
        pass


def _make_app():
    var = _FakeVar("0")
    app = _DummyApp(None)
    app.root = _FakeRoot()
    app.display_var = var
    app.engine = CalculatorEngine(EntryTextBuffer(var))
    return app


def test_entry_text_buffer_uses_variable():
    var = _FakeVar("0")
    buffer = EntryTextBuffer(var)
    buffer.set_text("3.5")
    assert var.get() == "3.5"
    assert buffer.get_text() == "3.5"


def test_engine_drives_entry_variable():
    var = _FakeVar("stale")
    engine = CalculatorEngine(EntryTextBuffer(var))
    assert var.get() == "0"
    engine.digit("9")
    assert var.get() == "9"


def test_message_box_notifier(monkeypatch):
    shown = []
    monkeypatch.setattr(
        calculator_ui.messagebox, "showerror",
        lambda title, message, parent=None: shown.append((title, message)),
    )
    notifier = MessageBoxNotifier()
    engine = CalculatorEngine(notifier=notifier)
    for label in "5÷0":
        engine.dispatch(calculator_ui.event_for_label(label))
    engine.equals()
    assert shown == [("Error", "División por 0 no permitida.")]
    assert engine.display_text == "5"


def test_buttons_update_display():
    app = _make_app()
    for label in ["1", "2", "+", "3", "0", "="]:
        app._on_button(label)
    assert app.display_var.get() == "42"


def test_keypress_routes_and_breaks():
    app = _make_app()
    assert app._on_keypress(_FakeKeyEvent("7", "7")) == "break"
    assert app._on_keypress(_FakeKeyEvent("*", "asterisk")) == "break"
    assert app._on_keypress(_FakeKeyEvent("6", "6")) == "break"
    assert app._on_keypress(_FakeKeyEvent("\r", "Return")) == "break"
    assert app.display_var.get() == "42"
    assert app._on_keypress(_FakeKeyEvent("", "Shift_L")) is None


def test_escape_clears():
    app = _make_app()
    app._on_keypress(_FakeKeyEvent("8", "8"))
    app._on_keypress(_FakeKeyEvent("\x1b", "Escape"))
    assert app.display_var.get() == "0"


def test_external_engine_display_is_mirrored():
    app = _make_app()
    app.engine = CalculatorEngine()
    app._on_button("4")
    assert app.display_var.get() == "4"
