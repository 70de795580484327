import pytest

from calculator_engine import EventKind, InputEvent, Operator
from key_bindings import KEYPAD, event_for_key, event_for_label


@pytest.mark.parametrize("label, expected", [
    ("C", InputEvent.clear()),
    ("←", InputEvent.backspace()),
    ("7", InputEvent.digit("7")),
    (".", InputEvent.dot()),
    ("+", InputEvent.operator(Operator.ADD)),
    ("−", InputEvent.operator(Operator.SUBTRACT)),
    ("×", InputEvent.operator(Operator.MULTIPLY)),
    ("÷", InputEvent.operator(Operator.DIVIDE)),
    ("=", InputEvent.equals()),
])
def test_labels(label, expected):
    assert event_for_label(label) == expected


def test_every_keypad_label_maps_to_an_event():
    for row in KEYPAD:
        for text, _span, _kind in row:
            assert event_for_label(text) is not None, text


def test_keypad_rows_have_equal_width():
    widths = {sum(span for _text, span, _kind in row) for row in KEYPAD}
    assert widths == {4}


def test_unknown_label():
    assert event_for_label("%") is None
    assert event_for_label("٣") is None


@pytest.mark.parametrize("char, keysym, expected", [
    ("5", "5", InputEvent.digit("5")),
    (".", "period", InputEvent.dot()),
    ("+", "plus", InputEvent.operator(Operator.ADD)),
    ("-", "minus", InputEvent.operator(Operator.SUBTRACT)),
    ("*", "asterisk", InputEvent.operator(Operator.MULTIPLY)),
    ("/", "slash", InputEvent.operator(Operator.DIVIDE)),
    ("=", "equal", InputEvent.equals()),
    ("\r", "Return", InputEvent.equals()),
    ("\r", "KP_Enter", InputEvent.equals()),
    ("\x08", "BackSpace", InputEvent.backspace()),
    ("\x1b", "Escape", InputEvent.clear()),
    ("", "KP_4", InputEvent.digit("4")),
    ("", "KP_Decimal", InputEvent.dot()),
    ("", "KP_Multiply", InputEvent.operator(Operator.MULTIPLY)),
])
def test_keys(char, keysym, expected):
    assert event_for_key(char, keysym) == expected


def test_ignored_keys():
    assert event_for_key("a", "a") is None
    assert event_for_key("", "Shift_L") is None
    assert event_for_key("", "") is None


def test_char_only_lookup():
    event = event_for_key("9")
    assert event.kind is EventKind.DIGIT
    assert event.value == "9"
