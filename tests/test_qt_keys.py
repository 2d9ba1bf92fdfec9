import pytest
from PyQt6.QtCore import Qt

from niti.core.shortcuts import Chord
from niti.services.ui.adapters.qt_keys import chord_from_key

CTRL = Qt.KeyboardModifier.ControlModifier
SHIFT = Qt.KeyboardModifier.ShiftModifier
ALT = Qt.KeyboardModifier.AltModifier


@pytest.mark.parametrize(
    "key, mods, expected",
    [
        (Qt.Key.Key_S.value, CTRL, Chord("s", ctrl=True)),
        (Qt.Key.Key_Q.value, CTRL, Chord("q", ctrl=True)),
        (Qt.Key.Key_Plus.value, CTRL | SHIFT, Chord("+", ctrl=True, shift=True)),
        (Qt.Key.Key_Equal.value, CTRL | SHIFT, Chord("=", ctrl=True, shift=True)),
        (Qt.Key.Key_Minus.value, CTRL, Chord("-", ctrl=True)),
        (Qt.Key.Key_N.value, CTRL | ALT, Chord("n", ctrl=True, alt=True)),
        (Qt.Key.Key_A.value, Qt.KeyboardModifier.NoModifier, Chord("a")),
    ],
)
def test_printable_keys_map_to_chords(key, mods, expected):
    assert chord_from_key(key, mods) == expected


@pytest.mark.parametrize("key", [Qt.Key.Key_F1.value, Qt.Key.Key_Escape.value, Qt.Key.Key_Left.value])
def test_non_printable_keys_are_ignored(key):
    assert chord_from_key(key, CTRL) is None
