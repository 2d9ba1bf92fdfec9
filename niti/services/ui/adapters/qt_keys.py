from __future__ import annotations

from PyQt6.QtCore import Qt

from niti.core.shortcuts import Chord


def chord_from_key(key: int, modifiers: Qt.KeyboardModifier) -> Chord | None:
    """
    Translate a Qt key code plus modifiers into a Chord.

    Qt reports letters as upper-case codes and keeps ``+``/``=``/``-`` as
    their ASCII codes, so printable keys map straight to characters.
    Non-printable keys (arrows, function keys) yield None.
    """
    if key <= 0x1F or key > 0x7E:
        return None
    return Chord(
        key=chr(key).lower(),
        ctrl=bool(modifiers & Qt.KeyboardModifier.ControlModifier),
        shift=bool(modifiers & Qt.KeyboardModifier.ShiftModifier),
        alt=bool(modifiers & Qt.KeyboardModifier.AltModifier),
    )
