"""Pure session-state logic: transitions, framing, confirmation and shortcuts."""

from .confirmation import ConfirmationFlow
from .framing import frame_inbound
from .shortcuts import Chord, ShortcutActions, ShortcutRouter

__all__ = [
    "Chord",
    "ConfirmationFlow",
    "ShortcutActions",
    "ShortcutRouter",
    "frame_inbound",
]
