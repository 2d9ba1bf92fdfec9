from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

Action = Callable[[], None]


@dataclass(frozen=True)
class Chord:
    """A modifier-qualified key. ``key`` is the produced character, lower-cased."""

    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False


def ctrl(key: str, *, shift: bool = False) -> Chord:
    return Chord(key=key.lower(), ctrl=True, shift=shift)


@dataclass(frozen=True)
class ShortcutActions:
    save: Action
    open: Action
    new: Action
    quit: Action
    zoom_in: Action
    zoom_out: Action


def default_bindings(actions: ShortcutActions) -> dict[Chord, Action]:
    return {
        ctrl("s"): actions.save,
        ctrl("o"): actions.open,
        ctrl("n"): actions.new,
        ctrl("q"): actions.quit,
        # Shift+= reports "+" on most layouts; accept both.
        ctrl("=", shift=True): actions.zoom_in,
        ctrl("+", shift=True): actions.zoom_in,
        ctrl("-"): actions.zoom_out,
    }


class ShortcutRouter:
    """Stateless dispatch table from chords to actions."""

    def __init__(self, bindings: Mapping[Chord, Action] | None = None) -> None:
        self._bindings: dict[Chord, Action] = dict(bindings or {})

    @classmethod
    def from_actions(cls, actions: ShortcutActions) -> ShortcutRouter:
        return cls(default_bindings(actions))

    def rebind(self, actions: ShortcutActions) -> None:
        self._bindings = default_bindings(actions)

    def chords(self) -> list[Chord]:
        return list(self._bindings)

    def dispatch(self, chord: Chord) -> bool:
        """Run the bound action. Returns False for chords that should pass through."""
        action = self._bindings.get(chord)
        if action is None:
            return False
        action()
        return True
