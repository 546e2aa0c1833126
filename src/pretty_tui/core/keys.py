"""Backend-neutral key events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Key(str, Enum):
    """Abstract key symbols the form understands."""

    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    TAB = "tab"
    ESCAPE = "escape"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    OTHER = "other"  # Any key the backend has no symbol for


class KeyKind(str, Enum):
    """Some platforms report both press and release for one keystroke."""

    PRESS = "press"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """A key symbol plus its press/release discriminator.

    ``char`` is only set for ``Key.CHAR``.
    """

    key: Key
    char: str | None = None
    kind: KeyKind = KeyKind.PRESS

    @classmethod
    def of(cls, key: Key, kind: KeyKind = KeyKind.PRESS) -> KeyEvent:
        return cls(key=key, kind=kind)

    @classmethod
    def character(cls, char: str, kind: KeyKind = KeyKind.PRESS) -> KeyEvent:
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        return cls(key=Key.CHAR, char=char, kind=kind)

    @property
    def is_press(self) -> bool:
        return self.kind is KeyKind.PRESS

    def __str__(self) -> str:
        if self.key is Key.CHAR:
            return repr(self.char)
        return f"<{self.key.value}>"


def keys(*names: str) -> list[KeyEvent]:
    """Build press events from short names.

    Single characters become ``Key.CHAR`` events, anything else is looked up
    as a ``Key`` value (``"enter"``, ``"tab"``, ...).

        keys("i", "a", "tab", "enter")
    """
    events = []
    for name in names:
        if len(name) == 1:
            events.append(KeyEvent.character(name))
        else:
            events.append(KeyEvent.of(Key(name)))
    return events
