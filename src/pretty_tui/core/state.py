"""Form state - the values being collected plus focus, mode and cursor.

All mutation helpers keep two invariants:
- cursor never exceeds the length of the focused text buffer
- mileage stays within 0..100
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MILEAGE_MIN = 0
MILEAGE_MAX = 100


class Focus(str, Enum):
    """Which field receives key events, in top-to-bottom order."""

    ACCOUNT = "account"
    PASSWORD = "password"
    MILEAGE = "mileage"

    @property
    def is_text(self) -> bool:
        return self is not Focus.MILEAGE

    def below(self) -> Focus:
        """Next field toward mileage; mileage stays put."""
        match self:
            case Focus.ACCOUNT:
                return Focus.PASSWORD
            case Focus.PASSWORD | Focus.MILEAGE:
                return Focus.MILEAGE

    def above(self) -> Focus:
        """Next field toward account; account stays put."""
        match self:
            case Focus.MILEAGE:
                return Focus.PASSWORD
            case Focus.PASSWORD | Focus.ACCOUNT:
                return Focus.ACCOUNT


class Mode(str, Enum):
    """Navigate moves focus, edit changes the focused field."""

    NAVIGATE = "navigate"
    EDIT = "edit"


@dataclass(frozen=True)
class FormResult:
    """Confirmed values handed back to the caller."""

    account: str
    password: str
    mileage: int

    def distance_km(self, total_km: float) -> float:
        """Mileage percentage expressed as a distance."""
        return self.mileage * total_km / 100

    def __repr__(self) -> str:
        return f"FormResult(account={self.account!r}, password='***', mileage={self.mileage})"


@dataclass
class FormState:
    """Mutable state of the login form.

    Attributes:
        account: Account text buffer
        password: Password text buffer
        mileage: Percentage in 0..100
        focus: Field receiving key events
        mode: Navigate or edit
        cursor: Insertion offset into the focused text buffer
    """

    account: str = ""
    password: str = ""
    mileage: int = MILEAGE_MAX
    focus: Focus = Focus.ACCOUNT
    mode: Mode = Mode.NAVIGATE
    cursor: int = 0

    def __post_init__(self) -> None:
        self.mileage = min(max(self.mileage, MILEAGE_MIN), MILEAGE_MAX)
        self.cursor = min(max(self.cursor, 0), len(self.buffer))

    def __repr__(self) -> str:
        return (
            f"FormState(account={self.account!r}, password={'*' * len(self.password)!r}, "
            f"mileage={self.mileage}, focus={self.focus.value}, mode={self.mode.value}, "
            f"cursor={self.cursor})"
        )

    @property
    def buffer(self) -> str:
        """Text of the focused field ('' for mileage)."""
        match self.focus:
            case Focus.ACCOUNT:
                return self.account
            case Focus.PASSWORD:
                return self.password
            case Focus.MILEAGE:
                return ""

    def _store(self, text: str) -> None:
        match self.focus:
            case Focus.ACCOUNT:
                self.account = text
            case Focus.PASSWORD:
                self.password = text
            case Focus.MILEAGE:
                pass

    # -------------------------------------------------------------------------
    # Focus
    # -------------------------------------------------------------------------

    def move_focus(self, target: Focus) -> bool:
        """Focus ``target`` and park the cursor at the end of its buffer.

        Returns:
            True if focus actually changed
        """
        if target is self.focus:
            return False
        self.focus = target
        self.cursor_to_end()
        return True

    def cursor_to_end(self) -> None:
        self.cursor = len(self.buffer)

    # -------------------------------------------------------------------------
    # Text editing
    # -------------------------------------------------------------------------

    def insert(self, char: str) -> None:
        """Insert ``char`` at the cursor of the focused text field."""
        if not self.focus.is_text:
            return
        text = self.buffer
        self._store(text[: self.cursor] + char + text[self.cursor :])
        self.cursor += len(char)

    def backspace(self) -> None:
        """Delete the character left of the cursor."""
        if not self.focus.is_text or self.cursor == 0:
            return
        self.cursor -= 1
        text = self.buffer
        self._store(text[: self.cursor] + text[self.cursor + 1 :])

    def cursor_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def cursor_right(self) -> None:
        if self.cursor < len(self.buffer):
            self.cursor += 1

    # -------------------------------------------------------------------------
    # Mileage
    # -------------------------------------------------------------------------

    def adjust_mileage(self, delta: int) -> None:
        """Saturating add to the mileage percentage."""
        self.mileage = min(max(self.mileage + delta, MILEAGE_MIN), MILEAGE_MAX)

    def result(self) -> FormResult:
        return FormResult(self.account, self.password, self.mileage)
