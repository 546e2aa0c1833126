"""Focus/edit transitions.

Every (mode, focus, key) combination has a defined outcome; unknown keys are
no-ops. Handlers mutate the FormState in place and report what the loop
should do next through a Transition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .keys import Key, KeyEvent
from .state import Focus, FormResult, FormState, Mode

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """What the render loop should do after a key."""

    CONTINUE = "continue"  # Keep looping
    EXIT = "exit"  # User cancelled, no result
    CONFIRM = "confirm"  # Form confirmed, result attached


@dataclass(frozen=True)
class Transition:
    """Result of feeding one key event to the state machine."""

    outcome: Outcome = Outcome.CONTINUE
    result: FormResult | None = None

    @property
    def done(self) -> bool:
        return self.outcome is not Outcome.CONTINUE


CONTINUE = Transition()
EXIT = Transition(Outcome.EXIT)


def apply(state: FormState, event: KeyEvent) -> Transition:
    """Feed one event to the state machine.

    Release events are inert.
    """
    if not event.is_press:
        return CONTINUE
    match state.mode:
        case Mode.NAVIGATE:
            return handle_navigate(state, event)
        case Mode.EDIT:
            return handle_edit(state, event)


def handle_navigate(state: FormState, event: KeyEvent) -> Transition:
    """Navigate mode: move focus, enter edit mode, or quit."""
    match event.key, event.char:
        case (Key.ESCAPE, _) | (Key.CHAR, "q"):
            return EXIT
        case (Key.UP, _) | (Key.CHAR, "k"):
            _focus(state, state.focus.above())
        case (Key.DOWN, _) | (Key.CHAR, "j"):
            _focus(state, state.focus.below())
        case (Key.ENTER, _) | (Key.CHAR, "i" | "a"):
            state.mode = Mode.EDIT
            state.cursor_to_end()
            logger.debug(f"Editing {state.focus.value}")
        case _:
            pass
    return CONTINUE


def handle_edit(state: FormState, event: KeyEvent) -> Transition:
    """Edit mode: alter the focused field, advance, or confirm."""
    if event.key is Key.ESCAPE:
        state.mode = Mode.NAVIGATE
        logger.debug("Back to navigate mode")
        return CONTINUE

    match state.focus:
        case Focus.ACCOUNT | Focus.PASSWORD:
            _edit_text(state, event)
        case Focus.MILEAGE:
            if event.key is Key.ENTER:
                state.mode = Mode.NAVIGATE
                return Transition(Outcome.CONFIRM, state.result())
            _edit_mileage(state, event)
    return CONTINUE


def _edit_text(state: FormState, event: KeyEvent) -> None:
    match event.key:
        case Key.ENTER | Key.TAB:
            _focus(state, state.focus.below())
        case Key.BACKSPACE:
            state.backspace()
        case Key.CHAR:
            state.insert(event.char or "")
        case Key.LEFT:
            state.cursor_left()
        case Key.RIGHT:
            state.cursor_right()
        case Key.UP | Key.DOWN | Key.ESCAPE | Key.OTHER:
            pass


def _edit_mileage(state: FormState, event: KeyEvent) -> None:
    match event.key, event.char:
        case (Key.LEFT, _) | (Key.CHAR, "h"):
            state.adjust_mileage(-1)
        case (Key.RIGHT, _) | (Key.CHAR, "l"):
            state.adjust_mileage(1)
        case _:
            # Tab does not confirm; other characters are ignored
            pass


def _focus(state: FormState, target: Focus) -> None:
    if state.move_focus(target):
        logger.debug(f"Focus -> {target.value}")
