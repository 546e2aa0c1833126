"""Textual backend - lets the FormController draw into a Textual app.

Architecture:
    FormController <-> TextualBackend <-> PrettyTUI widgets
          ^                 |
          +-- KeyEvent <----+-- Surface key events

The backend is both the render sink and the input source. Textual owns the
real terminal (alternate screen, raw input); enter()/leave() only switch
the backend between accepting and refusing draws.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from textual import events

from .core.controller import BackendError
from .core.keys import Key, KeyEvent
from .core.render_model import CursorPlacement, Frame, WelcomeFrame
from .widgets import FormView, WelcomeView

if TYPE_CHECKING:
    from textual.app import App

logger = logging.getLogger(__name__)

TEXTUAL_KEYS = {
    "backspace": Key.BACKSPACE,
    "enter": Key.ENTER,
    "tab": Key.TAB,
    "escape": Key.ESCAPE,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "up": Key.UP,
    "down": Key.DOWN,
}


def to_key_event(event: events.Key) -> KeyEvent:
    """Translate a Textual key event.

    Textual only reports presses. Keys without a form symbol map to
    ``Key.OTHER``.
    """
    key = TEXTUAL_KEYS.get(event.key)
    if key is not None:
        return KeyEvent.of(key)
    if event.is_printable and event.character and len(event.character) == 1:
        return KeyEvent.character(event.character)
    return KeyEvent.of(Key.OTHER)


class TextualBackend:
    """Render backend and input source backed by a running Textual app.

    Textual CSS owns the layout, so frame rects are not applied. Of a
    CursorPlacement only the field and offset reach the widgets; the screen
    position is kept in ``cursor``.

    Usage:
        backend = TextualBackend(app)
        controller = FormController(backend, log_buffer)
        # In the app's key handler:
        backend.feed(to_key_event(event))
    """

    def __init__(self, app: App) -> None:
        self.app = app
        self.active = False
        self.cursor: tuple[int, int] | None = None
        self._queue: asyncio.Queue[KeyEvent] = asyncio.Queue()

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def feed(self, event: KeyEvent) -> None:
        """Queue an event for the next poll."""
        self._queue.put_nowait(event)

    async def poll(self, timeout: float | None) -> KeyEvent | None:
        """Next queued event, or None after ``timeout`` seconds."""
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except asyncio.TimeoutError:
            return None

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def enter(self) -> None:
        self.active = True
        logger.debug("Backend entered")

    def leave(self) -> None:
        self.active = False
        logger.debug("Backend left")

    def size(self) -> tuple[int, int]:
        size = self.app.size
        return size.width, size.height

    def _views(self) -> tuple[WelcomeView, FormView]:
        if not self.active:
            raise BackendError("Backend is not active")
        return self.app.query_one("#welcome", WelcomeView), self.app.query_one("#form", FormView)

    def draw_welcome(self, frame: WelcomeFrame) -> None:
        welcome, form = self._views()
        form.add_class("hidden")
        welcome.remove_class("hidden")
        welcome.show(frame)

    def draw(self, frame: Frame) -> None:
        welcome, form = self._views()
        welcome.add_class("hidden")
        form.remove_class("hidden")
        form.show(frame)

    def set_cursor(self, cursor: CursorPlacement | None) -> None:
        self.cursor = (cursor.x, cursor.y) if cursor else None
        if self.active:
            # The form may already be unmounted during shutdown
            for form in self.app.query("#form").results(FormView):
                form.place_cursor(cursor)
