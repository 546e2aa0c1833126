"""Pretty TUI - Main Application.

Hosts the welcome screen and the login form. The FormController runs as a
worker on the app's event loop; the app's only jobs are to forward key
presses to the controller and to expose its widgets as the render sink.

Layout:
┌─────────────────────────────────────────────────────────────┐
│ <Esc>, q: quit     ██████╗ ██████╗ ███████╗████████╗ ...    │
│ <Up>, k: up                                                 │
├─ account ───────────────────────────────────────────────────┤
├─ password ──────────────────────────────────────────────────┤
├─ mileage ───────────────────── 5/5 km ──────────────────────┤
├─ log ───────────────────────────────────────────────────────┤
│ 14:32:01 INFO Form started                                  │
└─────────────────────────────────────────────────────────────┘
"""

from __future__ import annotations

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.message import Message

from .backend import TextualBackend, to_key_event
from .config import FormConfig
from .core.controller import BackendError, FormController
from .core.keys import KeyEvent
from .core.state import FormResult
from .logs import LogBuffer, setup_logging
from .widgets import FormView, WelcomeView

logger = logging.getLogger(__name__)


class Surface(Container):
    """Focusable root that captures every key for the controller."""

    can_focus = True

    DEFAULT_CSS = """
    Surface {
        height: 100%;
        padding: 2 2;
    }
    """

    class KeyPressed(Message):
        """Fired for each key press, already translated."""

        def __init__(self, event: KeyEvent) -> None:
            super().__init__()
            self.event = event

    def on_key(self, event: events.Key) -> None:
        """Swallow keys so Textual's own bindings (tab focus etc.) stay out."""
        event.prevent_default()
        event.stop()
        self.post_message(self.KeyPressed(to_key_event(event)))


class PrettyTUI(App[FormResult | None]):
    """Login form application.

    Returns the confirmed FormResult, or None if the user cancelled.

    Usage:
        app = PrettyTUI(FormConfig(distance_km=10))
        result = app.run()
    """

    TITLE = "Pretty TUI"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: vertical;
    }

    .hidden {
        display: none;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("ctrl+q", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        config: FormConfig | None = None,
        log_buffer: LogBuffer | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config or FormConfig()
        self.log_buffer = log_buffer or setup_logging(
            self.config.log_level, LogBuffer(self.config.log_capacity)
        )
        self.backend = TextualBackend(self)
        self.controller: FormController | None = None

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        with Surface(id="surface"):
            yield WelcomeView(id="welcome")
            yield FormView(id="form", classes="hidden")

    def on_mount(self) -> None:
        """Start the controller once the widgets exist."""
        self.query_one("#surface", Surface).focus()
        self.controller = FormController(self.backend, self.log_buffer, config=self.config)
        self.run_worker(self._drive(), name="form", exclusive=True)

    async def _drive(self) -> None:
        """Welcome, form loop, teardown, then exit with the result."""
        controller = self.controller
        if controller is None:
            return
        try:
            await controller.welcome()
            result = await controller.run()
        finally:
            if not controller.closed:
                controller.quit()
        self.exit(result)

    def on_surface_key_pressed(self, message: Surface.KeyPressed) -> None:
        """Hand key presses to the controller's input source."""
        self.backend.feed(message.event)


def run_form(config: FormConfig | None = None) -> FormResult | None:
    """Run the form full-screen and return what the user confirmed.

    Args:
        config: Form settings (default: FormConfig())

    Returns:
        The confirmed values, or None if the user cancelled

    Raises:
        BackendError: If the app stopped on an error
    """
    app = PrettyTUI(config)
    result = app.run()
    if app.return_code:
        raise BackendError(f"Form aborted with exit code {app.return_code}")
    return result
