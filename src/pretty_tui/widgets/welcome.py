"""Welcome screen: banner plus a press-any-key prompt."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static

from ..core.render_model import WELCOME_BANNER, WELCOME_PROMPT, WelcomeFrame


class WelcomeView(Container):
    """Bordered box with the banner centred and the prompt below it."""

    DEFAULT_CSS = """
    WelcomeView {
        height: 100%;
        border: solid $border;
        align: center middle;
    }

    WelcomeView #welcome-banner {
        width: 100%;
        height: auto;
        content-align: center middle;
        text-align: center;
        color: cyan;
    }

    WelcomeView #welcome-prompt {
        width: 100%;
        height: 4;
        content-align: center middle;
        text-align: center;
        color: green;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static(WELCOME_BANNER, id="welcome-banner")
        yield Static(WELCOME_PROMPT, id="welcome-prompt")

    def show(self, frame: WelcomeFrame) -> None:
        """Apply a welcome frame's text; the CSS above lays out the bands."""
        self.query_one("#welcome-banner", Static).update(frame.banner)
        self.query_one("#welcome-prompt", Static).update(frame.prompt)
