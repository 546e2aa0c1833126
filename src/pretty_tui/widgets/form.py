"""Form view: header, the three field panels and the log panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Static

from ..core.render_model import TITLE_BANNER, CursorPlacement, Frame
from ..core.state import Focus
from .fields import MileageGauge, TextField
from .help import HelpPanel
from .log import LogPanel


class FormView(Container):
    """The login form.

    ┌─────────────────────────────────────────────────────┐
    │ <Esc>, q: quit        PRETTY DERBY banner           │
    │ ┌account──────────────────────────────────────────┐ │
    │ ┌password─────────────────────────────────────────┐ │
    │ ┌mileage──────────────────────────────────────────┐ │
    │ ┌log──────────────────────────────────────────────┐ │
    └─────────────────────────────────────────────────────┘
    """

    DEFAULT_CSS = """
    FormView {
        height: 100%;
        layout: vertical;
    }

    FormView #form-header {
        height: 11;
    }

    FormView #form-title {
        width: 96;
        height: 100%;
        padding: 2 0;
    }

    FormView #form-fields {
        height: 9;
    }
    """

    def compose(self) -> ComposeResult:
        with Horizontal(id="form-header"):
            yield HelpPanel(id="help")
            yield Static(TITLE_BANNER, id="form-title")
        with Vertical(id="form-fields"):
            yield TextField(id="account")
            yield TextField(id="password")
            yield MileageGauge(id="mileage")
        yield LogPanel(id="log")

    def field(self, focus: Focus) -> TextField:
        """Text field widget for a text focus target."""
        return self.query_one(f"#{focus.value}", TextField)

    def show(self, frame: Frame) -> None:
        """Apply a form frame from the render model."""
        self.query_one("#help", HelpPanel).show(frame.help)
        for panel in frame.fields:
            self.field(panel.field).show(panel)
        self.query_one("#mileage", MileageGauge).show(frame.mileage)
        self.query_one("#log", LogPanel).show(frame.log)

    def place_cursor(self, cursor: CursorPlacement | None) -> None:
        """Show the block cursor in one text field, hide it elsewhere."""
        for focus in (Focus.ACCOUNT, Focus.PASSWORD):
            field = self.field(focus)
            field.cursor = cursor.offset if cursor and cursor.field is focus else None
