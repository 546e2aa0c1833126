"""Key hint block shown in the form header."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ..core.render_model import HelpLine


class HelpPanel(Static):
    """Mode-dependent key hints, keys in bold.

    <Esc>, q: quit
    <Up>, k: up
    """

    DEFAULT_CSS = """
    HelpPanel {
        width: 1fr;
        height: 100%;
        padding: 2 2;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._lines: tuple[HelpLine, ...] = ()

    @property
    def lines(self) -> tuple[HelpLine, ...]:
        return self._lines

    def show(self, lines: tuple[HelpLine, ...]) -> None:
        """Replace the hints; unchanged hints are not redrawn."""
        if lines == self._lines:
            return
        self._lines = lines
        text = Text()
        for i, line in enumerate(lines):
            if i:
                text.append("\n")
            text.append(line.keys, style="bold")
            text.append(line.action)
        self.update(text)
