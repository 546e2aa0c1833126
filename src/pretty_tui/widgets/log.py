"""Scrolling log panel at the bottom of the form."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ..core.render_model import LogPanel as LogPanelModel
from ..logs import level_style


class LogPanel(Static):
    """Bordered panel with the newest log lines, coloured by level."""

    DEFAULT_CSS = """
    LogPanel {
        height: 1fr;
        border: solid $border;
        padding: 0;
        overflow: hidden;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._lines: tuple[str, ...] = ()

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    def show(self, panel: LogPanelModel) -> None:
        """Apply a log panel from the render model."""
        self.border_title = panel.title
        if panel.lines == self._lines:
            return
        self._lines = panel.lines
        text = Text(no_wrap=True, overflow="ellipsis")
        for i, line in enumerate(panel.lines):
            if i:
                text.append("\n")
            text.append(line, style=level_style(line))
        self.update(text)
