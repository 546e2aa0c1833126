"""Form field widgets: bordered text fields and the mileage gauge."""

from __future__ import annotations

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

from ..core.render_model import BorderState, FieldPanel, GaugePanel

BORDER_CLASSES = tuple(state.value for state in BorderState if state is not BorderState.UNFOCUSED)

FIELD_CSS = """
    {name} {{
        height: 3;
        border: solid $border;
        padding: 0;
    }}

    {name}.focused-navigate {{
        border: solid blue;
        color: blue;
    }}

    {name}.focused-edit {{
        border: solid yellow;
        color: yellow;
    }}
"""


class BorderedField(Static):
    """Base for field panels whose border encodes focus and mode."""

    border_state: reactive[BorderState] = reactive(BorderState.UNFOCUSED)

    def watch_border_state(self, state: BorderState) -> None:
        self.remove_class(*BORDER_CLASSES)
        if state is not BorderState.UNFOCUSED:
            self.add_class(state.value)


class TextField(BorderedField):
    """Single-line text field; shows a block cursor while editing.

    ┌account──────────────────────┐
    │alice█                       │
    └─────────────────────────────┘
    """

    DEFAULT_CSS = FIELD_CSS.format(name="TextField")

    value: reactive[str] = reactive("")
    cursor: reactive[int | None] = reactive(None)

    def render(self) -> Text:
        text = Text(self.value, no_wrap=True, overflow="crop", style="default")
        if self.cursor is not None:
            if self.cursor >= len(self.value):
                text.append(" ", style="reverse")
            else:
                text.stylize("reverse", self.cursor, self.cursor + 1)
        return text

    def show(self, panel: FieldPanel) -> None:
        """Apply a field panel from the render model."""
        self.border_title = panel.title
        self.value = panel.text
        self.border_state = panel.border


class GaugeBar:
    """Rich renderable: a full-width bar with a centred label."""

    def __init__(self, percent: int, label: str, bar_style: str = "white", label_style: str = "yellow"):
        self.percent = percent
        self.label = label
        self.bar_style = bar_style
        self.label_style = label_style

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        width = options.max_width
        filled = round(width * self.percent / 100)
        bar = "█" * filled + " " * (width - filled)
        if len(self.label) > width:
            yield Text(bar, style=self.bar_style, no_wrap=True)
            return
        start = (width - len(self.label)) // 2
        end = start + len(self.label)
        yield Text.assemble(
            (bar[:start], self.bar_style),
            (self.label, self.label_style),
            (bar[end:], self.bar_style),
            no_wrap=True,
        )


class MileageGauge(BorderedField):
    """Percentage gauge for the mileage field.

    ┌mileage──────────────────────┐
    │████████████4.75/5 km████    │
    └─────────────────────────────┘
    """

    DEFAULT_CSS = FIELD_CSS.format(name="MileageGauge")

    percent: reactive[int] = reactive(100)
    label: reactive[str] = reactive("")

    def render(self) -> GaugeBar:
        return GaugeBar(self.percent, self.label)

    def show(self, panel: GaugePanel) -> None:
        """Apply a gauge panel from the render model."""
        self.border_title = panel.title
        self.percent = panel.percent
        self.label = panel.label
        self.border_state = panel.border
