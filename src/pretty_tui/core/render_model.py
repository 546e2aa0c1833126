"""Render model - what a backend has to draw for one frame.

The model is built from FormState, the terminal size and a log snapshot.
It carries layout rectangles, texts and border states but no styling code;
backends decide how a BorderState or a gauge actually looks.

Main frame layout (inside a margin of 2):

    ┌─ header (11 rows) ──────────────────────────────────────────┐
    │ help block                     │ title banner (96 columns)  │
    ├─ fields (9 rows) ───────────────────────────────────────────┤
    │ account  (3 rows)                                           │
    │ password (3 rows)                                           │
    │ mileage  (3 rows)                                           │
    ├─ log (remaining rows) ──────────────────────────────────────┤
    └─────────────────────────────────────────────────────────────┘
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .state import Focus, FormState, Mode

MARGIN = 2
HEADER_HEIGHT = 11
FIELDS_HEIGHT = 9
FIELD_HEIGHT = 3
TITLE_WIDTH = 96
WELCOME_BANNER_HEIGHT = 16
WELCOME_PROMPT_OFFSET = 8
WELCOME_PROMPT_HEIGHT = 4

# Full banner for the welcome screen
WELCOME_BANNER = r"""
╭────────────────────────────────────────────────────────────────────────────────────────────────────╮
│                                                                                                    │
│  ██████╗ ██████╗ ███████╗████████╗████████╗██╗   ██╗    ██████╗ ███████╗██████╗ ██████╗ ██╗   ██╗  │
│  ██╔══██╗██╔══██╗██╔════╝╚══██╔══╝╚══██╔══╝╚██╗ ██╔╝    ██╔══██╗██╔════╝██╔══██╗██╔══██╗╚██╗ ██╔╝  │
│  ██████╔╝██████╔╝█████╗     ██║      ██║    ╚████╔╝     ██║  ██║█████╗  ██████╔╝██████╔╝ ╚████╔╝   │
│  ██╔═══╝ ██╔══██╗██╔══╝     ██║      ██║     ╚██╔╝      ██║  ██║██╔══╝  ██╔══██╗██╔══██╗  ╚██╔╝    │
│  ██║     ██║  ██║███████╗   ██║      ██║      ██║       ██████╔╝███████╗██║  ██║██████╔╝   ██║     │
│  ╚═╝     ╚═╝  ╚═╝╚══════╝   ╚═╝      ╚═╝      ╚═╝       ╚═════╝ ╚══════╝╚═╝  ╚═╝╚═════╝    ╚═╝     │
│                                                                                                    │
╰────────────────────────────────────────────────────────────────────────────────────────────────────╯
"""

# Compact banner for the form header
TITLE_BANNER = r"""
██████╗ ██████╗ ███████╗████████╗████████╗██╗   ██╗    ██████╗ ███████╗██████╗ ██████╗ ██╗   ██╗
██╔══██╗██╔══██╗██╔════╝╚══██╔══╝╚══██╔══╝╚██╗ ██╔╝    ██╔══██╗██╔════╝██╔══██╗██╔══██╗╚██╗ ██╔╝
██████╔╝██████╔╝█████╗     ██║      ██║    ╚████╔╝     ██║  ██║█████╗  ██████╔╝██████╔╝ ╚████╔╝
██╔═══╝ ██╔══██╗██╔══╝     ██║      ██║     ╚██╔╝      ██║  ██║██╔══╝  ██╔══██╗██╔══██╗  ╚██╔╝
██║     ██║  ██║███████╗   ██║      ██║      ██║       ██████╔╝███████╗██║  ██║██████╔╝   ██║
╚═╝     ╚═╝  ╚═╝╚══════╝   ╚═╝      ╚═╝      ╚═╝       ╚═════╝ ╚══════╝╚═╝  ╚═╝╚═════╝    ╚═╝
"""

WELCOME_PROMPT = "Press any key to continue..."


@dataclass(frozen=True)
class Rect:
    """Screen rectangle in cells."""

    x: int
    y: int
    width: int
    height: int

    def inner(self, margin: int = 1) -> Rect:
        """Shrink by ``margin`` on every side, never below zero size."""
        width = max(self.width - 2 * margin, 0)
        height = max(self.height - 2 * margin, 0)
        return Rect(self.x + margin, self.y + margin, width, height)

    def split_rows(self, *heights: int | None) -> list[Rect]:
        """Stack rows top to bottom; ``None`` takes whatever is left.

        Fixed rows are clipped once the rectangle runs out of space.
        """
        fixed = sum(h for h in heights if h is not None)
        fills = sum(1 for h in heights if h is None)
        spare = max(self.height - fixed, 0) // fills if fills else 0
        rects = []
        y = self.y
        bottom = self.y + self.height
        for h in heights:
            size = min(spare if h is None else h, max(bottom - y, 0))
            rects.append(Rect(self.x, y, self.width, size))
            y += size
        return rects

    def split_columns(self, *widths: int | None) -> list[Rect]:
        """Same as split_rows, left to right."""
        fixed = sum(w for w in widths if w is not None)
        fills = sum(1 for w in widths if w is None)
        spare = max(self.width - fixed, 0) // fills if fills else 0
        rects = []
        x = self.x
        right = self.x + self.width
        for w in widths:
            size = min(spare if w is None else w, max(right - x, 0))
            rects.append(Rect(x, self.y, size, self.height))
            x += size
        return rects


class BorderState(str, Enum):
    """Visual state of a field panel border: (focused?) x (mode)."""

    UNFOCUSED = "unfocused"
    FOCUSED_NAVIGATE = "focused-navigate"
    FOCUSED_EDIT = "focused-edit"

    @classmethod
    def of(cls, field: Focus, state: FormState) -> BorderState:
        if field is not state.focus:
            return cls.UNFOCUSED
        match state.mode:
            case Mode.NAVIGATE:
                return cls.FOCUSED_NAVIGATE
            case Mode.EDIT:
                return cls.FOCUSED_EDIT


@dataclass(frozen=True)
class HelpLine:
    """One ``<keys>: action`` hint; keys are drawn bold."""

    keys: str
    action: str

    def __str__(self) -> str:
        return f"{self.keys}{self.action}"


NAVIGATE_HELP = (
    HelpLine("<Esc>, q: ", "quit"),
    HelpLine("<Up>, k: ", "up"),
    HelpLine("<Down>, j: ", "down"),
    HelpLine("<Enter>, i, a: ", "edit mode"),
)
EDIT_HELP = (
    HelpLine("<Esc>: ", "normal mode"),
    HelpLine("<Cr> (Also named Enter): ", "confirm"),
)
MILEAGE_HELP = (
    HelpLine("<Left>, h: ", "reduce"),
    HelpLine("<Right>, l: ", "increase"),
)


@dataclass(frozen=True)
class FieldPanel:
    """A bordered single-line text field."""

    field: Focus
    title: str
    text: str
    border: BorderState
    rect: Rect


@dataclass(frozen=True)
class GaugePanel:
    """A bordered percentage gauge with a label."""

    title: str
    percent: int
    label: str
    border: BorderState
    rect: Rect


@dataclass(frozen=True)
class LogPanel:
    """Tail of the log, already cut to the visible rows."""

    title: str
    lines: tuple[str, ...]
    rect: Rect


@dataclass(frozen=True)
class CursorPlacement:
    """Where the terminal cursor goes while editing a text field.

    ``x``/``y`` are screen coordinates, ``offset`` the cursor within the
    field text.
    """

    field: Focus
    offset: int
    x: int
    y: int


@dataclass(frozen=True)
class WelcomeFrame:
    """Everything the welcome screen draws."""

    banner: str
    prompt: str
    border: Rect
    banner_rect: Rect
    prompt_rect: Rect


@dataclass(frozen=True)
class Frame:
    """Everything the form screen draws in one iteration."""

    mode: Mode
    focus: Focus
    help: tuple[HelpLine, ...]
    help_rect: Rect
    title: str
    title_rect: Rect
    account: FieldPanel
    password: FieldPanel
    mileage: GaugePanel
    log: LogPanel
    cursor: CursorPlacement | None

    @property
    def fields(self) -> tuple[FieldPanel, FieldPanel]:
        return (self.account, self.password)


def help_lines(state: FormState) -> tuple[HelpLine, ...]:
    """Key hints for the current mode and focus."""
    match state.mode:
        case Mode.NAVIGATE:
            return NAVIGATE_HELP
        case Mode.EDIT:
            if state.focus is Focus.MILEAGE:
                return EDIT_HELP + MILEAGE_HELP
            return EDIT_HELP


def mask(text: str, mask_char: str = "*") -> str:
    """One masking character per character of ``text``."""
    return mask_char * len(text)


def _number(value: float) -> str:
    return f"{value:g}"


def mileage_label(percent: int, total_km: float = 5.0) -> str:
    """Gauge label, e.g. ``4.75/5 km`` for 95% of 5 km."""
    return f"{_number(percent * total_km / 100)}/{_number(total_km)} km"


def log_tail(messages: Sequence[str], rect: Rect) -> tuple[str, ...]:
    """Lines that fit inside a bordered panel of ``rect``, newest last."""
    rows = max(rect.height - 2, 0)
    if rows == 0:
        return ()
    return tuple(messages[-rows:])


def build_frame(
    state: FormState,
    size: tuple[int, int],
    messages: Sequence[str] = (),
    *,
    mask_char: str = "*",
    distance_km: float = 5.0,
) -> Frame:
    """Build the render model for the form screen.

    Args:
        state: Current form state
        size: Terminal (width, height)
        messages: Snapshot of the log messages, oldest first
        mask_char: Character drawn for each password character
        distance_km: Distance represented by 100% mileage

    Returns:
        Frame ready to hand to a backend
    """
    width, height = size
    screen = Rect(0, 0, width, height).inner(MARGIN)
    header, fields, log_rect = screen.split_rows(HEADER_HEIGHT, FIELDS_HEIGHT, None)
    help_rect, title_rect = header.inner(MARGIN).split_columns(None, TITLE_WIDTH)
    account_rect, password_rect, mileage_rect, _ = fields.split_rows(
        FIELD_HEIGHT, FIELD_HEIGHT, FIELD_HEIGHT, None
    )

    account = FieldPanel(
        field=Focus.ACCOUNT,
        title="account",
        text=state.account,
        border=BorderState.of(Focus.ACCOUNT, state),
        rect=account_rect,
    )
    password = FieldPanel(
        field=Focus.PASSWORD,
        title="password",
        text=mask(state.password, mask_char),
        border=BorderState.of(Focus.PASSWORD, state),
        rect=password_rect,
    )
    mileage = GaugePanel(
        title="mileage",
        percent=state.mileage,
        label=mileage_label(state.mileage, distance_km),
        border=BorderState.of(Focus.MILEAGE, state),
        rect=mileage_rect,
    )

    cursor = None
    if state.mode is Mode.EDIT and state.focus.is_text:
        panel = account if state.focus is Focus.ACCOUNT else password
        cursor = CursorPlacement(
            field=state.focus,
            offset=state.cursor,
            x=panel.rect.x + state.cursor + 1,
            y=panel.rect.y + 1,
        )

    return Frame(
        mode=state.mode,
        focus=state.focus,
        help=help_lines(state),
        help_rect=help_rect,
        title=TITLE_BANNER,
        title_rect=title_rect,
        account=account,
        password=password,
        mileage=mileage,
        log=LogPanel(title="log", lines=log_tail(messages, log_rect), rect=log_rect),
        cursor=cursor,
    )


def build_welcome(size: tuple[int, int]) -> WelcomeFrame:
    """Render model for the welcome screen."""
    width, height = size
    border = Rect(0, 0, width, height).inner(MARGIN)
    _, banner_rect, _, prompt_rect, _ = border.inner().split_rows(
        WELCOME_PROMPT_OFFSET, WELCOME_BANNER_HEIGHT, None, WELCOME_PROMPT_HEIGHT, WELCOME_PROMPT_HEIGHT
    )
    return WelcomeFrame(
        banner=WELCOME_BANNER,
        prompt=WELCOME_PROMPT,
        border=border,
        banner_rect=banner_rect,
        prompt_rect=prompt_rect,
    )
