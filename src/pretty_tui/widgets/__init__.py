"""Textual widgets for the login form."""

from .fields import GaugeBar, MileageGauge, TextField
from .form import FormView
from .help import HelpPanel
from .log import LogPanel
from .welcome import WelcomeView

__all__ = [
    "FormView",
    "GaugeBar",
    "HelpPanel",
    "LogPanel",
    "MileageGauge",
    "TextField",
    "WelcomeView",
]
