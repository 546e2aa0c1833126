"""Core form logic.

Backend-agnostic state machine, render model and controller; nothing in
here imports Textual.
"""

from .controller import BackendError, FormController, InputSource, LogSource, RenderBackend
from .keys import Key, KeyEvent, KeyKind
from .machine import Outcome, Transition
from .render_model import BorderState, Frame, WelcomeFrame, build_frame, build_welcome
from .state import Focus, FormResult, FormState, Mode

__all__ = [
    "BackendError",
    "BorderState",
    "Focus",
    "FormController",
    "FormResult",
    "FormState",
    "Frame",
    "InputSource",
    "Key",
    "KeyEvent",
    "KeyKind",
    "LogSource",
    "Mode",
    "Outcome",
    "RenderBackend",
    "Transition",
    "WelcomeFrame",
    "build_frame",
    "build_welcome",
]
