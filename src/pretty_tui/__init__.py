"""Pretty TUI - a full-screen terminal login form.

Collects an account, a password and a mileage percentage,
built with Textual + Rich.
"""

__version__ = "0.1.0"

from .app import PrettyTUI, run_form  # noqa: E402
from .config import FormConfig  # noqa: E402
from .core import FormResult  # noqa: E402

__all__ = ["FormConfig", "FormResult", "PrettyTUI", "run_form"]
