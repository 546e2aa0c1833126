"""FormController - runs the welcome screen and the form render loop.

The controller owns its backend for its whole lifetime:
- construction puts the backend into full-screen mode
- each render borrows the backend for the duration of one draw
- quit() restores the terminal and hands the backend back

The loop is cooperative: render, then await the next input event with a
bounded timeout. On timeout it just renders again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol, runtime_checkable

from ..config import FormConfig
from . import machine
from .keys import KeyEvent
from .render_model import CursorPlacement, Frame, WelcomeFrame, build_frame, build_welcome
from .state import FormResult, FormState

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """Terminal/backend failure; aborts the run."""


@runtime_checkable
class InputSource(Protocol):
    """Blocking-with-timeout source of key events."""

    async def poll(self, timeout: float | None) -> KeyEvent | None:
        """Next event, or None if nothing arrived within ``timeout`` seconds.

        ``timeout=None`` waits indefinitely.
        """
        ...


class RenderBackend(Protocol):
    """Terminal capabilities the controller draws through."""

    def enter(self) -> None:
        """Enter full-screen and raw input mode."""
        ...

    def leave(self) -> None:
        """Restore the terminal to its original mode."""
        ...

    def size(self) -> tuple[int, int]:
        """Current terminal (width, height)."""
        ...

    def draw_welcome(self, frame: WelcomeFrame) -> None: ...

    def draw(self, frame: Frame) -> None: ...

    def set_cursor(self, cursor: CursorPlacement | None) -> None:
        """Show the cursor at ``cursor``, or hide it when None."""
        ...


class LogSource(Protocol):
    """Read-only view of already formatted log lines."""

    def messages(self) -> list[str]: ...


class FormController:
    """Drives the welcome screen and the login form.

    Usage:
        controller = FormController(backend, log_buffer, config=config)
        await controller.welcome()
        result = await controller.run()   # FormResult or None if cancelled
        controller.quit()
    """

    def __init__(
        self,
        backend: RenderBackend,
        logs: LogSource,
        events: InputSource | None = None,
        config: FormConfig | None = None,
    ) -> None:
        if events is None:
            if not isinstance(backend, InputSource):
                raise TypeError("backend does not provide input; pass events=")
            events = backend

        self.config = config or FormConfig()
        self.state = FormState(mileage=self.config.initial_mileage)
        self._logs = logs
        self._events = events

        try:
            backend.enter()
        except Exception as e:
            raise BackendError(f"Failed to enter full-screen mode: {e}") from e
        self._backend: RenderBackend | None = backend

    @property
    def closed(self) -> bool:
        return self._backend is None

    @contextmanager
    def _acquire(self) -> Iterator[RenderBackend]:
        """Borrow the backend for one render call."""
        if self._backend is None:
            raise BackendError("Controller already quit")
        try:
            yield self._backend
        except BackendError:
            raise
        except Exception as e:
            raise BackendError(f"Render failed: {e}") from e

    async def _poll(self) -> KeyEvent | None:
        try:
            return await self._events.poll(self.config.poll_timeout)
        except Exception as e:
            raise BackendError(f"Input poll failed: {e}") from e

    # -------------------------------------------------------------------------
    # Welcome
    # -------------------------------------------------------------------------

    async def welcome(self) -> None:
        """Show the banner until a key is pressed.

        Raises:
            BackendError: If drawing or polling fails
        """
        with self._acquire() as backend:
            backend.set_cursor(None)
            backend.draw_welcome(build_welcome(backend.size()))

        while True:
            event = await self._poll()
            if event is not None and event.is_press:
                logger.debug(f"Welcome dismissed with {event}")
                return

    # -------------------------------------------------------------------------
    # Form loop
    # -------------------------------------------------------------------------

    def render(self) -> Frame:
        """Draw the form once and return the frame that was drawn."""
        with self._acquire() as backend:
            frame = build_frame(
                self.state,
                backend.size(),
                self._logs.messages(),
                mask_char=self.config.mask_char,
                distance_km=self.config.distance_km,
            )
            backend.draw(frame)
            backend.set_cursor(frame.cursor)
        return frame

    def handle(self, event: KeyEvent) -> machine.Transition:
        """Feed one event to the state machine."""
        transition = machine.apply(self.state, event)
        if transition.outcome is machine.Outcome.CONFIRM:
            logger.info(f"Form confirmed for account {self.state.account!r}")
        elif transition.outcome is machine.Outcome.EXIT:
            logger.info("Form cancelled")
        return transition

    async def run(self) -> FormResult | None:
        """Run the form until the user confirms or cancels.

        Returns:
            The confirmed values, or None if the user cancelled

        Raises:
            BackendError: If drawing or polling fails
        """
        logger.info("Form started")
        while True:
            self.render()
            event = await self._poll()
            if event is None:
                continue
            transition = self.handle(event)
            if transition.done:
                return transition.result

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def quit(self) -> RenderBackend:
        """Restore the terminal and give the backend back.

        Raises:
            BackendError: If the terminal could not be restored; it may be
                left in raw/alternate-screen mode
        """
        if self._backend is None:
            raise BackendError("Controller already quit")
        backend, self._backend = self._backend, None
        try:
            backend.set_cursor(None)
            backend.leave()
        except Exception as e:
            logger.error(f"Failed to restore terminal: {e}")
            raise BackendError(f"Failed to restore terminal: {e}") from e
        return backend
