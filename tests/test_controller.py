"""Tests for FormController using a scripted input source and a recording backend."""

import pytest

from pretty_tui.config import FormConfig
from pretty_tui.core import BackendError, FormController, FormResult
from pretty_tui.core.keys import KeyEvent, KeyKind, keys
from pretty_tui.core.render_model import BorderState, Frame, WelcomeFrame
from pretty_tui.core.state import Focus, Mode
from pretty_tui.logs import LogBuffer

# =============================================================================
# Fakes
# =============================================================================


class ScriptedInput:
    """Input source replaying a fixed list; None entries are poll timeouts."""

    def __init__(self, events):
        self.events = list(events)
        self.timeouts: list[float | None] = []

    async def poll(self, timeout):
        self.timeouts.append(timeout)
        if not self.events:
            raise AssertionError("Input script exhausted")
        return self.events.pop(0)


class RecordingBackend:
    """Render backend that records every call."""

    def __init__(self, size=(140, 40)):
        self._size = size
        self.calls: list[str] = []
        self.frames: list[Frame] = []
        self.welcome_frames: list[WelcomeFrame] = []
        self.cursors = []
        self.active = False

    def enter(self):
        self.calls.append("enter")
        self.active = True

    def leave(self):
        self.calls.append("leave")
        self.active = False

    def size(self):
        return self._size

    def draw_welcome(self, frame):
        self.calls.append("draw_welcome")
        self.welcome_frames.append(frame)

    def draw(self, frame):
        self.calls.append("draw")
        self.frames.append(frame)

    def set_cursor(self, cursor):
        self.cursors.append(cursor)


class FailingBackend(RecordingBackend):
    def __init__(self, fail_on: str):
        super().__init__()
        self.fail_on = fail_on

    def enter(self):
        if self.fail_on == "enter":
            raise OSError("no tty")
        super().enter()

    def draw(self, frame):
        if self.fail_on == "draw":
            raise OSError("broken pipe")
        super().draw(frame)

    def leave(self):
        if self.fail_on == "leave":
            raise OSError("cannot restore")
        super().leave()


class InputBackend(RecordingBackend):
    """Backend that is also its own input source."""

    def __init__(self, events):
        super().__init__()
        self.script = ScriptedInput(events)

    async def poll(self, timeout):
        return await self.script.poll(timeout)


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def logs():
    return LogBuffer()


def make(backend, logs, events, **config):
    return FormController(backend, logs, events=ScriptedInput(events), config=FormConfig(**config))


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    def test_construction_enters(self, backend, logs):
        make(backend, logs, [])
        assert backend.calls == ["enter"]

    def test_enter_failure_is_backend_error(self, logs):
        with pytest.raises(BackendError):
            make(FailingBackend("enter"), logs, [])

    def test_quit_returns_backend(self, backend, logs):
        controller = make(backend, logs, [])
        assert controller.quit() is backend
        assert backend.calls[-1] == "leave"
        assert controller.closed

    @pytest.mark.asyncio
    async def test_use_after_quit_fails(self, backend, logs):
        controller = make(backend, logs, keys("q"))
        controller.quit()
        with pytest.raises(BackendError):
            await controller.run()
        with pytest.raises(BackendError):
            controller.quit()

    def test_quit_failure_is_reported(self, logs):
        controller = make(FailingBackend("leave"), logs, [])
        with pytest.raises(BackendError, match="restore"):
            controller.quit()

    def test_backend_without_input_needs_events(self, backend, logs):
        with pytest.raises(TypeError):
            FormController(backend, logs)

    @pytest.mark.asyncio
    async def test_backend_as_input_source(self, logs):
        backend = InputBackend(keys("q"))
        controller = FormController(backend, logs)
        assert await controller.run() is None

    def test_initial_mileage_from_config(self, backend, logs):
        controller = make(backend, logs, [], initial_mileage=40)
        assert controller.state.mileage == 40


# =============================================================================
# Welcome
# =============================================================================


class TestWelcome:
    @pytest.mark.asyncio
    async def test_waits_for_a_press(self, backend, logs):
        release = KeyEvent.character("x", kind=KeyKind.RELEASE)
        script = [None, release, None, KeyEvent.character("x"), KeyEvent.character("q")]
        events = ScriptedInput(script)
        controller = FormController(backend, logs, events=events)
        await controller.welcome()

        assert backend.calls == ["enter", "draw_welcome"]
        # The press after the release ends the welcome; 'q' is left for the form
        assert events.events == [KeyEvent.character("q")]

    @pytest.mark.asyncio
    async def test_welcome_key_not_fed_to_form(self, backend, logs):
        controller = make(backend, logs, keys("q", "i"))
        await controller.welcome()
        assert controller.state.mode is Mode.NAVIGATE


# =============================================================================
# Run loop
# =============================================================================


class TestRun:
    @pytest.mark.asyncio
    async def test_quit_returns_none(self, backend, logs):
        controller = make(backend, logs, keys("q"))
        assert await controller.run() is None

    @pytest.mark.asyncio
    async def test_scenario(self, backend, logs):
        script = keys("i", "a", "b", "c", "tab", "x", "y", "enter", *["h"] * 5, "enter")
        controller = make(backend, logs, script)
        result = await controller.run()
        assert result == FormResult("abc", "xy", 95)

    @pytest.mark.asyncio
    async def test_renders_every_iteration(self, backend, logs):
        controller = make(backend, logs, [None, None, *keys("q")])
        await controller.run()
        assert backend.calls.count("draw") == 3

    @pytest.mark.asyncio
    async def test_poll_timeout_from_config(self, backend, logs):
        events = ScriptedInput(keys("q"))
        controller = FormController(backend, logs, events=events, config=FormConfig(poll_timeout=0.2))
        await controller.run()
        assert events.timeouts == [0.2]

    @pytest.mark.asyncio
    async def test_frames_track_state(self, backend, logs):
        controller = make(backend, logs, [*keys("i", "p", "w"), None, *keys("escape", "q")])
        await controller.run()

        editing = backend.frames[3]
        assert editing.mode is Mode.EDIT
        assert editing.account.text == "pw"
        assert editing.account.border is BorderState.FOCUSED_EDIT
        assert editing.cursor is not None and editing.cursor.offset == 2

        navigating = backend.frames[-1]
        assert navigating.account.border is BorderState.FOCUSED_NAVIGATE
        assert navigating.cursor is None

    @pytest.mark.asyncio
    async def test_cursor_sent_to_backend(self, backend, logs):
        controller = make(backend, logs, [*keys("i", "a"), None, *keys("escape", "q")])
        await controller.run()
        placed = [c for c in backend.cursors if c is not None]
        assert placed[-1].field is Focus.ACCOUNT
        assert placed[-1].offset == 1
        assert backend.cursors[-1] is None

    @pytest.mark.asyncio
    async def test_password_masked_in_frames(self, backend, logs):
        script = keys("j", "i", "s", "e", "c", "escape", "q")
        controller = make(backend, logs, script, mask_char="#")
        await controller.run()
        assert backend.frames[-1].password.text == "###"
        assert controller.state.password == "sec"

    @pytest.mark.asyncio
    async def test_draw_failure_aborts(self, logs):
        controller = make(FailingBackend("draw"), logs, keys("q"))
        with pytest.raises(BackendError, match="Render failed"):
            await controller.run()

    @pytest.mark.asyncio
    async def test_poll_failure_aborts(self, backend, logs):
        class BrokenInput:
            async def poll(self, timeout):
                raise OSError("stdin closed")

        controller = FormController(backend, logs, events=BrokenInput())
        with pytest.raises(BackendError, match="poll"):
            await controller.run()

    @pytest.mark.asyncio
    async def test_log_panel_shows_controller_logs(self, backend):
        from pretty_tui.logs import setup_logging

        buffer = setup_logging("INFO", LogBuffer())
        controller = make(backend, buffer, [None, *keys("q")])
        await controller.run()
        assert any("Form started" in line for line in backend.frames[-1].log.lines)

    @pytest.mark.asyncio
    async def test_password_never_logged(self, backend):
        from pretty_tui.logs import setup_logging

        buffer = setup_logging("DEBUG", LogBuffer())
        script = keys("i", "a", "tab", "s", "3", "c", "r", "e", "t", "enter", "enter")
        controller = make(backend, buffer, script)
        result = await controller.run()
        assert result.password == "s3cret"
        assert not any("s3cret" in line for line in buffer.messages())
