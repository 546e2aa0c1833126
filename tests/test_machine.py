"""Unit tests for the focus/edit state machine."""

import random

import pytest

from pretty_tui.core import machine
from pretty_tui.core.keys import Key, KeyEvent, KeyKind, keys
from pretty_tui.core.machine import Outcome, apply
from pretty_tui.core.state import Focus, FormResult, FormState, Mode


def feed(state: FormState, *names: str) -> list[machine.Transition]:
    """Apply press events built from short key names."""
    return [apply(state, event) for event in keys(*names)]


@pytest.fixture
def state():
    return FormState()


@pytest.fixture
def editing_account():
    return FormState(account="hello", mode=Mode.EDIT, cursor=5)


# =============================================================================
# Initial state
# =============================================================================


def test_initial_state(state):
    assert state.account == ""
    assert state.password == ""
    assert state.mileage == 100
    assert state.focus is Focus.ACCOUNT
    assert state.mode is Mode.NAVIGATE
    assert state.cursor == 0


def test_mileage_clamped_on_construction():
    assert FormState(mileage=150).mileage == 100
    assert FormState(mileage=-3).mileage == 0


# =============================================================================
# Navigate mode
# =============================================================================


class TestNavigate:
    """Focus movement, edit entry and quitting."""

    @pytest.mark.parametrize("name", ["q", "escape"])
    def test_quit_keys_exit(self, state, name):
        (transition,) = feed(state, name)
        assert transition.outcome is Outcome.EXIT
        assert transition.result is None

    @pytest.mark.parametrize("name", ["down", "j"])
    def test_down_moves_one_step(self, state, name):
        feed(state, name)
        assert state.focus is Focus.PASSWORD
        feed(state, name)
        assert state.focus is Focus.MILEAGE

    @pytest.mark.parametrize("name", ["up", "k"])
    def test_up_moves_one_step(self, name):
        state = FormState(focus=Focus.MILEAGE)
        feed(state, name)
        assert state.focus is Focus.PASSWORD
        feed(state, name)
        assert state.focus is Focus.ACCOUNT

    def test_no_wraparound(self, state):
        feed(state, "up")
        assert state.focus is Focus.ACCOUNT
        feed(state, "down", "down", "down", "down")
        assert state.focus is Focus.MILEAGE

    @pytest.mark.parametrize("name", ["enter", "i", "a"])
    def test_edit_entry_moves_cursor_to_end(self, name):
        state = FormState(account="alice")
        feed(state, name)
        assert state.mode is Mode.EDIT
        assert state.cursor == 5
        assert state.account == "alice"

    def test_edit_entry_on_mileage(self):
        state = FormState(focus=Focus.MILEAGE)
        feed(state, "i")
        assert state.mode is Mode.EDIT
        assert state.focus is Focus.MILEAGE

    @pytest.mark.parametrize("name", ["x", "h", "l", "tab", "backspace", "left", "right", "other"])
    def test_other_keys_are_noops(self, state, name):
        before = FormState(**vars(state))
        (transition,) = feed(state, name)
        assert transition.outcome is Outcome.CONTINUE
        assert state == before

    def test_focus_change_parks_cursor_at_end(self):
        state = FormState(account="abcde", password="xy", mode=Mode.EDIT, cursor=5)
        feed(state, "escape", "down")
        assert state.focus is Focus.PASSWORD
        assert state.cursor == 2


# =============================================================================
# Edit mode - text fields
# =============================================================================


class TestEditText:
    """Editing the account and password buffers."""

    def test_escape_returns_to_navigate(self, editing_account):
        feed(editing_account, "left", "escape")
        assert editing_account.mode is Mode.NAVIGATE
        assert editing_account.cursor == 4
        assert editing_account.focus is Focus.ACCOUNT

    def test_insert_at_cursor(self, editing_account):
        feed(editing_account, "left", "left", "X")
        assert editing_account.account == "helXlo"
        assert editing_account.cursor == 4

    def test_insert_space(self, editing_account):
        feed(editing_account, " ")
        assert editing_account.account == "hello "

    @pytest.mark.parametrize("focus", [Focus.ACCOUNT, Focus.PASSWORD])
    def test_backspace_removes_char_before_cursor(self, focus):
        state = FormState(focus=focus, mode=Mode.EDIT)
        feed(state, "a", "b", "c", "d", "left", "left", "backspace")
        assert state.buffer == "acd"
        assert state.cursor == 1

    def test_backspace_at_start_is_idempotent(self, editing_account):
        feed(editing_account, *["left"] * 5)
        before = FormState(**vars(editing_account))
        feed(editing_account, "backspace", "backspace", "backspace")
        assert editing_account == before

    def test_right_at_end_is_idempotent(self, editing_account):
        feed(editing_account, "right", "right")
        assert editing_account.cursor == 5

    def test_left_stops_at_zero(self, editing_account):
        feed(editing_account, *["left"] * 8)
        assert editing_account.cursor == 0

    @pytest.mark.parametrize("name", ["enter", "tab"])
    def test_advance_from_account(self, name):
        state = FormState(account="abc", password="pw", mode=Mode.EDIT, cursor=3)
        feed(state, name)
        assert state.focus is Focus.PASSWORD
        assert state.mode is Mode.EDIT
        assert state.cursor == 2

    @pytest.mark.parametrize("name", ["enter", "tab"])
    def test_advance_from_password(self, name):
        state = FormState(focus=Focus.PASSWORD, mode=Mode.EDIT)
        (transition,) = feed(state, name)
        assert state.focus is Focus.MILEAGE
        assert state.mode is Mode.EDIT
        assert transition.outcome is Outcome.CONTINUE

    def test_up_down_ignored_while_editing(self, editing_account):
        feed(editing_account, "down", "up")
        assert editing_account.focus is Focus.ACCOUNT

    def test_vim_letters_are_text_while_editing(self):
        state = FormState(mode=Mode.EDIT)
        feed(state, "q", "j", "k", "h", "l")
        assert state.account == "qjkhl"
        assert state.mode is Mode.EDIT


# =============================================================================
# Edit mode - mileage
# =============================================================================


class TestEditMileage:
    """Saturating adjustment and confirmation."""

    @pytest.fixture
    def mileage(self):
        return FormState(account="abc", password="xy", focus=Focus.MILEAGE, mode=Mode.EDIT)

    @pytest.mark.parametrize("name", ["h", "left"])
    def test_decrement(self, mileage, name):
        feed(mileage, name, name)
        assert mileage.mileage == 98

    @pytest.mark.parametrize("name", ["l", "right"])
    def test_increment_saturates_at_100(self, mileage, name):
        feed(mileage, name)
        assert mileage.mileage == 100

    def test_decrement_saturates_at_zero(self):
        state = FormState(mileage=1, focus=Focus.MILEAGE, mode=Mode.EDIT)
        feed(state, "h", "h", "left")
        assert state.mileage == 0

    def test_other_characters_ignored(self, mileage):
        feed(mileage, "x", "5", "backspace")
        assert mileage.mileage == 100
        assert mileage.account == "abc"

    def test_tab_does_not_confirm(self, mileage):
        (transition,) = feed(mileage, "tab")
        assert transition.outcome is Outcome.CONTINUE
        assert mileage.mode is Mode.EDIT

    def test_enter_confirms(self, mileage):
        feed(mileage, "h")
        (transition,) = feed(mileage, "enter")
        assert transition.outcome is Outcome.CONFIRM
        assert transition.result == FormResult("abc", "xy", 99)
        assert mileage.mode is Mode.NAVIGATE

    def test_escape_then_enter_does_not_confirm(self, mileage):
        transitions = feed(mileage, "escape", "enter")
        assert all(t.outcome is Outcome.CONTINUE for t in transitions)
        assert mileage.mode is Mode.EDIT


# =============================================================================
# Release events and scenarios
# =============================================================================


def test_release_events_are_inert(state):
    transition = apply(state, KeyEvent.character("q", kind=KeyKind.RELEASE))
    assert transition.outcome is Outcome.CONTINUE
    apply(state, KeyEvent.of(Key.DOWN, kind=KeyKind.RELEASE))
    assert state.focus is Focus.ACCOUNT


def test_full_scenario(state):
    feed(state, "i")
    assert (state.mode, state.cursor) == (Mode.EDIT, 0)
    feed(state, "a", "b", "c")
    assert (state.account, state.cursor) == ("abc", 3)
    feed(state, "tab")
    assert (state.focus, state.mode, state.cursor) == (Focus.PASSWORD, Mode.EDIT, 0)
    feed(state, "x", "y")
    assert (state.password, state.cursor) == ("xy", 2)
    feed(state, "enter")
    assert (state.focus, state.mode) == (Focus.MILEAGE, Mode.EDIT)
    feed(state, *["h"] * 5)
    assert state.mileage == 95
    (transition,) = feed(state, "enter")
    assert transition.result == FormResult("abc", "xy", 95)


def test_random_sequences_keep_invariants():
    """Cursor and mileage bounds hold after every transition; only
    Enter on mileage while editing produces a result."""
    rng = random.Random(1234)
    alphabet = ["a", "b", "h", "l", "i", "j", "k", "q", "z", " "] + [k.value for k in Key if k is not Key.CHAR]

    for _ in range(200):
        state = FormState()
        for _ in range(60):
            name = rng.choice(alphabet)
            before_focus, before_mode = state.focus, state.mode
            (transition,) = feed(state, name)

            assert 0 <= state.mileage <= 100
            if state.focus.is_text:
                assert 0 <= state.cursor <= len(state.buffer)
            if transition.result is not None:
                assert (before_focus, before_mode, name) == (Focus.MILEAGE, Mode.EDIT, "enter")
            if transition.done:
                break


def test_password_hidden_in_repr():
    state = FormState(password="secret")
    result = state.result()
    assert "secret" not in repr(state)
    assert "secret" not in repr(result)


def test_distance_km():
    assert FormResult("a", "b", 95).distance_km(5.0) == pytest.approx(4.75)
