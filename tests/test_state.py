"""Tests for the viewer state machine."""

import pytest

from wanderword.mock_data import MOCK_JOURNEYS
from wanderword.state import (
    AppState,
    HidePanel,
    Next,
    Prev,
    Reset,
    SearchFailed,
    SearchStarted,
    SearchSucceeded,
    SetSpeed,
    ShowPanel,
    Status,
    Tick,
    TogglePlay,
    update,
)

COFFEE = MOCK_JOURNEYS["coffee"]


def ready_state():
    return update(update(AppState(), SearchStarted("coffee")), SearchSucceeded(COFFEE))


def run(state, *events):
    for event in events:
        state = update(state, event)
    return state


class TestSearch:

    def test_search_lifecycle(self):
        state = update(AppState(), SearchStarted("coffee"))
        assert state.status == Status.LOADING

        state = update(state, SearchSucceeded(COFFEE))
        assert state.status == Status.READY
        assert state.active_index == -1
        assert state.panel_open
        assert state.step_count == 4

    def test_second_search_ignored_while_loading(self):
        loading = update(AppState(), SearchStarted("coffee"))
        assert update(loading, SearchStarted("tea")) is loading

    def test_failure_keeps_previous_journey(self):
        state = run(ready_state(), SearchStarted("zeitgeist"), SearchFailed("no data"))
        assert state.status == Status.ERROR
        assert state.error == "no data"
        assert state.journey is COFFEE

    def test_failure_default_message(self):
        state = run(AppState(), SearchStarted("x"), SearchFailed(""))
        assert state.error == "RESEARCH_FAILED_RETRY_QUERY"

    def test_new_search_clears_error(self):
        state = run(AppState(), SearchStarted("x"), SearchFailed("boom"), SearchStarted("coffee"))
        assert state.error is None
        assert state.status == Status.LOADING

    def test_playback_ignored_while_loading(self):
        state = run(ready_state(), SearchStarted("tea"))
        assert run(state, Next(), TogglePlay(), Tick()) == state


class TestPlayback:

    def test_next_and_prev_are_clamped(self):
        state = run(ready_state(), Prev())
        assert state.active_index == -1

        state = run(state, Next(), Next(), Next(), Next(), Next(), Next())
        assert state.active_index == 3
        assert not state.can_go_next
        assert state.progress == 1.0

    def test_tick_advances_and_stops_at_end(self):
        state = run(ready_state(), TogglePlay())
        assert state.playing

        state = run(state, Tick(), Tick(), Tick())
        assert state.active_index == 2
        assert state.playing

        state = update(state, Tick())
        assert state.active_index == 3
        assert not state.playing

    def test_tick_when_paused_does_nothing(self):
        state = ready_state()
        assert update(state, Tick()) is state

    def test_toggle_at_end_replays(self):
        state = run(ready_state(), Next(), Next(), Next(), Next())
        state = update(state, TogglePlay())
        assert state.playing
        assert state.active_index == -1

    def test_toggle_pauses(self):
        state = run(ready_state(), TogglePlay(), Tick(), TogglePlay())
        assert not state.playing
        assert state.active_index == 0

    def test_toggle_without_steps(self):
        state = run(AppState(), SearchStarted("x"), SearchSucceeded({"word": "x", "journey": []}))
        assert update(state, TogglePlay()) is state

    def test_reset(self):
        state = run(ready_state(), TogglePlay(), Tick(), Tick(), Reset())
        assert state.active_index == -1
        assert not state.playing


class TestSpeedAndPanel:

    def test_speed_changes_interval(self):
        state = update(ready_state(), SetSpeed(2.0))
        assert state.tick_interval == pytest.approx(0.75)

    def test_unsupported_speed(self):
        with pytest.raises(ValueError):
            update(ready_state(), SetSpeed(3.0))

    def test_panel_needs_a_journey(self):
        assert not update(AppState(), ShowPanel()).panel_open
        state = run(ready_state(), HidePanel())
        assert not state.panel_open
        assert update(state, ShowPanel()).panel_open

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            update(AppState(), object())

    def test_update_does_not_mutate(self):
        state = ready_state()
        update(state, Next())
        assert state.active_index == -1
