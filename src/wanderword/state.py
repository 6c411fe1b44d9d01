"""Application and playback state for a word-journey viewer.

All state lives in one immutable ``AppState``; every user action or timer
tick is an event passed to ``update``, which returns the next state. The map
front end renders from the state and never mutates it.

Playback walks the journey one waypoint at a time. ``active_index`` is -1
while only the origin is shown and len(journey) - 1 at the last waypoint.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

# Seconds between waypoints at 1x speed
BASE_STEP_INTERVAL = 1.5
PLAYBACK_SPEEDS = (0.5, 1.0, 2.0)


class Status(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class AppState:
    status: Status = Status.IDLE
    journey: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    active_index: int = -1
    playing: bool = False
    speed: float = 1.0
    panel_open: bool = False

    @property
    def step_count(self) -> int:
        if not self.journey:
            return 0
        return len(self.journey.get("journey") or [])

    @property
    def progress(self) -> float:
        """Fraction of waypoints revealed, 0.0 to 1.0."""
        if not self.step_count:
            return 0.0
        return (self.active_index + 1) / self.step_count

    @property
    def can_go_next(self) -> bool:
        return self.active_index < self.step_count - 1

    @property
    def can_go_prev(self) -> bool:
        return self.active_index > -1

    @property
    def tick_interval(self) -> float:
        """Seconds until the next auto-advance at the current speed."""
        return BASE_STEP_INTERVAL / self.speed


# Events


@dataclass(frozen=True)
class SearchStarted:
    word: str


@dataclass(frozen=True)
class SearchSucceeded:
    journey: dict[str, Any]


@dataclass(frozen=True)
class SearchFailed:
    message: str


@dataclass(frozen=True)
class TogglePlay:
    pass


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Prev:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Tick:
    """Timer fired while playing."""


@dataclass(frozen=True)
class SetSpeed:
    speed: float


@dataclass(frozen=True)
class ShowPanel:
    pass


@dataclass(frozen=True)
class HidePanel:
    pass


Event = Union[
    SearchStarted, SearchSucceeded, SearchFailed, TogglePlay, Next, Prev,
    Reset, Tick, SetSpeed, ShowPanel, HidePanel,
]


def update(state: AppState, event: Event) -> AppState:
    """Return the state that follows ``event``. Never mutates ``state``."""
    if isinstance(event, SearchStarted):
        # Only one request may be in flight
        if state.status == Status.LOADING:
            return state
        return replace(
            state,
            status=Status.LOADING,
            error=None,
            playing=False,
            active_index=-1,
            panel_open=False,
        )

    if isinstance(event, SearchSucceeded):
        return replace(
            state,
            status=Status.READY,
            journey=event.journey,
            error=None,
            active_index=-1,
            playing=False,
            panel_open=True,
        )

    if isinstance(event, SearchFailed):
        # Keep the previous journey on screen; only the error changes
        return replace(
            state,
            status=Status.ERROR,
            error=event.message or "RESEARCH_FAILED_RETRY_QUERY",
        )

    if state.status == Status.LOADING and not isinstance(event, (ShowPanel, HidePanel, SetSpeed)):
        return state

    if isinstance(event, TogglePlay):
        if not state.step_count:
            return state
        if not state.playing and not state.can_go_next:
            # Replay from the origin once the end has been reached
            return replace(state, playing=True, active_index=-1)
        return replace(state, playing=not state.playing)

    if isinstance(event, Next):
        return replace(state, active_index=min(state.active_index + 1, state.step_count - 1))

    if isinstance(event, Prev):
        return replace(state, active_index=max(state.active_index - 1, -1))

    if isinstance(event, Reset):
        return replace(state, playing=False, active_index=-1)

    if isinstance(event, Tick):
        if not state.playing:
            return state
        if state.can_go_next:
            next_state = replace(state, active_index=state.active_index + 1)
            # Stop once the last waypoint is shown
            if not next_state.can_go_next:
                next_state = replace(next_state, playing=False)
            return next_state
        return replace(state, playing=False)

    if isinstance(event, SetSpeed):
        if event.speed not in PLAYBACK_SPEEDS:
            raise ValueError(f"Unsupported speed {event.speed}; use one of {PLAYBACK_SPEEDS}")
        return replace(state, speed=event.speed)

    if isinstance(event, ShowPanel):
        return replace(state, panel_open=state.journey is not None)

    if isinstance(event, HidePanel):
        return replace(state, panel_open=False)

    raise TypeError(f"Unknown event: {event!r}")
