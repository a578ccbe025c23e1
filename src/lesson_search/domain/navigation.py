"""Result navigation state machine.

The search overlay is driven by discrete input events. ``transition`` is a
pure function: given the current state, an event and a search function, it
returns the next state and the effects the host should perform (render rows,
move the focus highlight, navigate to a lesson, show or hide the overlay).

Focus is an index into the current results, -1 meaning nothing is focused.
It is clamped at both ends and reset to -1 whenever the result set changes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from lesson_search.domain.model import DocumentKey
from lesson_search.domain.search import ResultView
from lesson_search.search.query import DEFAULT_MIN_QUERY_LENGTH, is_degenerate


NO_FOCUS = -1

SearchFunction = Callable[[str], Sequence[ResultView]]


# --- Input events ---


@dataclass(slots=True, frozen=True)
class NavigationEvent:
    pass


@dataclass(slots=True, frozen=True)
class QueryChanged(NavigationEvent):
    text: str


@dataclass(slots=True, frozen=True)
class MoveUp(NavigationEvent):
    pass


@dataclass(slots=True, frozen=True)
class MoveDown(NavigationEvent):
    pass


@dataclass(slots=True, frozen=True)
class Activate(NavigationEvent):
    pass


@dataclass(slots=True, frozen=True)
class Open(NavigationEvent):
    pass


@dataclass(slots=True, frozen=True)
class Close(NavigationEvent):
    pass


@dataclass(slots=True, frozen=True)
class Toggle(NavigationEvent):
    pass


# --- Effects ---


@dataclass(slots=True, frozen=True)
class Effect:
    pass


@dataclass(slots=True, frozen=True)
class RenderResults(Effect):
    items: tuple[ResultView, ...]


@dataclass(slots=True, frozen=True)
class ShowHint(Effect):
    """Query too short to search; show the typing hint."""


@dataclass(slots=True, frozen=True)
class ShowEmpty(Effect):
    """Query searched but nothing matched."""


@dataclass(slots=True, frozen=True)
class FocusChanged(Effect):
    index: int


@dataclass(slots=True, frozen=True)
class Selected(Effect):
    document_key: DocumentKey


@dataclass(slots=True, frozen=True)
class Opened(Effect):
    pass


@dataclass(slots=True, frozen=True)
class Closed(Effect):
    pass


@dataclass(slots=True, frozen=True)
class NavigationState:
    """Overlay visibility, retained query and focus within its results."""

    is_open: bool = False
    query_text: str = ""
    results: tuple[ResultView, ...] = ()
    focus: int = NO_FOCUS

    @property
    def has_focus(self) -> bool:
        return self.focus != NO_FOCUS

    @property
    def focused_result(self) -> ResultView | None:
        if 0 <= self.focus < len(self.results):
            return self.results[self.focus]
        return None


def transition(
    state: NavigationState,
    event: NavigationEvent,
    search: SearchFunction,
    *,
    min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
) -> tuple[NavigationState, list[Effect]]:
    """Apply one input event.

    Args:
        state: Current navigation state.
        event: Input event from the host.
        search: Maps query text to ranked result views.
        min_query_length: Shorter queries show the hint instead of "no results".

    Returns:
        Tuple of (new_state, effects). Unknown or inapplicable events return
        the state unchanged with no effects.
    """
    if isinstance(event, QueryChanged):
        return _run_query(state, event.text, search, min_query_length)

    if isinstance(event, Toggle):
        event = Close() if state.is_open else Open()

    if isinstance(event, Open):
        if state.is_open:
            return state, []
        opened = replace(state, is_open=True)
        if not state.query_text:
            return replace(opened, results=(), focus=NO_FOCUS), [Opened(), ShowHint()]
        new_state, effects = _run_query(opened, state.query_text, search, min_query_length)
        return new_state, [Opened(), *effects]

    if isinstance(event, Close):
        if not state.is_open:
            return state, []
        return replace(state, is_open=False), [Closed()]

    if not state.is_open:
        return state, []

    if isinstance(event, MoveDown):
        return _move_focus(state, min(state.focus + 1, len(state.results) - 1))

    if isinstance(event, MoveUp):
        return _move_focus(state, max(state.focus - 1, NO_FOCUS))

    if isinstance(event, Activate):
        selected = state.focused_result
        if selected is None:
            return state, []
        return replace(state, is_open=False), [Closed(), Selected(document_key=selected.document_key)]

    return state, []


def _run_query(
    state: NavigationState,
    text: str,
    search: SearchFunction,
    min_query_length: int,
) -> tuple[NavigationState, list[Effect]]:
    results = tuple(search(text))
    new_state = replace(state, query_text=text, results=results, focus=NO_FOCUS)
    if is_degenerate(text, min_query_length):
        return new_state, [RenderResults(items=()), ShowHint()]
    if not results:
        return new_state, [RenderResults(items=()), ShowEmpty()]
    return new_state, [RenderResults(items=results)]


def _move_focus(state: NavigationState, focus: int) -> tuple[NavigationState, list[Effect]]:
    # With no results min(0, -1) keeps focus at -1
    focus = max(focus, NO_FOCUS)
    if focus == state.focus:
        return state, []
    return replace(state, focus=focus), [FocusChanged(index=focus)]
