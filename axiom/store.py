"""Minimal dispatch store hosting middleware such as the pipeline."""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List

log = logging.getLogger(__name__)

Reducer = Callable[[Any, Any], Any]
Middleware = Callable[[Any], Callable[[Callable[[Any], Any]], Callable[[Any], Any]]]


class Store:
    """Holds state, runs dispatched actions through middleware, then the reducer.

    ``dispatch`` always enters the full middleware chain, so actions
    dispatched from callbacks are intercepted again.
    """

    def __init__(self, reducer: Reducer, state: Any = None, middleware: Iterable[Middleware] = ()):
        self._reducer = reducer
        self._state = state
        self._listeners: List[Callable[[], None]] = []
        chain: Callable[[Any], Any] = self._reduce
        for mw in reversed(list(middleware)):
            chain = mw(self)(chain)
        self._chain = chain

    def dispatch(self, action: Any) -> Any:
        return self._chain(action)

    def get_state(self) -> Any:
        return self._state

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _reduce(self, action: Any) -> Any:
        self._state = self._reducer(self._state, action)
        for listener in list(self._listeners):
            listener()
        return action


def record_actions(state: Any, action: Any) -> List[Any]:
    """Reducer that keeps every action reaching the end of the chain."""
    return [*(state or []), action]
