# SPDX-License-Identifier: Apache-2.0
"""Outcome handlers invoked by the reinjection stage."""
from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Optional

from .metrics import ACTIONS_DROPPED

log = logging.getLogger(__name__)

Forward = Callable[[Any], Any]
Dispatch = Callable[[Any], Any]


class OutcomeHandler(abc.ABC):
    """One method per classified outcome.

    The defaults reproduce the pipeline's standard behaviour: a success is
    forwarded to the next stage, everything else is dropped.
    """

    def on_success(self, action, forward: Forward, dispatch: Dispatch) -> Any:
        return forward(action)

    def on_error(self, error: BaseException, action, forward: Forward, dispatch: Dispatch) -> Any:
        log.debug("no error handler for %s; dropping (%s)", action.kind, error)
        ACTIONS_DROPPED.labels(action.kind, "unhandled_error").inc()

    def on_unexpected_status(self, response, action, forward: Forward, dispatch: Dispatch) -> Any:
        log.debug("no status handler for %s; dropping status=%s", action.kind, response.status)
        ACTIONS_DROPPED.labels(action.kind, "unhandled_status").inc()


class CallbackHandler(OutcomeHandler):
    """Adapts the optional ``on_success``/``on_error``/``on_unexpected_status`` callables."""

    def __init__(
        self,
        on_success: Optional[Callable[..., Any]] = None,
        on_error: Optional[Callable[..., Any]] = None,
        on_unexpected_status: Optional[Callable[..., Any]] = None,
    ):
        self._on_success = on_success
        self._on_error = on_error
        self._on_unexpected_status = on_unexpected_status

    def on_success(self, action, forward: Forward, dispatch: Dispatch) -> Any:
        if self._on_success is None:
            return super().on_success(action, forward, dispatch)
        return self._on_success(action, forward, dispatch)

    def on_error(self, error: BaseException, action, forward: Forward, dispatch: Dispatch) -> Any:
        if self._on_error is None:
            return super().on_error(error, action, forward, dispatch)
        return self._on_error(error, action, forward, dispatch)

    def on_unexpected_status(self, response, action, forward: Forward, dispatch: Dispatch) -> Any:
        if self._on_unexpected_status is None:
            return super().on_unexpected_status(response, action, forward, dispatch)
        return self._on_unexpected_status(response, action, forward, dispatch)
