# SPDX-License-Identifier: Apache-2.0
"""Delivers classified outcomes to the next stage or to user handlers."""
from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from .classifier import Failure, Outcome, Success, UnexpectedStatus
from .directive import Directive
from .messages import Action
from .metrics import ACTIONS_DROPPED, OUTCOMES

log = logging.getLogger(__name__)


class Reinjector:
    """Turns one outcome into exactly one handler call (or a forward)."""

    async def deliver(
        self,
        outcome: Outcome,
        action: Action,
        directive: Directive,
        forward: Callable[[Any], Any],
        dispatch: Callable[[Any], Any],
    ) -> None:
        handler = directive.outcome_handler()
        if isinstance(outcome, UnexpectedStatus):
            try:
                copy = action.skipped()
            except Exception as exc:
                outcome = Failure(exc)
            else:
                if directive.log:
                    log.info("[unexpected status %s] %s", outcome.response.status, action.kind)
                self._done(action, directive)
                OUTCOMES.labels(action.kind, outcome.name).inc()
                await self._invoke(action, handler.on_unexpected_status, outcome.response, copy, forward, dispatch)
                return
        if isinstance(outcome, Success):
            try:
                copy = action.with_payload(outcome.value)
            except Exception as exc:
                outcome = Failure(exc)
            else:
                if directive.log:
                    log.info("[valid response] %s", action.kind)
                    if outcome.value is not outcome.response:
                        log.info("[extracting data] %s", action.kind)
                    log.info("[dispatching] %s", action.kind)
                self._done(action, directive)
                OUTCOMES.labels(action.kind, outcome.name).inc()
                await self._invoke(action, handler.on_success, copy, forward, dispatch)
                return
        if directive.log:
            log.info("[error] %s: %s", action.kind, outcome.error)
        self._done(action, directive)
        OUTCOMES.labels(action.kind, outcome.name).inc()
        await self._invoke(action, handler.on_error, outcome.error, action, forward, dispatch)

    @staticmethod
    def _done(action: Action, directive: Directive) -> None:
        if directive.log and directive.verbose_log:
            log.info("[done] %s %r", action.kind, action)

    @staticmethod
    async def _invoke(action: Action, fn: Callable[..., Any], *args: Any) -> None:
        try:
            result = fn(*args)
            if inspect.isawaitable(result):
                await result
        except Exception:
            ACTIONS_DROPPED.labels(action.kind, "handler_error").inc()
            log.exception("outcome handler for %s failed", action.kind)
