# SPDX-License-Identifier: Apache-2.0
"""Action interception pipeline."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Set

from .classifier import Failure, classify
from .config import PipelineConfig
from .directive import Directive, parse_directive
from .messages import Action
from .metrics import ACTIONS_DROPPED, ACTIVATIONS, CALL_LATENCY
from .reinjection import Reinjector
from .throttle import ThrottleGate
from .transport import CallInvoker, HttpTransport, Transport

log = logging.getLogger(__name__)

Forward = Callable[[Any], Any]


class ActionPipeline:
    """Middleware that performs the outbound call described by an action's directive.

    Used as ``pipeline(store)(forward)(action)``. Pass-through actions return
    whatever ``forward`` returns; activated and throttled actions return
    ``None`` and complete on the running event loop.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        throttle: ThrottleGate | None = None,
        *,
        config: PipelineConfig | None = None,
    ):
        self.config = config if config is not None else PipelineConfig()
        if transport is None:
            transport = HttpTransport(timeout_s=self.config.timeout_s, headers=self.config.headers)
        self.transport = transport
        self.throttle = throttle if throttle is not None else ThrottleGate()
        self.invoker = CallInvoker(transport)
        self.reinjector = Reinjector()
        self._tasks: Set[asyncio.Task] = set()

    def __call__(self, store) -> Callable[[Forward], Callable[[Any], Any]]:
        def bind(forward: Forward) -> Callable[[Any], Any]:
            def handle(action: Any) -> Any:
                return self.process(action, forward, store.dispatch)

            return handle

        return bind

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def process(self, action: Any, forward: Forward, dispatch: Callable[[Any], Any]) -> Any:
        if not isinstance(action, Action):
            return forward(action)
        directive = parse_directive(action)
        if directive is None:
            return forward(action)
        loop = asyncio.get_running_loop()
        if directive.throttle_window_ms is not None:
            if not self.throttle.admit(action.kind, directive.throttle_window_ms):
                ACTIONS_DROPPED.labels(action.kind, "throttled").inc()
                if directive.log:
                    log.info("[throttled] %s dropped", action.kind)
                return None
        ACTIVATIONS.labels(action.kind).inc()
        task = loop.create_task(self._activate(action, directive, forward, dispatch), name=f"axiom-{action.kind}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return None

    async def _activate(self, action: Action, directive: Directive, forward: Forward, dispatch) -> None:
        start = time.perf_counter()
        try:
            response = await self.invoker.invoke(
                directive.request,
                directive.interceptors,
                kind=action.kind,
                announce=directive.log,
            )
            outcome = classify(response, directive.request, extract_data=directive.extract_data)
        except Exception as exc:
            outcome = Failure(exc)
        CALL_LATENCY.labels(action.kind).observe((time.perf_counter() - start) * 1000)
        await self.reinjector.deliver(outcome, action, directive, forward, dispatch)

    async def drain(self) -> None:
        """Wait until every in-flight activation, including ones spawned meanwhile, has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        await self.transport.close()
