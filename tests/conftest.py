# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for pipeline tests."""
from __future__ import annotations

import asyncio
from typing import Any, List

import pytest

from axiom.directive import RequestSpec
from axiom.pipeline import ActionPipeline
from axiom.store import Store, record_actions
from axiom.throttle import ThrottleGate
from axiom.transport import Response


class FakeTransport:
    """Transport used in tests to script responses without a network."""

    def __init__(self):
        self.requests: List[RequestSpec] = []
        self.results: List[Any] = []
        self.default: Any = None
        self.closed = False
        self.gate: asyncio.Event | None = None

    def reply(self, status: int = 200, data: Any = None, **kwargs: Any) -> "FakeTransport":
        self.results.append(Response(status=status, data=data, **kwargs))
        return self

    def fail(self, error: BaseException) -> "FakeTransport":
        self.results.append(error)
        return self

    async def send(self, request: RequestSpec) -> Response:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        result = self.results.pop(0) if self.results else self.default
        if result is None:
            result = Response(status=200, data=None)
        if isinstance(result, BaseException):
            raise result
        result.request = request
        return result

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


class Recorder:
    """Collects every action reaching the forward continuation."""

    def __init__(self):
        self.forwarded: List[Any] = []
        self.dispatched: List[Any] = []

    def forward(self, action):
        self.forwarded.append(action)
        return action

    def dispatch(self, action):
        self.dispatched.append(action)
        return action


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def pipeline(transport, clock) -> ActionPipeline:
    return ActionPipeline(transport, ThrottleGate(clock=clock))


@pytest.fixture
def handle(pipeline, recorder):
    """The pipeline bound to the recorder's dispatch and forward."""
    return pipeline(recorder)(recorder.forward)


@pytest.fixture
def store(pipeline) -> Store:
    return Store(record_actions, state=[], middleware=[pipeline])
