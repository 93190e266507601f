# SPDX-License-Identifier: Apache-2.0
"""Outbound call execution on top of aiohttp."""
from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol

import aiohttp

from .directive import Interceptors, RequestSpec
from .serialization import decode_body

log = logging.getLogger(__name__)

SUCCESS_STATUS = 200


@dataclass(slots=True)
class Response:
    status: int
    data: Any
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""
    request: Optional[RequestSpec] = None


class Transport(Protocol):
    async def send(self, request: RequestSpec) -> Response:  # pragma: no cover - interface
        ...

    async def close(self) -> None:  # pragma: no cover - interface
        ...


class HttpTransport:
    """Shared aiohttp session; holds connections only, never per-call hooks."""

    def __init__(self, timeout_s: float = 10.0, headers: Optional[Dict[str, str]] = None):
        self.timeout_s = timeout_s
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()

    async def _ensure(self) -> aiohttp.ClientSession:
        async with self._lock:
            if self._session is not None and not self._session.closed:
                return self._session
            timeout = aiohttp.ClientTimeout(total=self.timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout, headers=self.headers)
            return self._session

    async def send(self, request: RequestSpec) -> Response:
        session = await self._ensure()
        timeout = aiohttp.ClientTimeout(total=request.timeout_s) if request.timeout_s else None
        kwargs: Dict[str, Any] = {"params": request.params, "headers": request.headers or None}
        if request.json is not None:
            kwargs["json"] = request.json
        elif request.data is not None:
            kwargs["data"] = request.data
        if timeout is not None:
            kwargs["timeout"] = timeout
        async with session.request(request.method, request.url, **kwargs) as resp:
            raw = await resp.read()
            # only a 200 body has to match the declared response type
            data = decode_body(
                raw,
                request.response_type,
                resp.content_type,
                resp.charset,
                strict=resp.status == SUCCESS_STATUS,
            )
            return Response(
                status=resp.status,
                data=data,
                headers=dict(resp.headers),
                url=str(resp.url),
                request=request,
            )

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None


async def _apply(hook: Callable[[Any], Any], value: Any) -> Any:
    result = hook(value)
    if inspect.isawaitable(result):
        result = await result
    return result


class HttpCall:
    """A single outbound call with its own interceptor chain."""

    def __init__(self, transport: Transport):
        self._transport = transport
        self._request_hooks: List[Callable[[RequestSpec], Any]] = []
        self._response_hooks: List[Callable[[Response], Any]] = []

    def use_request(self, hook: Callable[[RequestSpec], Any]) -> None:
        self._request_hooks.append(hook)

    def use_response(self, hook: Callable[[Response], Any]) -> None:
        self._response_hooks.append(hook)

    async def __call__(self, request: RequestSpec) -> Response:
        for hook in self._request_hooks:
            request = await _apply(hook, request)
        response = await self._transport.send(request)
        for hook in self._response_hooks:
            response = await _apply(hook, response)
            if not isinstance(response, Response):
                raise TypeError(f"response interceptor returned {type(response).__name__}, expected Response")
        return response


class CallInvoker:
    def __init__(self, transport: Transport):
        self.transport = transport

    def create(self, interceptors: Interceptors | None = None) -> HttpCall:
        call = HttpCall(self.transport)
        if interceptors is not None:
            if interceptors.request:
                call.use_request(interceptors.request)
            if interceptors.response:
                call.use_response(interceptors.response)
        return call

    async def invoke(
        self,
        request: RequestSpec,
        interceptors: Interceptors | None = None,
        *,
        kind: str = "",
        announce: bool = False,
    ) -> Response:
        call = self.create(interceptors)
        if announce:
            log.info("[call] %s %s %s", kind, request.method, request.url)
        return await call(request)
