# SPDX-License-Identifier: Apache-2.0
"""Directive parsing: turns the configuration attached to an action into a typed record."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from .handlers import CallbackHandler, OutcomeHandler
from .messages import Action
from .utils import resolve_callable


class DirectiveError(ValueError):
    """Raised when a directive cannot be turned into a valid configuration."""


@dataclass(slots=True)
class RequestSpec:
    url: str
    method: str = "GET"
    params: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    json: Any = None
    data: Any = None
    response_type: Optional[str] = None
    timeout_s: Optional[float] = None


@dataclass(slots=True)
class Interceptors:
    request: Optional[Callable[[RequestSpec], Any]] = None
    response: Optional[Callable[[Any], Any]] = None


@dataclass(slots=True)
class Directive:
    """Fully defaulted pipeline configuration for one action.

    ``throttle_window_ms`` of ``None`` disables throttling, ``request`` of
    ``None`` turns the pipeline into a pass-through. ``handler`` is built from
    the three callbacks when no explicit :class:`OutcomeHandler` is given.
    """

    request: Optional[RequestSpec] = None
    throttle_window_ms: Optional[float] = None
    log: bool = False
    verbose_log: bool = False
    extract_data: bool = True
    on_success: Optional[Callable[..., Any]] = None
    on_error: Optional[Callable[..., Any]] = None
    on_unexpected_status: Optional[Callable[..., Any]] = None
    interceptors: Interceptors = field(default_factory=Interceptors)
    handler: Optional[OutcomeHandler] = None
    skip: bool = False

    def outcome_handler(self) -> OutcomeHandler:
        if self.handler is not None:
            return self.handler
        return CallbackHandler(
            on_success=self.on_success,
            on_error=self.on_error,
            on_unexpected_status=self.on_unexpected_status,
        )


_ALIASES = {
    "throttleWindowMs": "throttle_window_ms",
    "verboseLog": "verbose_log",
    "xlog": "verbose_log",
    "extractData": "extract_data",
    "onSuccess": "on_success",
    "onError": "on_error",
    "onUnexpectedStatus": "on_unexpected_status",
    "_skip": "skip",
}

_FIELDS = frozenset(Directive.__dataclass_fields__)
_REQUEST_FIELDS = frozenset(RequestSpec.__dataclass_fields__)
_CALLBACKS = ("on_success", "on_error", "on_unexpected_status")

_REQUEST_ALIASES = {"responseType": "response_type", "timeout": "timeout_s"}


def is_skipped(directive: Any) -> bool:
    if directive is None:
        return False
    if isinstance(directive, Directive):
        return directive.skip
    if isinstance(directive, Mapping):
        return bool(directive.get("skip") or directive.get("_skip"))
    return bool(getattr(directive, "skip", False))


def parse_directive(action: Action) -> Directive | None:
    """Return the activation config for ``action`` or ``None`` for pass-through."""
    raw = action.directive
    if raw is None or is_skipped(raw):
        return None
    if isinstance(raw, Directive):
        directive = _normalise(raw)
    else:
        directive = _from_mapping(raw)
    _validate(directive)
    if directive.request is None:
        return None
    return directive


def _normalise(directive: Directive) -> Directive:
    request = directive.request
    interceptors = directive.interceptors
    if (request is None or isinstance(request, RequestSpec)) and isinstance(interceptors, Interceptors):
        return directive
    return dataclasses.replace(
        directive,
        request=parse_request(request) if request else None,
        interceptors=parse_interceptors(interceptors),
    )


def _from_mapping(raw: Any) -> Directive:
    if not isinstance(raw, Mapping):
        raise DirectiveError(f"directive must be a mapping or Directive, got {type(raw).__name__}")
    options: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _ALIASES.get(key, key)
        if name not in _FIELDS:
            raise DirectiveError(f"unknown directive option '{key}'")
        options[name] = value
    for name in _CALLBACKS:
        value = options.get(name)
        if isinstance(value, str):
            options[name] = _resolve(value)
        elif not value:
            options[name] = None
    request = options.get("request")
    options["request"] = parse_request(request) if request else None
    options["interceptors"] = parse_interceptors(options.get("interceptors"))
    for flag in ("log", "verbose_log", "extract_data", "skip"):
        if flag in options:
            options[flag] = bool(options[flag])
    return Directive(**options)


def _resolve(qualname: str) -> Any:
    try:
        return resolve_callable(qualname)
    except (ImportError, AttributeError) as exc:
        raise DirectiveError(f"cannot resolve hook '{qualname}': {exc}") from exc


def parse_request(raw: Any) -> RequestSpec:
    if isinstance(raw, RequestSpec):
        return raw
    if not isinstance(raw, Mapping):
        raise DirectiveError("request must be a mapping or RequestSpec")
    options = {_REQUEST_ALIASES.get(k, k): v for k, v in raw.items()}
    unknown = set(options) - _REQUEST_FIELDS
    if unknown:
        raise DirectiveError(f"unknown request option(s): {', '.join(sorted(unknown))}")
    if not options.get("url"):
        raise DirectiveError("request is missing 'url'")
    options["method"] = str(options.get("method", "GET")).upper()
    options["headers"] = dict(options.get("headers") or {})
    if options.get("timeout_s") is not None:
        options["timeout_s"] = float(options["timeout_s"])
    return RequestSpec(**options)


def parse_interceptors(raw: Any) -> Interceptors:
    if raw is None or raw is False:
        return Interceptors()
    if isinstance(raw, Interceptors):
        return raw
    if not isinstance(raw, Mapping):
        raise DirectiveError("interceptors must be a mapping with 'request'/'response'")
    unknown = set(raw) - {"request", "response"}
    if unknown:
        raise DirectiveError(f"unknown interceptor hook(s): {', '.join(sorted(unknown))}")
    hooks = {}
    for name in ("request", "response"):
        hook = raw.get(name)
        hooks[name] = _resolve(hook) if isinstance(hook, str) else hook
    return Interceptors(**hooks)


def _validate(directive: Directive) -> None:
    if directive.request is not None and not directive.request.url:
        raise DirectiveError("request is missing 'url'")
    window = directive.throttle_window_ms
    if window is not None:
        if isinstance(window, bool) or not isinstance(window, (int, float)) or window <= 0:
            raise DirectiveError(f"throttle_window_ms must be a positive number, got {window!r}")
    for name in _CALLBACKS:
        value = getattr(directive, name)
        if value is not None and not callable(value):
            raise DirectiveError(f"{name} must be callable")
    for name in ("request", "response"):
        hook = getattr(directive.interceptors, name)
        if hook is not None and not callable(hook):
            raise DirectiveError(f"{name} interceptor must be callable")
    if directive.handler is not None:
        if not isinstance(directive.handler, OutcomeHandler):
            raise DirectiveError("handler must be an OutcomeHandler")
        if any(getattr(directive, name) is not None for name in _CALLBACKS):
            raise DirectiveError("handler cannot be combined with on_success/on_error/on_unexpected_status")
