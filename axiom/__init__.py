# SPDX-License-Identifier: Apache-2.0
"""Action-interception middleware that performs HTTP calls on behalf of dispatched actions."""
from __future__ import annotations

from .classifier import SUCCESS_STATUS, Failure, Success, UnexpectedStatus, classify
from .directive import Directive, DirectiveError, Interceptors, RequestSpec, parse_directive
from .handlers import CallbackHandler, OutcomeHandler
from .messages import Action
from .pipeline import ActionPipeline
from .store import Store
from .throttle import ThrottleGate
from .transport import HttpTransport, Response

__all__ = [
    "Action",
    "ActionPipeline",
    "CallbackHandler",
    "Directive",
    "DirectiveError",
    "Failure",
    "HttpTransport",
    "Interceptors",
    "OutcomeHandler",
    "RequestSpec",
    "Response",
    "SUCCESS_STATUS",
    "Store",
    "Success",
    "ThrottleGate",
    "UnexpectedStatus",
    "classify",
    "parse_directive",
]
