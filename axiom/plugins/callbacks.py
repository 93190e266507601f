# SPDX-License-Identifier: Apache-2.0
"""Stock callbacks and interceptors that configuration files can refer to by name."""
from __future__ import annotations

import dataclasses
import uuid

from axiom.directive import RequestSpec
from axiom.messages import Action


def dispatch_failure(error, action, forward, dispatch):
    """on_error: dispatch ``<KIND>_FAILED`` carrying the error text."""
    return dispatch(
        Action(
            kind=f"{action.kind}_FAILED",
            payload={"error": str(error) or type(error).__name__, "type": type(error).__name__},
            metadata={"source": action.kind},
        )
    )


def dispatch_unexpected_status(response, action, forward, dispatch):
    """on_unexpected_status: dispatch ``<KIND>_UNEXPECTED_STATUS`` with status and body."""
    return dispatch(
        Action(
            kind=f"{action.kind}_UNEXPECTED_STATUS",
            payload={"status": response.status, "body": response.data},
            metadata={"source": action.kind},
        )
    )


def forward_response(action, forward, dispatch):
    return forward(action)


def stamp_request_id(request: RequestSpec) -> RequestSpec:
    headers = {**request.headers}
    headers.setdefault("X-Request-ID", uuid.uuid4().hex)
    return dataclasses.replace(request, headers=headers)
