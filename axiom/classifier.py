# SPDX-License-Identifier: Apache-2.0
"""Classification of call results into success, unexpected status or failure."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .directive import RequestSpec
from .transport import SUCCESS_STATUS, Response

EXTRACTABLE_TYPES = (None, "json")


@dataclass(slots=True)
class Success:
    value: Any
    response: Response
    name = "success"


@dataclass(slots=True)
class UnexpectedStatus:
    response: Response
    name = "unexpected_status"


@dataclass(slots=True)
class Failure:
    error: BaseException
    name = "error"


Outcome = Union[Success, UnexpectedStatus, Failure]


def should_extract(request: RequestSpec, extract_data: bool) -> bool:
    return extract_data and request.response_type in EXTRACTABLE_TYPES


def classify(response: Response, request: RequestSpec, *, extract_data: bool = True) -> Outcome:
    """Map a settled response to its outcome.

    Any status other than exactly 200 is an unexpected status, including the
    rest of the 2xx range. Transport exceptions never reach this function; the
    caller wraps them in :class:`Failure` directly.
    """
    if response.status != SUCCESS_STATUS:
        return UnexpectedStatus(response)
    value = response.data if should_extract(request, extract_data) else response
    return Success(value=value, response=response)
