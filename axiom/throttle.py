# SPDX-License-Identifier: Apache-2.0
"""Per-kind throttle gate with lazily checked expiry."""
from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Optional

log = logging.getLogger(__name__)


class ThrottleGate:
    """Admit at most one activation per kind within a window.

    Each admitted kind stores the monotonic time at which it becomes idle
    again; the entry is only inspected (and discarded) on the next admission
    attempt, so no timers are involved. Not thread-safe: the gate lives on a
    single event loop.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.monotonic
        self._until: Dict[str, float] = {}

    def admit(self, kind: str, window_ms: float) -> bool:
        now = self._clock()
        if self._expired(kind, now):
            # last write wins: a fresh admission always re-arms the window
            self._until[kind] = now + window_ms / 1000.0
            return True
        log.debug("throttle window for %s still open (%.1fms left)", kind, (self._until[kind] - now) * 1000)
        return False

    def is_throttled(self, kind: str) -> bool:
        return not self._expired(kind, self._clock())

    def reset(self, kind: str | None = None) -> None:
        if kind is None:
            self._until.clear()
        else:
            self._until.pop(kind, None)

    def __len__(self) -> int:
        return len(self._until)

    def _expired(self, kind: str, now: float) -> bool:
        until = self._until.get(kind)
        if until is None:
            return True
        if now >= until:
            del self._until[kind]
            return True
        return False
