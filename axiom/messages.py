"""Action envelope shared by the store, the pipeline and user callbacks."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(slots=True)
class Action:
    """Canonical wrapper around a dispatched action."""

    kind: str
    directive: Any = None
    payload: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def skipped(self) -> "Action":
        return Action(
            kind=self.kind,
            directive=mark_skipped(self.directive),
            payload=self.payload,
            metadata=dict(self.metadata),
        )

    def with_payload(self, payload: Any) -> "Action":
        action = self.skipped()
        action.payload = payload
        return action


def mark_skipped(directive: Any) -> Any:
    """Return a copy of ``directive`` with its skip flag forced on."""
    if directive is None:
        return None
    if dataclasses.is_dataclass(directive) and not isinstance(directive, type):
        return dataclasses.replace(directive, skip=True)
    if isinstance(directive, Mapping):
        data = {k: v for k, v in directive.items() if k != "_skip"}
        data["skip"] = True
        return data
    raise TypeError(f"cannot mark {type(directive)} as skipped")
