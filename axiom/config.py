"""Configuration loader for pipelines and replay runs."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .messages import Action


@dataclass(slots=True)
class PipelineConfig:
    timeout_s: float = 10.0
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class AxiomConfig:
    version: int
    pipeline: PipelineConfig
    actions: List[Action]
    metrics_port: Optional[int] = None


def _parse_pipeline(data: Dict[str, Any]) -> PipelineConfig:
    if not isinstance(data, dict):
        raise ValueError("'transport' must be a mapping")
    headers = data.get("headers") or {}
    if not isinstance(headers, dict):
        raise ValueError("'transport.headers' must be a mapping")
    return PipelineConfig(
        timeout_s=float(data.get("timeout_s", 10.0)),
        headers={str(k): str(v) for k, v in headers.items()},
    )


def _parse_actions(items: List[Dict[str, Any]]) -> List[Action]:
    actions: List[Action] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict) or "kind" not in item:
            raise ValueError(f"action #{idx} must be a mapping with a 'kind'")
        directive = item.get("directive")
        if directive is not None and not isinstance(directive, dict):
            raise ValueError(f"action '{item['kind']}' directive must be a mapping")
        actions.append(
            Action(
                kind=str(item["kind"]),
                directive=directive,
                payload=item.get("payload"),
                metadata=dict(item.get("metadata") or {}),
            )
        )
    return actions


def load_config(path: str | Path) -> AxiomConfig:
    raw = yaml.safe_load(Path(path).read_text()) or {}
    version = int(raw.get("version", 1))
    pipeline = _parse_pipeline(raw.get("transport", {}))
    actions = _parse_actions(raw.get("actions", []) or [])
    metrics_port = raw.get("metrics_port")
    return AxiomConfig(
        version=version,
        pipeline=pipeline,
        actions=actions,
        metrics_port=int(metrics_port) if metrics_port else None,
    )
