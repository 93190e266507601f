# SPDX-License-Identifier: Apache-2.0
"""Utility helpers for resolving configured hooks."""
from __future__ import annotations

import importlib
from typing import Any

PLUGIN_NAMESPACE = "axiom.plugins"


def resolve_callable(qualname: str) -> Any:
    """Resolve a hook name to a callable.

    Accepted forms:
    - `package.module:function`
    - `package.module.function` (absolute import)
    - `module.function`, looked up under `axiom.plugins` when no such top-level module exists
    """
    if ":" in qualname:
        module_name, func_name = qualname.split(":", 1)
        return _lookup(importlib.import_module(module_name), module_name, func_name, qualname)
    module_name, _, func_name = qualname.rpartition(".")
    if not module_name:
        return _lookup(importlib.import_module(PLUGIN_NAMESPACE), PLUGIN_NAMESPACE, func_name, qualname)
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        if "." in module_name or exc.name != module_name:
            raise
        module_name = f"{PLUGIN_NAMESPACE}.{module_name}"
        module = importlib.import_module(module_name)
    return _lookup(module, module_name, func_name, qualname)


def _lookup(module: Any, module_name: str, func_name: str, qualname: str) -> Any:
    try:
        return getattr(module, func_name)
    except AttributeError as exc:
        raise AttributeError(f"callable '{qualname}' not found in module '{module_name}'") from exc
