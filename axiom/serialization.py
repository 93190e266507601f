# SPDX-License-Identifier: Apache-2.0
"""Helpers for decoding response bodies."""
from __future__ import annotations

import json
from typing import Any, Optional

JSON_TYPES = {"application/json", "text/json"}


def decode_body(
    raw: bytes,
    response_type: Optional[str],
    content_type: str = "",
    charset: Optional[str] = None,
    *,
    strict: bool = True,
) -> Any:
    """Decode ``raw`` according to the declared response type.

    ``None`` behaves like the common HTTP client default: JSON when the body
    parses, text otherwise. An explicit ``"json"`` raises on invalid bodies
    unless ``strict`` is false, in which case it falls back to text.
    """
    fmt = (response_type or "").lower()
    encoding = charset or "utf-8"
    if fmt in {"bytes", "arraybuffer", "blob", "stream"}:
        return raw
    if fmt == "text":
        return raw.decode(encoding, errors="replace")
    if fmt == "json":
        if not raw:
            return None
        text = raw.decode(encoding, errors="strict" if strict else "replace")
        try:
            return json.loads(text)
        except ValueError:
            if strict:
                raise
            return text
    if fmt:
        return raw
    text = raw.decode(encoding, errors="replace")
    if not text:
        return text
    if content_type in JSON_TYPES or text.lstrip()[:1] in {"{", "["}:
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text
