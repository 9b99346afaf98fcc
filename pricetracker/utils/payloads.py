"""Helpers for logging raw API payloads."""

from __future__ import annotations

import json
from typing import Any


def dump_payload(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)
