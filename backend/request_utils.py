"""Helpers for reading loosely typed JSON sent by the landing page.

The page posts whatever the form widgets hold, so numbers often arrive as
strings and optional fields as ``""`` or ``null``. The coercions below give
those values the same meaning the page itself gives them.
"""

import json
import math
from typing import Any, Mapping, Optional

from fastapi import Request

FORWARDED_IP_HEADERS = ("x-nf-client-connection-ip", "x-forwarded-for")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return {}
    return json.loads(raw, parse_constant=_reject_constant)


def to_number(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def is_truthy(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def is_blank(value: Any) -> bool:
    return not is_truthy(value) or to_text(value).strip() == ""


def client_ip(headers: Mapping[str, str]) -> Optional[str]:
    for name in FORWARDED_IP_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return None
