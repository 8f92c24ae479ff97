# app/api/responses.py
import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from fastapi.responses import JSONResponse

# integers beyond this lose precision as JSON numbers in browsers
MAX_SAFE_INTEGER = 2 ** 53 - 1

# 64-bit id fields, always rendered as decimal strings
BIGINT_FIELDS = {"productId"}


def to_wire(value: Any, key: Optional[str] = None) -> Any:
    """
    Convert a payload into JSON-ready primitives. 64-bit id fields and any
    integer outside the safe range become decimal strings.
    """
    if hasattr(value, "to_dict"):
        value = value.to_dict()
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)

    if isinstance(value, dict):
        return {k: to_wire(v, k) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        if key in BIGINT_FIELDS or abs(value) > MAX_SAFE_INTEGER:
            return str(value)
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class SafeJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return super().render(to_wire(content))


def ok(status_code: int = 200, **payload: Any) -> SafeJSONResponse:
    return SafeJSONResponse({"ok": True, **payload}, status_code=status_code)


def error(message: str, status_code: int) -> SafeJSONResponse:
    return SafeJSONResponse({"ok": False, "error": message}, status_code=status_code)
