# app/api/body.py
import json
import logging
from typing import Any, Dict

from fastapi import Request
from starlette.exceptions import HTTPException

logger = logging.getLogger("uvicorn.error")

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# selected whenever a body cannot be read as a JSON object
EMPTY_BODY: Dict[str, Any] = {}


def parse_json_object(raw: bytes) -> Dict[str, Any]:
    """
    Parse raw bytes as a JSON object. Empty, undecodable or malformed input,
    and JSON that is not an object, all give an empty dict.
    """
    if not raw or not raw.strip():
        return dict(EMPTY_BODY)
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        logger.debug("Request body is not valid JSON; using empty body")
        return dict(EMPTY_BODY)
    if not isinstance(parsed, dict):
        logger.debug("Request body JSON is a %s, not an object; using empty body", type(parsed).__name__)
        return dict(EMPTY_BODY)
    return parsed


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Normalize a JSON or form-encoded body into a flat dict.
    Form fields keep their order and the last value wins for repeated keys;
    file parts are skipped. Everything else is read as JSON.
    """
    content_type = (request.headers.get("content-type") or "").lower()
    if any(ct in content_type for ct in FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except HTTPException:
            logger.debug("Request form body could not be parsed; using empty body")
            return dict(EMPTY_BODY)
        out: Dict[str, Any] = {}
        for key, value in form.multi_items():
            if isinstance(value, str):
                out[key] = value
        return out
    raw = await request.body()
    return parse_json_object(raw)
