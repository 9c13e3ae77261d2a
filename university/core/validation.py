"""
Field-error reporting shared by request parsing and the enforcers.

A field error is ``{"field": <name>, "msg": <message>}``. Every violation a
schema finds is reported, never just the first one.
"""

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ValidationError

_REQUEST_LOCATIONS = {"body", "path", "query", "header", "cookie"}


def field_error(field: str, msg: str) -> dict:
    return {"field": field, "msg": msg}


def _field_name(loc: Sequence) -> str:
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "body"


def _message(error: dict) -> str:
    # custom validators raise ValueError; report their text without pydantic's prefix
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error["msg"]


def format_errors(errors: Iterable[dict]) -> list[dict]:
    return [field_error(_field_name(e.get("loc", ())), _message(e)) for e in errors]


def collect_errors(schema: type[BaseModel], data: dict) -> list[dict]:
    """Validate ``data`` against ``schema`` without raising; [] means valid."""
    try:
        schema.model_validate(data)
    except ValidationError as exc:
        return format_errors(exc.errors())
    return []

