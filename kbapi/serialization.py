from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from .exceptions import SerializationError


def to_jsonable(obj: Any) -> Any:
    """Convert request payloads (models, lists of models, dicts) to plain JSON data."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}
    return obj


def dumps(obj: Any) -> bytes:
    try:
        return json.dumps(to_jsonable(obj), separators=(",", ":"), ensure_ascii=False).encode(
            "utf-8"
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e


def dumps_compact(obj: Any) -> str:
    """Compact JSON text, used when rendering error payloads."""
    try:
        return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return str(obj)


def loads(data: bytes) -> Any:
    return json.loads(data.decode("utf-8"))
