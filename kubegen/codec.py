"""JSON encoding and decoding of API resources."""
from __future__ import annotations

import json
from typing import Any, Dict

from pydantic import ValidationError as ModelValidationError

from .errors import DecodeError
from .models import RESOURCE_KINDS, Resource


def to_wire(resource: Resource) -> Dict[str, Any]:
    """Return the camelCase dict the API server expects, without empty fields."""
    return resource.model_dump(mode="json", by_alias=True, exclude_none=True)


def encode(resource: Resource) -> bytes:
    return json.dumps(to_wire(resource), separators=(",", ":")).encode("utf-8")


def decode(data: bytes) -> Resource:
    """Decode a JSON body into the model matching its ``kind``."""
    try:
        payload = json.loads(data)
    except (ValueError, UnicodeDecodeError) as exc:
        raise DecodeError(f"response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")

    kind = payload.get("kind")
    model = RESOURCE_KINDS.get(kind) if isinstance(kind, str) else None
    if model is None:
        raise DecodeError(f"unsupported resource kind: {kind!r}")

    try:
        return model.model_validate(payload)
    except ModelValidationError as exc:
        raise DecodeError(f"malformed {kind}: {exc}") from exc
