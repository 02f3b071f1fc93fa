"""Submission of generated resources with a single create request."""
from __future__ import annotations

import json
import logging
from typing import Protocol, Tuple

from . import codec
from .constants import LAST_APPLIED_ANNOTATION, RESOURCE_COLLECTIONS
from .errors import APIStatusError, GeneratorError
from .models import Resource

log = logging.getLogger(__name__)


class PostClient(Protocol):
    def post(self, path: str, body: bytes) -> Tuple[int, bytes]:
        ...


def collection_path(namespace: str, resource: Resource) -> str:
    collection = RESOURCE_COLLECTIONS.get(resource.kind)
    if collection is None:
        raise GeneratorError(f"no REST collection known for kind {resource.kind}")
    return f"/namespaces/{namespace}/{collection}"


def with_apply_annotation(resource: Resource) -> Resource:
    """Return a copy carrying its own JSON encoding as the last-applied annotation."""
    annotations = dict(resource.metadata.annotations or {})
    annotations.pop(LAST_APPLIED_ANNOTATION, None)
    bare = resource.model_copy(
        update={"metadata": resource.metadata.model_copy(update={"annotations": annotations or None})}
    )
    annotations[LAST_APPLIED_ANNOTATION] = codec.encode(bare).decode("utf-8")
    return resource.model_copy(
        update={"metadata": resource.metadata.model_copy(update={"annotations": annotations})}
    )


def dispatch(
    client: PostClient,
    namespace: str,
    resource: Resource,
    *,
    save_config: bool = False,
) -> Resource:
    """Create ``resource`` in ``namespace`` and return the server's copy.

    The returned object is the authoritative post-create state and may hold
    fields the local resource lacks, such as defaulted annotations. A
    ``TransportError`` leaves it unknown whether the create was applied.
    """
    if save_config:
        resource = with_apply_annotation(resource)

    path = collection_path(namespace, resource)
    log.debug("Creating %s %s in %s", resource.kind, resource.metadata.name, namespace)
    status, body = client.post(path, codec.encode(resource))

    if not 200 <= status < 300:
        raise APIStatusError(status, _status_message(body))

    return codec.decode(body)


def _status_message(body: bytes) -> str:
    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace").strip() or "no response body"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return json.dumps(payload)
