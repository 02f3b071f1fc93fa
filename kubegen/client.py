"""HTTP client for the resource API."""
from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Optional, Tuple

import httpx

from .config import ClientConfig
from .errors import TransportError

log = logging.getLogger(__name__)


class APIClient(AbstractContextManager):
    """Thin wrapper around an API server endpoint.

    One instance lives for one invocation; requests are issued once and
    never retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=5.0),
            headers={"Accept": "application/json", "User-Agent": "kubegen/0.1"},
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: Optional[httpx.BaseTransport] = None
    ) -> "APIClient":
        return cls(config.base_url, timeout=config.timeout, transport=transport)

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def post(self, path: str, body: bytes) -> Tuple[int, bytes]:
        """POST a JSON body and return the status code and raw response body."""
        log.debug("POST %s%s (%d bytes)", self.base_url, path, len(body))
        try:
            response = self._client.post(
                path,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as exc:
            log.debug("Request to %s failed", path, exc_info=True)
            raise TransportError(f"POST {path} failed: {exc}") from exc
        log.debug("POST %s -> %s", path, response.status_code)
        return response.status_code, response.content
