"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import argparse
import json
from typing import Any, Callable, Dict, Generator, List, Optional

import httpx
import pytest

from kubegen.cli import build_parser, parse_args
from kubegen.client import APIClient
from kubegen.pipeline import Factory


class FakeAPIServer:
    """Records create requests and echoes the body back like an API server.

    Echoed objects gain a uid and a defaulted annotation, so tests see the
    difference between the submitted and the server-side object.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 201
        self.response_body: Optional[bytes] = None
        self.defaulted_annotations: Dict[str, str] = {"example.com/defaulted": "true"}
        self.error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.response_body is not None:
            return httpx.Response(self.status_code, content=self.response_body)
        if self.status_code >= 300:
            return httpx.Response(
                self.status_code,
                json={"kind": "Status", "status": "Failure", "message": "already exists"},
            )
        payload: Dict[str, Any] = json.loads(request.content)
        metadata = payload.setdefault("metadata", {})
        metadata.setdefault("annotations", {}).update(self.defaulted_annotations)
        metadata["uid"] = "4f1c-uid"
        return httpx.Response(self.status_code, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def posted_json(self, index: int = 0) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture
def api_server() -> FakeAPIServer:
    """An in-process API server double."""
    return FakeAPIServer()


@pytest.fixture
def api_client(api_server: FakeAPIServer) -> Generator[APIClient, None, None]:
    """A client whose requests land on ``api_server``."""
    with APIClient("http://testserver", transport=api_server.transport) as client:
        yield client


@pytest.fixture
def factory(api_client: APIClient) -> Factory:
    return Factory(client=api_client)


@pytest.fixture
def run_flags() -> Callable[..., argparse.Namespace]:
    """Parse ``kubegen run`` arguments into a flags namespace."""
    parser = build_parser()

    def parse(*argv: str) -> argparse.Namespace:
        return parse_args(parser, ["run", *argv])

    return parse
