"""
Test helpers: a stub Odoo server behind httpx.MockTransport.

Requests go through a real OdooClient, so tests assert on the exact JSON
body the server would receive.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx

from odoorm import Model

BASE_URL = "https://example.com"

Route = Callable[[httpx.Request], httpx.Response]


class StubServer:
    """Answers ``/json/2/<model>/<method>`` with canned responses."""

    def __init__(self) -> None:
        self.routes: Dict[str, Route] = {}
        self.requests: List[httpx.Request] = []

    def stub(self, model: str, method: str, response: Any = None, status: int = 200) -> None:
        body = json.dumps(response).encode()
        self.stub_raw(model, method, status=status, content=body)

    def stub_raw(self, model: str, method: str, status: int = 200, content: bytes = b"") -> None:
        self.routes[f"/json/2/{model}/{method}"] = lambda request: httpx.Response(
            status,
            content=content,
            headers={"Content-Type": "application/json"},
        )

    def stub_error(
        self, model: str, method: str, *, name: str, message: str, status: int = 422
    ) -> None:
        body = {
            "name": name,
            "message": message,
            "arguments": [message],
            "context": {},
            "debug": "Traceback...",
        }
        self.stub(model, method, body, status=status)

    def stub_exception(self, model: str, method: str, exc: Exception) -> None:
        def raise_exc(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[f"/json/2/{model}/{method}"] = raise_exc

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            raise AssertionError(f"Unexpected request: POST {request.url.path}")
        return route(request)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    @property
    def bodies(self) -> List[Any]:
        return [json.loads(request.content) for request in self.requests]

    @property
    def last_body(self) -> Any:
        return self.bodies[-1]


class Entity(Model, model_name="test.entity"):
    pass
