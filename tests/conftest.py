"""Pytest configuration and fixtures for leanquery tests."""

from typing import Any, Dict, List, Optional, Tuple

import pytest
from dotenv import load_dotenv

from leanquery.client import Response, Transport
from leanquery.query import Query
from leanquery.registry import ObjectRegistry

# Load environment variables
load_dotenv()


class FakeTransport(Transport):
    """In-memory transport: records every request and replays a canned response."""

    def __init__(self, response: Optional[Response] = None) -> None:
        self.response = response or Response(status_code=200, value={"results": []})
        self.requests: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    def request(self, method: str, endpoint: str, parameters: Optional[Dict[str, Any]] = None) -> Response:
        self.requests.append((method, endpoint, parameters))
        return self.response

    @property
    def last_parameters(self) -> Optional[Dict[str, Any]]:
        return self.requests[-1][2] if self.requests else None


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def object_registry():
    """Fresh registry so class registrations do not leak between tests."""
    return ObjectRegistry()


@pytest.fixture
def make_query(fake_transport, object_registry):
    """Factory for queries wired to the fake transport and the fresh registry."""

    def _make(class_name: str = "Todo", **kwargs: Any) -> Query:
        return Query(class_name, transport=fake_transport, registry=object_registry, **kwargs)

    return _make
