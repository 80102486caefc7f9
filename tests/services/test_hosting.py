"""Tests for attaching a service provider to a FastAPI application."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from reprendpoint.exceptions import EndpointConfigurationError
from reprendpoint.services import (
    FromServices,
    ServiceCollection,
    attach_service_provider,
    get_service_provider,
)


class Counter:
    def __init__(self) -> None:
        self.value = 0

    def increment(self) -> int:
        self.value += 1
        return self.value


class RequestId:
    pass


class TestHosting:
    """Test provider lookup and request scopes."""

    def test_get_service_provider_without_provider(self):
        with pytest.raises(EndpointConfigurationError):
            get_service_provider(FastAPI())

    def test_attach_returns_app(self):
        app = FastAPI()
        provider = ServiceCollection().build_service_provider()

        assert attach_service_provider(app, provider) is app
        assert get_service_provider(app) is provider

    def test_from_services_in_route(self):
        app = FastAPI()
        attach_service_provider(
            app, ServiceCollection().add_singleton(Counter).build_service_provider()
        )

        @app.get("/count")
        async def count(counter: Counter = FromServices(Counter)):
            return {"value": counter.increment()}

        client = TestClient(app)
        assert client.get("/count").json() == {"value": 1}
        assert client.get("/count").json() == {"value": 2}

    def test_scoped_service_per_request(self):
        app = FastAPI()
        attach_service_provider(
            app, ServiceCollection().add_scoped(RequestId).build_service_provider()
        )
        seen = []

        @app.get("/id")
        async def request_id(
            first: RequestId = FromServices(RequestId),
            second: RequestId = FromServices(RequestId),
        ):
            seen.append((first, second))
            return {}

        client = TestClient(app)
        client.get("/id")
        client.get("/id")

        assert seen[0][0] is seen[0][1]
        assert seen[0][0] is not seen[1][0]
