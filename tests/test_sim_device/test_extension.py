"""
Tests for the extra-routes hook of the simulated device API.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sim_device.api import create_sim_device_app
from sim_device.extension import apply_extra_routes, clear_extra_routes, register_extra_routes


@pytest.fixture(autouse=True)
def reset_extension():
    clear_extra_routes()
    yield
    clear_extra_routes()


def _mount_ping(app: FastAPI) -> None:
    @app.get("/api/v1/ext/ping")
    def ping() -> dict:
        return {"pong": True}


class TestExtraRoutes:

    def test_nothing_registered(self):
        assert apply_extra_routes(FastAPI()) is False

    def test_registered_routes_are_mounted(self, service):
        register_extra_routes(_mount_ping)

        client = TestClient(create_sim_device_app(service))

        assert client.get("/api/v1/ext/ping").json() == {"pong": True}
        assert client.get("/api/v1/health").status_code == 200

    def test_later_registration_replaces_earlier(self):
        calls = []
        register_extra_routes(lambda app: calls.append("first"))
        register_extra_routes(lambda app: calls.append("second"))

        assert apply_extra_routes(FastAPI()) is True
        assert calls == ["second"]
