"""
Router test fixtures.

Routers are mounted on a bare FastAPI app with the production exception
handlers and a mocked SessionEngine injected through dependency_overrides.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from meetup.api.deps import get_session_engine
from meetup.api.error_handling import register_exception_handlers
from meetup.api.routers import (
    health_router,
    locations_router,
    messages_router,
    sessions_router,
)


@pytest.fixture
def app(mock_session_engine) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    for router in (health_router, sessions_router, messages_router, locations_router):
        app.include_router(router, prefix="/api")
    app.dependency_overrides[get_session_engine] = lambda: mock_session_engine
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
