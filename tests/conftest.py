"""
Shared fixtures for the Extractly test suite.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

import pytest
from fastapi.testclient import TestClient

from extractly.auth import JWTManager
from extractly.config import AuthConfig, Config
from extractly.container import AppContext
from extractly.web import create_app

TEST_SECRET = "test-secret-key"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


class StubFetcher:
    """In-memory stand-in for HtmlFetcher that records requested URLs."""

    def __init__(self, html: str = "", error: Optional[Exception] = None) -> None:
        self.html = html
        self.error = error
        self.calls: List[str] = []
        self.initialized = False
        self.closed = False

    async def initialize(self) -> None:
        self.initialized = True

    async def close(self) -> None:
        self.closed = True

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


@pytest.fixture
def config() -> Config:
    return Config(environment="test", auth=AuthConfig(secret_key=TEST_SECRET))


@pytest.fixture
def jwt_manager(config: Config) -> JWTManager:
    return JWTManager(config.auth)


@pytest.fixture
def auth_header(jwt_manager: JWTManager) -> dict:
    return {"Authorization": f"Bearer {jwt_manager.create_token(user_id='tester', expires_in='1h')}"}


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher(html="<html><head><title>Stub page</title></head><body></body></html>")


@pytest.fixture
def app_context(config: Config, stub_fetcher: StubFetcher) -> AppContext:
    return AppContext(config, fetcher=stub_fetcher)


@pytest.fixture
def client(app_context: AppContext) -> Iterator[TestClient]:
    with TestClient(create_app(app_context)) as test_client:
        yield test_client
