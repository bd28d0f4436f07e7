import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.domain import storefront


@pytest.fixture()
def client():
    return TestClient(create_app(storefront), raise_server_exceptions=False)


@pytest.fixture()
def as_user():
    """Headers acting as the given user."""

    def _headers(user_id):
        return {"X-User-Id": user_id}

    return _headers
