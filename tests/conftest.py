import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def run_around_tests(monkeypatch):
    """Fixture to automatically cleanup infrastructure after every test"""
    monkeypatch.delenv("REVIEWS_REQUIRE_PURCHASE", raising=False)
    monkeypatch.delenv("STORE_ADMIN_EMAIL", raising=False)

    yield

    from protean import current_domain

    from storefront.catalogue.stock import reset_stock_locks
    from storefront.notifications.channel import reset_mailer

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    reset_mailer()
    reset_stock_locks()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def register():
    """Register a user through the domain and return the new id."""
    from protean import current_domain

    from storefront.identity.registration import RegisterUser

    def _register(name="Jane Doe", email="jane@example.com", role=None):
        return current_domain.process(RegisterUser(name=name, email=email, role=role), asynchronous=False)

    return _register


@pytest.fixture()
def admin_id(register):
    return register(name="Store Admin", email="admin@example.com", role="admin")


@pytest.fixture()
def customer_id(register):
    return register(name="Jane Doe", email="jane@example.com")


@pytest.fixture()
def create_product(admin_id):
    """Create a product as the admin and return its id."""
    from protean import current_domain

    from storefront.catalogue.creation import CreateProduct

    def _create(title="Classic Black T-Shirt", price=20.0, quantity=5, description="Premium cotton tee."):
        return current_domain.process(
            CreateProduct(
                admin_id=admin_id,
                title=title,
                description=description,
                price=price,
                quantity=quantity,
            ),
            asynchronous=False,
        )

    return _create
