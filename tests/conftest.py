import itertools
import os
from decimal import Decimal
from pathlib import Path

import pytest

from shared.config import Settings


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path) or "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------
@pytest.fixture()
def settings(tmp_path):
    """Test settings. A file-backed SQLite database per test unless
    ``STOREFRONT_TEST_DATABASE_URL`` points somewhere else."""
    database_url = os.environ.get("STOREFRONT_TEST_DATABASE_URL") or f"sqlite:///{tmp_path / 'storefront.db'}"
    return Settings(env="test", database_url=database_url, auth_tokens={})


@pytest.fixture()
def database(settings):
    from shared.database import Database, drop_db, setup_db

    database = Database.from_settings(settings)
    drop_db(database)
    setup_db(database)

    yield database

    drop_db(database)
    database.dispose()


@pytest.fixture(autouse=True)
def reset_adapters():
    """Restore the default auth provider and image host after every test."""
    yield

    from catalogue.images import reset_image_host
    from identity.auth import reset_auth_provider

    reset_auth_provider()
    reset_image_host()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user(database):
    from identity.users import Role, create_user

    counter = itertools.count(1)

    def _make(role=Role.USER):
        n = next(counter)
        with database.transaction() as conn:
            return create_user(conn, f"{role.value}{n}", f"{role.value}{n}@example.com", role)

    return _make


@pytest.fixture()
def make_product(database):
    from catalogue.products import ProductData, create_product

    def _make(name="Widget", price="10.00", stock_quantity=10, image_url=None):
        data = ProductData(
            name=name,
            price=Decimal(price),
            stock_quantity=stock_quantity,
            image_url=image_url,
        )
        with database.transaction() as conn:
            return create_product(conn, data)

    return _make


@pytest.fixture()
def user_id(make_user):
    return make_user()


@pytest.fixture()
def admin_id(make_user):
    from identity.users import Role

    return make_user(Role.ADMIN)


@pytest.fixture()
def shipping_address():
    from shared.address import Address

    return Address(
        full_name="Asha Shetty",
        address_line1="12 Car Street",
        city="Udupi",
        state="Karnataka",
        postal_code="576101",
        phone="9876543210",
    )


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def auth_provider():
    from identity.auth import StaticTokenAuthProvider, set_auth_provider

    provider = StaticTokenAuthProvider()
    set_auth_provider(provider)
    return provider


@pytest.fixture()
def user_headers(auth_provider, user_id):
    return {"Authorization": f"Bearer {auth_provider.issue(user_id)}"}


@pytest.fixture()
def admin_headers(auth_provider, admin_id):
    from identity.users import Role

    return {"Authorization": f"Bearer {auth_provider.issue(admin_id, Role.ADMIN)}"}


@pytest.fixture()
def client(settings, database):
    from app import create_app
    from fastapi.testclient import TestClient

    return TestClient(create_app(settings, database))


@pytest.fixture()
def address_payload():
    return {
        "fullName": "Asha Shetty",
        "address1": "12 Car Street",
        "city": "Udupi",
        "state": "Karnataka",
        "pincode": "576101",
        "phone": "9876543210",
    }
