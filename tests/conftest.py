from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.products.models import Product
from modules.users.models import User


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_product():
    """Factory persisting catalog products with sensible defaults."""

    def _make(name="Widget Alpha", price="100.00", **extra):
        extra.setdefault("description", f"{name} description")
        extra.setdefault("category", "Tools")
        return Product.objects.create(name=name, price=Decimal(price), **extra)

    return _make


@pytest.fixture()
def make_user():
    def _make(name="Ana Souza", email="ana@example.com", **extra):
        return User.objects.create(name=name, email=email, **extra)

    return _make
