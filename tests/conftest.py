import json
import os

import pytest
from django.contrib.auth import get_user_model
from django.test import Client
from rest_framework.test import APIClient

from orders.services.cart import CartService, set_cart_service
from tests.stores import InMemoryCartStore


# Ensure development-like environment during tests if not provided externally
os.environ.setdefault("ENVIRONMENT", "development")


@pytest.fixture
def api_client() -> APIClient:
    """Unauthenticated DRF APIClient.

    Use with endpoints that allow anonymous access, or combine with
    force_login/force_authenticate for authenticated flows.
    """
    return APIClient(enforce_csrf_checks=False)


@pytest.fixture
def user(db):
    """A persisted user instance."""
    User = get_user_model()
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="password123!",
        first_name="Test",
    )


@pytest.fixture
def auth_api_client(api_client: APIClient, user):
    """APIClient signed in as the provided user.

    A real session login is used so the access-control middleware sees the
    user as well as DRF.
    """
    api_client.force_login(user)
    return api_client


@pytest.fixture
def user_client(user) -> Client:
    """Django test client with a signed-in shopper."""
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def admin_user(db, settings):
    """A regular user promoted through ADMIN_USER_IDS."""
    User = get_user_model()
    admin = User.objects.create_user(username="boss", email="boss@example.com", password="password123!")
    settings.ADMIN_USER_IDS = json.dumps([str(admin.pk)])
    return admin


@pytest.fixture
def admin_client(admin_user) -> Client:
    client = Client()
    client.force_login(admin_user)
    return client


@pytest.fixture
def memory_store() -> InMemoryCartStore:
    return InMemoryCartStore()


@pytest.fixture
def cart_service(memory_store):
    """CartService on an in-memory store, installed as the process-wide service for the test."""
    service = CartService(memory_store, tax_rate="0.1", shipping_fee=500)
    previous = set_cart_service(service)
    yield service
    set_cart_service(previous)
