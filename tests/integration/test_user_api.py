"""Integration tests for User API endpoints."""

from __future__ import annotations

import uuid

import pytest

from modules.users.models import User

pytestmark = pytest.mark.integration

BASE = "/api/v1/users/"


@pytest.fixture()
def sample_user():
    return User.objects.create(name="Ana Souza", email="ana@example.com")


class TestUserApi:
    def test_create(self, api_client):
        response = api_client.post(
            BASE,
            {"name": "Bruno", "email": "Bruno@Example.com", "role": "seller"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["email"] == "bruno@example.com"
        assert response.data["role"] == "seller"

    def test_create_invalid_email(self, api_client):
        response = api_client.post(
            BASE, {"name": "Bruno", "email": "nope"}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_duplicate_email(self, api_client, sample_user):
        response = api_client.post(
            BASE, {"name": "Other", "email": "ana@example.com"}, format="json"
        )
        assert response.status_code == 409

    def test_list_filtered_by_role(self, api_client, sample_user):
        User.objects.create(name="Seller", email="s@example.com", role="seller")

        response = api_client.get(BASE, {"role": "seller"})

        assert [u["name"] for u in response.data["results"]] == ["Seller"]

    def test_role_route(self, api_client, sample_user):
        User.objects.create(name="Seller", email="s@example.com", role="seller")

        response = api_client.get(f"{BASE}role/seller/")

        assert response.status_code == 200
        assert [u["name"] for u in response.data["results"]] == ["Seller"]

    def test_search_route(self, api_client, sample_user):
        User.objects.create(name="Bruno", email="bruno@example.com")

        response = api_client.get(f"{BASE}search/", {"q": "souza"})

        assert [u["name"] for u in response.data["results"]] == ["Ana Souza"]

    def test_update(self, api_client, sample_user):
        response = api_client.patch(
            f"{BASE}{sample_user.id}/", {"name": "Ana Maria"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["name"] == "Ana Maria"

    def test_soft_delete(self, api_client, sample_user):
        response = api_client.delete(f"{BASE}{sample_user.id}/")

        assert response.status_code == 204
        assert api_client.get(f"{BASE}{sample_user.id}/").status_code == 404
        assert User.objects.filter(id=sample_user.id).exists()

    def test_retrieve_not_found(self, api_client):
        response = api_client.get(f"{BASE}{uuid.uuid4()}/")
        assert response.status_code == 404
