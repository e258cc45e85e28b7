import pytest
from rest_framework import status
from rest_framework.test import APIClient
from user.models import User


@pytest.mark.django_db
class TestAccountViews:
    def setup_method(self):
        self.client = APIClient()

    def _register(self, **overrides):
        data = {
            "email": "New@Example.com",
            "password": "password123",
            "name": "New User",
        }
        data.update(overrides)
        return self.client.post("/api/v1/users/register/", data, format="json")

    def test_register_signs_in(self):
        resp = self._register()

        assert resp.status_code == status.HTTP_201_CREATED
        assert resp.data["user"]["email"] == "new@example.com"
        assert resp.data["user"]["name"] == "New User"
        assert "access_token" in resp.cookies
        assert resp.cookies["access_token"]["httponly"]
        assert "access" not in resp.data
        assert User.objects.filter(email="new@example.com").exists()

    def test_register_rejects_duplicate_email(self):
        self._register()
        resp = self._register(email="new@example.com")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_rejects_numeric_password(self):
        resp = self._register(password="12345678")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_login_then_me_via_cookie(self, user):
        resp = self.client.post(
            "/api/v1/users/login/",
            {"email": "user@example.com", "password": "testpass123"},
            format="json",
        )
        assert resp.status_code == status.HTTP_200_OK

        me = self.client.get("/api/v1/users/me/")
        assert me.status_code == status.HTTP_200_OK
        assert me.data["email"] == "user@example.com"

    def test_login_with_wrong_password(self, user):
        resp = self.client.post(
            "/api/v1/users/login/",
            {"email": "user@example.com", "password": "wrong-pass1"},
            format="json",
        )
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_me_requires_authentication(self):
        assert self.client.get("/api/v1/users/me/").status_code == (
            status.HTTP_401_UNAUTHORIZED
        )

    def test_logout_clears_cookies(self, user):
        self.client.post(
            "/api/v1/users/login/",
            {"email": "user@example.com", "password": "testpass123"},
            format="json",
        )

        resp = self.client.post("/api/v1/users/logout/")

        assert resp.status_code == status.HTTP_204_NO_CONTENT
        assert resp.cookies["access_token"].value == ""
        assert self.client.get("/api/v1/users/me/").status_code == (
            status.HTTP_401_UNAUTHORIZED
        )


class TestLoginPage:
    def test_keeps_local_next_path(self, client):
        resp = client.get("/login", {"next": "/oauth/google/callback"})

        assert resp.status_code == 200
        assert b'data-next="/oauth/google/callback"' in resp.content

    def test_rejects_external_next(self, client):
        resp = client.get("/login", {"next": "https://evil.example.com/"})

        assert resp.status_code == 200
        assert b'data-next="/calendar"' in resp.content
        assert b"evil.example.com" not in resp.content
