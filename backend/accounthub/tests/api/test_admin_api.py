import pytest
from fastapi.testclient import TestClient

from accounthub.core.config import settings
from accounthub.tests.utils.factories import create_random_application, create_random_user
from accounthub.utils.validation import is_valid_app_key

API = settings.API_V1_STR


@pytest.fixture
def headers(admin_token_headers):
    return {**admin_token_headers, "Accept-Language": "en"}


class TestApplicationsApi:
    def test_create_and_list(self, client: TestClient, headers):
        r = client.post(
            f"{API}/applications/",
            headers=headers,
            json={"name": "Reader", "slug": "reader", "website_url": "https://reader.example.com"},
        )
        assert r.status_code == 200
        assert r.json()["message"] == "Application created"
        assert is_valid_app_key(r.json()["data"]["app_key"])

        page = client.get(f"{API}/applications/", headers=headers).json()
        assert page["total"] == 1
        assert page["data"][0]["slug"] == "reader"

    def test_invalid_slug(self, client: TestClient, headers):
        r = client.post(f"{API}/applications/", headers=headers, json={"name": "Reader", "slug": "Not A Slug"})
        assert r.status_code == 422

    def test_toggle_and_regenerate(self, client: TestClient, headers, db):
        app = create_random_application(db)
        old_key = app.app_key

        r = client.patch(f"{API}/applications/{app.id}/active", headers=headers, json={"is_active": False})
        assert r.status_code == 200
        assert r.json()["data"]["is_active"] is False

        r = client.post(f"{API}/applications/{app.id}/regenerate-key", headers=headers)
        assert r.status_code == 200
        assert r.json()["data"]["app_key"] != old_key


class TestUsersApi:
    def test_ban_and_audit_trail(self, client: TestClient, headers, db):
        user = create_random_user(db)

        r = client.patch(f"{API}/users/{user.id}/ban", headers=headers, json={"is_banned": True})
        assert r.status_code == 200
        assert r.json()["message"] == "User status updated"
        assert r.json()["data"]["is_banned"] is True

        logs = client.get(f"{API}/users/{user.id}/audit-logs", headers=headers).json()
        assert [log["action"] for log in logs] == ["BAN_USER"]
        assert logs[0]["target_user_email"] == user.email

        trail = client.get(f"{API}/audit-logs/", headers=headers).json()
        assert trail["count"] == 1

    def test_bad_user_id(self, client: TestClient, headers):
        r = client.get(f"{API}/users/42", headers=headers)
        assert r.status_code == 422


class TestVersionsApi:
    def test_latest_version(self, client: TestClient, headers, db):
        app = create_random_application(db)
        payload = {"application_id": str(app.id), "version_number": "2.0.0", "version_code": 20, "is_published": True}
        assert client.post(f"{API}/app-versions/", headers=headers, json=payload).status_code == 200

        r = client.get(
            f"{API}/app-versions/latest",
            headers=headers,
            params={"application_id": str(app.id), "platform": "android"},
        )
        assert r.status_code == 200
        assert r.json()["version_number"] == "2.0.0"

    def test_latest_version_missing(self, client: TestClient, headers, db):
        app = create_random_application(db)
        r = client.get(f"{API}/app-versions/latest", headers=headers, params={"application_id": str(app.id)})
        assert r.status_code == 404


class TestDashboardApi:
    def test_stats(self, client: TestClient, headers, db):
        create_random_application(db)
        create_random_user(db)

        stats = client.get(f"{API}/dashboard/stats", headers=headers).json()

        assert stats["total_users"] == 1
        assert stats["total_applications"] == 1
        assert client.get(f"{API}/dashboard/revenue", headers=headers).json() == []
