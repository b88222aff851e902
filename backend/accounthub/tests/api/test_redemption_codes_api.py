import uuid

import pytest
from fastapi.testclient import TestClient

from accounthub.core.config import settings
from accounthub.tests.utils.factories import create_random_application, create_random_plan
from accounthub.tests.utils.utils import CODE_RE

URL = f"{settings.API_V1_STR}/redemption-codes"


class TestRedemptionCodesApi:
    @pytest.fixture
    def target(self, db):
        app = create_random_application(db, name="Reader Pro")
        plan = create_random_plan(db, app, display_name="VIP Monthly")
        return app, plan

    @pytest.fixture
    def headers(self, admin_token_headers):
        return {**admin_token_headers, "Accept-Language": "en"}

    def _template(self, target, **kwargs):
        app, plan = target
        return {"application_id": str(app.id), "membership_plan_id": str(plan.id), **kwargs}

    def test_create(self, client: TestClient, headers, target):
        r = client.post(f"{URL}/", headers=headers, json=self._template(target))

        assert r.status_code == 200
        body = r.json()
        assert body["message"] == "Redemption code created"
        assert CODE_RE.match(body["data"]["code"])
        assert body["data"]["current_uses"] == 0

    def test_batch_create_in_chinese(self, client: TestClient, admin_token_headers, target):
        r = client.post(
            f"{URL}/batch",
            headers=admin_token_headers,
            json={"count": 5, "template": self._template(target)},
        )

        assert r.status_code == 200
        body = r.json()
        assert body["message"] == "成功创建 5 个兑换码"
        assert len({code["code"] for code in body["data"]}) == 5

    @pytest.mark.parametrize("count", [0, 101])
    def test_batch_count_bounds(self, client: TestClient, headers, target, count):
        r = client.post(f"{URL}/batch", headers=headers, json={"count": count, "template": self._template(target)})
        assert r.status_code == 422

    def test_list_stats_and_cache_invalidation(self, client: TestClient, headers, target):
        client.post(f"{URL}/batch", headers=headers, json={"count": 3, "template": self._template(target)})

        stats = client.get(f"{URL}/stats", headers=headers).json()
        assert stats == {"total": 3, "active": 3, "expired": 0, "exhausted": 0}

        client.post(f"{URL}/", headers=headers, json=self._template(target, status="expired"))

        stats = client.get(f"{URL}/stats", headers=headers).json()
        assert stats["total"] == 4
        assert stats["expired"] == 1

        page = client.get(f"{URL}/", headers=headers, params={"page_size": 2}).json()
        assert page["total"] == 4
        assert len(page["data"]) == 2
        assert page["data"][0]["application_name"] == "Reader Pro"
        assert page["data"][0]["usage_display"] == "0 / 1"

    def test_export(self, client: TestClient, headers, target):
        client.post(f"{URL}/batch", headers=headers, json={"count": 2, "template": self._template(target)})

        r = client.get(f"{URL}/export", headers=headers)

        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/plain")
        lines = r.text.split("\n")
        assert len(lines) == 2
        assert all(line.endswith("\tReader Pro\tVIP Monthly\tunlimited") for line in lines)

    def test_export_nothing(self, client: TestClient, headers):
        r = client.get(f"{URL}/export", headers=headers)
        assert r.status_code == 404
        assert r.json()["detail"] == "No redemption codes to export"

    def test_update_and_delete(self, client: TestClient, headers, target):
        code_id = client.post(f"{URL}/", headers=headers, json=self._template(target)).json()["data"]["id"]

        r = client.patch(f"{URL}/{code_id}", headers=headers, json={"status": "disabled"})
        assert r.status_code == 200
        assert r.json()["message"] == "Redemption code updated"
        assert r.json()["data"]["status"] == "disabled"

        r = client.delete(f"{URL}/{code_id}", headers=headers)
        assert r.status_code == 200
        assert r.json() == {"message": "Redemption code deleted", "data": None}

        r = client.get(f"{URL}/{code_id}", headers=headers)
        assert r.status_code == 404

    def test_malformed_id(self, client: TestClient, headers):
        r = client.delete(f"{URL}/not-a-uuid", headers=headers)
        assert r.status_code == 422
        assert r.json()["detail"] == "Delete failed: Invalid ID format"

    def test_missing_code(self, client: TestClient, headers):
        r = client.patch(f"{URL}/{uuid.uuid4()}", headers=headers, json={"status": "disabled"})
        assert r.status_code == 404
        assert r.json()["detail"].startswith("Update failed: redemption_codes ")

    def test_duplicate_code_is_bad_request(self, client: TestClient, headers, target):
        payload = self._template(target, code="FIXED-CODE", auto_generate=False)
        assert client.post(f"{URL}/", headers=headers, json=payload).status_code == 200

        r = client.post(f"{URL}/", headers=headers, json=payload)

        assert r.status_code == 400
        assert r.json()["detail"].startswith("Create failed: ")
        assert "operation failed" not in r.json()["detail"]
