import random
import re
import string

from fastapi.testclient import TestClient

from accounthub.core.config import settings

CODE_RE = re.compile(r"^[A-Z2-9]{4}(-[A-Z2-9]{4}){3}$")


def random_lower_string() -> str:
    return "".join(random.choices(string.ascii_lowercase, k=32))


def random_slug() -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=12))


def random_email() -> str:
    return f"{random_lower_string()}@{random_lower_string()}.com"


def get_admin_token_headers(client: TestClient) -> dict[str, str]:
    login_data = {
        "username": settings.FIRST_ADMIN_EMAIL,
        "password": settings.FIRST_ADMIN_PASSWORD,
    }
    r = client.post(f"{settings.API_V1_STR}/auth/login", data=login_data)
    tokens = r.json()
    a_token = tokens["access_token"]
    return {"Authorization": f"Bearer {a_token}"}
