import os

# Settings are read on import, so point them at an in-memory database first
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["ENVIRONMENT"] = "local"
os.environ["FIRST_ADMIN_EMAIL"] = "admin@example.com"
os.environ["FIRST_ADMIN_PASSWORD"] = "changethis"
os.environ.pop("SENTRY_DSN", None)

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

import accounthub.models  # noqa: E402,F401
from accounthub.api.deps import get_db  # noqa: E402
from accounthub.core.db import init_db  # noqa: E402
from accounthub.main import app  # noqa: E402
from accounthub.models.database.admin import Admin  # noqa: E402
from accounthub.queries.base import QueryCache  # noqa: E402
from accounthub.services.audit import AuditContext  # noqa: E402
from accounthub.tests.utils.utils import get_admin_token_headers  # noqa: E402


@pytest.fixture
def db() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine, expire_on_commit=False) as session:
        yield session
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def admin(db: Session) -> Admin:
    return init_db(db)


@pytest.fixture
def actor(admin: Admin) -> AuditContext:
    return AuditContext(admin_id=str(admin.id), ip_address="127.0.0.1", user_agent="pytest")


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache(ttl_seconds=60)


@pytest.fixture
def client(db: Session, admin: Admin) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token_headers(client: TestClient) -> dict[str, str]:
    return get_admin_token_headers(client)
