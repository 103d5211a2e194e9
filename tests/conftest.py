from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from app.core.config import get_settings  # noqa: E402
from app.database import get_session  # noqa: E402
from app.main import app  # noqa: E402
from tests.utils.factories import build_user, persist  # noqa: E402

settings = get_settings()


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def client(db_session):
    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    # No context manager: the lifespan hook would try to reach Postgres.
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_token(user_id: str, email: str, **claims) -> str:
    payload = {
        "sub": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=30),
        **claims,
    }
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm=settings.SUPABASE_JWT_ALG)


def auth_header(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(str(user.id), user.email)}"}


@pytest.fixture
def customer(db_session):
    (user,) = persist(db_session, build_user(name="Amir", email="amir@example.com"))
    return user


@pytest.fixture
def admin(db_session):
    (user,) = persist(
        db_session,
        build_user(name="Admin", email="admin@example.com", role="admin"),
    )
    return user


@pytest.fixture
def customer_headers(customer):
    return auth_header(customer)


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin)


@pytest.fixture
def token_factory():
    return make_token
