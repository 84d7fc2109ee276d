import os

# Settings are read at import time, so the environment has to be in place first
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("PLATFORM", "dev")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-signing-access-tokens")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from main import app
from core.database import Base
from middleware.metrics import fileserver_metrics
from models.users import User
from utils.deps import get_db
from utils.hashing import get_password_hash

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

TEST_PASSWORD = "TestPassword123!"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False}
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Fresh, empty database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
async def client(session: Session):
    """
    Async HTTP client bound to the app, with get_db pointed at the test session.
    """
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    fileserver_metrics.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def create_user(session: Session, email: str, password: str = TEST_PASSWORD) -> User:
    user = User(email=email, hashed_password=get_password_hash(password))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def registered_user(session: Session) -> User:
    return create_user(session, "user@example.com")


@pytest.fixture
def other_user(session: Session) -> User:
    return create_user(session, "other@example.com")


@pytest.fixture
def login(client: AsyncClient):
    """Log a user in through the API and return the response body."""
    async def _login(email: str, password: str = TEST_PASSWORD) -> dict:
        response = await client.post("/api/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return response.json()
    return _login


@pytest.fixture
async def user_tokens(login, registered_user) -> dict:
    return await login(registered_user.email)


@pytest.fixture
def auth_headers(user_tokens) -> dict:
    return {"Authorization": f"Bearer {user_tokens['token']}"}
