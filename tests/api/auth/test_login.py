import uuid
from jose import jwt
from core.config import settings
from models.refresh_tokens import RefreshToken


async def test_login_success(client, registered_user, session):
    """Login returns the user, an access token and a stored refresh token."""
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": "TestPassword123!"
    })

    assert response.status_code == 200
    data = response.json()

    assert data["id"] == str(registered_user.id)
    assert data["email"] == registered_user.email
    assert "created_at" in data and "updated_at" in data
    assert "hashed_password" not in data
    assert "password" not in data

    payload = jwt.decode(data["token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM],
                         issuer=settings.TOKEN_ISSUER)
    assert uuid.UUID(payload["sub"]) == registered_user.id

    stored = session.get(RefreshToken, data["refresh_token"])
    assert stored is not None
    assert stored.user_id == registered_user.id


async def test_login_wrong_password(client, registered_user):
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": "WrongPassword123!"
    })

    assert response.status_code == 401
    assert response.json()["error_code"] == "invalid_credentials"


async def test_login_nonexistent_user(client, registered_user):
    """Unknown email gets exactly the same response as a wrong password."""
    wrong_password = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": "WrongPassword123!"
    })
    unknown_email = await client.post("/api/login", json={
        "email": "nonexistent@example.com",
        "password": "Password123!"
    })

    assert unknown_email.status_code == 401
    assert unknown_email.json() == wrong_password.json()


async def test_login_invalid_body(client):
    response = await client.post("/api/login", json={"email": "not-an-email"})

    assert response.status_code == 422


async def test_multiple_logins_hold_separate_sessions(client, registered_user, session, login):
    first = await login(registered_user.email)
    second = await login(registered_user.email)

    assert first["refresh_token"] != second["refresh_token"]
    assert session.query(RefreshToken).filter(RefreshToken.user_id == registered_user.id).count() == 2
