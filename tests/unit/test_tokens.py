import uuid
from datetime import datetime, timedelta, UTC
import pytest
from jose import jwt
from core.config import settings
from core.exceptions import InvalidSignatureError, TokenExpiredError, WrongIssuerError
from services.token_service import TokenService

KEY = "unit-test-signing-key"


def test_access_token_creation():
    user_id = uuid.uuid4()
    token = TokenService.create_access_token(user_id, KEY)
    assert token

    payload = jwt.decode(token, key=KEY, algorithms=[settings.ALGORITHM], issuer=settings.TOKEN_ISSUER)
    assert payload["sub"] == str(user_id)
    assert payload["iss"] == settings.TOKEN_ISSUER
    assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_verify_returns_subject():
    user_id = uuid.uuid4()
    token = TokenService.create_access_token(user_id, KEY, expires_delta=timedelta(hours=1))

    assert TokenService.verify_access_token(token, KEY) == user_id


def test_verify_with_other_key_fails_signature():
    token = TokenService.create_access_token(uuid.uuid4(), KEY)

    with pytest.raises(InvalidSignatureError):
        TokenService.verify_access_token(token, "some-other-key")


def test_token_expired():
    token = TokenService.create_access_token(uuid.uuid4(), KEY, expires_delta=timedelta(seconds=-1))

    with pytest.raises(TokenExpiredError):
        TokenService.verify_access_token(token, KEY)


def test_token_expiring_now_is_expired():
    # exp is truncated to the current second, so it is never in the future
    token = TokenService.create_access_token(uuid.uuid4(), KEY, expires_delta=timedelta(0))

    with pytest.raises(TokenExpiredError):
        TokenService.verify_access_token(token, KEY)


def test_wrong_issuer():
    token = TokenService.create_access_token(uuid.uuid4(), KEY, issuer="someone-else")

    with pytest.raises(WrongIssuerError):
        TokenService.verify_access_token(token, KEY)


def test_signature_checked_before_expiry():
    token = TokenService.create_access_token(uuid.uuid4(), KEY, expires_delta=timedelta(seconds=-10))

    with pytest.raises(InvalidSignatureError):
        TokenService.verify_access_token(token, "some-other-key")


def test_expiry_checked_before_issuer():
    token = TokenService.create_access_token(
        uuid.uuid4(), KEY, expires_delta=timedelta(seconds=-10), issuer="someone-else"
    )

    with pytest.raises(TokenExpiredError):
        TokenService.verify_access_token(token, KEY)


def test_garbage_token_rejected():
    with pytest.raises(InvalidSignatureError):
        TokenService.verify_access_token("not.a.jwt", KEY)


def test_non_uuid_subject_rejected():
    now = datetime.now(UTC)
    token = jwt.encode(
        {"sub": "alice", "iat": now, "exp": now + timedelta(minutes=5), "iss": settings.TOKEN_ISSUER},
        KEY,
        algorithm=settings.ALGORITHM
    )

    with pytest.raises(InvalidSignatureError):
        TokenService.verify_access_token(token, KEY)


def test_tokens_issued_back_to_back_differ():
    user_id = uuid.uuid4()
    first = TokenService.create_access_token(user_id, KEY, expires_delta=timedelta(minutes=5))
    second = TokenService.create_access_token(user_id, KEY, expires_delta=timedelta(minutes=5))

    assert first != second
    assert TokenService.verify_access_token(first, KEY) == TokenService.verify_access_token(second, KEY)
