import uuid
from typing import Annotated
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from core.config import settings
from core.database import SessionLocal
from core.exceptions import BadRequestError, MissingHeaderError, MalformedHeaderError
from services.session_service import SessionService
from utils.bearer import get_bearer_token


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]


def get_current_user_id(request: Request) -> uuid.UUID:
    """Gate for protected endpoints: a valid access token or a 401."""
    return SessionService.authenticate(request.headers, settings.SECRET_KEY)

user_dependency = Annotated[uuid.UUID, Depends(get_current_user_id)]


def get_refresh_credential(request: Request) -> str:
    """Raw refresh token from the Authorization header."""
    return get_bearer_token(request.headers)

refresh_token_dependency = Annotated[str, Depends(get_refresh_credential)]


def get_revoke_credential(request: Request) -> str:
    """Like get_refresh_credential, but a missing or malformed header is a 400."""
    try:
        return get_bearer_token(request.headers)
    except (MissingHeaderError, MalformedHeaderError) as e:
        raise BadRequestError("Couldn't find token") from e

revoke_token_dependency = Annotated[str, Depends(get_revoke_credential)]
