import secrets
import uuid
from datetime import datetime, timezone, timedelta
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from core.config import settings
from core.exceptions import (RefreshTokenNotFoundError, TokenRevokedError, TokenExpiredError,
                             StorageFailureError)
from models.refresh_tokens import RefreshToken
from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)

# 32 bytes of entropy, hex encoded to 64 characters
REFRESH_TOKEN_BYTES = 32


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RefreshTokenService:
    """
    Persists opaque refresh tokens and answers whether one still resolves to a user.

    Every database error is rolled back and re-raised as StorageFailureError.
    Nothing is retried here.
    """

    @staticmethod
    def issue(user_id: uuid.UUID, db: Session, expires_delta: timedelta = None) -> str:
        """
        Creates and stores a new refresh token for a user.

        Returns:
            The plaintext token. It is not recoverable from any other response.
        """
        if expires_delta is None:
            expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

        token = secrets.token_hex(REFRESH_TOKEN_BYTES)

        try:
            db.add(RefreshToken(
                token=token,
                user_id=user_id,
                expires_at=datetime.now(timezone.utc) + expires_delta,
                revoked_at=None
            ))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Failed to store refresh token",
                extra={"user_id": str(user_id), "error": str(e)},
                exc_info=True
            )
            raise StorageFailureError() from e

        return token

    @staticmethod
    def resolve(token: str, db: Session) -> uuid.UUID:
        """
        Returns the user a refresh token belongs to.

        The row is read once and all checks run against that snapshot.
        A token that is both revoked and expired reports as revoked.

        Raises:
            RefreshTokenNotFoundError: no such token
            TokenRevokedError: revoked_at is set
            TokenExpiredError: now >= expires_at
            StorageFailureError: the lookup itself failed
        """
        try:
            record = db.get(RefreshToken, token)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Failed to read refresh token",
                extra={**sanitize_log_data({"refresh_token": token}), "error": str(e)},
                exc_info=True
            )
            raise StorageFailureError() from e

        if record is None:
            raise RefreshTokenNotFoundError()

        if record.revoked_at is not None:
            raise TokenRevokedError()

        if datetime.now(timezone.utc) >= _as_utc(record.expires_at):
            raise TokenExpiredError()

        return record.user_id

    @staticmethod
    def revoke(token: str, db: Session) -> None:
        """
        Marks a refresh token as revoked (logout).

        Revoking a token that is already revoked is a no-op. The update is
        conditional on revoked_at being NULL, so the first revocation time
        is never overwritten by a concurrent request.

        Raises:
            RefreshTokenNotFoundError: no such token
            StorageFailureError: the update failed
        """
        now = datetime.now(timezone.utc)
        try:
            result = db.execute(
                update(RefreshToken)
                .where(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
                .values(revoked_at=now, updated_at=now)
            )
            if result.rowcount == 0:
                exists = db.get(RefreshToken, token) is not None
            else:
                exists = True
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Failed to revoke refresh token",
                extra={**sanitize_log_data({"refresh_token": token}), "error": str(e)},
                exc_info=True
            )
            raise StorageFailureError() from e

        if not exists:
            raise RefreshTokenNotFoundError()
