import uuid
from typing import Optional
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from core.exceptions import ConflictError, NotFoundError, StorageFailureError
from models.users import User
from models.chirps import Chirp
from models.refresh_tokens import RefreshToken
from schemas.user_schemas import CreateUserRequest, UpdateUserRequest
from utils.hashing import get_password_hash
from utils.logger import get_logger

logger = get_logger(__name__)


def _normalize_email(email: str) -> str:
    return email.lower().strip()


class AuthService:
    """User records: registration, lookup and profile updates."""

    @staticmethod
    def create_user(request: CreateUserRequest, db: Session) -> User:
        """
        Creates a new user with a hashed password.

        Raises:
            ConflictError: the email is already registered
            StorageFailureError: the insert failed for any other reason
        """
        email = _normalize_email(request.email)

        if AuthService.get_user_by_email(email, db) is not None:
            logger.warning(
                "Registration attempt with existing email",
                extra={"email": email}
            )
            raise ConflictError("Email already registered")

        model = User(
            email=email,
            hashed_password=get_password_hash(request.password)
        )

        try:
            db.add(model)
            db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            db.rollback()
            raise ConflictError("Email already registered") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to create user", extra={"email": email}, exc_info=True)
            raise StorageFailureError() from e

        db.refresh(model)
        return model

    @staticmethod
    def get_user_by_email(email: str, db: Session) -> Optional[User]:
        try:
            return db.execute(
                select(User).where(User.email == _normalize_email(email))
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to look up user by email", exc_info=True)
            raise StorageFailureError() from e

    @staticmethod
    def get_user_by_id(user_id: uuid.UUID, db: Session) -> Optional[User]:
        try:
            return db.get(User, user_id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to look up user by id", extra={"user_id": str(user_id)}, exc_info=True)
            raise StorageFailureError() from e

    @staticmethod
    def update_user(user_id: uuid.UUID, request: UpdateUserRequest, db: Session) -> User:
        """
        Replaces a user's email and password.

        Raises:
            NotFoundError: the user no longer exists
            ConflictError: the new email belongs to someone else
        """
        model = AuthService.get_user_by_id(user_id, db)
        if model is None:
            raise NotFoundError("User not found")

        email = _normalize_email(request.email)
        other = AuthService.get_user_by_email(email, db)
        if other is not None and other.id != model.id:
            raise ConflictError("Email already registered")

        model.email = email
        model.hashed_password = get_password_hash(request.password)

        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Email already registered") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to update user", extra={"user_id": str(user_id)}, exc_info=True)
            raise StorageFailureError() from e

        db.refresh(model)
        return model

    @staticmethod
    def delete_all_users(db: Session) -> int:
        """
        Removes every user together with their chirps and refresh tokens.

        Only reachable through the dev-only admin reset.
        """
        try:
            # Children first; SQLite does not enforce ON DELETE CASCADE by default
            db.execute(delete(RefreshToken))
            db.execute(delete(Chirp))
            deleted = db.execute(delete(User)).rowcount
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to reset users", exc_info=True)
            raise StorageFailureError() from e

        return deleted
