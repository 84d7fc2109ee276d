import secrets
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from sqlalchemy.orm import Session
from core.config import settings
from core.exceptions import InvalidCredentialsError, ForbiddenError
from models.users import User
from services.auth_service import AuthService
from services.refresh_token_service import RefreshTokenService
from services.token_service import TokenService
from utils.bearer import get_bearer_token
from utils.hashing import get_password_hash, verify_password
from utils.logger import get_logger

logger = get_logger(__name__)

# Checked against when the email is unknown, so both login failures cost one bcrypt verify
DUMMY_PASSWORD_HASH = get_password_hash(secrets.token_hex(16))


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


class SessionService:
    """
    Login, refresh, logout and per-request identity checks.

    A refresh token moves from issued to active and ends either expired or
    revoked; neither end state can be left. Failures are raised as the typed
    errors in core.exceptions and never retried here.
    """

    @staticmethod
    def login(email: str, password: str, db: Session) -> LoginResult:
        """
        Checks credentials and opens a new session.

        Unknown email and wrong password raise the same InvalidCredentialsError
        and take the same bcrypt verify, so neither the response nor its timing
        shows which emails are registered.
        """
        user = AuthService.get_user_by_email(email, db)
        hashed_password = user.hashed_password if user is not None else DUMMY_PASSWORD_HASH

        if not verify_password(password, hashed_password) or user is None:
            logger.warning("Login failed - invalid credentials", extra={"email": email})
            raise InvalidCredentialsError()

        access_token = TokenService.create_access_token(user.id, settings.SECRET_KEY)
        refresh_token = RefreshTokenService.issue(user.id, db)

        logger.debug("User authenticated successfully", extra={"user_id": str(user.id)})

        return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)

    @staticmethod
    def refresh(refresh_token: str, db: Session) -> str:
        """
        Exchanges a valid refresh token for a new access token.

        The refresh token is not rotated: it stays usable until it expires
        or is revoked.
        """
        user_id = RefreshTokenService.resolve(refresh_token, db)
        return TokenService.create_access_token(user_id, settings.SECRET_KEY)

    @staticmethod
    def revoke(refresh_token: str, db: Session) -> None:
        RefreshTokenService.revoke(refresh_token, db)

    @staticmethod
    def authenticate(headers: Mapping[str, str], signing_key: str) -> uuid.UUID:
        """Resolve the subject of a request carrying an access token."""
        token = get_bearer_token(headers)
        return TokenService.verify_access_token(token, signing_key)

    @staticmethod
    def authorize_owner(subject: uuid.UUID, resource_owner_id: uuid.UUID) -> None:
        if subject != resource_owner_id:
            logger.warning(
                "Ownership check failed",
                extra={"user_id": str(subject), "owner_id": str(resource_owner_id)}
            )
            raise ForbiddenError()
