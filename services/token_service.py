import secrets
import uuid
from datetime import datetime, timezone, timedelta
from typing import Optional
from jose import jwt, JWTError
from core.config import settings
from core.exceptions import InvalidSignatureError, TokenExpiredError, WrongIssuerError


class TokenService:
    """
    Signs and verifies short-lived access tokens (HS256 JWTs).

    Access tokens are never stored and cannot be revoked; their lifetime is
    bounded by `exp`. Revocation happens at the refresh-token layer.
    """

    @staticmethod
    def create_access_token(subject: uuid.UUID, signing_key: str,
                            expires_delta: Optional[timedelta] = None,
                            issuer: Optional[str] = None) -> str:
        """
        Creates a signed access token for a user.

        Args:
            subject: User ID the token identifies
            signing_key: Symmetric key used for HS256
            expires_delta: Lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)
            issuer: `iss` claim (default: TOKEN_ISSUER)

        Returns:
            Encoded JWT string
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        now = datetime.now(timezone.utc)

        payload = {
            "sub": str(subject),
            "iat": now,
            "exp": now + expires_delta,
            "iss": issuer or settings.TOKEN_ISSUER,
            # iat/exp have one-second resolution; jti keeps same-second tokens distinct
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(payload, signing_key, algorithm=settings.ALGORITHM)

    @staticmethod
    def verify_access_token(token: str, signing_key: str, issuer: Optional[str] = None) -> uuid.UUID:
        """
        Validates an access token and returns its subject.

        Checks run in a fixed order: signature, then expiry, then issuer.
        A token whose `exp` equals the current second is already expired.

        Raises:
            InvalidSignatureError: bad signature, undecodable token or bad subject
            TokenExpiredError: exp <= now
            WrongIssuerError: iss does not match
        """
        try:
            # Expiry and issuer are checked below so the failure order stays fixed
            payload = jwt.decode(
                token,
                signing_key,
                algorithms=[settings.ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "verify_iss": False},
            )
        except JWTError:
            raise InvalidSignatureError()

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or not exp > datetime.now(timezone.utc).timestamp():
            raise TokenExpiredError()

        if payload.get("iss") != (issuer or settings.TOKEN_ISSUER):
            raise WrongIssuerError()

        try:
            return uuid.UUID(payload.get("sub"))
        except (TypeError, ValueError):
            raise InvalidSignatureError()
