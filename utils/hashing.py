from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from core.config import settings

bcrypt_context = CryptContext(
    schemes=['bcrypt'],
    deprecated='auto',
    bcrypt__rounds=settings.BCRYPT_ROUNDS
)

# bcrypt only looks at the first 72 bytes of the input
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    """Return a salted bcrypt hash. The salt and work factor are embedded in the result."""
    return bcrypt_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against a stored hash.

    A wrong password, an empty input or a hash passlib cannot parse all
    give False. Comparison is constant-time inside passlib.
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt_context.verify(_truncate(plain_password), hashed_password)
    except (ValueError, TypeError, UnknownHashError):
        return False
