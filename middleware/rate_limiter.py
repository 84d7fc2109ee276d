from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from core.config import settings
from core.exceptions import AuthenticationError
from services.token_service import TokenService
from utils.bearer import get_bearer_token


def get_rate_limit_key(request: Request) -> str:
    """
    Authenticated requests are limited per user, everything else per client IP.
    """
    try:
        token = get_bearer_token(request.headers)
        return str(TokenService.verify_access_token(token, settings.SECRET_KEY))
    except AuthenticationError:
        return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=["200/hour"],
    enabled=settings.ENV != "testing"
)
