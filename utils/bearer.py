from collections.abc import Mapping
from core.exceptions import MissingHeaderError, MalformedHeaderError

BEARER_PREFIX = "Bearer "


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """
    Pull the raw token out of an `Authorization: Bearer <token>` header.

    The scheme keyword is case-sensitive and must be followed by exactly one
    space and a non-empty token. Nothing here decodes the token.

    Raises:
        MissingHeaderError: no Authorization header
        MalformedHeaderError: any other scheme or layout
    """
    authorization = headers.get("Authorization")
    if authorization is None:
        raise MissingHeaderError()

    if not authorization.startswith(BEARER_PREFIX):
        raise MalformedHeaderError()

    token = authorization[len(BEARER_PREFIX):]
    if not token or token != token.strip() or " " in token:
        raise MalformedHeaderError()

    return token
