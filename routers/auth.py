from fastapi import APIRouter, Request, Response
from starlette import status
from schemas.auth_schemas import LoginRequest, LoginResponse, RefreshResponse
from schemas.user_schemas import UserResponse
from services.session_service import SessionService
from utils.deps import db_dependency, refresh_token_dependency, revoke_token_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/api",
    tags=["auth"]
)


@router.post("/login", response_model=LoginResponse)
@limiter.limit("5/minute")
def login(request: Request, body: LoginRequest, db: db_dependency):
    result = SessionService.login(body.email, body.password, db)

    logger.info(
        "User logged in successfully",
        extra={"user_id": str(result.user.id)}
    )

    return LoginResponse(
        **UserResponse.model_validate(result.user).model_dump(),
        token=result.access_token,
        refresh_token=result.refresh_token
    )


@router.post("/refresh", response_model=RefreshResponse)
@limiter.limit("10/minute")
def refresh(request: Request, refresh_token: refresh_token_dependency, db: db_dependency):
    """
    New access token for a valid refresh token. The refresh token itself is unchanged.
    """
    token = SessionService.refresh(refresh_token, db)

    logger.info("Access token refreshed")

    return RefreshResponse(token=token)


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit("10/minute")
def revoke(request: Request, refresh_token: revoke_token_dependency, db: db_dependency):
    """
    Revoke a refresh token (logout). Repeating the call is harmless.
    """
    SessionService.revoke(refresh_token, db)

    logger.info("Session revoked")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
