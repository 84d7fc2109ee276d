from fastapi import APIRouter, Request, status
from schemas.user_schemas import CreateUserRequest, UpdateUserRequest, UserResponse
from services.auth_service import AuthService
from utils.deps import db_dependency, user_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/api/users",
    tags=["users"]
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
@limiter.limit("3/minute")
def create_user(request: Request, body: CreateUserRequest, db: db_dependency):
    user = AuthService.create_user(body, db)

    logger.info("User registered successfully", extra={"user_id": str(user.id)})

    return user


@router.put("", status_code=status.HTTP_200_OK, response_model=UserResponse)
@limiter.limit("5/minute")
def update_user(request: Request, body: UpdateUserRequest, user_id: user_dependency, db: db_dependency):
    """
    Replace the caller's email and password (protected endpoint).
    """
    user = AuthService.update_user(user_id, body, db)

    logger.info("User updated", extra={"user_id": str(user.id)})

    return user
