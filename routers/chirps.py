import uuid
from fastapi import APIRouter, Request, Response, status
from schemas.chirp_schemas import ChirpRequest, ChirpResponse, ValidateChirpResponse
from services.chirp_service import ChirpService
from services.session_service import SessionService
from utils.deps import db_dependency, user_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/api",
    tags=["chirps"]
)


@router.post("/validate_chirp", response_model=ValidateChirpResponse)
def validate_chirp(body: ChirpRequest):
    return ValidateChirpResponse(cleaned_body=ChirpService.validate_body(body.body))


@router.post("/chirps", status_code=status.HTTP_201_CREATED, response_model=ChirpResponse)
@limiter.limit("30/minute")
def create_chirp(request: Request, body: ChirpRequest, user_id: user_dependency, db: db_dependency):
    chirp = ChirpService.create_chirp(user_id, body.body, db)

    logger.info("Chirp created", extra={"user_id": str(user_id), "chirp_id": str(chirp.id)})

    return chirp


@router.get("/chirps", response_model=list[ChirpResponse])
def list_chirps(db: db_dependency):
    return ChirpService.list_chirps(db)


@router.get("/chirps/{chirp_id}", response_model=ChirpResponse)
def get_chirp(chirp_id: uuid.UUID, db: db_dependency):
    return ChirpService.get_chirp(chirp_id, db)


@router.delete("/chirps/{chirp_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit("30/minute")
def delete_chirp(request: Request, chirp_id: uuid.UUID, user_id: user_dependency, db: db_dependency):
    """
    Delete a chirp. Only its author may do this.
    """
    chirp = ChirpService.get_chirp(chirp_id, db)
    SessionService.authorize_owner(user_id, chirp.user_id)

    ChirpService.delete_chirp(chirp, db)

    logger.info("Chirp deleted", extra={"user_id": str(user_id), "chirp_id": str(chirp_id)})

    return Response(status_code=status.HTTP_204_NO_CONTENT)
