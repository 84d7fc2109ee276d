import uuid
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from core.config import settings
from core.exceptions import BadRequestError, NotFoundError, StorageFailureError
from models.chirps import Chirp
from utils.logger import get_logger
from utils.profanity import clean_body

logger = get_logger(__name__)


class ChirpService:

    @staticmethod
    def validate_body(body: str) -> str:
        """Enforce the length limit and return the body with banned words masked."""
        # Counted in characters, so non-ASCII text gets the same limit as ASCII
        if len(body) > settings.MAX_CHIRP_LENGTH:
            raise BadRequestError("Chirp is too long")
        return clean_body(body, settings.BANNED_WORDS)

    @staticmethod
    def create_chirp(user_id: uuid.UUID, body: str, db: Session) -> Chirp:
        model = Chirp(user_id=user_id, body=ChirpService.validate_body(body))

        try:
            db.add(model)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to create chirp", extra={"user_id": str(user_id)}, exc_info=True)
            raise StorageFailureError() from e

        db.refresh(model)
        return model

    @staticmethod
    def list_chirps(db: Session) -> list[Chirp]:
        try:
            return list(db.execute(select(Chirp).order_by(Chirp.created_at)).scalars())
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to list chirps", exc_info=True)
            raise StorageFailureError() from e

    @staticmethod
    def get_chirp(chirp_id: uuid.UUID, db: Session) -> Chirp:
        try:
            model = db.get(Chirp, chirp_id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to fetch chirp", extra={"chirp_id": str(chirp_id)}, exc_info=True)
            raise StorageFailureError() from e

        if model is None:
            raise NotFoundError("Chirp not found")
        return model

    @staticmethod
    def delete_chirp(chirp: Chirp, db: Session) -> None:
        try:
            db.delete(chirp)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to delete chirp", extra={"chirp_id": str(chirp.id)}, exc_info=True)
            raise StorageFailureError() from e
