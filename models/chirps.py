import uuid
from core.database import Base
from sqlalchemy import Column, String, Uuid, ForeignKey
from sqlalchemy.orm import relationship
from models.mixins import CreatedAtMixin, UpdatedAtMixin

class Chirp(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "chirps"

    #pk
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    #fk
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    #relationships
    user = relationship("User", back_populates="chirps")

    body = Column(String, nullable=False)
