from core.database import Base
from sqlalchemy import Column, DateTime, String, Uuid, ForeignKey, Index
from sqlalchemy.orm import relationship
from models.mixins import CreatedAtMixin, UpdatedAtMixin

class RefreshToken(Base, CreatedAtMixin, UpdatedAtMixin):
    """
    Opaque long-lived session credential.

    The token string itself is the primary key. It is 32 random bytes, so it
    is stored as issued rather than hashed. A row is valid while revoked_at
    is NULL and expires_at is in the future; revoked_at is only ever set once.
    """
    __tablename__ = "refresh_tokens"

    #pk
    token = Column(String(64), primary_key=True)

    #fk
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    #relationships
    user = relationship("User", back_populates="refresh_tokens")

    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)


Index("ix_refresh_tokens_user_active", RefreshToken.user_id, RefreshToken.revoked_at)
