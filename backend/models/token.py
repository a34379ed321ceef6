# backend/models/token.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func
from database import Base


# Token ids invalidated by logout
class RevokedToken(Base):
    __tablename__ = "revoked_tokens"

    jti = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    revoked_at = Column(DateTime(timezone=True), server_default=func.now())
