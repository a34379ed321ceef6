from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, func
from database import Base


# One audited action in a store. store_id is empty for actions that happen
# before a store exists (failed sign-ups, failed logins).
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    action = Column(String(50), nullable=False, index=True)   # e.g. SALE_CREATE, STOCK_ADJUSTMENT
    resource = Column(String(50), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="SUCCESS", index=True)
    ip = Column(String(64), nullable=True)
    meta = Column(JSON, nullable=True)

    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)
