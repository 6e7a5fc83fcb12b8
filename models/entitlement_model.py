from sqlalchemy import Column, String, DateTime, Boolean, JSON, func
from database import Base


class EntitlementModel(Base):
    __tablename__ = "entitlements"

    profile_id = Column(String(255), primary_key=True, index=True)
    is_premium = Column(Boolean, nullable=False, default=False)
    purchase_info = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now())
