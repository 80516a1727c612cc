"""Local recommendations (restaurants, shops, services) per property."""
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, DateTime, Boolean, JSON
from sqlalchemy.sql import func
from househub.database import Base

RECOMMENDATION_CATEGORIES = (
    "restaurant",
    "grocery",
    "entertainment",
    "healthcare",
    "shopping",
    "services",
    "outdoor",
    "other",
)


class Recommendation(Base):
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    category = Column(String(32), nullable=False, default="other")
    address = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    website = Column(String(1000), nullable=True)
    phone_number = Column(String(50), nullable=True)
    rating = Column(Float, nullable=True)
    images = Column(JSON, nullable=True)
    is_recommended = Column(Boolean, nullable=False, default=True)

    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
