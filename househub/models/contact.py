"""Property contact directory: owners, emergency numbers, trades and vendors."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.sql import func
from househub.database import Base

CONTACT_CATEGORIES = (
    "owner",
    "emergency",
    "maintenance",
    "management",
    "utility",
    "neighbor",
    "vendor",
    "contractor",
    "service",
    "general",
)


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    category = Column(String(32), nullable=False, default="general")
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(String(500), nullable=True)
    website = Column(String(1000), nullable=True)
    notes = Column(Text, nullable=True)
    priority = Column(Integer, nullable=False, default=3)  # 1 is the first number to call

    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
