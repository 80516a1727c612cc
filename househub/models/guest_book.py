"""Guest book entries and their photos."""
from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, DateTime, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from househub.database import Base


class GuestBookEntry(Base):
    __tablename__ = "guest_book_entries"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

    guest_name = Column(String(255), nullable=False)
    guest_email = Column(String(255), nullable=True)
    visit_date = Column(Date, nullable=True)
    title = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)  # 1..5

    # Publicly visible only when both are set
    is_public = Column(Boolean, nullable=False, default=True)
    is_approved = Column(Boolean, nullable=False, default=False)

    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    photos = relationship(
        "GuestBookPhoto",
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class GuestBookPhoto(Base):
    __tablename__ = "guest_book_photos"

    id = Column(Integer, primary_key=True, index=True)
    entry_id = Column(Integer, ForeignKey("guest_book_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    photo_url = Column(String(1000), nullable=False)
    caption = Column(String(500), nullable=True)

    entry = relationship("GuestBookEntry", back_populates="photos")
