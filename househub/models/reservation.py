"""Reservations, their companions and approval requests."""
import enum
from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, DateTime, Boolean
# Companion has a "relationship" column, so the ORM helper is aliased
from sqlalchemy.orm import relationship as orm_relationship
from sqlalchemy.sql import func
from househub.database import Base


class ReservationStatus(str, enum.Enum):
    pending_approval = "pending approval"
    confirmed = "confirmed"
    cancelled = "cancelled"
    rejected = "rejected"
    denied = "denied"


class ApprovalStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    guests = Column(Integer, nullable=False, default=1)  # includes named companions
    status = Column(String(32), nullable=False, default=ReservationStatus.pending_approval.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    companions = orm_relationship(
        "Companion",
        back_populates="reservation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Companion(Base):
    __tablename__ = "reservation_companions"

    id = Column(Integer, primary_key=True, index=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    relationship = Column(String(32), nullable=False, default="friend")
    age_range = Column(String(16), nullable=False, default="adult")

    invited_to_system = Column(Boolean, nullable=False, default=False)
    # Set once, when the invitation is dispatched; never cleared
    invite_sent_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    reservation = orm_relationship("Reservation", back_populates="companions")


class ReservationApproval(Base):
    __tablename__ = "reservation_approvals"

    id = Column(Integer, primary_key=True, index=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True)
    requested_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(16), nullable=False, default=ApprovalStatus.pending.value)
    requested_at = Column(DateTime(timezone=True), server_default=func.now())

    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
