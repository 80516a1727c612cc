"""House walkthrough manual: ordered sections of ordered steps."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from househub.database import Base


class WalkthroughSection(Base):
    __tablename__ = "walkthrough_sections"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    steps = relationship(
        "WalkthroughStep",
        back_populates="section",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WalkthroughStep.order_index",
    )


class WalkthroughStep(Base):
    __tablename__ = "walkthrough_steps"

    id = Column(Integer, primary_key=True, index=True)
    section_id = Column(Integer, ForeignKey("walkthrough_sections.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=True)
    image_url = Column(String(1000), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    section = relationship("WalkthroughSection", back_populates="steps")
